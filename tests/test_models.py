from argparse import Namespace
from pathlib import Path

import pytest

from lshsig.exceptions import InvalidParameterError
from lshsig.models import CLIConfig, SignatureConfig


def test_signature_config_defaults() -> None:
    config = SignatureConfig()
    assert config.num_perm == config.band_count * config.band_size


def test_signature_config_validation() -> None:
    with pytest.raises(InvalidParameterError):
        SignatureConfig(ngram_width=0)
    with pytest.raises(ValueError):
        SignatureConfig(band_size=0)


def test_cli_config_validation() -> None:
    with pytest.raises(ValueError, match="Invalid command"):
        CLIConfig(command="unknown")
    with pytest.raises(ValueError, match="Invalid format"):
        CLIConfig(command="signature", output_format="xml")
    with pytest.raises(ValueError, match="max_workers"):
        CLIConfig(command="signature", max_workers=0)


def test_cli_config_from_args() -> None:
    args = Namespace(
        command="signature",
        paths=["rows.txt"],
        ngram_width=3,
        band_count=4,
        band_size=2,
        seed=7,
        format="table",
        max_workers=None,
        log_file=None,
        log_json=False,
        verbose=True,
    )
    config = CLIConfig.from_args(args)
    assert config.paths == [Path("rows.txt")]
    assert config.output_format == "table"
    assert config.signature_config == SignatureConfig(
        ngram_width=3, band_count=4, band_size=2, seed=7
    )
