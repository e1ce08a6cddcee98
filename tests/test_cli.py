import io
import json
from pathlib import Path
from typing import Callable, List

import pytest

from lshsig.cli import main, parse_args, read_rows
from lshsig.exceptions import InputReadError
from lshsig.signatures import generate_signature

SIG_ARGS = ["--ngram-width", "3", "--band-count", "4", "--band-size", "2"]


def test_parse_args_defaults() -> None:
    config = parse_args(["signature", "rows.txt"])
    assert config.command == "signature"
    assert config.paths == [Path("rows.txt")]
    assert config.ngram_width == 5
    assert config.band_count == 20
    assert config.band_size == 5
    assert config.seed == 42
    assert config.output_format == "jsonl"
    assert config.max_workers is None


def test_parse_args_replicate() -> None:
    config = parse_args(["replicate", "ab", "3"])
    assert config.command == "replicate"
    assert config.text == "ab"
    assert config.count == 3


def test_parse_args_requires_command() -> None:
    with pytest.raises(SystemExit):
        parse_args([])


def test_signature_jsonl(
    write_rows: Callable[[str, List[str]], Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    rows = ["hello world", "hello there", ""]
    path = write_rows("rows.txt", rows)

    assert main(["signature", str(path), *SIG_ARGS, "--seed", "7"]) == 0

    lines = capsys.readouterr().out.splitlines()
    records = [json.loads(line) for line in lines]
    assert [r["row"] for r in records] == [0, 1, 2]
    for text, record in zip(rows, records):
        assert record["signature"] == generate_signature(text, 3, 4, 2, 7)


def test_signature_reads_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("alpha\nbeta\n"))

    assert main(["signature", *SIG_ARGS]) == 0

    records = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert len(records) == 2
    assert records[1]["signature"] == generate_signature("beta", 3, 4, 2, 42)


def test_signature_table(
    write_rows: Callable[[str, List[str]], Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_rows("rows.txt", ["hello world"])
    assert main(["signature", str(path), *SIG_ARGS, "--format", "table"]) == 0
    assert "Bands" in capsys.readouterr().out


def test_signature_invalid_width(
    write_rows: Callable[[str, List[str]], Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_rows("rows.txt", ["hello"])
    assert main(["signature", str(path), "--ngram-width", "0"]) == 2
    assert "Invalid parameter" in capsys.readouterr().out


def test_signature_missing_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["signature", str(tmp_path / "missing.txt")]) == 4
    assert "Could not read input" in capsys.readouterr().out


def test_signature_with_log_file(
    write_rows: Callable[[str, List[str]], Path], tmp_path: Path
) -> None:
    path = write_rows("rows.txt", ["hello world"])
    log_file = tmp_path / "run.log"

    assert main(["--log-file", str(log_file), "signature", str(path)]) == 0
    assert "Signature batch completed" in log_file.read_text()


def test_replicate_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["replicate", "ab", "3"]) == 0
    assert capsys.readouterr().out == "ababab\n"


def test_replicate_negative_count(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["replicate", "x", "-1"]) == 2
    assert "count" in capsys.readouterr().out


def test_read_rows_multiple_files(
    write_rows: Callable[[str, List[str]], Path],
) -> None:
    first = write_rows("a.txt", ["one", "two"])
    second = write_rows("b.txt", ["three"])
    assert read_rows([first, second]) == ["one", "two", "three"]


def test_read_rows_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InputReadError) as exc_info:
        read_rows([tmp_path / "missing.txt"])
    assert "missing.txt" in exc_info.value.path
