"""Configuration models for signature computation and the CLI."""

from argparse import Namespace
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from lshsig.signatures import SIGNATURE_FIELDS, validate_parameter


@dataclass
class SignatureConfig:
    """Parameters of a banded MinHash signature."""

    ngram_width: int = 5
    band_count: int = 20
    band_size: int = 5
    seed: int = 42

    def __post_init__(self) -> None:
        """Validate numeric constraints."""
        for name in SIGNATURE_FIELDS:
            validate_parameter(name, getattr(self, name))

    @property
    def num_perm(self) -> int:
        """Total hash functions drawn per row."""
        return self.band_count * self.band_size


@dataclass
class CLIConfig:
    """Configuration for CLI operation."""

    command: str
    paths: List[Path] = field(default_factory=list)
    ngram_width: int = 5
    band_count: int = 20
    band_size: int = 5
    seed: int = 42
    output_format: str = "jsonl"
    max_workers: Optional[int] = None
    text: str = ""
    count: int = 1
    log_file: Optional[Path] = None
    log_json: bool = False
    verbose: bool = False

    VALID_COMMANDS = {"signature", "replicate"}
    VALID_FORMATS = {"jsonl", "table"}

    @classmethod
    def from_args(cls, args: Namespace) -> "CLIConfig":
        """Create a CLIConfig from parsed command line arguments."""
        if args.command == "replicate":
            return cls(
                command=args.command,
                text=args.text,
                count=args.count,
                log_file=args.log_file,
                log_json=args.log_json,
                verbose=args.verbose,
            )
        return cls(
            command=args.command,
            paths=[Path(p) for p in args.paths],
            ngram_width=args.ngram_width,
            band_count=args.band_count,
            band_size=args.band_size,
            seed=args.seed,
            output_format=args.format,
            max_workers=args.max_workers,
            log_file=args.log_file,
            log_json=args.log_json,
            verbose=args.verbose,
        )

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.command not in self.VALID_COMMANDS:
            commands = ", ".join(sorted(self.VALID_COMMANDS))
            raise ValueError(f"Invalid command. Must be one of: {commands}")
        if self.output_format not in self.VALID_FORMATS:
            formats = ", ".join(sorted(self.VALID_FORMATS))
            raise ValueError(f"Invalid format. Must be one of: {formats}")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError("max_workers must be positive")

    @property
    def signature_config(self) -> SignatureConfig:
        """Create SignatureConfig from settings."""
        return SignatureConfig(
            ngram_width=self.ngram_width,
            band_count=self.band_count,
            band_size=self.band_size,
            seed=self.seed,
        )
