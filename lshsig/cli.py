"""Command-line interface for lshsig."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from lshsig import __version__
from lshsig.batch import compute_signatures
from lshsig.exceptions import InputReadError, handle_error
from lshsig.logging import StructuredLogger, setup_logging
from lshsig.models import CLIConfig
from lshsig.types import RowSignature
from lshsig.utils import replicate

__all__ = ["main", "parse_args", "read_rows"]


def parse_args(argv: Optional[List[str]] = None) -> CLIConfig:
    """Parse command line arguments into unified config."""
    parser = argparse.ArgumentParser(
        description="Compute banded MinHash signatures for lines of text."
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"lshsig {__version__}",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Path to log file (if not specified, only log to console)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Write the log file as JSON lines",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    signature = subparsers.add_parser(
        "signature", help="Compute one signature per input line"
    )
    signature.add_argument(
        "paths",
        nargs="*",
        help="Files to read rows from (default: standard input)",
    )
    signature.add_argument(
        "--ngram-width",
        type=int,
        default=5,
        help="Characters per shingle (default: 5)",
    )
    signature.add_argument(
        "--band-count",
        type=int,
        default=20,
        help="Number of bands per signature (default: 20)",
    )
    signature.add_argument(
        "--band-size",
        type=int,
        default=5,
        help="Hash functions combined into each band (default: 5)",
    )
    signature.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Seed of the hash function stream (default: 42)",
    )
    signature.add_argument(
        "--max-workers",
        type=int,
        help="Maximum number of worker processes for large inputs",
    )
    signature.add_argument(
        "--format",
        choices=["jsonl", "table"],
        default="jsonl",
        help="Output format (default: jsonl)",
    )

    repeat = subparsers.add_parser(
        "replicate", help="Print TEXT concatenated COUNT times"
    )
    repeat.add_argument("text", help="Text to replicate")
    repeat.add_argument("count", type=int, help="Number of copies")

    args = parser.parse_args(argv)
    return CLIConfig.from_args(args)


def read_rows(paths: List[Path]) -> List[str]:
    """Read one row per line from the given files, or stdin if none."""
    if not paths:
        return sys.stdin.read().splitlines()

    rows: List[str] = []
    for path in paths:
        try:
            rows.extend(path.read_text(encoding="utf-8").splitlines())
        except (OSError, UnicodeDecodeError) as e:
            raise InputReadError(str(path), str(e)) from e
    return rows


def render_signatures(
    console: Console,
    rows: List[str],
    signatures: List[RowSignature],
    output_format: str,
) -> None:
    """Print signatures in the requested format."""
    if output_format == "jsonl":
        for i, signature in enumerate(signatures):
            print(json.dumps({"row": i, "signature": signature}))
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Text", overflow="ellipsis", max_width=40)
    table.add_column("Bands")
    for i, (text, signature) in enumerate(zip(rows, signatures)):
        bands = " ".join(f"{band:016x}" for band in signature)
        table.add_row(str(i), text, bands)
    console.print(table)


def run_signature(
    config: CLIConfig, console: Console, logger: StructuredLogger
) -> int:
    """Handle the signature command."""
    sig_config = config.signature_config
    rows = read_rows(config.paths)
    logger.info_with_fields(
        "Read input rows",
        operation="read",
        rows=len(rows),
        sources=[str(p) for p in config.paths] or ["<stdin>"],
    )

    signatures = compute_signatures(
        rows,
        ngram_width=sig_config.ngram_width,
        band_count=sig_config.band_count,
        band_size=sig_config.band_size,
        seed=sig_config.seed,
        max_workers=config.max_workers,
    )
    render_signatures(console, rows, signatures, config.output_format)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    console = Console()
    try:
        config = parse_args(argv)
        logger = setup_logging(config.log_file, config.verbose, config.log_json)

        if config.command == "replicate":
            print(replicate(config.text, config.count))
            return 0
        return run_signature(config, console, logger)
    except Exception as e:
        return handle_error(console, e)


if __name__ == "__main__":
    sys.exit(main())
