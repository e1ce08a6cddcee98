"""Core LSH signature computation functionality."""

import numbers
from typing import Any

from lshsig.exceptions import InvalidParameterError
from lshsig.minhash import MinHasher, SeededHashStream
from lshsig.shingles import extract_shingles
from lshsig.types import RowSignature

SIGNATURE_FIELDS = ("ngram_width", "band_count", "band_size", "seed")

# Smallest allowed value per field; seed accepts any integer
_MINIMUMS = {"ngram_width": 1, "band_count": 0, "band_size": 1}


def validate_parameter(field: str, value: Any) -> int:
    """
    Check a single signature parameter and return it as an int.

    Raises:
        InvalidParameterError: If the value is not an integer or is below
            the minimum for its field
    """
    # bool is an int subclass but never a meaningful size or seed
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(field, value, "must be an integer")
    minimum = _MINIMUMS.get(field)
    if minimum is not None and value < minimum:
        raise InvalidParameterError(field, value, f"must be at least {minimum}")
    return int(value)


def generate_signature(
    text: str,
    ngram_width: int,
    band_count: int,
    band_size: int,
    seed: int,
) -> RowSignature:
    """
    Compute the banded MinHash signature of one row.

    Args:
        text: Row text
        ngram_width: Characters per shingle
        band_count: Number of bands in the signature
        band_size: Hash functions combined into each band
        seed: Seed of the row's hash parameter stream

    Returns:
        ``band_count`` unsigned 64-bit band hashes in band order
    """
    if not isinstance(text, str):
        raise InvalidParameterError("text", text, "must be a string")
    for field, value in zip(
        SIGNATURE_FIELDS, (ngram_width, band_count, band_size, seed)
    ):
        validate_parameter(field, value)
    return _generate(text, ngram_width, band_count, band_size, seed)


def _generate(
    text: str,
    ngram_width: int,
    band_count: int,
    band_size: int,
    seed: int,
) -> RowSignature:
    """Compute a signature from parameters that were already validated."""
    shingles = extract_shingles(text, ngram_width)
    stream = SeededHashStream(seed)

    # Bands consume the stream in order: band index, then function index
    signature: RowSignature = []
    for _ in range(band_count):
        band = MinHasher.build(band_size, stream)
        signature.append(band.hash(shingles))
    return signature


def band_agreement(sig1: RowSignature, sig2: RowSignature) -> float:
    """Fraction of band positions where two signatures agree.

    With ``band_size = 1`` this estimates the Jaccard similarity of the
    two rows' shingle sets.
    """
    if len(sig1) != len(sig2):
        raise ValueError("Signatures must have the same number of bands")
    if not sig1:
        return 0.0
    matches = sum(1 for band1, band2 in zip(sig1, sig2) if band1 == band2)
    return matches / len(sig1)
