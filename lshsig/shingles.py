"""Character n-gram shingling."""

from typing import Iterator

from datasketch.hashfunc import sha1_hash64

from lshsig.exceptions import InvalidParameterError
from lshsig.types import ShingleHash, ShingleSet


def hash_shingle(shingle: str) -> ShingleHash:
    """Reduce one shingle to an unsigned 64-bit hash."""
    return ShingleHash(sha1_hash64(shingle.encode("utf-8")))


def iter_ngrams(text: str, width: int) -> Iterator[str]:
    """Yield the contiguous character n-grams of ``text``.

    A non-empty text shorter than ``width`` yields itself as its only
    n-gram, so short strings still take part in similarity comparisons.
    """
    if not text:
        return
    if len(text) < width:
        yield text
        return
    for start in range(len(text) - width + 1):
        yield text[start : start + width]


def extract_shingles(text: str, width: int) -> ShingleSet:
    """
    Extract the deduplicated set of shingle hashes of a string.

    Args:
        text: Input text
        width: Number of characters per shingle

    Returns:
        Set of 64-bit shingle hashes; empty for empty text

    Raises:
        InvalidParameterError: If width is smaller than 1
    """
    if width < 1:
        raise InvalidParameterError("ngram_width", width, "must be at least 1")
    return frozenset(hash_shingle(ngram) for ngram in iter_ngrams(text, width))
