from numbers import Integral
from typing import List, Sequence

from .exceptions import InvalidParameterError


def replicate(text: str, count: int) -> str:
    """Return ``text`` concatenated with itself ``count`` times."""
    if isinstance(count, bool) or not isinstance(count, Integral):
        raise InvalidParameterError("count", count, "must be an integer")
    if count < 0:
        raise InvalidParameterError("count", count, "must not be negative")
    return text * int(count)


def replicate_batch(texts: Sequence[str], counts: Sequence[int]) -> List[str]:
    """Apply :func:`replicate` row by row, validating every count first."""
    if len(texts) != len(counts):
        raise InvalidParameterError(
            "count", f"<{len(counts)} values>", f"expected {len(texts)} values"
        )
    for count in counts:
        if isinstance(count, bool) or not isinstance(count, Integral) or count < 0:
            raise InvalidParameterError(
                "count", count, "must be a non-negative integer"
            )
    return [text * int(count) for text, count in zip(texts, counts)]
