"""Seeded universal hash functions and per-band MinHash computation."""

import struct
from typing import List, Sequence

import numpy as np
from datasketch.hashfunc import sha1_hash64

from lshsig.types import BandSignature, HashFunctionParameters, ShingleSet

# Modulus of the universal hash family, the Mersenne prime 2**61 - 1
MERSENNE_PRIME = (1 << 61) - 1

# Minimum reported for an empty shingle set
EMPTY_SENTINEL = (1 << 64) - 1

_UINT64_MASK = (1 << 64) - 1


class SeededHashStream:
    """Deterministic sequence of universal hash parameters.

    Each call to :meth:`next` draws ``a`` from ``[1, P)`` and then ``b``
    from ``[0, P)``. The sequence depends only on the seed and on how many
    draws came before, so a stream must never be shared between rows.
    """

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)
        # Negative seeds map onto their two's-complement u64 value
        self._rng = np.random.default_rng(self.seed & _UINT64_MASK)
        self.draws = 0

    def next(self) -> HashFunctionParameters:
        """Draw the next pair of hash function parameters."""
        a = int(self._rng.integers(1, MERSENNE_PRIME, dtype=np.uint64))
        b = int(self._rng.integers(0, MERSENNE_PRIME, dtype=np.uint64))
        self.draws += 1
        return HashFunctionParameters(a=a, b=b)

    def take(self, count: int) -> List[HashFunctionParameters]:
        """Draw ``count`` parameter pairs in order."""
        return [self.next() for _ in range(count)]


def universal_hash(params: HashFunctionParameters, value: int) -> int:
    """Evaluate ``(a * value + b) mod P`` without fixed-width overflow."""
    return (params.a * value + params.b) % MERSENNE_PRIME


def combine_minima(minima: Sequence[int]) -> BandSignature:
    """Fold a band's minima, in draw order, into one 64-bit hash.

    The minima are packed as little-endian u64 values and hashed with
    SHA-1, so equal minima give equal hashes and any single difference
    gives an unrelated one.
    """
    packed = struct.pack(f"<{len(minima)}Q", *minima)
    return BandSignature(sha1_hash64(packed))


class MinHasher:
    """One band: ``band_size`` hash functions drawn from a seeded stream."""

    def __init__(self, functions: Sequence[HashFunctionParameters]) -> None:
        if not functions:
            raise ValueError("MinHasher needs at least one hash function")
        self.functions = tuple(functions)

    @classmethod
    def build(cls, band_size: int, stream: SeededHashStream) -> "MinHasher":
        """Create a band consuming exactly ``band_size`` draws from ``stream``."""
        return cls(stream.take(band_size))

    @property
    def band_size(self) -> int:
        return len(self.functions)

    def minima(self, shingles: ShingleSet) -> List[int]:
        """Per-function minimum over ``shingles``, sentinel when empty."""
        if not shingles:
            return [EMPTY_SENTINEL] * len(self.functions)
        return [
            min(universal_hash(params, shingle) for shingle in shingles)
            for params in self.functions
        ]

    def hash(self, shingles: ShingleSet) -> BandSignature:
        """Compute the combined band hash for a shingle set."""
        return combine_minima(self.minima(shingles))
