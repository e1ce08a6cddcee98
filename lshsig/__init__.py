"""Banded MinHash signatures for near-duplicate text detection."""

from lshsig.batch import compute_signatures
from lshsig.binding import BatchParameters, Constant, PerRow, bind_parameters
from lshsig.exceptions import (
    InvalidParameterError,
    LshSigError,
    NonConstantParameterError,
)
from lshsig.minhash import EMPTY_SENTINEL, MERSENNE_PRIME, MinHasher, SeededHashStream
from lshsig.shingles import extract_shingles
from lshsig.signatures import band_agreement, generate_signature
from lshsig.types import BindingMode
from lshsig.utils import replicate, replicate_batch

__version__ = "0.1.0"

__all__ = [
    "BatchParameters",
    "BindingMode",
    "Constant",
    "EMPTY_SENTINEL",
    "InvalidParameterError",
    "LshSigError",
    "MERSENNE_PRIME",
    "MinHasher",
    "NonConstantParameterError",
    "PerRow",
    "SeededHashStream",
    "band_agreement",
    "bind_parameters",
    "compute_signatures",
    "extract_shingles",
    "generate_signature",
    "replicate",
    "replicate_batch",
]
