"""Type definitions for lshsig."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, FrozenSet, List, NewType, Sequence, TypeAlias, Union

# Type aliases for clarity
ShingleHash = NewType("ShingleHash", int)
BandSignature = NewType("BandSignature", int)

# Deduplicated shingle hashes of one row; order is irrelevant
ShingleSet: TypeAlias = FrozenSet[ShingleHash]

# Band hashes of one row, band index = list position
RowSignature: TypeAlias = List[BandSignature]

# A parameter supplied either once for the batch or once per row
ParameterInput: TypeAlias = Union[int, Sequence[int]]

# Common type aliases
JsonDict: TypeAlias = Dict[str, Any]


@dataclass(frozen=True)
class HashFunctionParameters:
    """Coefficients of one universal hash ``h(x) = (a * x + b) mod P``."""

    a: int
    b: int


class BindingMode(Enum):
    """How a batch parameter is bound to the rows of a batch."""

    CONSTANT = auto()  # One value for the whole batch
    PER_ROW = auto()  # One value per row
