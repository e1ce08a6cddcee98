"""Resolution of batch parameters into constant or per-row bindings."""

import numbers
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple, Union

import numpy as np

from lshsig.exceptions import InvalidParameterError, NonConstantParameterError
from lshsig.logging import get_logger
from lshsig.signatures import SIGNATURE_FIELDS, validate_parameter
from lshsig.types import BindingMode, ParameterInput

__all__ = [
    "BatchParameters",
    "Constant",
    "ParameterBinding",
    "PerRow",
    "bind_parameters",
    "resolve_binding",
]

logger = get_logger()


@dataclass(frozen=True)
class Constant:
    """One value shared by every row of the batch."""

    value: int

    mode = BindingMode.CONSTANT

    def value_for(self, row: int) -> int:
        return self.value


@dataclass(frozen=True)
class PerRow:
    """One value per row of the batch."""

    values: Tuple[int, ...]

    mode = BindingMode.PER_ROW

    def value_for(self, row: int) -> int:
        return self.values[row]


ParameterBinding = Union[Constant, PerRow]


def _infer_mode(value: ParameterInput) -> BindingMode:
    if isinstance(value, numbers.Integral):
        return BindingMode.CONSTANT
    return BindingMode.PER_ROW


def resolve_binding(
    field: str,
    value: ParameterInput,
    row_count: int,
    mode: Optional[BindingMode] = None,
) -> ParameterBinding:
    """
    Resolve and validate one parameter for a batch of ``row_count`` rows.

    A scalar is always a constant. A sequence must hold one value per row;
    in constant mode every value must equal the first row's value.

    Raises:
        InvalidParameterError: If a value is out of range or the column
            length does not match the batch
        NonConstantParameterError: If a constant column varies across rows
    """
    if mode is None:
        mode = _infer_mode(value)

    if isinstance(value, numbers.Integral):
        return Constant(validate_parameter(field, value))

    if isinstance(value, (str, bytes)) or not isinstance(
        value, (Sequence, np.ndarray)
    ):
        raise InvalidParameterError(
            field, value, "must be an integer or a sequence of integers"
        )

    values: Sequence[int] = value
    if len(values) != row_count:
        raise InvalidParameterError(
            field, f"<{len(values)} values>", f"expected {row_count} values"
        )
    if mode is BindingMode.CONSTANT and len(values):
        # Constancy is checked on the raw column, then the one value is validated
        first = values[0]
        for row, item in enumerate(values):
            if item != first:
                logger.warning_with_fields(
                    "Constant parameter varies across rows",
                    operation="bind",
                    field=field,
                    row=row,
                )
                raise NonConstantParameterError(field, first, item, row)
        return Constant(validate_parameter(field, first))
    return PerRow(tuple(validate_parameter(field, item) for item in values))


@dataclass(frozen=True)
class BatchParameters:
    """Resolved bindings of all signature parameters for one batch."""

    ngram_width: ParameterBinding
    band_count: ParameterBinding
    band_size: ParameterBinding
    seed: ParameterBinding

    def for_row(self, row: int) -> Tuple[int, int, int, int]:
        """Return ``(ngram_width, band_count, band_size, seed)`` for a row."""
        return (
            self.ngram_width.value_for(row),
            self.band_count.value_for(row),
            self.band_size.value_for(row),
            self.seed.value_for(row),
        )

    @property
    def modes(self) -> Dict[str, BindingMode]:
        return {field: getattr(self, field).mode for field in SIGNATURE_FIELDS}


def bind_parameters(
    row_count: int,
    ngram_width: ParameterInput,
    band_count: ParameterInput,
    band_size: ParameterInput,
    seed: ParameterInput,
    modes: Optional[Dict[str, BindingMode]] = None,
) -> BatchParameters:
    """Resolve all four parameters once for the batch, failing fast."""
    modes = modes or {}
    unknown = set(modes) - set(SIGNATURE_FIELDS)
    if unknown:
        raise InvalidParameterError(
            "modes", sorted(unknown), "unknown parameter name"
        )

    inputs = {
        "ngram_width": ngram_width,
        "band_count": band_count,
        "band_size": band_size,
        "seed": seed,
    }
    bindings = {
        field: resolve_binding(field, inputs[field], row_count, modes.get(field))
        for field in SIGNATURE_FIELDS
    }
    return BatchParameters(**bindings)
