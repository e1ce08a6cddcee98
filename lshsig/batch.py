"""Batch signature computation, the host-facing entry point."""

import multiprocessing
import time
from concurrent.futures import ProcessPoolExecutor
from multiprocessing import cpu_count
from typing import Dict, List, Optional, Sequence, Tuple

from lshsig.binding import BatchParameters, bind_parameters
from lshsig.exceptions import InvalidParameterError
from lshsig.logging import get_logger
from lshsig.signatures import _generate
from lshsig.types import BindingMode, ParameterInput, RowSignature

__all__ = ["compute_signatures"]

logger = get_logger()

# Batches smaller than this are hashed in-process
PARALLEL_THRESHOLD = 1000

_RowTask = Tuple[str, int, int, int, int]


def _signature_row(task: _RowTask) -> RowSignature:
    """Worker function for parallel processing."""
    text, ngram_width, band_count, band_size, seed = task
    return _generate(text, ngram_width, band_count, band_size, seed)


def _row_tasks(texts: Sequence[str], params: BatchParameters) -> List[_RowTask]:
    tasks = []
    for row, text in enumerate(texts):
        if not isinstance(text, str):
            raise InvalidParameterError("text", text, f"row {row} is not a string")
        tasks.append((text, *params.for_row(row)))
    return tasks


def compute_signatures(
    texts: Sequence[str],
    ngram_width: ParameterInput,
    band_count: ParameterInput,
    band_size: ParameterInput,
    seed: ParameterInput,
    modes: Optional[Dict[str, BindingMode]] = None,
    max_workers: Optional[int] = None,
    parallel_threshold: int = PARALLEL_THRESHOLD,
) -> List[RowSignature]:
    """
    Compute one signature per row of a batch.

    Every parameter is either an int shared by the batch or a sequence with
    one value per row. ``modes`` may declare a sequence constant, in which
    case all of its values must agree. All validation happens before any
    row is hashed, so a failing batch produces no output.

    Args:
        texts: Row texts
        ngram_width: Characters per shingle
        band_count: Bands per signature
        band_size: Hash functions per band
        seed: Seed of each row's hash parameter stream
        modes: Optional explicit binding mode per parameter name
        max_workers: Worker processes for large batches (default: CPU count)
        parallel_threshold: Minimum batch size that is processed in parallel

    Returns:
        Signatures in row order

    Raises:
        InvalidParameterError: If any parameter or row text is invalid
        NonConstantParameterError: If a constant parameter varies by row
    """
    if max_workers is not None and max_workers <= 0:
        raise InvalidParameterError("max_workers", max_workers, "must be positive")

    start_time = time.perf_counter()
    params = bind_parameters(
        len(texts), ngram_width, band_count, band_size, seed, modes=modes
    )
    tasks = _row_tasks(texts, params)

    logger.info_with_fields(
        "Starting signature batch",
        operation="batch_start",
        rows=len(tasks),
        modes={field: mode.name for field, mode in params.modes.items()},
    )

    workers = min(max_workers or cpu_count(), len(tasks))
    if workers <= 1 or len(tasks) < parallel_threshold:
        logger.debug_with_fields(
            "Using sequential processing",
            operation="process_mode",
            mode="sequential",
            rows=len(tasks),
        )
        signatures = [_signature_row(task) for task in tasks]
    else:
        logger.debug_with_fields(
            "Using parallel processing",
            operation="process_mode",
            mode="parallel",
            worker_count=workers,
            rows=len(tasks),
        )
        signatures = _compute_parallel(tasks, workers)

    logger.info_with_fields(
        "Signature batch completed",
        operation="batch_complete",
        rows=len(signatures),
        total_time=time.perf_counter() - start_time,
    )
    return signatures


def _compute_parallel(tasks: List[_RowTask], workers: int) -> List[RowSignature]:
    """Fan rows out over worker processes, preserving row order."""
    chunksize = max(1, len(tasks) // (workers * 4))
    executor = ProcessPoolExecutor(
        max_workers=workers, mp_context=multiprocessing.get_context("spawn")
    )
    try:
        return list(executor.map(_signature_row, tasks, chunksize=chunksize))
    finally:
        executor.shutdown(wait=True, cancel_futures=True)
