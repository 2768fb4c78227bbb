"""Sequential and wave-based batch execution helpers."""
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar
import asyncio
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def chunked(items: Sequence[T], size: int) -> List[List[T]]:
    """
    Split items into consecutive chunks of at most size elements.

    Args:
        items: Sequence to split
        size: Maximum chunk length (must be positive)

    Returns:
        List of chunks in original order
    """
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


async def run_sequential_batches(
    items: Sequence[T],
    batch_size: int,
    worker: Callable[[List[T], int], Awaitable[List[R]]],
) -> List[R]:
    """
    Run worker over consecutive batches, one at a time, and concatenate results.

    Only one batch is in flight at any moment, so output order follows input
    order. Error handling is the worker's responsibility.

    Args:
        items: Items to process
        batch_size: Items per batch
        worker: Coroutine called as worker(batch, batch_num) with 1-based batch_num

    Returns:
        Concatenated worker results
    """
    results: List[R] = []
    for batch_num, batch in enumerate(chunked(items, batch_size), 1):
        results.extend(await worker(batch, batch_num))
    return results


async def run_in_waves(
    items: Sequence[T],
    wave_size: int,
    worker: Callable[[T], Awaitable[R]],
    on_wave_complete: Optional[Callable[[List[T], List[R]], Any]] = None,
) -> List[R]:
    """
    Run worker over items in waves of wave_size concurrent calls.

    Every call in a wave must finish before the next wave starts. The worker
    should not raise; an exception aborts the remaining waves.

    Args:
        items: Items to process
        wave_size: Concurrent calls per wave
        worker: Coroutine called once per item
        on_wave_complete: Optional callback(wave, wave_results) after each wave

    Returns:
        Results in input order
    """
    results: List[R] = []
    for wave in chunked(items, wave_size):
        wave_results = await asyncio.gather(*(worker(item) for item in wave))
        results.extend(wave_results)
        if on_wave_complete is not None:
            on_wave_complete(wave, list(wave_results))
    return results
