"""Row-range schedulers that run a body over disjoint chunks of rows."""

import logging
import os
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Tuple


logger = logging.getLogger(__name__)

RowBody = Callable[[int, int], None]


def partition_rows(start: int, end: int, parts: int) -> List[Tuple[int, int]]:
    """Split ``[start, end)`` into at most ``parts`` contiguous ranges.

    Every row lands in exactly one range. Earlier ranges get the extra
    row when the split is uneven. An empty input range gives no ranges.
    """
    total = end - start
    if total <= 0:
        return []
    parts = max(1, min(parts, total))
    base, extra = divmod(total, parts)

    ranges = []
    lo = start
    for i in range(parts):
        hi = lo + base + (1 if i < extra else 0)
        ranges.append((lo, hi))
        lo = hi
    return ranges


class RowRangeScheduler(ABC):
    """Executes a row body over ``[start, end)`` and blocks until done.

    Implementations decide how the range is partitioned and whether the
    partitions run concurrently. ``for_range`` must not return before
    every partition has finished, and must re-raise a failure from any
    partition.
    """

    @abstractmethod
    def for_range(self, body: RowBody, start: int, end: int) -> None:
        """Run ``body(lo, hi)`` for each partition of ``[start, end)``."""

    def shutdown(self) -> None:
        """Release worker resources. No-op by default."""

    def __enter__(self) -> "RowRangeScheduler":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()


class SerialScheduler(RowRangeScheduler):
    """Runs the whole range as one partition on the calling thread."""

    def for_range(self, body: RowBody, start: int, end: int) -> None:
        if end > start:
            body(start, end)


class ThreadPoolScheduler(RowRangeScheduler):
    """Fork-join scheduler backed by a thread pool.

    numpy releases the GIL inside its array kernels, so row chunks make
    progress in parallel even though the body is Python code.

    Args:
        max_workers: Worker thread count (``None`` = ``os.cpu_count()``).
        min_rows_per_chunk: Smallest chunk worth handing to a worker.
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        min_rows_per_chunk: int = 8,
    ):
        self._max_workers = max_workers or os.cpu_count() or 1
        self._min_rows = max(1, min_rows_per_chunk)
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def _ensure_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix="pxl2000-rows",
            )
            logger.debug("Started row pool with %d workers", self._max_workers)
        return self._executor

    def partitions(self, start: int, end: int) -> List[Tuple[int, int]]:
        """Chunks that :meth:`for_range` would dispatch for ``[start, end)``."""
        total = max(0, end - start)
        parts = min(self._max_workers, max(1, total // self._min_rows))
        return partition_rows(start, end, parts)

    def for_range(self, body: RowBody, start: int, end: int) -> None:
        chunks = self.partitions(start, end)
        if not chunks:
            return
        if len(chunks) == 1:
            body(*chunks[0])
            return

        executor = self._ensure_executor()
        futures = [executor.submit(body, lo, hi) for lo, hi in chunks]
        # Every chunk finishes before any failure is raised
        wait(futures)
        for future in futures:
            exc = future.exception()
            if exc is not None:
                raise exc

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
            logger.debug("Row pool shut down")


def create_scheduler(
    max_workers: Optional[int] = None,
    min_rows_per_chunk: int = 8,
) -> RowRangeScheduler:
    """Pick a scheduler for the requested worker count.

    ``max_workers == 1`` gives a :class:`SerialScheduler`; anything else
    gives a :class:`ThreadPoolScheduler`.
    """
    if max_workers == 1:
        return SerialScheduler()
    return ThreadPoolScheduler(
        max_workers=max_workers, min_rows_per_chunk=min_rows_per_chunk
    )
