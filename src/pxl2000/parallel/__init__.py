"""Parallel row execution."""

from .scheduler import (
    RowRangeScheduler,
    SerialScheduler,
    ThreadPoolScheduler,
    create_scheduler,
    partition_rows,
)

__all__ = [
    "RowRangeScheduler",
    "SerialScheduler",
    "ThreadPoolScheduler",
    "create_scheduler",
    "partition_rows",
]
