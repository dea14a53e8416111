"""Tests for row-range schedulers."""

import logging
import threading

import pytest

from pxl2000.parallel import (
    SerialScheduler, ThreadPoolScheduler, create_scheduler, partition_rows,
)


class TestPartitionRows:
    def test_covers_range_exactly_once(self):
        chunks = partition_rows(3, 20, 4)
        rows = [r for lo, hi in chunks for r in range(lo, hi)]
        assert rows == list(range(3, 20))

    def test_chunks_are_contiguous(self):
        chunks = partition_rows(0, 10, 3)
        assert chunks == [(0, 4), (4, 7), (7, 10)]

    def test_more_parts_than_rows(self):
        assert partition_rows(5, 7, 8) == [(5, 6), (6, 7)]

    @pytest.mark.parametrize("start,end", [(4, 4), (6, 2)])
    def test_empty_range(self, start, end):
        assert partition_rows(start, end, 4) == []


class TestSerialScheduler:
    def test_single_call(self):
        calls = []
        SerialScheduler().for_range(lambda lo, hi: calls.append((lo, hi)), 2, 9)
        assert calls == [(2, 9)]

    def test_empty_range_skips_body(self):
        calls = []
        SerialScheduler().for_range(lambda lo, hi: calls.append((lo, hi)), 5, 5)
        assert calls == []


class TestThreadPoolScheduler:
    def test_runs_every_row_once(self):
        seen = []
        lock = threading.Lock()

        def body(lo, hi):
            with lock:
                seen.extend(range(lo, hi))

        with ThreadPoolScheduler(max_workers=4, min_rows_per_chunk=2) as scheduler:
            scheduler.for_range(body, 1, 31)

        assert sorted(seen) == list(range(1, 31))

    def test_uses_worker_threads(self):
        names = set()
        lock = threading.Lock()

        def body(lo, hi):
            with lock:
                names.add(threading.current_thread().name)

        with ThreadPoolScheduler(max_workers=3, min_rows_per_chunk=1) as scheduler:
            scheduler.for_range(body, 0, 30)

        assert all(name.startswith("pxl2000-rows") for name in names)

    def test_partitions_respect_min_rows(self):
        scheduler = ThreadPoolScheduler(max_workers=8, min_rows_per_chunk=10)
        assert len(scheduler.partitions(0, 35)) == 3
        assert len(scheduler.partitions(0, 5)) == 1

    def test_failure_propagates_after_join(self):
        finished = []
        lock = threading.Lock()

        def body(lo, hi):
            if lo == 0:
                raise ValueError("bad rows")
            with lock:
                finished.append(lo)

        with ThreadPoolScheduler(max_workers=4, min_rows_per_chunk=1) as scheduler:
            with pytest.raises(ValueError, match="bad rows"):
                scheduler.for_range(body, 0, 8)

        assert len(finished) == 3

    def test_failure_not_logged_by_scheduler(self, caplog):
        def body(lo, hi):
            raise ValueError("bad rows")

        with caplog.at_level(logging.DEBUG, logger="pxl2000.parallel.scheduler"):
            with ThreadPoolScheduler(max_workers=2, min_rows_per_chunk=1) as scheduler:
                with pytest.raises(ValueError):
                    scheduler.for_range(body, 0, 4)

        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]

    def test_shutdown_is_idempotent(self):
        scheduler = ThreadPoolScheduler(max_workers=2, min_rows_per_chunk=1)
        scheduler.for_range(lambda lo, hi: None, 0, 4)
        scheduler.shutdown()
        scheduler.shutdown()


class TestCreateScheduler:
    def test_one_worker_is_serial(self):
        assert isinstance(create_scheduler(max_workers=1), SerialScheduler)

    def test_default_is_pool(self):
        scheduler = create_scheduler()
        assert isinstance(scheduler, ThreadPoolScheduler)
        assert scheduler.max_workers >= 1
