"""
Thread pool scenarios.

Every handler here only submits work and returns; the output of the work
arrives later from worker threads. Workers log through the sink captured
while the handler ran, and LogSink serializes their lines with everything
else.

Executors live as long as the catalog. Catalog.close() shuts them down and
waits for queued work, so batch runs see every line before printing.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from demo_console.catalogs.base import Catalog
from demo_console.output import current_sink, echo
from demo_console.registry import DemoEntry, DemoRegistry
from demo_console.sink import LogSink

logger = logging.getLogger(__name__)

# Simulated work per task, in seconds.
WORK_SECONDS = 0.05


class ThreadScenarios:
    """Owns the executors and threads the scenarios start."""

    def __init__(self, work_seconds: float = WORK_SECONDS) -> None:
        self.work_seconds = work_seconds
        self._fixed_pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="fixed-pool")
        self._cached_pool = ThreadPoolExecutor(thread_name_prefix="cached-pool")
        self._single = ThreadPoolExecutor(max_workers=1, thread_name_prefix="single")
        self._manual_threads: list[threading.Thread] = []
        self._lock = threading.Lock()

    def _work(self, sink: LogSink, label: str) -> None:
        started = threading.current_thread().name
        time.sleep(self.work_seconds)
        sink.append(f"  {label} done on {started}")

    def manual_threads(self) -> None:
        echo("=== scenario A: one new thread per task (not recommended) ===")
        sink = current_sink()
        for i in range(1, 4):
            thread = threading.Thread(
                target=self._work,
                args=(sink, f"manual task {i}"),
                name=f"manual-thread-{i}",
            )
            with self._lock:
                self._manual_threads.append(thread)
            echo(f"step {i} -> start thread {thread.name}")
            thread.start()
        echo("threads are created and destroyed per task and nothing limits how many run")

    def fixed_pool(self) -> None:
        echo("=== scenario B: fixed pool (size 2) ===")
        sink = current_sink()
        echo("submit 4 tasks; at most 2 run at the same time, the rest wait in the queue")
        for i in range(1, 5):
            self._fixed_pool.submit(self._work, sink, f"fixed task {i}")
            echo(f"  -> submitted task {i}")

    def cached_pool(self) -> None:
        echo("=== scenario C: growing pool for short bursts ===")
        sink = current_sink()
        echo("idle workers are reused; new ones are started only when all are busy")
        for i in range(1, 6):
            self._cached_pool.submit(self._work, sink, f"burst task {i}")
            echo(f"  -> submitted burst task {i}")

    def single_thread(self) -> None:
        echo("=== scenario D: single-thread executor (ordered) ===")
        sink = current_sink()
        echo("3 writes run one after another, in submission order, on the same thread")
        for i in range(1, 4):
            self._single.submit(self._work, sink, f"write {i}")
            echo(f"  -> queued write {i}")

    def close(self) -> None:
        """Wait for submitted work, then release the workers."""
        for pool in (self._fixed_pool, self._cached_pool, self._single):
            pool.shutdown(wait=True)
        with self._lock:
            threads, self._manual_threads = self._manual_threads, []
        for thread in threads:
            thread.join()
        logger.debug("Thread scenarios shut down (%d manual threads joined)", len(threads))


def build_catalog(work_seconds: float = WORK_SECONDS) -> Catalog:
    """Assemble the thread pool catalog."""
    scenarios = ThreadScenarios(work_seconds=work_seconds)
    registry = DemoRegistry.from_entries(
        [
            DemoEntry("manual_threads", "A: manual threads", scenarios.manual_threads),
            DemoEntry("fixed_pool", "B: fixed pool", scenarios.fixed_pool),
            DemoEntry("cached_pool", "C: growing pool", scenarios.cached_pool),
            DemoEntry("single_thread", "D: single-thread executor", scenarios.single_thread),
        ]
    )
    return Catalog(
        name="threads",
        title="Thread pools",
        registry=registry,
        greeting=("Thread pool demo is ready. Pick any scenario below.", ""),
        on_close=scenarios.close,
    )
