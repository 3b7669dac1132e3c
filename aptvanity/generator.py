"""
Generator orchestrator: manages multiprocessing workers and aggregates their events.
"""

import logging
import queue
import time
from multiprocessing import Process, Queue, Event
from dataclasses import dataclass, field
from typing import Callable, Optional

from aptvanity.estimate import benchmark_throughput, estimate_search
from aptvanity.matcher import SearchConfig
from aptvanity.worker import ProgressEvent, ResultEvent, search_worker

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 1.0  # seconds between on_progress callbacks


@dataclass
class SearchStats:
    """Aggregate counters, written only by the coordinator."""
    total_generated: int = 0
    found_count: int = 0
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    @property
    def elapsed(self) -> float:
        end = self.end_time if self.end_time is not None else time.time()
        return end - self.start_time

    @property
    def rate(self) -> float:
        elapsed = self.elapsed
        return self.total_generated / elapsed if elapsed > 0 else 0.0


class VanityGenerator:
    """Orchestrates parallel vanity address search.

    Usage:
        gen = VanityGenerator(SearchConfig.create(prefix="cafe", target_count=2))
        gen.on_progress = lambda stats: print(f"{stats.rate:.0f} addresses/sec")
        gen.on_result = lambda result, stats: print(result.search_address)
        results = gen.run_blocking()
    """

    def __init__(self, config: SearchConfig):
        self.config = config

        # Callbacks
        self.on_progress: Optional[Callable[[SearchStats], None]] = None
        self.on_result: Optional[Callable[[ResultEvent, SearchStats], None]] = None

        # Internal state
        self._workers: list[Process] = []
        self._dead_workers: set[str] = set()
        self._event_queue: Optional[Queue] = None
        self._stop_event: Optional[Event] = None
        self._stats = SearchStats()
        self._last_progress = 0.0
        self._last_check = 0.0
        self._results: list[ResultEvent] = []
        self._is_running = False

    def get_estimate(self, benchmark: Callable[[], int] = benchmark_throughput) -> str:
        """Get a human-readable time estimate for the current pattern."""
        return estimate_search(
            self.config.prefix,
            self.config.suffix,
            self.config.thread_count,
            benchmark=benchmark,
        )

    @property
    def done(self) -> bool:
        return self._stats.found_count >= self.config.target_count

    def start(self) -> None:
        """Start worker processes (non-blocking)."""
        if self._is_running:
            raise RuntimeError("Generator is already running")

        self._event_queue = Queue()
        self._stop_event = Event()
        self._stats = SearchStats()
        self._last_progress = self._stats.start_time
        self._last_check = self._stats.start_time
        self._results = []
        self._dead_workers = set()
        self._is_running = True

        try:
            for i in range(self.config.thread_count):
                p = Process(
                    target=search_worker,
                    args=(self.config, self._event_queue, self._stop_event),
                    daemon=True,
                    name=f"aptvanity-worker-{i}",
                )
                p.start()
                self._workers.append(p)
        except BaseException:
            logger.debug("Worker pool startup failed after %d workers", len(self._workers))
            self.stop()
            raise
        logger.debug("Started %d workers", len(self._workers))

    def handle_event(self, event) -> None:
        """Apply one worker event to the stats. Events after completion are dropped."""
        if self.done:
            return

        if isinstance(event, ProgressEvent):
            self._stats.total_generated += event.count
            now = time.time()
            if now - self._last_progress >= PROGRESS_INTERVAL:
                self._last_progress = now
                if self.on_progress:
                    self.on_progress(self._stats)
        elif isinstance(event, ResultEvent):
            self._stats.found_count += 1
            self._results.append(event)
            if self.done:
                self._stats.end_time = time.time()
            if self.on_result:
                self.on_result(event, self._stats)
        else:
            logger.warning("Ignoring unknown worker event %r", event)

    def _check_workers(self) -> None:
        for w in self._workers:
            if w.name not in self._dead_workers and not w.is_alive():
                self._dead_workers.add(w.name)
                logger.warning("Worker %s exited unexpectedly (exit code %s)", w.name, w.exitcode)

        if self._workers and len(self._dead_workers) == len(self._workers):
            raise RuntimeError("All workers exited before the search completed")

    def poll(self, timeout: float = 0.5) -> SearchStats:
        """Handle every event that arrives within `timeout`, in arrival order."""
        if not self._is_running:
            return self._stats

        try:
            event = self._event_queue.get(timeout=timeout)
        except queue.Empty:
            event = None

        now = time.time()
        if event is None or now - self._last_check >= PROGRESS_INTERVAL:
            self._last_check = now
            self._check_workers()
        if event is None:
            return self._stats

        self.handle_event(event)
        while not self.done:
            try:
                event = self._event_queue.get_nowait()
            except queue.Empty:
                break
            self.handle_event(event)

        return self._stats

    def stop(self) -> list[ResultEvent]:
        """Stop all workers immediately and return collected results.

        In-flight attempts are discarded without draining the queue.
        """
        if self._stop_event:
            self._stop_event.set()

        for w in self._workers:
            if w.is_alive():
                w.terminate()
        for w in self._workers:
            w.join(timeout=2.0)

        if self._event_queue:
            self._event_queue.close()
            self._event_queue.cancel_join_thread()
            self._event_queue = None
        if self._stats.end_time is None:
            self._stats.end_time = time.time()

        logger.debug("Stopped %d workers", len(self._workers))
        self._workers = []
        self._is_running = False
        return self._results

    @property
    def stats(self) -> SearchStats:
        return self._stats

    @property
    def results(self) -> list[ResultEvent]:
        return list(self._results)

    @property
    def is_running(self) -> bool:
        return self._is_running

    def run_blocking(self, poll_timeout: float = 0.5) -> list[ResultEvent]:
        """Run until target_count matches are found. For CLI use."""
        self.start()
        try:
            while not self.done:
                self.poll(poll_timeout)
        except KeyboardInterrupt:
            logger.debug("Search interrupted")
        finally:
            self.stop()
        return self.results
