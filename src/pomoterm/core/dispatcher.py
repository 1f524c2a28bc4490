"""Fire-and-forget execution of slow side effects.

Notifications, audio and disk writes run on a single worker thread so the
tick/input loop never blocks on them. Jobs run in submission order, so
snapshots reach the disk in the order they were taken.
"""

from __future__ import annotations

import queue
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from pomoterm.core.exceptions import PersistenceFailure, SinkFailure
from pomoterm.utils.logger import get_logger


class Dispatcher:
    """Runs jobs off the loop thread and records their failures."""

    def __init__(self, max_workers: int = 1):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="pomoterm-io"
        )
        self.warnings: queue.SimpleQueue[str] = queue.SimpleQueue()
        self.logger = get_logger()
        self._closed = False

    def submit(self, name: str, job: Callable[[], None]) -> Future | None:
        """Queue ``job``. Never raises into the caller."""
        if self._closed:
            self.logger.warning("dispatcher closed, dropping job: %s", name)
            return None
        return self._executor.submit(self._run, name, job)

    def _run(self, name: str, job: Callable[[], None]) -> None:
        try:
            job()
        except PersistenceFailure as e:
            self.logger.error("%s failed: %s", name, e)
            self.warnings.put(f"Could not save: {e}")
        except SinkFailure as e:
            self.logger.warning("%s failed: %s", name, e)
        except Exception:
            self.logger.exception("%s failed", name)

    def drain_warnings(self) -> list[str]:
        """Warnings raised by finished jobs since the last call."""
        drained = []
        while True:
            try:
                drained.append(self.warnings.get_nowait())
            except queue.Empty:
                return drained

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting jobs and, by default, finish the queued ones."""
        self._closed = True
        self._executor.shutdown(wait=wait)


class InlineDispatcher(Dispatcher):
    """Runs jobs immediately on the calling thread, with the same error
    handling. Used by one-shot CLI commands."""

    def __init__(self):
        self.warnings = queue.SimpleQueue()
        self.logger = get_logger()
        self._closed = False

    def submit(self, name: str, job: Callable[[], None]) -> Future | None:
        if self._closed:
            self.logger.warning("dispatcher closed, dropping job: %s", name)
            return None
        self._run(name, job)
        return None

    def shutdown(self, wait: bool = True) -> None:
        self._closed = True
