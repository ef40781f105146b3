# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: progress.py
# -----------------------------------------------------------------------------
import logging
import queue
import threading
from typing import Callable, Optional

from utility.logging_utils import get_class_logger

ProgressSink = Callable[[str], None]

_CLOSE = object()


class ProgressChannel:
    """
    Bounded message channel between a batch run and a progress sink.

    notify() enqueues and returns; a single reporter thread delivers messages
    to the sink in order. When the queue is full notify() blocks, so messages
    are never dropped. Sink exceptions are logged and never reach the producer.
    """

    def __init__(
        self,
        sink: Optional[ProgressSink] = None,
        *,
        maxsize: int = 100,
        logger: logging.Logger | None = None,
    ) -> None:
        self.sink = sink
        self.logger = logger or get_class_logger(self.__class__)
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=max(1, maxsize))
        self._closed = False
        self._reporter = threading.Thread(target=self._drain, name="progress-reporter", daemon=True)
        self._reporter.start()

    def notify(self, message: str) -> None:
        if self._closed:
            raise RuntimeError("progress channel is closed")
        self.logger.info("Progress: %s", message)
        self._queue.put(message)

    def close(self, timeout: Optional[float] = None) -> None:
        """Deliver everything still queued, then stop the reporter."""
        if self._closed:
            return
        self._closed = True
        self._queue.put(_CLOSE)
        self._reporter.join(timeout)

    def _drain(self) -> None:
        while True:
            item = self._queue.get()
            if item is _CLOSE:
                return
            if self.sink is None:
                continue
            try:
                self.sink(item)  # type: ignore[arg-type]
            except Exception as e:
                self.logger.error("Error reporting progress: %s", e)

    def __enter__(self) -> "ProgressChannel":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
