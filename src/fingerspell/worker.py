"""
Background worker that classifies landmark frames off the detector's thread.
The detector pushes frames into a queue; a dedicated thread consumes them
in delivery order.
"""
import logging
import queue
import threading
from dataclasses import replace
from typing import Callable, Optional

from .pipeline import GesturePipeline, GestureResult
from .smoothing import SymbolDebouncer

logger = logging.getLogger(__name__)

ResultCallback = Callable[[GestureResult], None]

_STOP = object()


class ClassificationWorker:
    """
    Queue-fed classification loop.

    When the queue is full the oldest pending frame is dropped so the
    display always catches up to the latest hand pose.
    """

    def __init__(
        self,
        pipeline: GesturePipeline,
        on_result: ResultCallback,
        maxsize: int = 4,
        debouncer: Optional[SymbolDebouncer] = None,
    ):
        self._pipeline = pipeline
        self._on_result = on_result
        self._debouncer = debouncer
        self._queue: "queue.Queue" = queue.Queue(maxsize=maxsize)
        self._thread: Optional[threading.Thread] = None
        self._is_running = False
        self._dropped = 0
        self._lock = threading.Lock()

    def start(self) -> bool:
        """
        Start the consumer thread.

        Returns:
            False if a previous thread has not finished, since a second
            consumer on the same queue would break delivery order.
        """
        if self._is_running:
            return True
        if self._thread is not None and self._thread.is_alive():
            logger.warning("Previous classification thread is still running; not restarting")
            return False
        self._is_running = True
        self._thread = threading.Thread(target=self._run, name="classification-worker", daemon=True)
        self._thread.start()
        return True

    def stop(self, timeout: float = 1.0) -> None:
        """Process what is already queued, then stop the thread."""
        with self._lock:
            if not self._is_running:
                return
            self._is_running = False
        try:
            self._queue.put(_STOP, timeout=timeout)
        except queue.Full:
            logger.warning("Classification worker did not drain its queue before timeout")
            return
        if self._thread:
            self._thread.join(timeout=timeout)
            if not self._thread.is_alive():
                self._thread = None

    def submit(self, landmarks) -> bool:
        """
        Enqueue a LandmarkFrame (or None for "no hand").
        Safe to call from the detector's callback thread.

        Returns:
            False if the worker is not running.
        """
        with self._lock:
            if not self._is_running:
                return False
            self._put(landmarks)
            return True

    def _put(self, item) -> None:
        # Caller holds the lock
        while True:
            try:
                self._queue.put_nowait(item)
                return
            except queue.Full:
                try:
                    self._queue.get_nowait()
                except queue.Empty:
                    continue
                self._dropped += 1

    def _run(self) -> None:
        while True:
            try:
                item = self._queue.get(timeout=0.1)
            except queue.Empty:
                # Stop marker may not have fit in a full queue
                if not self._is_running:
                    break
                continue
            if item is _STOP:
                break

            result = self._pipeline.process(item)
            if self._debouncer is not None:
                symbol = self._debouncer.update(result.symbol)
                result = replace(result, symbol=symbol)

            try:
                self._on_result(result)
            except Exception as e:
                logger.exception(f"Result callback failed: {e}")

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def dropped(self) -> int:
        return self._dropped
