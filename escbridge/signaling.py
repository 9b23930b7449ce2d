"""Worker that answers housekeeping commands such as ``ping``."""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Any, Callable, Protocol

from . import config

log = logging.getLogger(__name__)

RESPONSE_CHANNEL = 254
_POLL_SECONDS = 0.005


class _Publisher(Protocol):
    def publish(self, channel: int, doc: Any) -> Any: ...


def _uptime_clock() -> Callable[[], int]:
    start = time.monotonic()
    return lambda: int((time.monotonic() - start) * 1000)


class Signaling:
    """Handles command documents and publishes responses on channel 254."""

    def __init__(
        self,
        publisher: _Publisher,
        clock: Callable[[], int] | None = None,
        queue_size: int = config.SIGNALING_QUEUE_SIZE,
    ) -> None:
        self.publisher = publisher
        self.clock = clock if clock is not None else _uptime_clock()
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=queue_size)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def handle(self, doc: Any) -> dict[str, Any] | None:
        """Answer the command in ``doc``; return the response, or None if unknown."""
        command = doc.get("command") if isinstance(doc, dict) else None
        if not isinstance(command, str):
            command = "unknown"

        response: dict[str, Any]
        if command == "ping":
            log.debug("received ping command")
            response = {"msg": "pong", "status": 200, "timestamp": self.clock()}
        elif command == "get_water_level":
            log.debug("received get_water_level command")
            response = {"status": 200, "timestamp": self.clock()}
        else:
            log.debug("unknown command: %s", command)
            return None

        self.publisher.publish(RESPONSE_CHANNEL, response)
        return response

    def submit(self, doc: Any) -> None:
        """Queue ``doc`` for the worker; raises ``queue.Full`` when full."""
        self._queue.put_nowait(doc)

    def start(self) -> None:
        """Start the worker thread."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("signaling already running")
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="SignalingTask", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop the worker thread and wait for it to finish."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                doc = self._queue.get(timeout=_POLL_SECONDS)
            except queue.Empty:
                continue
            self.handle(doc)

    def __enter__(self) -> Signaling:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()