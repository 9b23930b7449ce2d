"""Worker that applies throttle documents to a bank of ESCs."""

from __future__ import annotations

import logging
import queue
import re
import threading
from collections.abc import Sequence
from typing import Any

from . import config
from .esc import ESCDriver, PwmOutput

log = logging.getLogger(__name__)

_POLL_SECONDS = 0.01
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _esc_index(key: Any) -> int:
    """Parse a key the way C ``atoi`` does: leading integer, else 0."""
    if isinstance(key, int) and not isinstance(key, bool):
        return key
    match = _LEADING_INT.match(str(key))
    return int(match.group(1)) if match else 0


def _as_float(value: Any) -> float:
    if isinstance(value, (int, float)):
        return float(value)
    return 0.0


class MotorControl:
    """Owns the ESC drivers and applies queued throttle documents to them.

    A document maps ESC indices (as strings or integers) to throttle values.
    """

    def __init__(
        self,
        output: PwmOutput | None = None,
        pins: Sequence[int] = config.ESC_PINS,
        freq_hz: int = config.ESC_PWM_FREQUENCY,
        resolution_bits: int = config.ESC_PWM_RESOLUTION,
        queue_size: int = config.MOTOR_QUEUE_SIZE,
    ) -> None:
        self.output = output if output is not None else PwmOutput()
        self.drivers = [
            ESCDriver(pin, freq_hz, resolution_bits, channel, self.output)
            for channel, pin in enumerate(pins)
        ]
        for driver in self.drivers:
            driver.set_throttle(0.0)
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=queue_size)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def apply(self, doc: Any) -> dict[int, int]:
        """Apply ``doc`` now; return the duty written per ESC index."""
        written: dict[int, int] = {}
        if not isinstance(doc, dict):
            return written
        for key, value in doc.items():
            idx = _esc_index(key)
            if 0 <= idx < len(self.drivers):
                throttle = _as_float(value)
                written[idx] = self.drivers[idx].set_throttle(throttle)
                log.debug("ESC %d set to %s", idx, throttle)
        return written

    def submit(self, doc: Any) -> None:
        """Queue ``doc`` for the worker; raises ``queue.Full`` when full."""
        self._queue.put_nowait(doc)

    def start(self) -> None:
        """Start the worker thread."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("motor control already running")
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="MotorControlTask", daemon=True
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
            self.apply(doc)

    def __enter__(self) -> MotorControl:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()