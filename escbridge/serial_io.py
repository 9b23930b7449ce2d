"""Framed MessagePack publish/subscribe over a serial link.

A frame is ``COBS(channel || msgpack(doc) || crc8) || 0x00``.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Protocol

from . import cobs
from .crc8 import crc8
from .msgpack_codec import decode_msgpack, encode_msgpack

log = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 115200
FRAME_DELIMITER = 0x00
MIN_PACKET_SIZE = 3

Callback = Callable[[Any], None]


class _Port(Protocol):
    def read(self, size: int = ...) -> bytes: ...

    def write(self, data: bytes) -> int | None: ...


def _check_channel(channel: int) -> int:
    if not 0 <= channel <= 0xFF:
        raise ValueError(f"channel must be in 0..255, got {channel}")
    return channel


def frame_message(channel: int, doc: Any) -> bytes:
    """Build the wire frame for ``doc`` on ``channel``, delimiter included."""
    message = bytearray([_check_channel(channel)])
    message += encode_msgpack(doc)
    message.append(crc8(message))
    return cobs.encode(message) + bytes([FRAME_DELIMITER])


def parse_packet(packet: bytes | bytearray | memoryview) -> tuple[int, Any]:
    """Check and unpack a COBS-decoded packet into ``(channel, doc)``.

    Raises ``ValueError`` for a short packet or CRC mismatch, and
    ``MsgPackDecodeError`` when the payload is not MessagePack.
    """
    packet = bytes(packet)
    if len(packet) < MIN_PACKET_SIZE:
        raise ValueError("packet too short")
    message, received_crc = packet[:-1], packet[-1]
    if crc8(message) != received_crc:
        raise ValueError("CRC mismatch")
    return message[0], decode_msgpack(message[1:])


def open_port(port: str, baudrate: int = DEFAULT_BAUDRATE) -> Any:
    """Open a serial port suitable for :class:`SerialIO`."""
    import serial

    return serial.Serial(port, baudrate, timeout=0)


class SerialIO:
    """Publishes documents to, and dispatches documents from, a byte stream."""

    def __init__(self, port: _Port) -> None:
        self.port = port
        self._callbacks: dict[int, Callback] = {}
        self._buffer = bytearray()
        self._write_lock = threading.Lock()

    def subscribe(self, channel: int, callback: Callback) -> None:
        """Call ``callback(doc)`` for every valid packet on ``channel``."""
        self._callbacks[_check_channel(channel)] = callback

    def publish(self, channel: int, doc: Any) -> bytes:
        """Send ``doc`` on ``channel`` and return the frame written."""
        frame = frame_message(channel, doc)
        with self._write_lock:
            self.port.write(frame)
        return frame

    def _read_available(self) -> bytes:
        waiting = getattr(self.port, "in_waiting", None)
        if waiting is None:
            return self.port.read(4096) or b""
        if waiting <= 0:
            return b""
        return self.port.read(waiting) or b""

    def update_subscriber(self) -> int:
        """Consume all pending input; return how many packets were dispatched."""
        dispatched = 0
        while chunk := self._read_available():
            for byte in chunk:
                if byte != FRAME_DELIMITER:
                    self._buffer.append(byte)
                    continue
                if not self._buffer:
                    continue
                raw = bytes(self._buffer)
                self._buffer.clear()
                if self._process(raw):
                    dispatched += 1
        return dispatched

    def _process(self, raw: bytes) -> bool:
        try:
            channel, doc = parse_packet(cobs.decode(raw))
        except ValueError as exc:
            log.debug("dropping packet: %s", exc)
            return False
        callback = self._callbacks.get(channel)
        if callback is None:
            return False
        callback(doc)
        return True

    def close(self) -> None:
        """Close the underlying port if it can be closed."""
        close = getattr(self.port, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> SerialIO:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()