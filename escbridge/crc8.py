"""CRC-8 as used by SMBus (polynomial 0x07, initial value 0x00)."""

from __future__ import annotations

CRC8_INIT = 0x00
CRC8_POLY = 0x07


def _make_table() -> tuple[int, ...]:
    table = []
    for value in range(256):
        crc = value
        for _ in range(8):
            crc = ((crc << 1) ^ CRC8_POLY) if crc & 0x80 else (crc << 1)
            crc &= 0xFF
        table.append(crc)
    return tuple(table)


_TABLE = _make_table()


def crc8(data: bytes | bytearray | memoryview) -> int:
    """Return the CRC-8 of ``data``."""
    crc = CRC8_INIT
    for byte in bytes(data):
        crc = _TABLE[crc ^ byte]
    return crc