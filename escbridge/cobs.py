"""Consistent Overhead Byte Stuffing."""

from __future__ import annotations


class CobsDecodeError(ValueError):
    """Raised when a byte string is not a valid COBS stream."""


def encode(data: bytes | bytearray | memoryview) -> bytes:
    """Encode ``data`` with COBS. The result holds no zero bytes."""
    out = bytearray([0])
    code_idx = 0
    code = 1

    for byte in bytes(data):
        if byte == 0:
            out[code_idx] = code
            code_idx = len(out)
            out.append(0)
            code = 1
            continue
        out.append(byte)
        code += 1
        if code == 0xFF:
            out[code_idx] = code
            code_idx = len(out)
            out.append(0)
            code = 1

    out[code_idx] = code
    return bytes(out)


def decode(data: bytes | bytearray | memoryview) -> bytes:
    """Decode a COBS stream (without its trailing delimiter)."""
    data = bytes(data)
    size = len(data)
    out = bytearray()
    idx = 0

    while idx < size:
        code = data[idx]
        if code == 0:
            raise CobsDecodeError(f"zero code byte at offset {idx}")
        end = idx + code
        if end > size:
            raise CobsDecodeError(f"block at offset {idx} runs past end of data")
        out += data[idx + 1 : end]
        idx = end
        if code != 0xFF and idx < size:
            out.append(0)

    return bytes(out)