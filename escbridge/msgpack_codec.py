"""MessagePack encoding of JSON-like documents."""

from __future__ import annotations

from typing import Any

import msgpack


class MsgPackDecodeError(ValueError):
    """Raised when bytes do not hold a MessagePack value."""


def encode_msgpack(doc: Any) -> bytes:
    """Serialise ``doc`` to MessagePack."""
    return msgpack.packb(doc, use_bin_type=True)


def decode_msgpack(data: bytes | bytearray | memoryview) -> Any:
    """Deserialise the first MessagePack value in ``data``.

    Trailing bytes after the first value are ignored.
    """
    unpacker = msgpack.Unpacker(raw=False, strict_map_key=False)
    unpacker.feed(bytes(data))
    try:
        return next(unpacker)
    except StopIteration:
        raise MsgPackDecodeError("empty or incomplete MessagePack input") from None
    except (msgpack.UnpackException, ValueError, TypeError) as exc:
        raise MsgPackDecodeError(str(exc)) from exc