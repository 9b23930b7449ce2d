import pytest

from escbridge import cobs
from escbridge.crc8 import crc8
from escbridge.msgpack_codec import MsgPackDecodeError
from escbridge.serial_io import SerialIO, frame_message, parse_packet


class FakePort:
    def __init__(self, incoming=b""):
        self.incoming = bytearray(incoming)
        self.written = bytearray()

    @property
    def in_waiting(self):
        return len(self.incoming)

    def read(self, size=1):
        data = bytes(self.incoming[:size])
        del self.incoming[:size]
        return data

    def write(self, data):
        self.written += data
        return len(data)


def test_frame_ends_with_single_delimiter():
    frame = frame_message(7, {"a": 1})
    assert frame[-1] == 0
    assert 0 not in frame[:-1]


def test_frame_round_trip():
    doc = {"msg": "pong", "status": 200}
    frame = frame_message(254, doc)
    assert parse_packet(cobs.decode(frame[:-1])) == (254, doc)


def test_frame_carries_crc_of_channel_and_payload():
    packet = cobs.decode(frame_message(3, [1, 2])[:-1])
    assert packet[0] == 3
    assert packet[-1] == crc8(packet[:-1])


def test_channel_out_of_range():
    with pytest.raises(ValueError):
        frame_message(256, {})
    with pytest.raises(ValueError):
        SerialIO(FakePort()).subscribe(-1, print)


def test_parse_short_packet():
    with pytest.raises(ValueError, match="too short"):
        parse_packet(b"\x01\x02")


def test_parse_crc_mismatch():
    message = b"\x01\x80"
    with pytest.raises(ValueError, match="CRC"):
        parse_packet(message + bytes([crc8(message) ^ 0xFF]))


def test_parse_bad_msgpack():
    message = b"\x01\xc1"
    with pytest.raises(MsgPackDecodeError):
        parse_packet(message + bytes([crc8(message)]))


def test_publish_writes_frame():
    port = FakePort()
    io = SerialIO(port)
    frame = io.publish(5, {"x": 1.5})
    assert bytes(port.written) == frame == frame_message(5, {"x": 1.5})


def test_update_dispatches_to_subscriber():
    port = FakePort(frame_message(1, {"0": 0.5}) + frame_message(2, "hi"))
    io = SerialIO(port)
    got = []
    io.subscribe(1, lambda d: got.append(("one", d)))
    io.subscribe(2, lambda d: got.append(("two", d)))
    assert io.update_subscriber() == 2
    assert got == [("one", {"0": 0.5}), ("two", "hi")]


def test_update_handles_split_frames_and_leading_zeros():
    frame = frame_message(9, {"k": [1, 2, 3]})
    port = FakePort(b"\x00\x00" + frame[:4])
    io = SerialIO(port)
    got = []
    io.subscribe(9, got.append)
    assert io.update_subscriber() == 0
    port.incoming += frame[4:]
    assert io.update_subscriber() == 1
    assert got == [{"k": [1, 2, 3]}]


def test_corrupt_frame_is_dropped_and_next_delivered():
    good = frame_message(4, {"ok": True})
    bad = bytearray(frame_message(4, {"ok": False}))
    bad[2] ^= 0x01
    if bad[2] == 0:
        bad[2] = 0x55
    port = FakePort(bytes(bad) + good)
    io = SerialIO(port)
    got = []
    io.subscribe(4, got.append)
    assert io.update_subscriber() == 1
    assert got == [{"ok": True}]


def test_unsubscribed_channel_ignored():
    port = FakePort(frame_message(10, 1))
    io = SerialIO(port)
    got = []
    io.subscribe(11, got.append)
    assert io.update_subscriber() == 0
    assert got == []
    assert port.in_waiting == 0