import queue
import time

import pytest

from escbridge import cobs
from escbridge.serial_io import SerialIO, parse_packet
from escbridge.signaling import RESPONSE_CHANNEL, Signaling


class Recorder:
    def __init__(self):
        self.sent = []

    def publish(self, channel, doc):
        self.sent.append((channel, doc))


class FakePort:
    def __init__(self):
        self.written = bytearray()

    def write(self, data):
        self.written += data

    def read(self, size=1):
        return b""


def test_ping_publishes_pong():
    rec = Recorder()
    sig = Signaling(rec, clock=lambda: 42)
    response = sig.handle({"command": "ping"})
    assert response == {"msg": "pong", "status": 200, "timestamp": 42}
    assert rec.sent == [(254, response)]
    assert RESPONSE_CHANNEL == 254


def test_get_water_level_publishes_status():
    rec = Recorder()
    sig = Signaling(rec, clock=lambda: 7)
    assert sig.handle({"command": "get_water_level"}) == {"status": 200, "timestamp": 7}
    assert rec.sent == [(254, {"status": 200, "timestamp": 7})]


@pytest.mark.parametrize("doc", [{"command": "reboot"}, {}, {"command": 3}, [1], None])
def test_unknown_commands_publish_nothing(doc):
    rec = Recorder()
    assert Signaling(rec).handle(doc) is None
    assert rec.sent == []


def test_default_clock_counts_up_from_zero():
    rec = Recorder()
    sig = Signaling(rec)
    first = sig.handle({"command": "ping"})["timestamp"]
    second = sig.handle({"command": "ping"})["timestamp"]
    assert 0 <= first <= second


def test_ping_over_serial_produces_valid_frame():
    port = FakePort()
    sig = Signaling(SerialIO(port), clock=lambda: 5)
    sig.handle({"command": "ping"})
    frame = bytes(port.written)
    assert frame[-1] == 0
    channel, doc = parse_packet(cobs.decode(frame[:-1]))
    assert channel == 254
    assert doc == {"msg": "pong", "status": 200, "timestamp": 5}


def test_submit_full_queue_raises():
    sig = Signaling(Recorder(), queue_size=1)
    sig.submit({"command": "ping"})
    with pytest.raises(queue.Full):
        sig.submit({"command": "ping"})


def test_worker_handles_submitted_commands():
    rec = Recorder()
    sig = Signaling(rec, clock=lambda: 1)
    with sig:
        sig.submit({"command": "ping"})
        deadline = time.monotonic() + 2.0
        while not rec.sent and time.monotonic() < deadline:
            time.sleep(0.005)
    assert rec.sent == [(254, {"msg": "pong", "status": 200, "timestamp": 1})]