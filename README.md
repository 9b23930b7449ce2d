# escbridge

A small library for talking to a bank of electronic speed controllers (ESCs)
over a serial link. It provides:

- **Settings** (`escbridge.config`): ESC pins, PWM frequency (400 Hz) and
  resolution (16 bits), pulse limits (`ESC_MIN` 1100 µs, `ESC_MID` 1500 µs,
  `ESC_MAX` 1900 µs), bidirectional mode and queue sizes.
- **COBS framing** (`escbridge.cobs`): `encode(data)` and `decode(data)`.
  `decode` raises `CobsDecodeError` (a `ValueError`) for malformed streams.
- **CRC-8** (`escbridge.crc8`): `crc8(data)` with the SMBus parameters
  (polynomial `0x07`, initial value `0x00`).
- **MessagePack payloads** (`escbridge.msgpack_codec`): `encode_msgpack(doc)` and
  `decode_msgpack(data)`. Decoding returns the first value and ignores trailing
  bytes; empty, incomplete or invalid input raises `MsgPackDecodeError`.
- **Throttle mapping** (`escbridge.esc`): `throttle_to_pulse_us(...)` turns a
  throttle value into a pulse width in microseconds, `pulse_to_duty(...)` turns
  that into a PWM duty value, and `ESCDriver.set_throttle(...)` writes the duty
  to a `PwmOutput` and returns it.
- **Serial messaging** (`escbridge.serial_io`): `frame_message`, `parse_packet`,
  `open_port` and `SerialIO`, which publishes documents on numbered channels and
  dispatches incoming packets to subscribed callbacks.
- **Workers** (`escbridge.motor_control`, `escbridge.signaling`): `MotorControl`
  applies throttle documents to the ESCs, and `Signaling` answers `ping` and
  `get_water_level` commands. Both can run as background threads.

## Installation

```
pip install escbridge
```

## Wire format

Every message is framed as:

```
COBS( channel_byte + msgpack(document) + crc8(channel_byte + msgpack(document)) ) + 0x00
```

Channels are 0–255; other values raise `ValueError`. The receiver collects
bytes up to each `0x00`, COBS-decodes them, checks the trailing CRC, and hands
the decoded document to the callback subscribed to the channel. Packets that
are shorter than three bytes, fail the CRC, or do not decode are dropped, as
are packets on channels with no subscriber.

## Examples

Framing a message by hand:

```python
from escbridge import cobs
from escbridge.serial_io import frame_message, parse_packet

frame = frame_message(1, {"0": 0.5, "3": -0.25})
channel, doc = parse_packet(cobs.decode(frame[:-1]))
assert channel == 1
assert doc == {"0": 0.5, "3": -0.25}
```

Mapping a throttle to a pulse width (bidirectional, 1100–1900 µs around 1500 µs):

```python
from escbridge.esc import throttle_to_pulse_us, pulse_to_duty

us = throttle_to_pulse_us(0.5, True, 1100, 1900, 1500)   # 1700.0
duty = pulse_to_duty(us, 400, 16)
```

Throttle values are clamped to `[-1.0, 1.0]` in bidirectional mode and to
`[0.0, 1.0]` otherwise.

Applying a motor command:

```python
from escbridge.esc import PwmOutput
from escbridge.motor_control import MotorControl

output = PwmOutput()
motors = MotorControl(output)        # every ESC starts at 0 throttle
written = motors.apply({"0": 0.5, "7": -1.0, "9": 1.0})
# written maps ESC index to duty; index 9 is out of range and ignored
print(output.duties)
```

Keys are read as integers the way C `atoi` does (leading digits, else 0);
non-numeric throttle values count as 0. With `start()`/`stop()` (or a `with`
block) a worker thread applies documents queued with `submit()`, which raises
`queue.Full` when the queue is full.

Running a serial bridge:

```python
from escbridge.motor_control import MotorControl
from escbridge.serial_io import SerialIO, open_port
from escbridge.signaling import Signaling

with SerialIO(open_port("/dev/ttyUSB0", 115200)) as link:
    motors = MotorControl()
    signals = Signaling(link)           # replies are published on channel 254
    link.subscribe(1, motors.submit)
    link.subscribe(2, signals.submit)
    with motors, signals:
        while True:
            link.update_subscriber()    # returns the number of packets dispatched
```

`Signaling.handle(doc)` answers `{"command": "ping"}` with
`{"msg": "pong", "status": 200, "timestamp": ...}` and
`{"command": "get_water_level"}` with `{"status": 200, "timestamp": ...}`; the
timestamp is milliseconds since the `Signaling` object was created unless a
`clock` is given. Other commands get no reply and `handle` returns `None`.

## What this package does not do

- `PwmOutput` only records the last duty written to each channel in its
  `duties` dictionary; it does not drive real PWM pins. To control hardware,
  pass an object with a `write(channel, duty)` method of your own.
- `get_water_level` replies carry no per-task stack information, only the
  status and timestamp.
- There is no command-line tool and no network or web interface; the serial
  loop is yours to run.

## Testing

```
pip install -e .[test]
pytest
```