"""Serial bridge for ESC motor control: COBS framing, CRC-8, MessagePack, PWM throttle mapping and worker threads."""

__version__ = "0.1.0"

__all__ = [
    "cobs",
    "config",
    "crc8",
    "esc",
    "motor_control",
    "msgpack_codec",
    "serial_io",
    "signaling",
]