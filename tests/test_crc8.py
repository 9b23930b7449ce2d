import pytest

from escbridge.crc8 import CRC8_INIT, CRC8_POLY, crc8


def test_empty_is_initial_value():
    assert crc8(b"") == CRC8_INIT


def test_single_one_byte_gives_polynomial():
    assert crc8(b"\x01") == CRC8_POLY


def test_standard_check_value():
    assert crc8(b"123456789") == 0xF4


@pytest.mark.parametrize(
    "payload",
    [b"\x00", b"hello", bytes(range(256)), b"\xff" * 40, b"\x01\x82\xa3abc"],
)
def test_appending_crc_yields_zero(payload):
    assert crc8(payload + bytes([crc8(payload)])) == 0


@pytest.mark.parametrize("payload", [b"abc", bytes(range(50)), b"\x10\x20"])
def test_result_fits_in_a_byte(payload):
    assert 0 <= crc8(payload) <= 0xFF


def test_detects_single_bit_flip():
    payload = bytearray(b"motor command")
    original = crc8(payload)
    payload[3] ^= 0x04
    assert crc8(payload) != original
    assert crc8(bytes(payload)) == crc8(memoryview(bytes(payload)))