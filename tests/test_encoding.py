import pytest

from qr_symbol.encoding import (
    bits_to_bytes, build_data_codewords, detect_mode, encode_alphanumeric,
    encode_byte, encode_numeric, encode_segment, int_to_bits, normalize_payload,
    pad_codewords,
)
from qr_symbol.errors import EmptyPayloadError, PlacementMismatchError
from qr_symbol.tables import MODE_ALPHANUMERIC, MODE_BYTE, MODE_NUMERIC


def bits(text):
    return [int(b) for b in text.replace(' ', '')]


class TestDetectMode:
    def test_numeric(self):
        assert detect_mode("12345") == MODE_NUMERIC
        assert detect_mode(b"0000") == MODE_NUMERIC

    def test_alphanumeric(self):
        assert detect_mode("HELLO WORLD") == MODE_ALPHANUMERIC
        assert detect_mode("$%*+-./:") == MODE_ALPHANUMERIC

    def test_byte(self):
        assert detect_mode("hello") == MODE_BYTE
        assert detect_mode("HELLO!") == MODE_BYTE
        assert detect_mode(b"\x00\xff") == MODE_BYTE

    def test_non_ascii_digits_are_not_numeric(self):
        assert detect_mode("١٢") == MODE_BYTE


class TestNormalizePayload:
    def test_text_is_utf8(self):
        assert normalize_payload("hé") == b"h\xc3\xa9"

    def test_binary_types(self):
        assert normalize_payload(b"ab") == b"ab"
        assert normalize_payload(bytearray(b"ab")) == b"ab"
        assert normalize_payload(memoryview(b"ab")) == b"ab"

    def test_integer_becomes_decimal_text(self):
        assert normalize_payload(1234) == b"1234"
        assert normalize_payload(-5) == b"-5"

    def test_empty(self):
        with pytest.raises(EmptyPayloadError):
            normalize_payload("")
        with pytest.raises(EmptyPayloadError):
            normalize_payload(b"")

    @pytest.mark.parametrize("payload", [None, 1.5, True, ["a"]])
    def test_unsupported(self, payload):
        with pytest.raises(TypeError):
            normalize_payload(payload)

    def test_lone_surrogate_is_rejected(self):
        with pytest.raises(TypeError):
            normalize_payload("a\ud800b")


def test_int_to_bits_and_back():
    assert int_to_bits(5, 4) == [0, 1, 0, 1]
    assert bits_to_bytes([1, 0, 1]) == [0b10100000]


def test_numeric_packing():
    # 5 digits: one group of 3 (10 bits) and one of 2 (7 bits)
    packed = encode_numeric("12345")
    assert len(packed) == 17
    assert packed == int_to_bits(123, 10) + int_to_bits(45, 7)
    assert len(encode_numeric("1")) == 4
    assert encode_numeric("8675309") == bits("1101100011 1000010010 1001")


def test_alphanumeric_packing():
    assert encode_alphanumeric("HE") == int_to_bits(17 * 45 + 14, 11)
    assert encode_alphanumeric("HELLO WORLD")[-6:] == int_to_bits(13, 6)
    assert len(encode_alphanumeric("HELLO WORLD")) == 5 * 11 + 6


def test_byte_packing():
    assert encode_byte(b"\x01\xff") == int_to_bits(1, 8) + int_to_bits(255, 8)


def test_segment_header():
    seg = encode_segment("HELLO WORLD", 1, MODE_ALPHANUMERIC)
    assert seg[:4] == [0, 0, 1, 0]
    assert seg[4:13] == int_to_bits(11, 9)
    assert len(seg) == 4 + 9 + 61


def test_segment_counts_utf8_bytes_for_text():
    seg = encode_segment("é", 1, MODE_BYTE)
    assert seg[4:12] == int_to_bits(2, 8)
    assert len(seg) == 4 + 8 + 16


def test_segment_count_width_depends_on_version():
    assert len(encode_segment(b"a", 10, MODE_BYTE)) == 4 + 16 + 8
    assert len(encode_segment("1", 27, MODE_NUMERIC)) == 4 + 14 + 4


def test_hello_world_codewords():
    codewords = build_data_codewords("HELLO WORLD", 1, 'M', MODE_ALPHANUMERIC)
    assert codewords == [32, 91, 11, 120, 209, 114, 220, 77, 67, 64,
                         236, 17, 236, 17, 236, 17]


def test_padding_alternates():
    codewords = pad_codewords([0, 1, 0, 0], 5)
    assert codewords == [0b01000000, 0xEC, 0x11, 0xEC, 0x11]


def test_terminator_is_truncated_when_capacity_is_nearly_full():
    codewords = pad_codewords([1] * 14, 2)
    assert codewords == [0xFF, 0b11111100]


def test_overflow_is_an_internal_error():
    with pytest.raises(PlacementMismatchError):
        pad_codewords([1] * 17, 2)


def test_terminator_fills_the_last_four_bits():
    codewords = pad_codewords([1] * 12, 2)
    assert codewords == [0xFF, 0xF0]
