"""
Data encoding: mode detection and bitstream construction.

The payload is turned into mode indicator + character count indicator +
packed data bits, then terminated and padded to the exact number of data
codewords of the chosen version and level.

References:
- https://www.thonky.com/qr-code-tutorial/data-encoding
"""

from typing import List, Union

from .errors import EmptyPayloadError, PlacementMismatchError
from .tables import (
    MODE_ALPHANUMERIC, MODE_BYTE, MODE_NUMERIC, MODE_TERMINATOR,
    data_codewords, get_character_count_bits,
)

Payload = Union[str, bytes, bytearray, memoryview, int]

# Alphanumeric character mapping
ALPHANUMERIC_TABLE = {
    '0': 0, '1': 1, '2': 2, '3': 3, '4': 4,
    '5': 5, '6': 6, '7': 7, '8': 8, '9': 9,
    'A': 10, 'B': 11, 'C': 12, 'D': 13, 'E': 14,
    'F': 15, 'G': 16, 'H': 17, 'I': 18, 'J': 19,
    'K': 20, 'L': 21, 'M': 22, 'N': 23, 'O': 24,
    'P': 25, 'Q': 26, 'R': 27, 'S': 28, 'T': 29,
    'U': 30, 'V': 31, 'W': 32, 'X': 33, 'Y': 34,
    'Z': 35, ' ': 36, '$': 37, '%': 38, '*': 39,
    '+': 40, '-': 41, '.': 42, '/': 43, ':': 44
}

NUMERIC_CHARACTERS = frozenset('0123456789')

PAD_CODEWORDS = (0xEC, 0x11)


def normalize_payload(payload: Payload) -> bytes:
    """
    Convert any accepted payload type to the bytes that get encoded.

    Text is encoded as UTF-8 and integers are written in decimal.

    Raises:
        TypeError: for unsupported payload types, or text that cannot
            be encoded as UTF-8 (lone surrogates)
        EmptyPayloadError: if the payload is empty
    """
    if isinstance(payload, str):
        try:
            data = payload.encode('utf-8')
        except UnicodeEncodeError as e:
            raise TypeError(f"Text payload is not valid Unicode: {e.reason}") from e
    elif isinstance(payload, (bytes, bytearray, memoryview)):
        data = bytes(payload)
    elif isinstance(payload, int) and not isinstance(payload, bool):
        data = str(payload).encode('ascii')
    else:
        raise TypeError(f"Unsupported payload type: {type(payload).__name__}")

    if not data:
        raise EmptyPayloadError()
    return data


def _as_text(data: Union[str, bytes]) -> str:
    # latin-1 maps every byte to the character with the same code point
    return data.decode('latin-1') if isinstance(data, (bytes, bytearray)) else data


def detect_mode(data: Union[str, bytes]) -> int:
    """Detect the most efficient encoding mode for the data."""
    text = _as_text(data)
    if all(c in NUMERIC_CHARACTERS for c in text):
        return MODE_NUMERIC
    if all(c in ALPHANUMERIC_TABLE for c in text):
        return MODE_ALPHANUMERIC
    return MODE_BYTE


def int_to_bits(value: int, length: int) -> List[int]:
    """Convert integer to list of bits with specified length."""
    return [(value >> (length - 1 - i)) & 1 for i in range(length)]


def bits_to_bytes(bits: List[int]) -> List[int]:
    """Convert list of bits to list of bytes, zero-filling the last byte."""
    bits = list(bits)
    while len(bits) % 8 != 0:
        bits.append(0)

    bytes_list = []
    for i in range(0, len(bits), 8):
        byte = 0
        for j in range(8):
            byte = (byte << 1) | bits[i + j]
        bytes_list.append(byte)

    return bytes_list


def encode_numeric(data: str) -> List[int]:
    """Encode numeric data. Returns list of bits."""
    bits = []
    i = 0
    while i < len(data):
        if i + 3 <= len(data):
            value = int(data[i:i+3])
            bits.extend(int_to_bits(value, 10))
            i += 3
        elif i + 2 <= len(data):
            value = int(data[i:i+2])
            bits.extend(int_to_bits(value, 7))
            i += 2
        else:
            value = int(data[i])
            bits.extend(int_to_bits(value, 4))
            i += 1
    return bits


def encode_alphanumeric(data: str) -> List[int]:
    """Encode alphanumeric data. Returns list of bits."""
    bits = []
    i = 0
    while i < len(data):
        if i + 2 <= len(data):
            v1 = ALPHANUMERIC_TABLE[data[i]]
            v2 = ALPHANUMERIC_TABLE[data[i + 1]]
            value = 45 * v1 + v2
            bits.extend(int_to_bits(value, 11))
            i += 2
        else:
            value = ALPHANUMERIC_TABLE[data[i]]
            bits.extend(int_to_bits(value, 6))
            i += 1
    return bits


def encode_byte(data: bytes) -> List[int]:
    bits = []
    for byte in data:
        bits.extend(int_to_bits(byte, 8))
    return bits


def encode_segment(data: Union[str, bytes], version: int, mode: int) -> List[int]:
    """
    Encode one data segment.

    Returns: List of bits including mode indicator and character count.
    """
    if mode == MODE_BYTE:
        raw = data.encode('utf-8') if isinstance(data, str) else bytes(data)
        char_count = len(raw)
        payload_bits = encode_byte(raw)
    else:
        text = _as_text(data)
        char_count = len(text)
        if mode == MODE_NUMERIC:
            payload_bits = encode_numeric(text)
        else:
            payload_bits = encode_alphanumeric(text)

    bits = []

    # Mode indicator (4 bits)
    bits.extend(int_to_bits(mode, 4))

    # Character count indicator
    count_bits = get_character_count_bits(version, mode)
    bits.extend(int_to_bits(char_count, count_bits))

    bits.extend(payload_bits)
    return bits


def pad_codewords(data_bits: List[int], capacity_bytes: int) -> List[int]:
    """
    Pad data to required length.

    Raises:
        PlacementMismatchError: if the bits already exceed the capacity
    """
    capacity_bits = capacity_bytes * 8
    if len(data_bits) > capacity_bits:
        raise PlacementMismatchError(
            f"Bitstream of {len(data_bits)} bits exceeds {capacity_bits} data bits")

    bits = list(data_bits)

    # Add terminator (up to 4 bits)
    term_bits = min(4, capacity_bits - len(bits))
    bits.extend(int_to_bits(MODE_TERMINATOR, 4)[:term_bits])

    # Pad to byte boundary, then convert
    codewords = bits_to_bytes(bits)

    # Add pad codewords (alternating 236, 17)
    i = 0
    while len(codewords) < capacity_bytes:
        codewords.append(PAD_CODEWORDS[i % 2])
        i += 1

    return codewords


def build_data_codewords(data: Union[str, bytes], version: int,
                         ec_level: str, mode: int) -> List[int]:
    """Encode and pad a payload into the data codewords of a symbol."""
    bits = encode_segment(data, version, mode)
    return pad_codewords(bits, data_codewords(version, ec_level))
