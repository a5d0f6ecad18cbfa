import pytest

from qr_symbol.format_info import (
    bch_encode, draw_format_bits, draw_version_bits, format_bits_to_list,
    get_format_string, get_version_string,
)


@pytest.mark.parametrize("level,mask,expected", [
    ('L', 0, 0b111011111000100),
    ('L', 4, 0b110011000101111),
    ('M', 0, 0b101010000010010),
    ('M', 5, 0b100000011001110),
    ('Q', 6, 0b010111011011010),
    ('Q', 7, 0b010101111101101),
    ('H', 0, 0b001011010001001),
    ('H', 7, 0b000100000111011),
])
def test_format_strings(level, mask, expected):
    assert get_format_string(level, mask) == expected


def test_bch_remainder_is_divisible():
    assert bch_encode(0) == 0
    assert bch_encode(0b00101) >> 10 == 0b00101


@pytest.mark.parametrize("version,expected", [
    (7, 0x07C94),
    (8, 0x085BC),
    (21, 0x15683),
    (40, 0x28C69),
])
def test_version_strings(version, expected):
    assert get_version_string(version) == expected


def test_format_bits_written_twice():
    size = 21
    matrix = [[0] * size for _ in range(size)]
    draw_format_bits(matrix, 'M', 5)
    bits = format_bits_to_list(get_format_string('M', 5))

    first = [matrix[8][c] for c in range(6)] + [matrix[8][7], matrix[8][8], matrix[7][8]]
    first += [matrix[r][8] for r in range(5, -1, -1)]
    second = [matrix[r][8] for r in range(size - 1, size - 8, -1)]
    second += [matrix[8][c] for c in range(size - 8, size)]

    assert first == bits
    assert second == bits
    assert matrix[size - 8][8] == 1
    assert matrix[6][8] == 0


def test_version_bits():
    size = 45
    matrix = [[0] * size for _ in range(size)]
    draw_version_bits(matrix, 7)
    value = get_version_string(7)
    for i in range(18):
        bit = (value >> i) & 1
        assert matrix[i // 3][size - 11 + i % 3] == bit
        assert matrix[size - 11 + i % 3][i // 3] == bit


def test_no_version_bits_below_7():
    matrix = [[0] * 41 for _ in range(41)]
    draw_version_bits(matrix, 6)
    assert all(cell == 0 for row in matrix for cell in row)
