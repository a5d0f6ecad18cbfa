"""
Format and version information.

Format information carries the error correction level and mask pattern as
5 data bits protected by a (15,5) BCH code. Symbols of version 7 and up
also carry the version number in an (18,6) BCH code.

References:
- https://www.thonky.com/qr-code-tutorial/format-version-information
"""

from typing import List

# BCH generator polynomial: x^10 + x^8 + x^5 + x^4 + x^2 + x + 1
BCH_GENERATOR = 0b10100110111

# x^12 + x^11 + x^10 + x^9 + x^8 + x^5 + x^2 + 1
VERSION_GENERATOR = 0b1111100100101

# Format mask pattern
FORMAT_MASK = 0b101010000010010

# Error correction level bits
EC_LEVEL_BITS = {
    'L': 0b01,
    'M': 0b00,
    'Q': 0b11,
    'H': 0b10
}


def bch_encode(data_5bits: int) -> int:
    """
    Encode 5 data bits using (15,5) BCH code.

    Args:
        data_5bits: 5-bit integer (EC level 2 bits + mask pattern 3 bits)

    Returns:
        15-bit encoded format information (before final XOR)
    """
    remainder = data_5bits << 10
    for i in range(14, 9, -1):
        if remainder & (1 << i):
            remainder ^= BCH_GENERATOR << (i - 10)
    return (data_5bits << 10) | remainder


def get_format_string(ec_level: str, mask_pattern: int) -> int:
    """Generate the complete 15-bit format string."""
    data_5bits = (EC_LEVEL_BITS[ec_level] << 3) | mask_pattern
    encoded = bch_encode(data_5bits)
    return encoded ^ FORMAT_MASK


def format_bits_to_list(format_int: int) -> List[int]:
    """Convert 15-bit integer to list of bits, most significant first."""
    return [(format_int >> (14 - i)) & 1 for i in range(15)]


def get_version_string(version: int) -> int:
    """Encode a version number (7-40) into its 18-bit BCH codeword."""
    remainder = version << 12
    for i in range(17, 11, -1):
        if remainder & (1 << i):
            remainder ^= VERSION_GENERATOR << (i - 12)
    return (version << 12) | remainder


def draw_format_bits(matrix: List[List[int]], ec_level: str, mask: int):
    """Write both copies of the format information into the matrix."""
    size = len(matrix)
    format_bits = format_bits_to_list(get_format_string(ec_level, mask))

    # Primary position: around top-left finder
    # Bits 0-5: row 8, columns 0-5
    # Bit 6: row 8, column 7
    # Bit 7: row 8, column 8
    # Bit 8: column 8, row 7
    # Bits 9-14: column 8, rows 5 up to 0 (skipping 6)
    for i in range(6):
        matrix[8][i] = format_bits[i]
    matrix[8][7] = format_bits[6]
    matrix[8][8] = format_bits[7]
    matrix[7][8] = format_bits[8]
    for i in range(6):
        matrix[5 - i][8] = format_bits[9 + i]

    # Secondary position
    # Bits 0-6: column 8, rows (size-1) up to (size-7)
    # Bits 7-14: row 8, columns (size-8) to (size-1)
    for i in range(7):
        matrix[size - 1 - i][8] = format_bits[i]
    for i in range(8):
        matrix[8][size - 8 + i] = format_bits[7 + i]

    # The dark module sits beside the lower copy and is always set
    matrix[size - 8][8] = 1


def draw_version_bits(matrix: List[List[int]], version: int):
    """
    Write both 6x3 version blocks. No-op below version 7.

    Bit i (least significant first) goes to row i // 3, column
    size - 11 + i % 3 near the top-right finder and to the transposed cell
    near the bottom-left finder.
    """
    if version < 7:
        return
    size = len(matrix)
    bits = get_version_string(version)
    for i in range(18):
        bit = (bits >> i) & 1
        a = size - 11 + i % 3
        b = i // 3
        matrix[b][a] = bit
        matrix[a][b] = bit
