"""
Static lookup tables for QR code versions 1-40.

All values follow ISO/IEC 18004. Nothing in this module changes after
import, so the tables can be shared freely between concurrent encodes.

References:
- https://www.thonky.com/qr-code-tutorial/error-correction-table
- https://www.thonky.com/qr-code-tutorial/alignment-pattern-locations
"""

from typing import Dict, List, NamedTuple

MIN_VERSION = 1
MAX_VERSION = 40

EC_LEVELS = ('L', 'M', 'Q', 'H')
DEFAULT_EC_LEVEL = 'M'

#==============================================================================
# MODE INDICATORS AND CHARACTER COUNT WIDTHS
#==============================================================================

# Mode indicators (4-bit values)
MODE_NUMERIC = 0b0001
MODE_ALPHANUMERIC = 0b0010
MODE_BYTE = 0b0100
MODE_KANJI = 0b1000
MODE_TERMINATOR = 0b0000

MODE_NAMES = {
    MODE_NUMERIC: 'numeric',
    MODE_ALPHANUMERIC: 'alphanumeric',
    MODE_BYTE: 'byte',
    MODE_KANJI: 'kanji',
}

# Character count indicator widths for versions 1-9, 10-26 and 27-40
CHARACTER_COUNT_BITS = {
    MODE_NUMERIC: (10, 12, 14),
    MODE_ALPHANUMERIC: (9, 11, 13),
    MODE_BYTE: (8, 16, 16),
    MODE_KANJI: (8, 10, 12),
}


def get_character_count_bits(version: int, mode: int) -> int:
    """Get the number of bits for the character count indicator."""
    if version <= 9:
        tier = 0
    elif version <= 26:
        tier = 1
    else:
        tier = 2
    return CHARACTER_COUNT_BITS[mode][tier]


#==============================================================================
# CODEWORD AND ERROR CORRECTION BLOCK TABLES
#==============================================================================

# Total codewords (data + error correction) per version, index 0 unused
TOTAL_CODEWORDS = (
    0,
    26, 44, 70, 100, 134, 172, 196, 242, 292, 346,
    404, 466, 532, 581, 655, 733, 815, 901, 991, 1085,
    1156, 1258, 1364, 1474, 1588, 1706, 1828, 1921, 2051, 2185,
    2323, 2465, 2611, 2761, 2876, 3034, 3196, 3362, 3532, 3706,
)

# Data modules left over once every codeword is placed, index 0 unused
REMAINDER_BITS = (
    0,
    0, 7, 7, 7, 7, 7, 0, 0, 0, 0,
    0, 0, 0, 3, 3, 3, 3, 3, 3, 3,
    4, 4, 4, 4, 4, 4, 4, 3, 3, 3,
    3, 3, 3, 3, 0, 0, 0, 0, 0, 0,
)

# Total error correction codewords per version and level
EC_CODEWORDS = {
    1: {'L': 7, 'M': 10, 'Q': 13, 'H': 17},
    2: {'L': 10, 'M': 16, 'Q': 22, 'H': 28},
    3: {'L': 15, 'M': 26, 'Q': 36, 'H': 44},
    4: {'L': 20, 'M': 36, 'Q': 52, 'H': 64},
    5: {'L': 26, 'M': 48, 'Q': 72, 'H': 88},
    6: {'L': 36, 'M': 64, 'Q': 96, 'H': 112},
    7: {'L': 40, 'M': 72, 'Q': 108, 'H': 130},
    8: {'L': 48, 'M': 88, 'Q': 132, 'H': 156},
    9: {'L': 60, 'M': 110, 'Q': 160, 'H': 192},
    10: {'L': 72, 'M': 130, 'Q': 192, 'H': 224},
    11: {'L': 80, 'M': 150, 'Q': 224, 'H': 264},
    12: {'L': 96, 'M': 176, 'Q': 260, 'H': 308},
    13: {'L': 104, 'M': 198, 'Q': 288, 'H': 352},
    14: {'L': 120, 'M': 216, 'Q': 320, 'H': 384},
    15: {'L': 132, 'M': 240, 'Q': 360, 'H': 432},
    16: {'L': 144, 'M': 280, 'Q': 408, 'H': 480},
    17: {'L': 168, 'M': 308, 'Q': 448, 'H': 532},
    18: {'L': 180, 'M': 338, 'Q': 504, 'H': 588},
    19: {'L': 196, 'M': 364, 'Q': 546, 'H': 650},
    20: {'L': 224, 'M': 416, 'Q': 600, 'H': 700},
    21: {'L': 224, 'M': 442, 'Q': 644, 'H': 750},
    22: {'L': 252, 'M': 476, 'Q': 690, 'H': 816},
    23: {'L': 270, 'M': 504, 'Q': 750, 'H': 900},
    24: {'L': 300, 'M': 560, 'Q': 810, 'H': 960},
    25: {'L': 312, 'M': 588, 'Q': 870, 'H': 1050},
    26: {'L': 336, 'M': 644, 'Q': 952, 'H': 1110},
    27: {'L': 360, 'M': 700, 'Q': 1020, 'H': 1200},
    28: {'L': 390, 'M': 728, 'Q': 1050, 'H': 1260},
    29: {'L': 420, 'M': 784, 'Q': 1140, 'H': 1350},
    30: {'L': 450, 'M': 812, 'Q': 1200, 'H': 1440},
    31: {'L': 480, 'M': 868, 'Q': 1290, 'H': 1530},
    32: {'L': 510, 'M': 924, 'Q': 1350, 'H': 1620},
    33: {'L': 540, 'M': 980, 'Q': 1440, 'H': 1710},
    34: {'L': 570, 'M': 1036, 'Q': 1530, 'H': 1800},
    35: {'L': 570, 'M': 1064, 'Q': 1590, 'H': 1890},
    36: {'L': 600, 'M': 1120, 'Q': 1680, 'H': 1980},
    37: {'L': 630, 'M': 1204, 'Q': 1770, 'H': 2100},
    38: {'L': 660, 'M': 1260, 'Q': 1860, 'H': 2220},
    39: {'L': 720, 'M': 1316, 'Q': 1950, 'H': 2310},
    40: {'L': 750, 'M': 1372, 'Q': 2040, 'H': 2430},
}

# Number of error correction blocks per version and level
EC_BLOCKS = {
    1: {'L': 1, 'M': 1, 'Q': 1, 'H': 1},
    2: {'L': 1, 'M': 1, 'Q': 1, 'H': 1},
    3: {'L': 1, 'M': 1, 'Q': 2, 'H': 2},
    4: {'L': 1, 'M': 2, 'Q': 2, 'H': 4},
    5: {'L': 1, 'M': 2, 'Q': 4, 'H': 4},
    6: {'L': 2, 'M': 4, 'Q': 4, 'H': 4},
    7: {'L': 2, 'M': 4, 'Q': 6, 'H': 5},
    8: {'L': 2, 'M': 4, 'Q': 6, 'H': 6},
    9: {'L': 2, 'M': 5, 'Q': 8, 'H': 8},
    10: {'L': 4, 'M': 5, 'Q': 8, 'H': 8},
    11: {'L': 4, 'M': 5, 'Q': 8, 'H': 11},
    12: {'L': 4, 'M': 8, 'Q': 10, 'H': 11},
    13: {'L': 4, 'M': 9, 'Q': 12, 'H': 16},
    14: {'L': 4, 'M': 9, 'Q': 16, 'H': 16},
    15: {'L': 6, 'M': 10, 'Q': 12, 'H': 18},
    16: {'L': 6, 'M': 10, 'Q': 17, 'H': 16},
    17: {'L': 6, 'M': 11, 'Q': 16, 'H': 19},
    18: {'L': 6, 'M': 13, 'Q': 18, 'H': 21},
    19: {'L': 7, 'M': 14, 'Q': 21, 'H': 25},
    20: {'L': 8, 'M': 16, 'Q': 20, 'H': 25},
    21: {'L': 8, 'M': 17, 'Q': 23, 'H': 25},
    22: {'L': 9, 'M': 17, 'Q': 23, 'H': 34},
    23: {'L': 9, 'M': 18, 'Q': 25, 'H': 30},
    24: {'L': 10, 'M': 20, 'Q': 27, 'H': 32},
    25: {'L': 12, 'M': 21, 'Q': 29, 'H': 35},
    26: {'L': 12, 'M': 23, 'Q': 34, 'H': 37},
    27: {'L': 12, 'M': 25, 'Q': 34, 'H': 40},
    28: {'L': 13, 'M': 26, 'Q': 35, 'H': 42},
    29: {'L': 14, 'M': 28, 'Q': 38, 'H': 45},
    30: {'L': 15, 'M': 29, 'Q': 40, 'H': 48},
    31: {'L': 16, 'M': 31, 'Q': 43, 'H': 51},
    32: {'L': 17, 'M': 33, 'Q': 45, 'H': 54},
    33: {'L': 18, 'M': 35, 'Q': 48, 'H': 57},
    34: {'L': 19, 'M': 37, 'Q': 51, 'H': 60},
    35: {'L': 19, 'M': 38, 'Q': 53, 'H': 63},
    36: {'L': 20, 'M': 40, 'Q': 56, 'H': 66},
    37: {'L': 21, 'M': 43, 'Q': 59, 'H': 70},
    38: {'L': 22, 'M': 45, 'Q': 62, 'H': 74},
    39: {'L': 24, 'M': 47, 'Q': 65, 'H': 77},
    40: {'L': 25, 'M': 49, 'Q': 68, 'H': 81},
}


class BlockGroup(NamedTuple):
    """A run of equally sized error correction blocks."""
    count: int
    total_codewords: int
    data_codewords: int

    @property
    def ec_codewords(self) -> int:
        return self.total_codewords - self.data_codewords


def data_codewords(version: int, ec_level: str) -> int:
    """Number of data codewords available for a version and level."""
    return TOTAL_CODEWORDS[version] - EC_CODEWORDS[version][ec_level]


def ec_codewords_per_block(version: int, ec_level: str) -> int:
    """Every block of a symbol carries the same number of EC codewords."""
    return EC_CODEWORDS[version][ec_level] // EC_BLOCKS[version][ec_level]


def block_groups(version: int, ec_level: str) -> List[BlockGroup]:
    """
    Split the codewords of a symbol into its block groups.

    When the data codewords do not divide evenly, the first group holds the
    shorter blocks and the second group holds blocks one codeword longer.

    Returns:
        One or two BlockGroup entries, shorter blocks first
    """
    num_blocks = EC_BLOCKS[version][ec_level]
    ec_len = ec_codewords_per_block(version, ec_level)
    data_total = data_codewords(version, ec_level)

    short_len = data_total // num_blocks
    num_long = data_total % num_blocks
    num_short = num_blocks - num_long

    groups = [BlockGroup(num_short, short_len + ec_len, short_len)]
    if num_long:
        groups.append(BlockGroup(num_long, short_len + 1 + ec_len, short_len + 1))
    return groups


#==============================================================================
# ALIGNMENT PATTERN CENTRES
#==============================================================================

ALIGNMENT_POSITIONS = {
    1: [],
    2: [6, 18],
    3: [6, 22],
    4: [6, 26],
    5: [6, 30],
    6: [6, 34],
    7: [6, 22, 38],
    8: [6, 24, 42],
    9: [6, 26, 46],
    10: [6, 28, 50],
    11: [6, 30, 54],
    12: [6, 32, 58],
    13: [6, 34, 62],
    14: [6, 26, 46, 66],
    15: [6, 26, 48, 70],
    16: [6, 26, 50, 74],
    17: [6, 30, 54, 78],
    18: [6, 30, 56, 82],
    19: [6, 30, 58, 86],
    20: [6, 34, 62, 90],
    21: [6, 28, 50, 72, 94],
    22: [6, 26, 50, 74, 98],
    23: [6, 30, 54, 78, 102],
    24: [6, 28, 54, 80, 106],
    25: [6, 32, 58, 84, 110],
    26: [6, 30, 58, 86, 114],
    27: [6, 34, 62, 90, 118],
    28: [6, 26, 50, 74, 98, 122],
    29: [6, 30, 54, 78, 102, 126],
    30: [6, 26, 52, 78, 104, 130],
    31: [6, 30, 56, 82, 108, 134],
    32: [6, 34, 60, 86, 112, 138],
    33: [6, 30, 58, 86, 114, 142],
    34: [6, 34, 62, 90, 118, 146],
    35: [6, 30, 54, 78, 102, 126, 150],
    36: [6, 24, 50, 76, 102, 128, 154],
    37: [6, 28, 54, 80, 106, 132, 158],
    38: [6, 32, 58, 84, 110, 136, 162],
    39: [6, 26, 54, 82, 110, 138, 166],
    40: [6, 30, 58, 86, 114, 142, 170],
}


#==============================================================================
# CHARACTER CAPACITY
#==============================================================================

def _max_characters(available_bits: int, mode: int) -> int:
    """Largest character count whose packed payload fits available_bits."""
    if available_bits <= 0:
        return 0
    if mode == MODE_NUMERIC:
        count = 3 * (available_bits // 10)
        rest = available_bits % 10
        if rest >= 7:
            count += 2
        elif rest >= 4:
            count += 1
        return count
    if mode == MODE_ALPHANUMERIC:
        count = 2 * (available_bits // 11)
        if available_bits % 11 >= 6:
            count += 1
        return count
    return available_bits // 8


def _build_capacity_table() -> Dict[int, Dict[str, Dict[int, int]]]:
    table = {}
    for version in range(MIN_VERSION, MAX_VERSION + 1):
        table[version] = {}
        for level in EC_LEVELS:
            data_bits = data_codewords(version, level) * 8
            row = {}
            for mode in (MODE_NUMERIC, MODE_ALPHANUMERIC, MODE_BYTE):
                count_bits = get_character_count_bits(version, mode)
                limit = _max_characters(data_bits - 4 - count_bits, mode)
                row[mode] = min(limit, (1 << count_bits) - 1)
            table[version][level] = row
    return table


# CHARACTER_CAPACITY[version][level][mode] -> max characters (bytes in byte mode)
CHARACTER_CAPACITY = _build_capacity_table()


def get_capacity(version: int, ec_level: str, mode: int) -> int:
    """Maximum payload length for a version, level and mode."""
    return CHARACTER_CAPACITY[version][ec_level][mode]
