"""
Shared test helpers: a small reader that turns a finished symbol back into
its payload, plus the qrcode library as a reference encoder.
"""

import pytest

from qr_symbol.galois import EXP_TABLE, poly_evaluate
from qr_symbol.tables import ALIGNMENT_POSITIONS, TOTAL_CODEWORDS, block_groups

FORMAT_MASK = 0b101010000010010
LEVEL_FROM_BITS = {0b01: 'L', 0b00: 'M', 0b11: 'Q', 0b10: 'H'}

UNMASK = [
    lambda r, c: (r + c) % 2 == 0,
    lambda r, c: r % 2 == 0,
    lambda r, c: c % 3 == 0,
    lambda r, c: (r + c) % 3 == 0,
    lambda r, c: (r // 2 + c // 3) % 2 == 0,
    lambda r, c: (r * c) % 2 + (r * c) % 3 == 0,
    lambda r, c: ((r * c) % 2 + (r * c) % 3) % 2 == 0,
    lambda r, c: ((r + c) % 2 + (r * c) % 3) % 2 == 0,
]

ALNUM = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:'


def read_format(rows):
    """Return (level, mask) from the copy around the top-left finder."""
    cells = [(8, c) for c in range(6)] + [(8, 7), (8, 8), (7, 8)]
    cells += [(r, 8) for r in range(5, -1, -1)]
    value = 0
    for r, c in cells:
        value = (value << 1) | int(rows[r][c])
    value ^= FORMAT_MASK
    return LEVEL_FROM_BITS[value >> 13], (value >> 10) & 0b111


def _reserved(version, size):
    reserved = set()
    for r in range(size):
        for c in range(size):
            if (r <= 8 and c <= 8) or (r <= 8 and c >= size - 8) or (r >= size - 8 and c <= 8):
                reserved.add((r, c))
            if r == 6 or c == 6:
                reserved.add((r, c))
    positions = ALIGNMENT_POSITIONS[version]
    for cr in positions:
        for cc in positions:
            if (cr, cc) in ((positions[0], positions[0]), (positions[0], positions[-1]),
                            (positions[-1], positions[0])):
                continue
            for r in range(cr - 2, cr + 3):
                for c in range(cc - 2, cc + 3):
                    reserved.add((r, c))
    if version >= 7:
        for i in range(6):
            for j in range(size - 11, size - 8):
                reserved.add((i, j))
                reserved.add((j, i))
    return reserved


def read_codewords(rows):
    """Unmask and read all codewords in placement order."""
    size = len(rows)
    version = (size - 17) // 4
    level, mask = read_format(rows)
    reserved = _reserved(version, size)

    bits = []
    col = size - 1
    upward = True
    while col > 0:
        if col == 6:
            col -= 1
        order = range(size - 1, -1, -1) if upward else range(size)
        for r in order:
            for c in (col, col - 1):
                if (r, c) in reserved:
                    continue
                bit = int(rows[r][c])
                if UNMASK[mask](r, c):
                    bit ^= 1
                bits.append(bit)
        col -= 2
        upward = not upward

    codewords = []
    for i in range(TOTAL_CODEWORDS[version]):
        byte = 0
        for b in bits[i * 8:i * 8 + 8]:
            byte = (byte << 1) | b
        codewords.append(byte)
    return version, level, codewords


def deinterleave(codewords, version, level):
    """Split the interleaved sequence back into complete blocks."""
    sizes = []
    for group in block_groups(version, level):
        sizes.extend([group] * group.count)
    data_blocks = [[] for _ in sizes]
    ec_blocks = [[] for _ in sizes]
    it = iter(codewords)
    for i in range(max(g.data_codewords for g in sizes)):
        for block, group in zip(data_blocks, sizes):
            if i < group.data_codewords:
                block.append(next(it))
    for i in range(sizes[0].ec_codewords):
        for block in ec_blocks:
            block.append(next(it))
    return [d + e for d, e in zip(data_blocks, ec_blocks)], [g.data_codewords for g in sizes]


def syndromes_are_zero(block, ec_len):
    return all(poly_evaluate(block, EXP_TABLE[i]) == 0 for i in range(ec_len))


class _BitReader:
    def __init__(self, data):
        self.bits = [(byte >> (7 - i)) & 1 for byte in data for i in range(8)]
        self.pos = 0

    def read(self, n):
        value = 0
        for _ in range(n):
            value = (value << 1) | self.bits[self.pos]
            self.pos += 1
        return value


def _count_bits(mode, version):
    tier = 0 if version <= 9 else 1 if version <= 26 else 2
    return {1: (10, 12, 14), 2: (9, 11, 13), 4: (8, 16, 16)}[mode][tier]


def read_symbol(symbol):
    """
    Decode a finished symbol back to its payload bytes.

    Also checks every Reed-Solomon block has zero syndromes.
    """
    rows = symbol.rows if hasattr(symbol, 'rows') else symbol
    version, level, codewords = read_codewords(rows)
    blocks, data_lengths = deinterleave(codewords, version, level)

    data = []
    for block, data_len in zip(blocks, data_lengths):
        assert syndromes_are_zero(block, len(block) - data_len)
        data.extend(block[:data_len])

    reader = _BitReader(data)
    mode = reader.read(4)
    count = reader.read(_count_bits(mode, version))
    if mode == 1:
        digits = []
        while count >= 3:
            digits.append('%03d' % reader.read(10))
            count -= 3
        if count == 2:
            digits.append('%02d' % reader.read(7))
        elif count == 1:
            digits.append('%d' % reader.read(4))
        return ''.join(digits).encode('ascii')
    if mode == 2:
        chars = []
        while count >= 2:
            value = reader.read(11)
            chars.append(ALNUM[value // 45] + ALNUM[value % 45])
            count -= 2
        if count:
            chars.append(ALNUM[reader.read(6)])
        return ''.join(chars).encode('ascii')
    assert mode == 4, f"unexpected mode {mode}"
    return bytes(reader.read(8) for _ in range(count))


@pytest.fixture
def reference_modules():
    """Build the same symbol with the qrcode library (forced version and mask)."""
    qrcode = pytest.importorskip("qrcode")
    from qrcode import constants

    levels = {
        'L': constants.ERROR_CORRECT_L,
        'M': constants.ERROR_CORRECT_M,
        'Q': constants.ERROR_CORRECT_Q,
        'H': constants.ERROR_CORRECT_H,
    }

    def build(data, version, level, mask):
        qr = qrcode.QRCode(version=version, error_correction=levels[level],
                           mask_pattern=mask, border=0)
        qr.add_data(data, optimize=0)
        qr.make(fit=False)
        return [[bool(cell) for cell in row] for row in qr.modules]

    return build


@pytest.fixture
def symbol_reader():
    return read_symbol
