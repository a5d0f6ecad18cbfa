import pytest

from qr_symbol.galois import LOG_TABLE
from qr_symbol.reed_solomon import (
    GENERATOR_POLYNOMIALS, add_error_correction, build_generator,
    generator_polynomial, interleave, rs_remainder, split_blocks,
)
from qr_symbol.tables import TOTAL_CODEWORDS, data_codewords

# "HELLO WORLD" as version 1-M data codewords
HELLO_WORLD_DATA = [32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17]
HELLO_WORLD_EC = [196, 35, 39, 119, 235, 215, 231, 226, 93, 23]


def test_generator_polynomial_exponents():
    gen = build_generator(7)
    assert [LOG_TABLE[c] for c in gen] == [0, 87, 229, 146, 149, 238, 102, 21]


def test_generator_table_covers_all_block_sizes():
    assert set(GENERATOR_POLYNOMIALS) == {7, 10, 13, 15, 16, 17, 18, 20, 22, 24, 26, 28, 30}
    assert generator_polynomial(10) == build_generator(10)
    # Sizes outside the standard set are still built on demand
    assert len(generator_polynomial(5)) == 6


def test_remainder_known_vector():
    assert rs_remainder(HELLO_WORLD_DATA, 10) == HELLO_WORLD_EC


def test_single_block_symbol_is_data_then_ec():
    assert add_error_correction(HELLO_WORLD_DATA, 1, 'M') == HELLO_WORLD_DATA + HELLO_WORLD_EC


def test_split_blocks_short_blocks_first():
    codewords = list(range(data_codewords(5, 'Q')))
    blocks = split_blocks(codewords, 5, 'Q')
    assert [len(b) for b in blocks] == [15, 15, 16, 16]
    assert blocks[0][0] == 0
    assert blocks[2][0] == 30
    assert sum(blocks, []) == codewords


def test_interleave_skips_exhausted_blocks():
    data = [[1, 2], [3, 4], [5, 6, 7]]
    ec = [[10, 11], [12, 13], [14, 15]]
    assert interleave(data, ec) == [1, 3, 5, 2, 4, 6, 7, 10, 12, 14, 11, 13, 15]


@pytest.mark.parametrize("version,level", [(1, 'L'), (5, 'Q'), (7, 'H'), (22, 'H'), (40, 'M')])
def test_final_length(version, level):
    data = [i % 256 for i in range(data_codewords(version, level))]
    assert len(add_error_correction(data, version, level)) == TOTAL_CODEWORDS[version]


def test_wrong_data_length_rejected():
    with pytest.raises(ValueError):
        add_error_correction([0] * 15, 1, 'M')
