"""
Reed-Solomon error correction for QR codes.

Splits the data codewords into the block structure of a version/level,
computes the error correction codewords of each block and interleaves the
result into the final codeword sequence.

References:
- https://en.wikipedia.org/wiki/Reed-Solomon_error_correction
- https://en.wikiversity.org/wiki/Reed-Solomon_codes_for_coders
- https://www.thonky.com/qr-code-tutorial/structure-final-message
"""

from typing import Dict, List

from .errors import PlacementMismatchError
from .galois import EXP_TABLE, gf_multiply, poly_multiply
from .tables import (
    EC_LEVELS, MAX_VERSION, MIN_VERSION, TOTAL_CODEWORDS,
    block_groups, data_codewords, ec_codewords_per_block,
)


def build_generator(num_ec_codewords: int) -> List[int]:
    """
    Build generator polynomial for given number of EC codewords.

    g(x) = (x - alpha^0)(x - alpha^1)...(x - alpha^(n-1))
         = (x + alpha^0)(x + alpha^1)...(x + alpha^(n-1))

    In GF(256), subtraction equals addition. Coefficients are returned
    highest degree first, so the leading coefficient is always 1.
    """
    gen = [1]
    for i in range(num_ec_codewords):
        gen = poly_multiply(gen, [1, EXP_TABLE[i]])
    return gen


def _build_generator_table() -> Dict[int, List[int]]:
    degrees = {
        ec_codewords_per_block(version, level)
        for version in range(MIN_VERSION, MAX_VERSION + 1)
        for level in EC_LEVELS
    }
    return {degree: build_generator(degree) for degree in sorted(degrees)}


# Every block length used by versions 1-40, built once at import
GENERATOR_POLYNOMIALS = _build_generator_table()


def generator_polynomial(num_ec_codewords: int) -> List[int]:
    gen = GENERATOR_POLYNOMIALS.get(num_ec_codewords)
    if gen is None:
        gen = build_generator(num_ec_codewords)
    return gen


def rs_remainder(data: List[int], num_ec_codewords: int) -> List[int]:
    """
    Compute the EC codewords of one block.

    The message polynomial, shifted up by num_ec_codewords, is divided by
    the generator; the remainder is the error correction.

    Args:
        data: List of data bytes (integers 0-255)
        num_ec_codewords: Number of error correction codewords to generate

    Returns:
        List of error correction codewords
    """
    gen = generator_polynomial(num_ec_codewords)
    result = list(data) + [0] * num_ec_codewords

    for i in range(len(data)):
        coeff = result[i]
        if coeff != 0:
            for j in range(1, len(gen)):
                result[i + j] ^= gf_multiply(gen[j], coeff)

    return result[len(data):]


def split_blocks(codewords: List[int], version: int, ec_level: str) -> List[List[int]]:
    """Cut the data codewords into blocks, shorter blocks first."""
    blocks = []
    offset = 0
    for group in block_groups(version, ec_level):
        for _ in range(group.count):
            blocks.append(codewords[offset:offset + group.data_codewords])
            offset += group.data_codewords
    return blocks


def interleave(data_blocks: List[List[int]], ec_blocks: List[List[int]]) -> List[int]:
    """
    Take codeword 0 of every block, then codeword 1, and so on.

    Short blocks simply run out earlier; all data codewords come before
    any error correction codeword.
    """
    result = []
    for blocks in (data_blocks, ec_blocks):
        longest = max(len(block) for block in blocks)
        for i in range(longest):
            for block in blocks:
                if i < len(block):
                    result.append(block[i])
    return result


def add_error_correction(codewords: List[int], version: int, ec_level: str) -> List[int]:
    """
    Produce the final interleaved codeword sequence for a symbol.

    Raises:
        ValueError: if codewords does not match the data capacity
    """
    expected = data_codewords(version, ec_level)
    if len(codewords) != expected:
        raise ValueError(
            f"Version {version}-{ec_level} needs {expected} data codewords, "
            f"got {len(codewords)}")

    num_ec = ec_codewords_per_block(version, ec_level)
    data_blocks = split_blocks(codewords, version, ec_level)
    ec_blocks = [rs_remainder(block, num_ec) for block in data_blocks]

    final = interleave(data_blocks, ec_blocks)
    if len(final) != TOTAL_CODEWORDS[version]:
        raise PlacementMismatchError(
            f"Interleaved {len(final)} codewords, version {version} holds "
            f"{TOTAL_CODEWORDS[version]}")
    return final
