"""
Data masking with penalty calculation.

Each of the eight mask patterns is tried on a throwaway copy of the symbol,
scored with the four penalty rules and the lowest score wins.

References:
- https://www.thonky.com/qr-code-tutorial/data-masking
"""

from typing import Callable, List, Tuple

from .errors import InvalidMaskError
from .format_info import draw_format_bits, draw_version_bits
from .matrix import function_module_grid

MASK_PATTERNS: List[Callable[[int, int], bool]] = [
    lambda r, c: (r + c) % 2 == 0,
    lambda r, c: r % 2 == 0,
    lambda r, c: c % 3 == 0,
    lambda r, c: (r + c) % 3 == 0,
    lambda r, c: (r // 2 + c // 3) % 2 == 0,
    lambda r, c: (r * c) % 2 + (r * c) % 3 == 0,
    lambda r, c: ((r * c) % 2 + (r * c) % 3) % 2 == 0,
    lambda r, c: ((r + c) % 2 + (r * c) % 3) % 2 == 0,
]

FINDER_LIKE_PATTERNS = (
    [1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0],
    [0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 1],
)


def validate_mask(mask: int) -> int:
    if (not isinstance(mask, int) or isinstance(mask, bool)
            or not 0 <= mask < len(MASK_PATTERNS)):
        raise InvalidMaskError(f"Mask pattern must be between 0 and 7, got {mask!r}")
    return mask


def apply_mask(matrix: List[List[int]], is_function: List[List[bool]],
               mask_num: int) -> List[List[int]]:
    """Apply mask pattern to data modules only. Returns a new matrix."""
    size = len(matrix)
    result = [[0 if c is None else c for c in row] for row in matrix]
    mask_func = MASK_PATTERNS[mask_num]

    for r in range(size):
        for c in range(size):
            if not is_function[r][c] and mask_func(r, c):
                result[r][c] ^= 1

    return result


def calculate_penalty(matrix: List[List[int]]) -> int:
    """Calculate total penalty score for a masked matrix."""
    size = len(matrix)
    penalty = 0
    penalty += penalty_runs(matrix, size)
    penalty += penalty_boxes(matrix, size)
    penalty += penalty_finder_like(matrix, size)
    penalty += penalty_balance(matrix, size)
    return penalty


def _run_penalty(line: List[int]) -> int:
    penalty = 0
    run_length = 1
    for i in range(1, len(line)):
        if line[i] == line[i - 1]:
            run_length += 1
        else:
            if run_length >= 5:
                penalty += run_length - 2
            run_length = 1
    if run_length >= 5:
        penalty += run_length - 2
    return penalty


def penalty_runs(matrix: List[List[int]], size: int) -> int:
    """Rule 1: runs of 5+ same-color modules score run length - 2."""
    penalty = 0
    for r in range(size):
        penalty += _run_penalty(matrix[r])
    for c in range(size):
        penalty += _run_penalty([matrix[r][c] for r in range(size)])
    return penalty


def penalty_boxes(matrix: List[List[int]], size: int) -> int:
    """Rule 2: 3 points for every 2x2 same-color box."""
    penalty = 0
    for r in range(size - 1):
        for c in range(size - 1):
            color = matrix[r][c]
            if (matrix[r][c+1] == color and matrix[r+1][c] == color
                    and matrix[r+1][c+1] == color):
                penalty += 3
    return penalty


def penalty_finder_like(matrix: List[List[int]], size: int) -> int:
    """Rule 3: 40 points per 1:1:3:1:1 pattern with four light modules on one side."""
    penalty = 0

    for r in range(size):
        for c in range(size - 10):
            if matrix[r][c:c+11] in FINDER_LIKE_PATTERNS:
                penalty += 40

    for c in range(size):
        column = [matrix[r][c] for r in range(size)]
        for r in range(size - 10):
            if column[r:r+11] in FINDER_LIKE_PATTERNS:
                penalty += 40

    return penalty


def penalty_balance(matrix: List[List[int]], size: int) -> int:
    """Rule 4: 10 points per 5% step the dark ratio sits away from 50%."""
    dark_count = sum(sum(row) for row in matrix)
    total = size * size
    percent = (dark_count * 100) // total

    prev_multiple = percent - (percent % 5)
    next_multiple = prev_multiple + 5

    return min(
        abs(prev_multiple - 50) // 5,
        abs(next_multiple - 50) // 5
    ) * 10


def choose_best_mask(matrix: List[List[int]], version: int,
                     ec_level: str) -> Tuple[int, int]:
    """
    Choose the mask pattern with lowest penalty.

    Each trial copy gets the format and version information it would carry,
    so the score matches the finished symbol. Masks are scored in index
    order and only a strictly lower score replaces the best, so ties keep
    the lowest index.

    Returns:
        (mask index, penalty)
    """
    is_function = function_module_grid(version)
    best_mask = 0
    best_penalty = None

    for mask_num in range(len(MASK_PATTERNS)):
        masked = apply_mask(matrix, is_function, mask_num)
        draw_format_bits(masked, ec_level, mask_num)
        draw_version_bits(masked, version)
        penalty = calculate_penalty(masked)

        if best_penalty is None or penalty < best_penalty:
            best_penalty = penalty
            best_mask = mask_num

    return best_mask, best_penalty
