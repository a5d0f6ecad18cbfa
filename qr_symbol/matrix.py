"""
QR code matrix construction.

The builder stamps every function pattern, reserves the format and version
areas and then places the codeword bits in the standard zigzag order.
Cells are indexed matrix[y][x] (row, column).

References:
- https://www.thonky.com/qr-code-tutorial/module-placement-matrix
"""

from typing import List, Optional

from .errors import PlacementMismatchError
from .tables import ALIGNMENT_POSITIONS

Grid = List[List[Optional[int]]]


def symbol_size(version: int) -> int:
    return 4 * version + 17


def alignment_centers(version: int) -> List[tuple]:
    """(row, col) centres of every alignment pattern, skipping the finder corners."""
    positions = ALIGNMENT_POSITIONS[version]
    if not positions:
        return []
    first, last = positions[0], positions[-1]
    corners = {(first, first), (first, last), (last, first)}
    return [(row, col) for row in positions for col in positions
            if (row, col) not in corners]


class MatrixBuilder:
    """
    Mutable module grid for one symbol under construction.

    Matrix values: None=unassigned, 0=white, 1=black. The is_function side
    grid marks every cell that data placement and masking must leave alone.
    """

    def __init__(self, version: int):
        self.version = version
        self.size = symbol_size(version)

        self.matrix: Grid = [[None] * self.size for _ in range(self.size)]
        self.is_function = [[False] * self.size for _ in range(self.size)]

        self._place_function_patterns()

    def _place_function_patterns(self):
        self._place_finder_patterns()
        self._place_separators()
        self._place_alignment_patterns()
        self._place_timing_patterns()
        self._place_dark_module()
        self._reserve_format_area()
        if self.version >= 7:
            self._reserve_version_area()

    def _place_finder_patterns(self):
        """Place the three finder patterns."""
        positions = [
            (0, 0),                          # Top-left
            (self.size - 7, 0),              # Top-right
            (0, self.size - 7)               # Bottom-left
        ]
        for (x, y) in positions:
            self._place_finder_pattern(x, y)

    def _place_finder_pattern(self, x: int, y: int):
        """Place a single finder pattern with its top-left corner at (x, y)."""
        for dy in range(7):
            for dx in range(7):
                if (dy == 0 or dy == 6 or dx == 0 or dx == 6 or
                    (2 <= dx <= 4 and 2 <= dy <= 4)):
                    value = 1
                else:
                    value = 0
                self._set_function(x + dx, y + dy, value)

    def _place_separators(self):
        """Place white separators around finder patterns."""
        for i in range(8):
            # Horizontal
            self._set_function(i, 7, 0)
            self._set_function(self.size - 8 + i, 7, 0)
            self._set_function(i, self.size - 8, 0)
            # Vertical
            self._set_function(7, i, 0)
            self._set_function(self.size - 8, i, 0)
            self._set_function(7, self.size - 8 + i, 0)

    def _place_alignment_patterns(self):
        for row, col in alignment_centers(self.version):
            self._place_alignment_pattern(col, row)

    def _place_alignment_pattern(self, x: int, y: int):
        """Place a single alignment pattern centered at (x, y)."""
        for dy in range(-2, 3):
            for dx in range(-2, 3):
                if abs(dy) == 2 or abs(dx) == 2 or (dy == 0 and dx == 0):
                    value = 1
                else:
                    value = 0
                self._set_function(x + dx, y + dy, value)

    def _place_timing_patterns(self):
        """Place timing patterns (row 6 and column 6), dark on even indices."""
        for i in range(8, self.size - 8):
            value = (i + 1) % 2
            if self.matrix[6][i] is None:
                self._set_function(i, 6, value)
            if self.matrix[i][6] is None:
                self._set_function(6, i, value)

    def _place_dark_module(self):
        x, y = 8, 4 * self.version + 9
        self._set_function(x, y, 1)

    def _reserve_format_area(self):
        """Reserve space for format information."""
        for i in range(9):
            self.is_function[8][i] = True
            self.is_function[i][8] = True

        for i in range(8):
            self.is_function[8][self.size - 1 - i] = True
            self.is_function[self.size - 1 - i][8] = True

    def _reserve_version_area(self):
        """Reserve space for version information (version 7+)."""
        for i in range(6):
            for j in range(3):
                self.is_function[i][self.size - 11 + j] = True
                self.is_function[self.size - 11 + j][i] = True

    def _set_function(self, x: int, y: int, value: int):
        """Set a function pattern module."""
        if 0 <= x < self.size and 0 <= y < self.size:
            self.matrix[y][x] = value
            self.is_function[y][x] = True

    def place_data(self, data_bits: List[int]) -> int:
        """
        Place data bits in zigzag pattern.

        data_bits must hold exactly one bit per data module, remainder
        bits included.

        Raises:
            PlacementMismatchError: if the bit count and the number of
                data modules differ
        """
        bit_index = 0
        x = self.size - 1
        upward = True

        while x >= 0:
            if x == 6:
                x -= 1

            y_range = range(self.size - 1, -1, -1) if upward else range(self.size)
            for y in y_range:
                for dx in [0, -1]:
                    col = x + dx
                    if self.is_function[y][col]:
                        continue
                    if bit_index >= len(data_bits):
                        raise PlacementMismatchError(
                            f"Ran out of bits after {bit_index} for version "
                            f"{self.version}")
                    self.matrix[y][col] = data_bits[bit_index]
                    bit_index += 1

            x -= 2
            upward = not upward

        if bit_index != len(data_bits):
            raise PlacementMismatchError(
                f"Placed {bit_index} of {len(data_bits)} bits for version "
                f"{self.version}")
        return bit_index

    def to_bits(self) -> List[List[int]]:
        """Copy of the matrix with unset cells as 0."""
        return [[0 if c is None else c for c in row] for row in self.matrix]


#==============================================================================
# FUNCTION MODULE POSITIONS
#==============================================================================

def function_module_grid(version: int) -> List[List[bool]]:
    """
    Mark every function pattern and reserved metadata cell.

    Derived only from position rules, independent of any built matrix.
    """
    size = symbol_size(version)
    grid = [[False] * size for _ in range(size)]

    def mark(top: int, left: int, height: int, width: int):
        for row in range(top, top + height):
            for col in range(left, left + width):
                grid[row][col] = True

    # Finder + separator + format strip at each corner (dark module included)
    mark(0, 0, 9, 9)
    mark(0, size - 8, 9, 8)
    mark(size - 8, 0, 8, 9)

    # Timing patterns
    mark(6, 0, 1, size)
    mark(0, 6, size, 1)

    for row, col in alignment_centers(version):
        mark(row - 2, col - 2, 5, 5)

    if version >= 7:
        mark(0, size - 11, 6, 3)
        mark(size - 11, 0, 3, 6)

    return grid


def data_module_count(version: int) -> int:
    """Number of modules available for codeword and remainder bits."""
    return sum(not cell for row in function_module_grid(version) for cell in row)
