"""
Complete QR code generation.

Ties the components together: payload -> mode -> version -> data
codewords -> error correction -> matrix -> mask -> format/version info.
The result is an immutable QRMatrix that rendering code reads through
size, get_module and the version/level/mask metadata.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .encoding import Payload, build_data_codewords, detect_mode, int_to_bits, normalize_payload
from .errors import PlacementMismatchError
from .format_info import draw_format_bits, draw_version_bits
from .masking import apply_mask, choose_best_mask, validate_mask
from .matrix import MatrixBuilder, data_module_count
from .reed_solomon import add_error_correction
from .tables import DEFAULT_EC_LEVEL, MODE_NAMES, REMAINDER_BITS
from .versions import normalize_ec_level, select_version, validate_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QRMatrix:
    """
    A finished QR symbol.

    Attributes:
        rows: size x size tuple of rows, True for dark modules
        version: Symbol version (1-40)
        ec_level: 'L', 'M', 'Q' or 'H'
        mask: Mask pattern applied (0-7)
        mode: Name of the encoding mode used for the payload
    """
    rows: Tuple[Tuple[bool, ...], ...]
    version: int
    ec_level: str
    mask: int
    mode: str

    @property
    def size(self) -> int:
        """Module count along one side."""
        return len(self.rows)

    def get_module(self, row: int, col: int) -> bool:
        """Module at (row, col); negative indices are rejected, not wrapped."""
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(
                f"Module ({row}, {col}) is outside a {self.size}x{self.size} symbol")
        return self.rows[row][col]

    def to_list(self) -> List[List[int]]:
        """Fresh 2D list of 0s and 1s."""
        return [[1 if cell else 0 for cell in row] for row in self.rows]


class QRCodeGenerator:
    """Complete QR code generator."""

    def __init__(self, ec_level: str = DEFAULT_EC_LEVEL):
        """
        Initialize generator with error correction level.

        Args:
            ec_level: 'L' (7%), 'M' (15%), 'Q' (25%), or 'H' (30%)
        """
        self.ec_level = normalize_ec_level(ec_level)

    def generate(self, data: Payload, version: Optional[int] = None,
                 mask: Optional[int] = None) -> QRMatrix:
        """
        Generate a QR code for the given data.

        Args:
            data: Text, bytes or integer to encode
            version: QR version (1-40), or None to pick the smallest that fits
            mask: Mask pattern (0-7), or None to pick the lowest penalty

        Returns:
            The finished QRMatrix
        """
        if version is not None:
            validate_version(version)
        if mask is not None:
            validate_mask(mask)

        payload = normalize_payload(data)

        # Step 1: Determine mode and version
        mode = detect_mode(payload)
        version = select_version(len(payload), mode, self.ec_level, version)
        logger.debug("Generating version %d QR code, EC level %s, %s mode, %d characters",
                     version, self.ec_level, MODE_NAMES[mode], len(payload))

        # Step 2: Encode, terminate and pad
        data_codewords = build_data_codewords(payload, version, self.ec_level, mode)

        # Step 3: Error correction and interleaving
        final_message = add_error_correction(data_codewords, version, self.ec_level)
        logger.debug("%d data codewords, %d codewords after error correction",
                     len(data_codewords), len(final_message))

        # Step 4: Convert to bits, remainder bits included
        final_bits = []
        for byte in final_message:
            final_bits.extend(int_to_bits(byte, 8))
        final_bits.extend([0] * REMAINDER_BITS[version])

        expected = data_module_count(version)
        if len(final_bits) != expected:
            raise PlacementMismatchError(
                f"Version {version} has {expected} data modules but "
                f"{len(final_bits)} bits were produced")

        # Step 5: Build the matrix and place data
        qr = MatrixBuilder(version)
        qr.place_data(final_bits)
        base = qr.to_bits()

        # Step 6: Choose and apply the mask
        if mask is None:
            mask, penalty = choose_best_mask(base, version, self.ec_level)
            logger.debug("Applied mask pattern %d (penalty: %d)", mask, penalty)
        final_matrix = apply_mask(base, qr.is_function, mask)

        # Step 7: Format and version information
        draw_format_bits(final_matrix, self.ec_level, mask)
        draw_version_bits(final_matrix, version)

        rows = tuple(tuple(cell == 1 for cell in row) for row in final_matrix)
        return QRMatrix(rows, version, self.ec_level, mask, MODE_NAMES[mode])


def encode(payload: Payload, ec_level: str = DEFAULT_EC_LEVEL,
           version: Optional[int] = None, mask: Optional[int] = None) -> QRMatrix:
    """
    Encode a payload into a finished QR symbol.

    Args:
        payload: Text (encoded as UTF-8), bytes or integer
        ec_level: 'L', 'M', 'Q' or 'H'
        version: Force a version (1-40) instead of the smallest that fits
        mask: Force a mask pattern (0-7) instead of the lowest penalty

    Raises:
        EmptyPayloadError, CapacityExceededError, InvalidVersionError,
        InvalidMaskError, InvalidErrorCorrectionLevelError
    """
    return QRCodeGenerator(ec_level).generate(payload, version=version, mask=mask)
