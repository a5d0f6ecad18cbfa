"""
qr_symbol: a QR code symbol encoder following ISO/IEC 18004.

Turns text, bytes or integers into a finished module matrix:
- Galois Field GF(256) arithmetic and Reed-Solomon error correction
- Numeric, alphanumeric and byte mode data encoding
- Exact capacity, block and alignment tables for versions 1-40
- Function patterns, zigzag data placement and penalty-based masking
- BCH-protected format and version information

Usage:
    from qr_symbol import encode
    symbol = encode("HELLO WORLD", "M")
    symbol.size, symbol.version, symbol.get_module(0, 0)
"""

from .errors import (
    CapacityExceededError, EmptyPayloadError, InvalidErrorCorrectionLevelError,
    InvalidMaskError, InvalidVersionError, PlacementMismatchError, QRCodeError,
)
from .generator import QRCodeGenerator, QRMatrix, encode
from .versions import CapacityInfo, CapacityReport, capacity_info, check_capacity

__version__ = "1.0.0"
__all__ = [
    'encode', 'QRCodeGenerator', 'QRMatrix',
    'check_capacity', 'CapacityReport', 'capacity_info', 'CapacityInfo',
    'QRCodeError', 'EmptyPayloadError', 'CapacityExceededError',
    'InvalidVersionError', 'InvalidMaskError', 'InvalidErrorCorrectionLevelError',
    'PlacementMismatchError',
]
