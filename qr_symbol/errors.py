"""Exceptions raised while encoding a QR symbol."""

from typing import Optional


class QRCodeError(Exception):
    """Base class for every error raised by qr_symbol."""


class EmptyPayloadError(QRCodeError, ValueError):
    """The payload has zero length."""

    def __init__(self, message: str = "Payload must not be empty"):
        super().__init__(message)


class CapacityExceededError(QRCodeError, ValueError):
    """
    The payload does not fit the requested symbol.

    Attributes:
        length: Length of the payload in characters (bytes in byte mode)
        capacity: Largest capacity that was available
        version: Forced version that was too small, or None when no
            version at all could hold the payload
    """

    def __init__(self, length: int, capacity: int, version: Optional[int] = None):
        self.length = length
        self.capacity = capacity
        self.version = version
        if version is None:
            message = (f"Data too long: {length} characters, "
                       f"maximum capacity is {capacity}")
        else:
            message = (f"Data too long for version {version}: {length} characters, "
                       f"capacity is {capacity}")
        super().__init__(message)


class InvalidVersionError(QRCodeError, ValueError):
    """A forced version is outside 1..40."""


class InvalidMaskError(QRCodeError, ValueError):
    """A forced mask pattern is outside 0..7."""


class InvalidErrorCorrectionLevelError(QRCodeError, ValueError):
    """The error correction level is not one of L, M, Q, H."""


class PlacementMismatchError(QRCodeError):
    """
    Internal bit accounting failed.

    Raised when the bitstream overflows the data capacity or when the number
    of bits placed in the matrix differs from the number of data modules.
    Either case is a bug in the tables or the placement walk, never bad input.
    """
