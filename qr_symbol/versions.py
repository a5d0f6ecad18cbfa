"""Version selection and capacity checks."""

from dataclasses import dataclass
from typing import Optional

from .encoding import Payload, detect_mode, normalize_payload
from .errors import (
    CapacityExceededError, InvalidErrorCorrectionLevelError, InvalidVersionError,
)
from .matrix import symbol_size
from .tables import (
    DEFAULT_EC_LEVEL, EC_LEVELS, MAX_VERSION, MIN_VERSION, MODE_ALPHANUMERIC,
    MODE_BYTE, MODE_NAMES, MODE_NUMERIC,
    get_capacity,
)


def normalize_ec_level(ec_level: str) -> str:
    """Return the upper-case level letter, rejecting anything but L/M/Q/H."""
    level = ec_level.upper() if isinstance(ec_level, str) else ec_level
    if level not in EC_LEVELS:
        raise InvalidErrorCorrectionLevelError(
            f"Invalid error correction level: {ec_level!r}")
    return level


def validate_version(version: int) -> int:
    if (not isinstance(version, int) or isinstance(version, bool)
            or not MIN_VERSION <= version <= MAX_VERSION):
        raise InvalidVersionError(
            f"Version must be between {MIN_VERSION} and {MAX_VERSION}, got {version!r}")
    return version


def select_version(length: int, mode: int, ec_level: str,
                   forced_version: Optional[int] = None) -> int:
    """
    Pick the smallest version whose capacity holds the payload.

    Args:
        length: Payload length in characters (bytes in byte mode)
        mode: Mode indicator from detect_mode
        ec_level: 'L', 'M', 'Q' or 'H'
        forced_version: Use exactly this version instead of searching

    Raises:
        InvalidVersionError: if forced_version is outside 1-40
        CapacityExceededError: if the payload does not fit
    """
    if forced_version is not None:
        validate_version(forced_version)
        capacity = get_capacity(forced_version, ec_level, mode)
        if length > capacity:
            raise CapacityExceededError(length, capacity, forced_version)
        return forced_version

    for version in range(MIN_VERSION, MAX_VERSION + 1):
        if length <= get_capacity(version, ec_level, mode):
            return version

    raise CapacityExceededError(length, get_capacity(MAX_VERSION, ec_level, mode))


@dataclass(frozen=True)
class CapacityReport:
    """Outcome of check_capacity."""
    fits: bool
    mode: str
    length: int
    version: Optional[int]
    max_capacity: int


def check_capacity(payload: Payload, ec_level: str = DEFAULT_EC_LEVEL,
                   version: Optional[int] = None) -> CapacityReport:
    """
    Report whether a payload fits without building a symbol.

    With a version, the report describes that version; otherwise it carries
    the smallest fitting version, or None and the version 40 capacity when
    nothing fits. Invalid levels, versions and empty payloads still raise.
    """
    level = normalize_ec_level(ec_level)
    data = normalize_payload(payload)
    mode = detect_mode(data)

    if version is not None:
        validate_version(version)
        capacity = get_capacity(version, level, mode)
        return CapacityReport(len(data) <= capacity, MODE_NAMES[mode],
                              len(data), version, capacity)

    try:
        chosen = select_version(len(data), mode, level)
    except CapacityExceededError as e:
        return CapacityReport(False, MODE_NAMES[mode], len(data), None, e.capacity)
    return CapacityReport(True, MODE_NAMES[mode], len(data), chosen,
                          get_capacity(chosen, level, mode))


@dataclass(frozen=True)
class CapacityInfo:
    """Per-mode character capacity of one version and level."""
    numeric: int
    alphanumeric: int
    byte: int
    modules: int


def capacity_info(version: int, ec_level: str = DEFAULT_EC_LEVEL) -> CapacityInfo:
    """Capacities of every mode at this version and level, plus the side length."""
    validate_version(version)
    level = normalize_ec_level(ec_level)
    return CapacityInfo(
        numeric=get_capacity(version, level, MODE_NUMERIC),
        alphanumeric=get_capacity(version, level, MODE_ALPHANUMERIC),
        byte=get_capacity(version, level, MODE_BYTE),
        modules=symbol_size(version),
    )
