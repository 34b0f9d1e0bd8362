"""Error taxonomy shared by the domain and service layers.

Every failure a lookup or address operation can produce maps to exactly
one :class:`ErrorKind`.  Services surface the kind as ``ServiceError.code``
so callers can branch on cause rather than parse messages.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Failure kinds, in the order a resolution can hit them."""

    UNSUPPORTED_DOMAIN = "UNSUPPORTED_DOMAIN"
    UNREGISTERED_DOMAIN = "UNREGISTERED_DOMAIN"
    UNSPECIFIED_RESOLVER = "UNSPECIFIED_RESOLVER"
    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    BAD_CHECKSUM = "BAD_CHECKSUM"
    NAMING_SERVICE_DOWN = "NAMING_SERVICE_DOWN"
    INVALID_NAMEHASH = "INVALID_NAMEHASH"


class AddressError(ValueError):
    """Raised by the address codec for malformed or mis-checksummed input."""

    def __init__(self, kind: ErrorKind, message: str, value: object) -> None:
        super().__init__(message)
        self.kind = kind
        self.value = value
