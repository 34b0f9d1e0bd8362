"""CodecService — namehash and address operations as ServiceResults.

Thin wrapper over the pure domain functions so the CLI sees the same
result contract for hashing as for lookups.
"""

from __future__ import annotations

from cnsctl.domain.address import to_checksum_address, to_icap_address
from cnsctl.domain.errors import AddressError, ErrorKind
from cnsctl.domain.names import is_supported_domain, normalize_domain
from cnsctl.domain.namehash import childhash, namehash
from cnsctl.services.base import BaseService
from cnsctl.services.result import ServiceResult
from cnsctl.services.telemetry import traced


class CodecService(BaseService):
    """Hashing and checksumming operations."""

    @traced
    def namehash(self, domain: str) -> ServiceResult:
        normalized = normalize_domain(domain)
        return self._success(
            "namehash",
            domain=normalized,
            value=namehash(normalized),
            supported=is_supported_domain(normalized),
        )

    @traced
    def childhash(self, parent: str, label: str) -> ServiceResult:
        op = "childhash"
        label = normalize_domain(label)
        try:
            value = childhash(parent, label)
        except ValueError as exc:
            return self._failure(op, ErrorKind.INVALID_NAMEHASH, str(exc), parent=parent)
        return self._success(op, parent=parent, label=label, value=value)

    @traced
    def checksum_address(self, address: str) -> ServiceResult:
        op = "checksum_address"
        try:
            value = to_checksum_address(address)
        except AddressError as exc:
            return self._failure(op, exc.kind, str(exc), address=address)
        return self._success(op, address=address, value=value)

    @traced
    def icap_address(self, address: str) -> ServiceResult:
        op = "icap_address"
        try:
            value = to_icap_address(address)
        except AddressError as exc:
            return self._failure(op, exc.kind, str(exc), address=address)
        return self._success(op, address=address, value=value)
