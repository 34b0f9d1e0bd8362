"""ResolutionService — registry/resolver lookups with typed failures.

A lookup runs four steps in a fixed order, each with its own error kind:

1. domain syntax and TLD         -> ``UNSUPPORTED_DOMAIN``
2. owner of the namehash          -> ``UNREGISTERED_DOMAIN``
3. resolver bound to the namehash -> ``UNSPECIFIED_RESOLVER``
4. record for the key             -> ``RECORD_NOT_FOUND``

INVARIANT: A step is never reached if an earlier one failed, so a domain
without an owner never reports a resolver or record error.  Transport
failures from the registry surface as ``NAMING_SERVICE_DOWN`` and are not
retried.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass
from typing import TypeVar

from cnsctl.domain.address import ZERO_ADDRESS, to_checksum_address
from cnsctl.domain.errors import AddressError, ErrorKind
from cnsctl.domain.names import DEFAULT_TLDS, is_supported_domain, normalize_domain
from cnsctl.domain.namehash import namehash
from cnsctl.domain.records import (
    CHECKSUM_TICKERS,
    COIN_ADDRESS_FORMATS,
    EMAIL_KEY,
    IPFS_HASH_KEY,
    REDIRECT_URL_KEY,
    AddressFormat,
    address_format,
    coin_address_key,
    ticker_from_key,
)
from cnsctl.infrastructure.registry import RegistryClient, RegistryTransportError
from cnsctl.services.base import BaseService
from cnsctl.services.result import ServiceResult
from cnsctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class _LookupFailed(Exception):
    """Internal short-circuit carrying a finished failure result."""

    def __init__(self, result: ServiceResult) -> None:
        super().__init__(result.error.message if result.error else result.op)
        self.result = result


@dataclass(frozen=True)
class _Binding:
    domain: str
    node: str
    owner: str
    resolver: str | None = None


def _is_absent(address: str | None) -> bool:
    return not address or address.lower() == ZERO_ADDRESS


class ResolutionService(BaseService):
    """Resolve records for domains through a :class:`RegistryClient`.

    Holds no per-lookup state; one instance may serve concurrent tasks.
    """

    def __init__(
        self,
        registry: RegistryClient,
        *,
        tlds: Iterable[str] = DEFAULT_TLDS,
        checksum_tickers: Iterable[str] = CHECKSUM_TICKERS,
    ) -> None:
        self._registry = registry
        self._tlds = frozenset(t.lower() for t in tlds)
        self._checksum_tickers = frozenset(t.upper() for t in checksum_tickers)

    # ── Registry steps ───────────────────────────────────────────────

    async def _call(
        self,
        op: str,
        step: str,
        awaitable: Awaitable[_T],
        *,
        resolver: str | None = None,
        **detail: str,
    ) -> _T:
        with trace_span(step) as span:
            if span is not None:
                for name, value in detail.items():
                    span.annotate(name, value)
                if resolver:
                    span.annotate("resolver", resolver)
            try:
                return await awaitable
            except (RegistryTransportError, TimeoutError) as exc:
                msg = f"Naming service unavailable during {step}: {exc}"
                raise _LookupFailed(
                    self._failure(op, ErrorKind.NAMING_SERVICE_DOWN, msg, **detail)
                ) from exc

    async def _bind(self, op: str, domain: str, *, need_resolver: bool) -> _Binding:
        normalized = normalize_domain(domain)
        if not is_supported_domain(normalized, self._tlds):
            msg = f"Domain {domain!r} is not supported"
            raise _LookupFailed(self._failure(op, ErrorKind.UNSUPPORTED_DOMAIN, msg, domain=domain))

        node = namehash(normalized)
        owner = await self._call(op, "owner_of", self._registry.owner_of(node), domain=normalized)
        if _is_absent(owner):
            msg = f"Domain {normalized} is not registered"
            failure = self._failure(op, ErrorKind.UNREGISTERED_DOMAIN, msg, domain=normalized)
            raise _LookupFailed(failure)
        assert owner is not None

        if not need_resolver:
            return _Binding(normalized, node, owner)

        resolver = await self._call(
            op, "resolver_of", self._registry.resolver_of(node), domain=normalized
        )
        if _is_absent(resolver):
            msg = f"Domain {normalized} has no resolver"
            failure = self._failure(op, ErrorKind.UNSPECIFIED_RESOLVER, msg, domain=normalized)
            raise _LookupFailed(failure)
        return _Binding(normalized, node, owner, resolver)

    def _not_found(self, op: str, binding: _Binding, key: str, msg: str) -> ServiceResult:
        return self._failure(op, ErrorKind.RECORD_NOT_FOUND, msg, domain=binding.domain, key=key)

    def _present(self, op: str, binding: _Binding, key: str, raw: str) -> ServiceResult:
        payload: dict[str, str] = {"domain": binding.domain, "namehash": binding.node, "key": key}
        ticker = ticker_from_key(key)
        if ticker is None:
            return self._success(op, **payload, value=raw)
        payload["ticker"] = ticker
        if address_format(ticker, self._checksum_tickers) is AddressFormat.VERBATIM:
            warnings: list[str] = []
            if ticker not in COIN_ADDRESS_FORMATS:
                warnings.append(f"Unknown coin {ticker}; address returned as stored")
            return self._success(op, **payload, value=raw, warnings=warnings)
        try:
            value = to_checksum_address(raw)
        except AddressError as exc:
            msg = f"{ticker} record: {exc}"
            return self._failure(op, exc.kind, msg, domain=binding.domain, key=key)
        return self._success(op, **payload, value=value)

    async def _resolve(self, op: str, domain: str, key: str) -> ServiceResult:
        try:
            binding = await self._bind(op, domain, need_resolver=True)
            if not key:
                return self._not_found(op, binding, key, "Record key must not be empty")
            assert binding.resolver is not None
            raw = await self._call(
                op,
                "record_at",
                self._registry.record_at(binding.resolver, binding.node, key),
                resolver=binding.resolver,
                domain=binding.domain,
                key=key,
            )
        except _LookupFailed as failed:
            return failed.result

        if not raw:
            return self._not_found(op, binding, key, f"No {key} record for {binding.domain}")
        logger.debug("Resolved %s on %s", key, binding.domain)
        return self._present(op, binding, key, raw)

    # ── Public API ───────────────────────────────────────────────────

    @traced
    async def resolve_record(self, domain: str, key: str) -> ServiceResult:
        """Resolve *key* on *domain*; the value is in ``data["value"]``."""
        return await self._resolve("resolve_record", domain, key)

    @traced
    async def record(self, domain: str, key: str) -> ServiceResult:
        return await self._resolve("record", domain, key)

    @traced
    async def address(self, domain: str, ticker: str) -> ServiceResult:
        """Resolve the *ticker* coin address, checksummed where the coin uses hex."""
        return await self._resolve("address", domain, coin_address_key(ticker))

    @traced
    async def ipfs_hash(self, domain: str) -> ServiceResult:
        return await self._resolve("ipfs_hash", domain, IPFS_HASH_KEY)

    @traced
    async def http_url(self, domain: str) -> ServiceResult:
        return await self._resolve("http_url", domain, REDIRECT_URL_KEY)

    @traced
    async def email(self, domain: str) -> ServiceResult:
        return await self._resolve("email", domain, EMAIL_KEY)

    @traced
    async def owner(self, domain: str) -> ServiceResult:
        """Return the owner address of *domain*."""
        op = "owner"
        try:
            binding = await self._bind(op, domain, need_resolver=False)
        except _LookupFailed as failed:
            return failed.result
        return self._success(op, domain=binding.domain, namehash=binding.node, value=binding.owner)

    @traced
    async def resolver(self, domain: str) -> ServiceResult:
        """Return the resolver address bound to *domain*."""
        op = "resolver"
        try:
            binding = await self._bind(op, domain, need_resolver=True)
        except _LookupFailed as failed:
            return failed.result
        node = binding.node
        return self._success(op, domain=binding.domain, namehash=node, value=binding.resolver)

    @traced
    async def ttl(self, domain: str) -> ServiceResult:
        """Return the TTL recorded for *domain* (registered domains only)."""
        op = "ttl"
        try:
            binding = await self._bind(op, domain, need_resolver=False)
            value = await self._call(
                op, "ttl_of", self._registry.ttl_of(binding.node), domain=binding.domain
            )
        except _LookupFailed as failed:
            return failed.result
        return self._success(op, domain=binding.domain, namehash=binding.node, value=value)
