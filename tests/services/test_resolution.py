"""Tests for ResolutionService — lookup ordering, typed failures, wrappers."""

from __future__ import annotations

from typing import Any

import anyio
import pytest

from cnsctl.domain.errors import ErrorKind
from cnsctl.domain.namehash import namehash
from cnsctl.infrastructure.registry import RegistryTransportError, StaticRegistryClient
from cnsctl.services.resolution import ResolutionService
from cnsctl.services.result import ServiceResult
from tests.conftest import (
    ETH_CHECKSUM,
    IPFS_HASH,
    LABEL_DOMAIN,
    LABEL_RECORDS,
    OWNER,
    RESOLVER,
)


class RecordingRegistry:
    """Registry double that records calls and answers from fixed values."""

    def __init__(
        self,
        *,
        owner: str | None = OWNER,
        resolver: str | None = RESOLVER,
        record: str | None = None,
        ttl: int = 0,
        fail_on: str | None = None,
        error: Exception | None = None,
    ) -> None:
        self.owner = owner
        self.resolver = resolver
        self.record = record
        self.ttl = ttl
        self.fail_on = fail_on
        self.error = error or RegistryTransportError("connection refused")
        self.calls: list[tuple[Any, ...]] = []

    def _maybe_fail(self, name: str) -> None:
        if self.fail_on == name:
            raise self.error

    async def owner_of(self, node: str) -> str | None:
        self.calls.append(("owner_of", node))
        self._maybe_fail("owner_of")
        return self.owner

    async def resolver_of(self, node: str) -> str | None:
        self.calls.append(("resolver_of", node))
        self._maybe_fail("resolver_of")
        return self.resolver

    async def record_at(self, resolver: str, node: str, key: str) -> str | None:
        self.calls.append(("record_at", resolver, node, key))
        self._maybe_fail("record_at")
        return self.record

    async def ttl_of(self, node: str) -> int:
        self.calls.append(("ttl_of", node))
        self._maybe_fail("ttl_of")
        return self.ttl

    @property
    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]


def _code(result: ServiceResult) -> str | None:
    return result.error.code if result.error else None


@pytest.fixture
def service(registry: StaticRegistryClient) -> ResolutionService:
    return ResolutionService(registry)


class TestResolveRecord:
    def test_ipfs_record_returned_unchanged(self, service: ResolutionService) -> None:
        result = anyio.run(service.resolve_record, LABEL_DOMAIN, "ipfs.html2")
        assert result.ok is True
        assert result.op == "resolve_record"
        assert result.value == IPFS_HASH
        assert result.data["domain"] == LABEL_DOMAIN
        assert result.data["namehash"] == namehash(LABEL_DOMAIN)
        assert result.data["key"] == "ipfs.html2"
        assert "ticker" not in result.data

    def test_domain_normalized_before_hashing(self, service: ResolutionService) -> None:
        result = anyio.run(service.resolve_record, "  Reseller-Test-Braden-6.CRYPTO ", "ipfs.html2")
        assert result.ok is True
        assert result.data["domain"] == LABEL_DOMAIN

    def test_key_is_case_sensitive(self, service: ResolutionService) -> None:
        result = anyio.run(service.resolve_record, LABEL_DOMAIN, "IPFS.HTML2")
        assert _code(result) == ErrorKind.RECORD_NOT_FOUND

    def test_missing_record(self, service: ResolutionService) -> None:
        result = anyio.run(service.resolve_record, LABEL_DOMAIN, "No.such.record")
        assert result.ok is False
        assert result.value is None
        assert _code(result) == ErrorKind.RECORD_NOT_FOUND
        assert result.error is not None
        assert result.error.detail == {"domain": LABEL_DOMAIN, "key": "No.such.record"}

    @pytest.mark.parametrize("domain", ["", "brad.eth", "brad..crypto", ".crypto", "bra d.crypto"])
    def test_unsupported_domain(self, domain: str) -> None:
        registry = RecordingRegistry(record="x")
        result = anyio.run(ResolutionService(registry).resolve_record, domain, "ipfs.html2")
        assert _code(result) == ErrorKind.UNSUPPORTED_DOMAIN
        assert registry.calls == []

    def test_custom_tlds(self) -> None:
        registry = RecordingRegistry(record="x")
        svc = ResolutionService(registry, tlds=["zil"])
        assert anyio.run(svc.resolve_record, "brad.zil", "k").ok is True
        assert _code(anyio.run(svc.resolve_record, "brad.crypto", "k")) == (
            ErrorKind.UNSUPPORTED_DOMAIN
        )


class TestOrdering:
    def test_unregistered_never_reaches_resolver(self) -> None:
        registry = RecordingRegistry(owner=None, resolver=RESOLVER, record="value")
        result = anyio.run(ResolutionService(registry).resolve_record, "brad.crypto", "k")
        assert _code(result) == ErrorKind.UNREGISTERED_DOMAIN
        assert registry.call_names == ["owner_of"]

    def test_zero_owner_is_unregistered(self, service: ResolutionService) -> None:
        result = anyio.run(service.resolve_record, "zero-owner.crypto", "ipfs.html2")
        assert _code(result) == ErrorKind.UNREGISTERED_DOMAIN

    def test_unknown_domain_is_unregistered(self, service: ResolutionService) -> None:
        result = anyio.run(service.resolve_record, "nobody.crypto", "ipfs.html2")
        assert _code(result) == ErrorKind.UNREGISTERED_DOMAIN

    def test_owner_without_resolver(self, service: ResolutionService) -> None:
        result = anyio.run(service.resolve_record, "owned-only.crypto", "ipfs.html2")
        assert _code(result) == ErrorKind.UNSPECIFIED_RESOLVER

    def test_zero_resolver_is_unspecified(self, service: ResolutionService) -> None:
        result = anyio.run(service.resolve_record, "zero-resolver.crypto", "ipfs.html2")
        assert _code(result) == ErrorKind.UNSPECIFIED_RESOLVER

    def test_resolver_without_record_is_record_not_found(self) -> None:
        registry = RecordingRegistry(record=None)
        result = anyio.run(ResolutionService(registry).resolve_record, "brad.crypto", "k")
        assert _code(result) == ErrorKind.RECORD_NOT_FOUND
        assert registry.call_names == ["owner_of", "resolver_of", "record_at"]

    def test_empty_record_is_record_not_found(self) -> None:
        registry = RecordingRegistry(record="")
        result = anyio.run(ResolutionService(registry).resolve_record, "brad.crypto", "k")
        assert _code(result) == ErrorKind.RECORD_NOT_FOUND

    def test_empty_key_not_queried(self) -> None:
        registry = RecordingRegistry(record="value")
        result = anyio.run(ResolutionService(registry).resolve_record, "brad.crypto", "")
        assert _code(result) == ErrorKind.RECORD_NOT_FOUND
        assert registry.call_names == ["owner_of", "resolver_of"]

    def test_calls_carry_namehash_and_resolver(self) -> None:
        registry = RecordingRegistry(record="value")
        anyio.run(ResolutionService(registry).resolve_record, "brad.crypto", "k")
        node = namehash("brad.crypto")
        assert registry.calls == [
            ("owner_of", node),
            ("resolver_of", node),
            ("record_at", RESOLVER, node, "k"),
        ]


class TestNamingServiceDown:
    @pytest.mark.parametrize("step", ["owner_of", "resolver_of", "record_at"])
    def test_transport_error_at_each_step(self, step: str) -> None:
        registry = RecordingRegistry(record="value", fail_on=step)
        result = anyio.run(ResolutionService(registry).resolve_record, "brad.crypto", "k")
        assert _code(result) == ErrorKind.NAMING_SERVICE_DOWN
        assert registry.call_names[-1] == step
        assert result.error is not None
        assert step in result.error.message

    def test_timeout(self) -> None:
        registry = RecordingRegistry(fail_on="owner_of", error=TimeoutError("timed out"))
        result = anyio.run(ResolutionService(registry).resolve_record, "brad.crypto", "k")
        assert _code(result) == ErrorKind.NAMING_SERVICE_DOWN

    def test_not_retried(self) -> None:
        registry = RecordingRegistry(fail_on="owner_of")
        anyio.run(ResolutionService(registry).resolve_record, "brad.crypto", "k")
        assert registry.call_names == ["owner_of"]

    def test_programming_errors_propagate(self) -> None:
        registry = RecordingRegistry(fail_on="owner_of", error=KeyError("bug"))
        with pytest.raises(KeyError):
            anyio.run(ResolutionService(registry).resolve_record, "brad.crypto", "k")


class TestAddress:
    def test_eth_is_checksummed(self, service: ResolutionService) -> None:
        result = anyio.run(service.address, LABEL_DOMAIN, "ETH")
        assert result.ok is True
        assert result.value == ETH_CHECKSUM
        assert result.data["ticker"] == "ETH"
        assert result.data["key"] == "crypto.ETH.address"

    def test_lowercase_ticker(self, service: ResolutionService) -> None:
        assert anyio.run(service.address, LABEL_DOMAIN, "eth").value == ETH_CHECKSUM

    def test_already_checksummed_value(self) -> None:
        registry = RecordingRegistry(record=ETH_CHECKSUM)
        result = anyio.run(ResolutionService(registry).address, "brad.crypto", "ETH")
        assert result.value == ETH_CHECKSUM

    @pytest.mark.parametrize("ticker", ["BTC", "BCH", "DASH", "LTC", "XMR", "ZEC", "ZIL"])
    def test_non_hex_coins_verbatim(self, service: ResolutionService, ticker: str) -> None:
        result = anyio.run(service.address, LABEL_DOMAIN, ticker)
        assert result.ok is True
        assert result.value == LABEL_RECORDS[f"crypto.{ticker}.address"]
        assert result.data["ticker"] == ticker

    def test_invalid_hex_record(self, service: ResolutionService) -> None:
        result = anyio.run(service.address, LABEL_DOMAIN, "ETC")
        assert _code(result) == ErrorKind.INVALID_ADDRESS

    def test_bad_checksum_record(self) -> None:
        registry = RecordingRegistry(record="0x45b31e01aa6f42f0549ad482be81635ed3149ABB")
        result = anyio.run(ResolutionService(registry).address, "brad.crypto", "ETH")
        assert _code(result) == ErrorKind.BAD_CHECKSUM

    def test_missing_coin(self, service: ResolutionService) -> None:
        result = anyio.run(service.address, LABEL_DOMAIN, "DOGE")
        assert _code(result) == ErrorKind.RECORD_NOT_FOUND

    def test_known_coins_have_no_warnings(self, service: ResolutionService) -> None:
        assert anyio.run(service.address, LABEL_DOMAIN, "BTC").warnings == []
        assert anyio.run(service.address, LABEL_DOMAIN, "ETH").warnings == []

    def test_unknown_coin_verbatim_with_warning(self) -> None:
        registry = RecordingRegistry(record="DH5yaieqoZN36fDVciNyRueRGvGLR3mr7L")
        result = anyio.run(ResolutionService(registry).address, "brad.crypto", "doge")
        assert result.ok is True
        assert result.value == "DH5yaieqoZN36fDVciNyRueRGvGLR3mr7L"
        assert result.warnings == ["Unknown coin DOGE; address returned as stored"]

    def test_checksum_policy_override(self) -> None:
        registry = RecordingRegistry(record="0x45b31e01aa6f42f0549ad482be81635ed3149abb")
        svc = ResolutionService(registry, checksum_tickers=[])
        assert anyio.run(svc.address, "brad.crypto", "ETH").value == (
            "0x45b31e01aa6f42f0549ad482be81635ed3149abb"
        )

    def test_record_with_coin_key_is_checksummed(self, service: ResolutionService) -> None:
        result = anyio.run(service.record, LABEL_DOMAIN, "crypto.ETH.address")
        assert result.op == "record"
        assert result.value == ETH_CHECKSUM


class TestTypedWrappers:
    def test_ipfs_hash(self, service: ResolutionService) -> None:
        result = anyio.run(service.ipfs_hash, LABEL_DOMAIN)
        assert result.op == "ipfs_hash"
        assert result.value == IPFS_HASH

    def test_http_url(self, service: ResolutionService) -> None:
        assert anyio.run(service.http_url, LABEL_DOMAIN).value == "www.unstoppabledomains.com"

    def test_email(self, service: ResolutionService) -> None:
        assert anyio.run(service.email, LABEL_DOMAIN).value == "brad@example.com"

    def test_email_missing(self, service: ResolutionService) -> None:
        result = anyio.run(service.email, "zero-resolver.crypto")
        assert _code(result) == ErrorKind.UNSPECIFIED_RESOLVER


class TestRegistryQueries:
    def test_owner(self, service: ResolutionService) -> None:
        result = anyio.run(service.owner, LABEL_DOMAIN)
        assert result.value == OWNER

    def test_owner_does_not_need_resolver(self, service: ResolutionService) -> None:
        assert anyio.run(service.owner, "owned-only.crypto").value == OWNER

    def test_owner_unregistered(self, service: ResolutionService) -> None:
        assert _code(anyio.run(service.owner, "nobody.crypto")) == ErrorKind.UNREGISTERED_DOMAIN

    def test_resolver(self, service: ResolutionService) -> None:
        assert anyio.run(service.resolver, LABEL_DOMAIN).value == RESOLVER

    def test_resolver_unspecified(self, service: ResolutionService) -> None:
        result = anyio.run(service.resolver, "owned-only.crypto")
        assert _code(result) == ErrorKind.UNSPECIFIED_RESOLVER

    def test_ttl(self, service: ResolutionService) -> None:
        assert anyio.run(service.ttl, LABEL_DOMAIN).value == 300

    def test_ttl_unregistered(self, service: ResolutionService) -> None:
        assert _code(anyio.run(service.ttl, "nobody.crypto")) == ErrorKind.UNREGISTERED_DOMAIN

    def test_ttl_transport_error(self) -> None:
        registry = RecordingRegistry(fail_on="ttl_of")
        result = anyio.run(ResolutionService(registry).ttl, "brad.crypto")
        assert _code(result) == ErrorKind.NAMING_SERVICE_DOWN


class TestConcurrency:
    def test_independent_lookups_share_one_service(self, service: ResolutionService) -> None:
        results: dict[str, ServiceResult] = {}

        async def lookup(name: str, key: str) -> None:
            results[name] = await service.resolve_record(LABEL_DOMAIN, key)

        async def main() -> None:
            async with anyio.create_task_group() as tg:
                tg.start_soon(lookup, "ipfs", "ipfs.html2")
                tg.start_soon(lookup, "missing", "No.such.record")
                tg.start_soon(lookup, "eth", "crypto.ETH.address")

        anyio.run(main)
        assert results["ipfs"].value == IPFS_HASH
        assert _code(results["missing"]) == ErrorKind.RECORD_NOT_FOUND
        assert results["eth"].value == ETH_CHECKSUM
