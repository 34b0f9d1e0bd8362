"""Registry clients — the narrow capability the resolver protocol calls.

A registry maps a namehash to its owner and resolver; the resolver holds the
key/value records.  Real clients talk to a ledger node; the
:class:`StaticRegistryClient` serves the same answers from memory or from a
TOML fixture file, so lookups can run offline.

INVARIANT: Clients return ``None`` for absent data and raise
:class:`RegistryTransportError` when they cannot answer.  They never retry
on behalf of the caller.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field, ValidationError

from cnsctl.domain.names import normalize_domain
from cnsctl.domain.namehash import namehash

logger = logging.getLogger(__name__)


class RegistryTransportError(Exception):
    """The registry could not be reached or returned an unusable response."""


@runtime_checkable
class RegistryClient(Protocol):
    """Async registry/resolver capability."""

    async def owner_of(self, node: str) -> str | None: ...

    async def resolver_of(self, node: str) -> str | None: ...

    async def record_at(self, resolver: str, node: str, key: str) -> str | None: ...

    async def ttl_of(self, node: str) -> int: ...


# --- Fixture models ---


class DomainEntry(BaseModel):
    """One registered domain in a registry fixture."""

    model_config = {"frozen": True}

    owner: str | None = None
    resolver: str | None = None
    ttl: int = 0
    records: dict[str, str] = Field(default_factory=dict)


class RegistryFixture(BaseModel):
    """Top-level shape of a registry TOML file."""

    model_config = {"frozen": True}

    domains: dict[str, DomainEntry] = Field(default_factory=dict)


class StaticRegistryClient:
    """In-memory registry keyed by namehash.

    Domain names in *domains* are normalized and hashed once at
    construction.  ``record_at`` answers only for the resolver address bound
    to the node, mirroring how a resolver contract is addressed.
    """

    def __init__(self, domains: Mapping[str, DomainEntry] | None = None) -> None:
        self._entries: dict[str, DomainEntry] = {}
        for name, entry in (domains or {}).items():
            self._entries[namehash(normalize_domain(name))] = entry

    @classmethod
    def from_file(cls, path: Path) -> StaticRegistryClient:
        """Load a registry fixture from a TOML file.

        Raises:
            RegistryTransportError: The file is missing, not TOML, or does
                not match :class:`RegistryFixture`.
        """
        try:
            raw = path.read_text(encoding="utf-8")
            fixture = RegistryFixture.model_validate(tomllib.loads(raw))
        except (OSError, tomllib.TOMLDecodeError, ValidationError) as exc:
            msg = f"Cannot load registry file {path}: {exc}"
            raise RegistryTransportError(msg) from exc
        logger.debug("Loaded %d domains from %s", len(fixture.domains), path)
        return cls(fixture.domains)

    def __len__(self) -> int:
        return len(self._entries)

    async def owner_of(self, node: str) -> str | None:
        entry = self._entries.get(node)
        return entry.owner if entry else None

    async def resolver_of(self, node: str) -> str | None:
        entry = self._entries.get(node)
        return entry.resolver if entry else None

    async def record_at(self, resolver: str, node: str, key: str) -> str | None:
        entry = self._entries.get(node)
        if entry is None or entry.resolver is None:
            return None
        if entry.resolver.lower() != resolver.lower():
            return None
        return entry.records.get(key)

    async def ttl_of(self, node: str) -> int:
        entry = self._entries.get(node)
        return entry.ttl if entry else 0
