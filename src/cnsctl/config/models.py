"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cnsctl.toml only contains
overrides.  With no config file at all, ``.crypto`` domains resolve against
an empty registry.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from cnsctl.domain.names import DEFAULT_TLDS
from cnsctl.domain.records import CHECKSUM_TICKERS


class NamingConfig(BaseModel):
    """[naming] section."""

    model_config = {"frozen": True}

    tlds: tuple[str, ...] = Field(default_factory=lambda: tuple(sorted(DEFAULT_TLDS)))
    checksum_tickers: tuple[str, ...] = Field(
        default_factory=lambda: tuple(sorted(CHECKSUM_TICKERS))
    )

    @field_validator("tlds")
    @classmethod
    def _lower_tlds(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(t.strip().lower() for t in value)

    @field_validator("checksum_tickers")
    @classmethod
    def _upper_tickers(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(t.strip().upper() for t in value)


class RegistryConfig(BaseModel):
    """[registry] section.

    ``path`` points at a registry TOML fixture; relative paths are resolved
    against the directory holding cnsctl.toml.
    """

    model_config = {"frozen": True}

    path: Path | None = None
