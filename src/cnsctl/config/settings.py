"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``CNSCTL_*`` prefix
  3. TOML file    — ``cnsctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from cnsctl.config.models import NamingConfig, RegistryConfig


CONFIG_FILENAME = "cnsctl.toml"
CONFIG_ENV_VAR = "CNSCTL_CONFIG"


def _named_config(raw: str, origin: str) -> Path:
    path = Path(raw).expanduser()
    if not path.is_file():
        msg = f"Config file from {origin} not found: {path}"
        raise click.ClickException(msg)
    return path


def locate_config(
    config_path: str | None = None, start: Path | None = None
) -> tuple[Path | None, Path]:
    """Return ``(config file or None, base directory)``.

    The file comes from *config_path*, else ``CNSCTL_CONFIG``, else the first
    ``cnsctl.toml`` found walking up from *start* (default: cwd).  A named
    file that does not exist is an error; a failed walk-up is not.

    The base directory is *start* when given, else the config file's
    directory, else cwd.  Relative ``[registry] path`` values resolve
    against it.
    """
    toml_path: Path | None = None
    if config_path:
        toml_path = _named_config(config_path, "--config")
    elif env_path := os.environ.get(CONFIG_ENV_VAR):
        toml_path = _named_config(env_path, CONFIG_ENV_VAR)
    else:
        here = (start or Path.cwd()).resolve()
        for directory in (here, *here.parents):
            candidate = directory / CONFIG_FILENAME
            if candidate.is_file():
                toml_path = candidate
                break

    if start is not None:
        base_dir = start
    elif toml_path is not None:
        base_dir = toml_path.resolve().parent
    else:
        base_dir = Path.cwd()
    return toml_path, base_dir


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``cnsctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class CnsSettings(BaseSettings):
    """Unified settings for the cnsctl CLI.

    Attributes:
        base_dir: Directory relative registry paths resolve against (parent
            of ``cnsctl.toml``, or CWD if no config found).
        config_path: The config file in effect, if any.
        registry_path: ``--registry`` override for ``[registry] path``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CNSCTL_",
        "env_nested_delimiter": "__",
    }

    base_dir: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    registry_path: Path | None = None

    # --- TOML sections ---
    naming: NamingConfig = Field(default_factory=NamingConfig)
    registry: RegistryConfig = Field(default_factory=RegistryConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        base_dir: Path | None = None,
        **cli_flags: Any,
    ) -> CnsSettings:
        """Construct settings from a CLI invocation.

        Locates the config file with :func:`locate_config` and merges CLI
        flags as highest-priority overrides.  ``None`` flag values
        are dropped so they do not mask env or TOML values.
        """
        toml_path, resolved_dir = locate_config(config_path, base_dir)
        flags = {k: v for k, v in cli_flags.items() if v is not None}
        _tls.toml_path = toml_path
        try:
            return cls(base_dir=resolved_dir, config_path=toml_path, **flags)
        finally:
            _tls.toml_path = None

    def registry_file(self) -> Path | None:
        """The registry fixture to load, resolved against :attr:`base_dir`."""
        path = self.registry_path or self.registry.path
        if path is None:
            return None
        return path if path.is_absolute() else self.base_dir / path
