"""Shared pytest fixtures and test helpers for cnsctl tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from cnsctl.infrastructure.registry import DomainEntry, StaticRegistryClient
from cnsctl.services.telemetry import disable_telemetry

LABEL_DOMAIN = "reseller-test-braden-6.crypto"
OWNER = "0x1a5363ca3ceef73b1544732e3264f6d600cf678e"
RESOLVER = "0xBD5F5ec7ed5f19b53726344540296C02584A5237"
IPFS_HASH = "QmVaAtQbi3EtsfpKoLzALm6vXphdi2KjMgxEDKeGg6wHuK"
ETH_LOWER = "0x45b31e01aa6f42f0549ad482be81635ed3149abb"
ETH_CHECKSUM = "0x45b31e01AA6f42F0549aD482BE81635ED3149abb"

LABEL_RECORDS = {
    "ipfs.html2": IPFS_HASH,
    "ipfs.html.value": IPFS_HASH,
    "ipfs.redirect_domain.value": "www.unstoppabledomains.com",
    "whois.email.value": "brad@example.com",
    "crypto.ETH.address": ETH_LOWER,
    "crypto.BTC.address": "1EVt92qQnaLDcmVFtHivRJaunG2mf2C3mB",
    "crypto.BCH.address": "qrq4sk49ayvepqz7j7ep8x4km2qp8lauvcnzhveyu6",
    "crypto.DASH.address": "XnixreEBqFuSLnDSLNbfqMH1GsZk7cgW4j",
    "crypto.LTC.address": "LetmswTW3b7dgJ46mXuiXMUY17XbK29UmL",
    "crypto.XMR.address": (
        "447d7TVFkoQ57k3jm3wGKoEAkfEym59mK96Xw5yWamDNFGaLKW5wL2qK5RMTDKGSvYfQYVN7dLSrLdkwtKH3hwbSCQCu26d"
    ),
    "crypto.ZEC.address": "t1h7ttmQvWCSH1wfrcmvT4mZJfGw2DgCSqV",
    "crypto.ZIL.address": "zil1yu5u4hegy9v3xgluweg4en54zm8f8auwxu0xxj",
    "crypto.ETC.address": "not-a-hex-address",
}

REGISTRY_TOML = f"""\
[domains."{LABEL_DOMAIN}"]
owner = "{OWNER}"
resolver = "{RESOLVER}"
ttl = 300

[domains."{LABEL_DOMAIN}".records]
"ipfs.html2" = "{IPFS_HASH}"
"ipfs.html.value" = "{IPFS_HASH}"
"crypto.ETH.address" = "{ETH_LOWER}"
"crypto.BTC.address" = "1EVt92qQnaLDcmVFtHivRJaunG2mf2C3mB"
"crypto.DOGE.address" = "DH5yaieqoZN36fDVciNyRueRGvGLR3mr7L"

[domains."owned-only.crypto"]
owner = "{OWNER}"
"""


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """Keep telemetry disabled between tests (the CLI enables it with -v)."""
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> StaticRegistryClient:
    """Registry with one fully configured domain and partial registrations."""
    return StaticRegistryClient(
        {
            LABEL_DOMAIN: DomainEntry(
                owner=OWNER, resolver=RESOLVER, ttl=300, records=LABEL_RECORDS
            ),
            "owned-only.crypto": DomainEntry(owner=OWNER),
            "zero-resolver.crypto": DomainEntry(owner=OWNER, resolver="0x" + "0" * 40),
            "zero-owner.crypto": DomainEntry(owner="0x" + "0" * 40, resolver=RESOLVER),
        }
    )


@pytest.fixture
def registry_file(tmp_path: Path) -> Path:
    """A registry TOML fixture on disk."""
    path = tmp_path / "registry.toml"
    path.write_text(REGISTRY_TOML, encoding="utf-8")
    return path


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory with no config discovery leaks."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CNSCTL_CONFIG", raising=False)
