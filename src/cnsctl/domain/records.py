"""Record key conventions and per-coin address formats.

Coin addresses live under ``crypto.<TICKER>.address``.  Whether a coin's
value is passed through the checksum codec is decided by
:data:`COIN_ADDRESS_FORMATS`, never inferred from the value itself.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType

IPFS_HASH_KEY = "ipfs.html.value"
REDIRECT_URL_KEY = "ipfs.redirect_domain.value"
EMAIL_KEY = "whois.email.value"

_COIN_KEY_RE = re.compile(r"^crypto\.([A-Za-z0-9_]+)\.address$")


class AddressFormat(StrEnum):
    """How a coin's stored address is presented."""

    HEX_CHECKSUM = "hex-checksum"
    VERBATIM = "verbatim"


# Account-model chains with 20-byte hex addresses.
COIN_ADDRESS_FORMATS: Mapping[str, AddressFormat] = MappingProxyType(
    {
        "ETH": AddressFormat.HEX_CHECKSUM,
        "ETC": AddressFormat.HEX_CHECKSUM,
        "MATIC": AddressFormat.HEX_CHECKSUM,
        "FTM": AddressFormat.HEX_CHECKSUM,
        "VET": AddressFormat.HEX_CHECKSUM,
        "BTC": AddressFormat.VERBATIM,
        "BCH": AddressFormat.VERBATIM,
        "LTC": AddressFormat.VERBATIM,
        "DASH": AddressFormat.VERBATIM,
        "XMR": AddressFormat.VERBATIM,
        "ZEC": AddressFormat.VERBATIM,
        "ZIL": AddressFormat.VERBATIM,
        "ADA": AddressFormat.VERBATIM,
        "EOS": AddressFormat.VERBATIM,
        "XLM": AddressFormat.VERBATIM,
        "XRP": AddressFormat.VERBATIM,
    }
)

CHECKSUM_TICKERS: frozenset[str] = frozenset(
    ticker for ticker, fmt in COIN_ADDRESS_FORMATS.items() if fmt is AddressFormat.HEX_CHECKSUM
)


def coin_address_key(ticker: str) -> str:
    """Return the record key holding the address for *ticker*."""
    return f"crypto.{ticker.upper()}.address"


def ticker_from_key(key: str) -> str | None:
    """Extract the uppercased ticker from a coin address key, else None."""
    match = _COIN_KEY_RE.match(key)
    if match is None:
        return None
    return match.group(1).upper()


def address_format(
    ticker: str, checksum_tickers: frozenset[str] = CHECKSUM_TICKERS
) -> AddressFormat:
    """Look up the presentation format for *ticker*.

    Unknown tickers are returned verbatim.
    """
    if ticker.upper() in checksum_tickers:
        return AddressFormat.HEX_CHECKSUM
    return AddressFormat.VERBATIM
