"""Account address checksumming and ICAP decoding.

Two input shapes are accepted:

- Hex: 40 hex digits, optionally ``0x``-prefixed.  The canonical form is
  the mixed-case checksum where digit *i* is uppercased when nibble *i* of
  ``keccak256(lowercase_digits)`` is 8 or more.
- ICAP (direct mode): ``XE`` + 2 check digits + 30-31 base-36 characters,
  validated with ISO 7064 mod 97-10.

INVARIANT: ``to_checksum_address`` is idempotent.
"""

from __future__ import annotations

import re
import string
from collections.abc import Mapping
from types import MappingProxyType

from cnsctl.domain.errors import AddressError, ErrorKind
from cnsctl.domain.namehash import keccak256

HEX_ADDRESS_RE = re.compile(r"^(0x)?[0-9a-fA-F]{40}$")
ICAP_RE = re.compile(r"^XE[0-9]{2}[0-9A-Za-z]{30,31}$")
_MIXED_CASE_RE = re.compile(r"([A-F].*[a-f])|([a-f].*[A-F])")

ZERO_ADDRESS = "0x" + "0" * 40

# Digits map to themselves, A-Z to 10-35.
ICAP_ALPHABET: Mapping[str, str] = MappingProxyType(
    {
        **{d: d for d in string.digits},
        **{c: str(10 + i) for i, c in enumerate(string.ascii_uppercase)},
    }
)

_BASE36 = string.digits + string.ascii_uppercase


def _checksum_hex(digits: str) -> str:
    """Apply the mixed-case checksum to 40 lowercase hex *digits*."""
    hashed = keccak256(digits.encode("ascii"))
    chars = list(digits)
    for i in range(0, 40, 2):
        byte = hashed[i >> 1]
        if (byte >> 4) >= 8:
            chars[i] = chars[i].upper()
        if (byte & 0x0F) >= 8:
            chars[i + 1] = chars[i + 1].upper()
    return "0x" + "".join(chars)


def icap_checksum(address: str) -> str:
    """Compute the two mod-97 check digits for an ICAP *address*.

    The check digits already present in *address* (positions 2-3) are
    ignored.
    """
    address = address.upper()
    rearranged = address[4:] + address[:2] + "00"
    try:
        expanded = "".join(ICAP_ALPHABET[c] for c in rearranged)
    except KeyError as exc:
        msg = f"Invalid ICAP character {exc.args[0]!r}"
        raise AddressError(ErrorKind.INVALID_ADDRESS, msg, address) from exc
    return f"{98 - int(expanded) % 97:02d}"


def _decode_icap(address: str) -> str:
    if address[2:4] != icap_checksum(address):
        raise AddressError(ErrorKind.BAD_CHECKSUM, "Bad ICAP checksum", address)
    digits = format(int(address[4:], 36), "x").zfill(40)
    if len(digits) > 40:
        raise AddressError(ErrorKind.INVALID_ADDRESS, "ICAP value exceeds 20 bytes", address)
    return _checksum_hex(digits)


def to_checksum_address(address: str) -> str:
    """Return the canonical mixed-case form of a hex or ICAP *address*.

    Raises:
        AddressError: ``INVALID_ADDRESS`` for malformed input,
            ``BAD_CHECKSUM`` when the input carries a checksum (mixed case or
            ICAP check digits) that does not match.
    """
    if not isinstance(address, str):
        raise AddressError(ErrorKind.INVALID_ADDRESS, "Address must be a string", address)

    if HEX_ADDRESS_RE.match(address):
        if not address.startswith("0x"):
            address = "0x" + address
        result = _checksum_hex(address[2:].lower())
        if _MIXED_CASE_RE.search(address) and result != address:
            raise AddressError(ErrorKind.BAD_CHECKSUM, "Bad address checksum", address)
        return result

    if ICAP_RE.match(address):
        return _decode_icap(address)

    raise AddressError(ErrorKind.INVALID_ADDRESS, "Invalid address", address)


def is_checksum_address(address: str) -> bool:
    """Check whether *address* is already in canonical checksum form."""
    try:
        return to_checksum_address(address) == address
    except AddressError:
        return False


def to_icap_address(address: str) -> str:
    """Encode a hex *address* as a direct-mode ICAP string."""
    value = int(to_checksum_address(address)[2:], 16)
    body = ""
    while value:
        value, rem = divmod(value, 36)
        body = _BASE36[rem] + body
    body = body.rjust(30, "0")
    return "XE" + icap_checksum("XE00" + body) + body
