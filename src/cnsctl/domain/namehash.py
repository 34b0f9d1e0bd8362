"""Namehash: fixed-size identifiers for hierarchical domain names.

``namehash(label.parent) = keccak256(namehash(parent) ++ keccak256(label))``,
folded right to left from the all-zero root.

INVARIANT: The engine hashes bytes exactly as given.  Lowercasing and
label validation belong to :mod:`cnsctl.domain.names`.
"""

from __future__ import annotations

import re

from eth_hash.auto import keccak

ROOT_NAMEHASH = "0x" + "00" * 32

_HASH_RE = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


def keccak256(data: bytes) -> bytes:
    """Return the 32-byte Keccak-256 digest of *data*."""
    return keccak(data)


def _hash_bytes(value: str) -> bytes:
    if not _HASH_RE.match(value):
        msg = f"Not a 32-byte hex hash: {value!r}"
        raise ValueError(msg)
    return bytes.fromhex(value[2:] if value.startswith("0x") else value)


def childhash(parent: str, label: str) -> str:
    """Combine a parent namehash with one new leftmost *label*.

    *parent* may be given with or without the ``0x`` prefix.
    """
    digest = keccak256(_hash_bytes(parent) + keccak256(label.encode("utf-8")))
    return "0x" + digest.hex()


def namehash(domain: str) -> str:
    """Hash a dotted *domain*.  The empty string is the root node."""
    node = ROOT_NAMEHASH
    if not domain:
        return node
    for label in reversed(domain.split(".")):
        node = childhash(node, label)
    return node
