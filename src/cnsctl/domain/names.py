"""Domain name normalization and support rules."""

from __future__ import annotations

import re
from collections.abc import Iterable

DEFAULT_TLDS: frozenset[str] = frozenset({"crypto"})

# Letters and digits in any script, plus hyphens; no underscores.
LABEL_RE = re.compile(r"(?:[^\W_]|-)+")


def normalize_domain(domain: str) -> str:
    """Strip surrounding whitespace and lowercase."""
    return domain.strip().lower()


def split_labels(domain: str) -> list[str]:
    """Split a dotted domain into labels, leftmost first."""
    return domain.split(".") if domain else []


def is_supported_domain(domain: str, tlds: Iterable[str] = DEFAULT_TLDS) -> bool:
    """Check whether a normalized *domain* belongs to this naming system.

    Every label must be non-empty, already lowercase, and made of letters,
    digits and hyphens (any script); the last label must be one of *tlds*.
    A bare TLD (``"crypto"``) is supported.
    """
    labels = split_labels(domain)
    if not labels:
        return False
    if not all(LABEL_RE.fullmatch(label) and label == label.lower() for label in labels):
        return False
    return labels[-1] in set(tlds)
