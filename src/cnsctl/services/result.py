"""ServiceResult and ServiceError — the tagged result of every lookup.

INVARIANT: Service methods return ServiceResult and never raise for a
failure in the error taxonomy.  ``ok=False`` always carries an ``error``
whose ``code`` is an :class:`~cnsctl.domain.errors.ErrorKind` value.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Either a value or one error kind, never both.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"resolve_record"``).
        data: Operation-specific payload on success; lookups put the
            resolved string under ``"value"``.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def value(self) -> Any:
        """The ``"value"`` entry of a successful result, else None."""
        if not self.ok:
            return None
        return self.data.get("value")
