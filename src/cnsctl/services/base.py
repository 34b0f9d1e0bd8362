"""BaseService — shared result construction for cnsctl services."""

from __future__ import annotations

import logging
from typing import Any

from cnsctl.domain.errors import ErrorKind
from cnsctl.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Subclasses build results through :meth:`_success` and :meth:`_failure`
    so every failure is logged once and carries a taxonomy code.
    """

    def _success(
        self, op: str, *, warnings: list[str] | None = None, **data: Any
    ) -> ServiceResult:
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings or [])

    def _failure(self, op: str, kind: ErrorKind, message: str, **detail: Any) -> ServiceResult:
        logger.debug("%s failed: %s (%s)", op, kind, message, extra={"detail": detail})
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=kind.value, message=message, detail=detail),
        )
