# PATH: apps/api/common/exceptions.py
"""
DRF EXCEPTION_HANDLER — coursehub 도메인 예외 → HTTP 응답

ValidationError 400 / ForbiddenError 403 / NotFoundError 404 /
ConflictError 409 / InvalidStateError 400.
그 외 예외는 DRF 기본 처리, 처리 불가 시 UnhandledExceptionMiddleware 로 전파.
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from coursehub.domain.shared.errors import (
    ConflictError,
    CourseDomainError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidStateError, status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: CourseDomainError) -> int:
    for error_cls, code in STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return code
    return status.HTTP_400_BAD_REQUEST


def exception_handler(exc, context):
    if isinstance(exc, CourseDomainError):
        code = status_for(exc)
        view = context.get("view")
        logger.info(
            "[domain_error] view=%s status=%s code=%s detail=%s",
            view.__class__.__name__ if view is not None else None,
            code,
            exc.code,
            exc,
        )
        return Response(exc.to_payload(), status=code)

    return drf_exception_handler(exc, context)
