"""Domain error base class and the API error boundary.

Service code raises subclasses of ``DomainError``; it never decides an
HTTP status.  ``api_exception_handler`` (wired as DRF's
``EXCEPTION_HANDLER``) owns that decision through ``ERROR_STATUS_MAP``
and renders every error in the standard envelope::

    {
        "type": "client_error" | "server_error",
        "errors": [{"code": "...", "detail": "...", "attr": null}]
    }
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.db import DatabaseError
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)


class DomainError(Exception):
    """Base class for every business-rule failure."""

    code = "domain_error"


class ValidationFailed(DomainError):
    """An entity failed model-level validation after an update."""

    code = "validation_failed"

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.errors = errors or {}


# Lazily populated so this module stays import-safe for the domain
# packages that subclass ``DomainError``.
ERROR_STATUS_MAP: Dict[type, int] = {}


def _build_default_map() -> None:
    from modules.carts.exceptions import CartEmpty
    from modules.geo.exceptions import GeocodingFailed, InvalidGeocodeResponse
    from modules.orders.exceptions import (
        NotificationFailed,
        OrderNotFound,
        OutOfServiceArea,
    )
    from modules.users.exceptions import UserNotFound

    ERROR_STATUS_MAP.update(
        {
            ValidationFailed: status.HTTP_400_BAD_REQUEST,
            GeocodingFailed: status.HTTP_400_BAD_REQUEST,
            InvalidGeocodeResponse: status.HTTP_400_BAD_REQUEST,
            OutOfServiceArea: status.HTTP_400_BAD_REQUEST,
            CartEmpty: status.HTTP_400_BAD_REQUEST,
            UserNotFound: status.HTTP_404_NOT_FOUND,
            OrderNotFound: status.HTTP_404_NOT_FOUND,
            NotificationFailed: status.HTTP_500_INTERNAL_SERVER_ERROR,
            DatabaseError: status.HTTP_500_INTERNAL_SERVER_ERROR,
        }
    )


def status_for(exc: Exception) -> Optional[int]:
    """Return the mapped HTTP status for *exc*, walking its MRO."""
    if not ERROR_STATUS_MAP:
        _build_default_map()
    for klass in type(exc).__mro__:
        if klass in ERROR_STATUS_MAP:
            return ERROR_STATUS_MAP[klass]
    return None


def _error_type(http_status: int) -> str:
    return "server_error" if http_status >= 500 else "client_error"


def _flatten_drf_detail(detail: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    if isinstance(detail, dict):
        errors: List[Dict[str, Any]] = []
        for key, value in detail.items():
            name = key if attr is None else f"{attr}.{key}"
            if key == "non_field_errors":
                name = attr
            errors.extend(_flatten_drf_detail(value, name))
        return errors
    if isinstance(detail, list):
        errors = []
        for index, value in enumerate(detail):
            name = attr
            if isinstance(value, (dict, list)) and attr is not None:
                name = f"{attr}.{index}"
            errors.extend(_flatten_drf_detail(value, name))
        return errors
    return [
        {
            "code": getattr(detail, "code", "error"),
            "detail": str(detail),
            "attr": attr,
        }
    ]


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """DRF exception handler mapping domain errors through ``ERROR_STATUS_MAP``."""
    http_status = status_for(exc)
    if http_status is not None:
        if isinstance(exc, DatabaseError):
            logger.error("api.store_failure", error=str(exc))
            errors = [{"code": "store_failure", "detail": "Storage failure.", "attr": None}]
        elif isinstance(exc, ValidationFailed) and exc.errors:
            errors = [
                {"code": exc.code, "detail": str(message), "attr": field}
                for field, messages in exc.errors.items()
                for message in messages
            ]
        else:
            errors = [{"code": getattr(exc, "code", "error"), "detail": str(exc), "attr": None}]

        if http_status >= 500:
            logger.error("api.domain_error", code=errors[0]["code"], error=str(exc))
        else:
            logger.info("api.domain_error", code=errors[0]["code"], error=str(exc))
        return Response(
            {"type": _error_type(http_status), "errors": errors},
            status=http_status,
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, drf_exceptions.ValidationError):
        errors = _flatten_drf_detail(exc.detail)
        error_type = "validation_error"
    else:
        errors = _flatten_drf_detail(getattr(exc, "detail", str(exc)))
        error_type = _error_type(response.status_code)

    response.data = {"type": error_type, "errors": errors}
    return response
