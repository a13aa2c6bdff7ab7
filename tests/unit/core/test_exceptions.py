from __future__ import annotations

import pytest
from django.db import DatabaseError, IntegrityError
from rest_framework import exceptions as drf_exceptions

from modules.carts.exceptions import CartEmpty
from modules.core.exceptions import (
    DomainError,
    ValidationFailed,
    api_exception_handler,
    status_for,
)
from modules.geo.exceptions import GeocodingFailed, InvalidGeocodeResponse
from modules.orders.exceptions import NotificationFailed, OrderNotFound, OutOfServiceArea
from modules.users.exceptions import UserNotFound

pytestmark = pytest.mark.unit


class TestStatusMapping:
    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (ValidationFailed("bad"), 400),
            (GeocodingFailed("x"), 400),
            (InvalidGeocodeResponse("x"), 400),
            (OutOfServiceArea("x"), 400),
            (CartEmpty("x"), 400),
            (UserNotFound("x"), 404),
            (OrderNotFound("x"), 404),
            (NotificationFailed("x"), 500),
            (DatabaseError("x"), 500),
        ],
    )
    def test_known_errors(self, exc, expected):
        assert status_for(exc) == expected

    def test_subclass_inherits_mapping(self):
        assert status_for(IntegrityError("dup")) == 500

    def test_unmapped_error(self):
        assert status_for(RuntimeError("boom")) is None

    def test_bare_domain_error_is_unmapped(self):
        assert status_for(DomainError("x")) is None


class TestApiExceptionHandler:
    def test_domain_error_envelope(self):
        response = api_exception_handler(OutOfServiceArea("Service not available."), {})

        assert response.status_code == 400
        assert response.data == {
            "type": "client_error",
            "errors": [
                {
                    "code": "out_of_service_area",
                    "detail": "Service not available.",
                    "attr": None,
                }
            ],
        }

    def test_validation_failed_lists_each_field(self):
        exc = ValidationFailed(
            "Order validation failed.",
            {"status": ["Bad choice."], "total_amount": ["Too small.", "Too precise."]},
        )

        response = api_exception_handler(exc, {})

        assert response.status_code == 400
        assert [(e["attr"], e["detail"]) for e in response.data["errors"]] == [
            ("status", "Bad choice."),
            ("total_amount", "Too small."),
            ("total_amount", "Too precise."),
        ]
        assert {e["code"] for e in response.data["errors"]} == {"validation_failed"}

    def test_database_error_hides_details(self):
        response = api_exception_handler(DatabaseError("disk I/O error at /var/db"), {})

        assert response.status_code == 500
        assert response.data["type"] == "server_error"
        assert response.data["errors"] == [
            {"code": "store_failure", "detail": "Storage failure.", "attr": None}
        ]

    def test_drf_validation_error_flattened(self):
        exc = drf_exceptions.ValidationError({"phone_number": ["Enter a valid phone number."]})

        response = api_exception_handler(exc, {})

        assert response.status_code == 400
        assert response.data["type"] == "validation_error"
        assert response.data["errors"][0]["attr"] == "phone_number"
        assert response.data["errors"][0]["detail"] == "Enter a valid phone number."

    def test_drf_not_authenticated(self):
        response = api_exception_handler(drf_exceptions.NotAuthenticated(), {})

        assert response.status_code == 401
        assert response.data["type"] == "client_error"
        assert response.data["errors"][0]["code"] == "not_authenticated"

    def test_unknown_exception_left_to_django(self):
        assert api_exception_handler(RuntimeError("boom"), {}) is None
