from decimal import Decimal

import pytest
import responses
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from modules.carts.models import Cart, CartItem
from modules.catalog.models import Service

User = get_user_model()

# Indiranagar, well inside the serviceable radius.
INSIDE_LAT, INSIDE_LNG = 12.9784, 77.6408
# Mysuru, roughly 130 km away.
OUTSIDE_LAT, OUTSIDE_LNG = 12.2958, 76.6394


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@pytest.fixture()
def customer():
    return User.objects.create_user(
        username="customer",
        email="customer@example.com",
        password="testpass123",
    )


@pytest.fixture()
def staff_user():
    return User.objects.create_user(
        username="staff",
        email="staff@example.com",
        password="testpass123",
        is_staff=True,
    )


@pytest.fixture()
def customer_client(customer):
    client = APIClient()
    client.force_authenticate(user=customer)
    return client


@pytest.fixture()
def staff_client(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


# ---------------------------------------------------------------------------
# Catalog and carts
# ---------------------------------------------------------------------------


@pytest.fixture()
def wash_fold():
    return Service.objects.create(name="Wash & Fold", description="Wash and fold.")


@pytest.fixture()
def dry_cleaning():
    return Service.objects.create(name="Dry Cleaning", description="Solvent clean.")


@pytest.fixture()
def filled_cart(customer, wash_fold, dry_cleaning):
    """Cart with three lines, two of them for the same service.

    Total: 4 * 30.00 + 2 * 45.50 + 1 * 250.00 = 461.00
    """
    cart = Cart.objects.create(user=customer)
    CartItem.objects.create(
        cart=cart, service=wash_fold, item="Shirt", quantity=4,
        price=Decimal("30.00"), position=0,
    )
    CartItem.objects.create(
        cart=cart, service=wash_fold, item="Trousers", quantity=2,
        price=Decimal("45.50"), position=1,
    )
    CartItem.objects.create(
        cart=cart, service=dry_cleaning, item="Blazer", quantity=1,
        price=Decimal("250.00"), position=2,
    )
    return cart


# ---------------------------------------------------------------------------
# Geocoding provider
# ---------------------------------------------------------------------------


@pytest.fixture()
def geocoder():
    """Intercept every HTTP call made through ``requests``."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture()
def geocoder_url():
    return settings.GEOCODER_URL


@pytest.fixture()
def geocode_payload():
    """Build an OpenCage-shaped response body with one candidate."""

    def _build(
        lat=INSIDE_LAT,
        lng=INSIDE_LNG,
        formatted="100 Feet Road, Indiranagar, Bengaluru 560038, India",
        components=None,
    ):
        if components is None:
            components = {
                "road": "100 Feet Road",
                "postcode": "560038",
                "city": "Bengaluru",
                "country": "India",
                "country_code": "in",
            }
        geometry = {}
        if lat is not None:
            geometry["lat"] = lat
        if lng is not None:
            geometry["lng"] = lng
        return {
            "results": [
                {
                    "formatted": formatted,
                    "geometry": geometry,
                    "components": components,
                    "confidence": 9,
                }
            ],
            "status": {"code": 200, "message": "OK"},
            "total_results": 1,
        }

    return _build


@pytest.fixture()
def empty_geocode_payload():
    return {"results": [], "status": {"code": 200, "message": "OK"}, "total_results": 0}
