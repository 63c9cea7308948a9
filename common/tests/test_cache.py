import pytest
from challans.tests.factories import ChallanLineFactory
from common.cache import cached_listing, invalidate_listings, listing_key
from django.core.cache import cache
from django.test import override_settings
from documents.tests.factories import move, receive
from locations.services import upsert_location
from locations.tests.factories import LocationFactory, PartnerFactory
from rest_framework.test import APIClient

LOCMEM = {"default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache", "LOCATION": "listing-tests"}}


@pytest.fixture
def locmem_cache():
    with override_settings(CACHES=LOCMEM):
        cache.clear()
        yield cache
        cache.clear()


def test_cached_listing_builds_once_per_generation(locmem_cache):
    calls = []

    def build():
        calls.append(1)
        return [len(calls)]

    assert cached_listing("demo", {"q": "a"}, build) == [1]
    assert cached_listing("demo", {"q": "a"}, build) == [1]
    assert cached_listing("demo", {"q": "b"}, build) == [2]

    invalidate_listings()
    assert cached_listing("demo", {"q": "a"}, build) == [3]


def test_listing_key_is_stable_for_param_order(locmem_cache):
    assert listing_key("x", {"a": 1, "b": None}) == listing_key("x", {"b": None, "a": 1})


def test_invalidate_without_generation_starts_fresh(locmem_cache):
    invalidate_listings()
    assert listing_key("x", {}).startswith("listings:2:")


@pytest.mark.django_db
def test_inventory_endpoint_serves_cached_rows_until_invalidated(locmem_cache):
    batch = ChallanLineFactory(qty_received=10)
    warehouse, _ = receive(batch)
    client = APIClient()

    first = client.get("/api/v1/inventory/").json()["results"]
    assert first[0]["qty_at_warehouse"] == 10

    move(batch, warehouse, LocationFactory(), 4)
    assert client.get("/api/v1/inventory/").json()["results"][0]["qty_at_warehouse"] == 10

    invalidate_listings()
    assert client.get("/api/v1/inventory/").json()["results"][0]["qty_at_warehouse"] == 6


@pytest.mark.django_db
def test_location_kind_change_invalidates_cached_inventory(locmem_cache, django_capture_on_commit_callbacks):
    batch = ChallanLineFactory(qty_received=10)
    warehouse, _ = receive(batch)
    partner = PartnerFactory(name="Endo Partners")
    move(batch, warehouse, partner, 4)
    invalidate_listings()
    client = APIClient()

    assert client.get("/api/v1/inventory/").json()["results"][0]["qty_returned"] == 0

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        result = upsert_location(name="Endo Partners", kind="company")
    assert result.success
    assert len(callbacks) == 1

    row = client.get("/api/v1/inventory/").json()["results"][0]
    assert row["qty_returned"] == 4


# EOF
