import pytest
from challans.tests.factories import ChallanLineFactory
from documents.tests.factories import move, receive
from inventory.selectors import available_at_location, batch_available_at_location, returned_totals
from locations.tests.factories import LocationFactory, PartnerFactory


@pytest.mark.django_db
def test_single_batch_availability_follows_movements():
    batch = ChallanLineFactory(qty_received=100)
    warehouse, _ = receive(batch)
    hospital = LocationFactory()

    assert available_at_location(batch.id, warehouse.id) == 100
    move(batch, warehouse, hospital, 40)
    assert available_at_location(batch.id, warehouse.id) == 60
    assert available_at_location(batch.id, hospital.id) == 40


@pytest.mark.django_db
def test_batch_lookup_returns_zero_for_unknown_and_unmoved_batches():
    moved = ChallanLineFactory(qty_received=10)
    idle = ChallanLineFactory(qty_received=5)
    warehouse, _ = receive(moved)

    result = batch_available_at_location([moved.id, idle.id, 999999], warehouse.id)
    assert result == {moved.id: 10, idle.id: 0, 999999: 0}


@pytest.mark.django_db
def test_batch_lookup_with_no_ids_is_empty():
    assert batch_available_at_location([], 1) == {}


@pytest.mark.django_db
def test_batch_lookup_uses_one_query_per_direction(django_assert_num_queries):
    batches = [ChallanLineFactory(qty_received=10 + i) for i in range(5)]
    warehouse = None
    for batch in batches:
        warehouse, _ = receive(batch, warehouse=warehouse)

    with django_assert_num_queries(2):
        result = batch_available_at_location([b.id for b in batches], warehouse.id)
    assert result == {b.id: b.qty_received for b in batches}


@pytest.mark.django_db
def test_conservation_and_non_negativity_across_locations():
    batch = ChallanLineFactory(qty_received=100)
    warehouse, company = receive(batch)
    hospital = LocationFactory()
    partner = PartnerFactory()

    move(batch, warehouse, hospital, 30)
    move(batch, warehouse, partner, 20)
    move(batch, hospital, partner, 10)
    move(batch, partner, company, 15)

    held = [warehouse, hospital, partner]
    availability = {loc.id: available_at_location(batch.id, loc.id) for loc in held}
    assert availability == {warehouse.id: 50, hospital.id: 20, partner.id: 15}
    assert all(qty >= 0 for qty in availability.values())
    returned = returned_totals([batch.id]).get(batch.id, 0)
    assert sum(availability.values()) + returned == batch.qty_received


# EOF
