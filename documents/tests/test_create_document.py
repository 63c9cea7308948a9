from datetime import date

import pytest
from challans.tests.factories import ChallanFactory, ChallanLineFactory, ItemFactory
from documents.models import Document, DocumentLine
from documents.services import (
    DocumentHeader,
    DocumentLineInput,
    create_document,
    determine_doc_type,
    highest_ticket_sequence,
)
from documents.tests.factories import move, receive
from inventory.selectors import available_at_location, list_inventory
from locations.tests.factories import CompanyFactory, LocationFactory, PartnerFactory
from tickets.selectors import ticket_detail

DAY = date(2024, 1, 1)


def _header(source, dest, doc_date=DAY, **kwargs):
    return DocumentHeader(doc_date=doc_date, source_location_id=source.id, dest_location_id=dest.id, **kwargs)


def _counts():
    return Document.objects.count(), DocumentLine.objects.count()


@pytest.fixture
def stocked():
    batch = ChallanLineFactory(
        qty_received=100,
        challan=ChallanFactory(supplier_name="Karl Storz", delivery_number="8001234567"),
        item=ItemFactory(material_code="26003BA"),
    )
    warehouse, company = receive(batch)
    return batch, warehouse, company


@pytest.mark.parametrize(
    "kind,expected",
    [("warehouse", "in"), ("company", "return"), ("partner", "out"), ("hospital", "out"), ("", "out"), (None, "out")],
)
def test_determine_doc_type_from_destination(kind, expected):
    assert determine_doc_type(kind) == expected


@pytest.mark.django_db
def test_scenario_a_warehouse_to_partner_creates_active_ticket(stocked):
    batch, warehouse, _ = stocked
    partner = PartnerFactory(name="Endo Partners")

    result = create_document(header=_header(warehouse, partner), lines=[DocumentLineInput(batch.id, 30)])

    assert result.success, result.message
    assert result.message == "Document created successfully"
    doc = Document.objects.get(id=result.doc_id)
    assert doc.doc_type == "out"
    line = doc.lines.get()
    assert line.ticket_code == "TKT-20240101-0001"
    assert line.material_code == "26003BA"
    assert line.company_delivery_no == "8001234567"

    (row,) = list_inventory()
    assert (row.qty_at_warehouse, row.qty_out, row.qty_returned, row.outstanding) == (70, 30, 0, 100)
    ticket = ticket_detail("TKT-20240101-0001")
    assert ticket.status == "active"
    assert ticket.current_location == "Endo Partners"


@pytest.mark.django_db
def test_scenario_b_return_to_supplier_carries_ticket_and_closes_it(stocked):
    batch, warehouse, company = stocked
    partner = PartnerFactory()
    create_document(header=_header(warehouse, partner), lines=[DocumentLineInput(batch.id, 30)])

    result = create_document(
        header=_header(partner, company, doc_date=date(2024, 1, 5)), lines=[DocumentLineInput(batch.id, 30)]
    )

    assert result.success, result.message
    doc = Document.objects.get(id=result.doc_id)
    assert doc.doc_type == "return"
    assert doc.lines.get().ticket_code == "TKT-20240101-0001"
    (row,) = list_inventory()
    assert (row.qty_at_warehouse, row.qty_out, row.qty_returned, row.outstanding) == (70, 0, 30, 70)
    ticket = ticket_detail("TKT-20240101-0001")
    assert ticket.status == "closed"
    assert ticket.current_location == company.name


@pytest.mark.django_db
def test_scenario_c_return_to_wrong_supplier_is_rejected(stocked):
    batch, warehouse, _ = stocked
    partner = PartnerFactory()
    create_document(header=_header(warehouse, partner), lines=[DocumentLineInput(batch.id, 30)])
    other = CompanyFactory(supplier="Olympus")
    before = _counts()

    result = create_document(header=_header(partner, other), lines=[DocumentLineInput(batch.id, 30)])

    assert not result.success
    assert result.doc_id is None
    assert result.message == (
        "Cannot return items to Olympus. The following items belong to different suppliers: 26003BA (from Karl Storz)"
    )
    assert _counts() == before


@pytest.mark.django_db
def test_scenario_d_insufficient_quantity_is_rejected(stocked):
    batch, warehouse, _ = stocked
    hospital = LocationFactory()
    move(batch, warehouse, hospital, 30)
    before = _counts()

    result = create_document(header=_header(hospital, warehouse), lines=[DocumentLineInput(batch.id, 50)])

    assert not result.success
    assert result.message == "Insufficient quantity for 26003BA. Available: 30, Requested: 50"
    assert _counts() == before


@pytest.mark.django_db
def test_repeated_batch_quantities_are_summed_for_availability(stocked):
    batch, warehouse, _ = stocked
    hospital = LocationFactory()

    result = create_document(
        header=_header(warehouse, hospital),
        lines=[DocumentLineInput(batch.id, 60), DocumentLineInput(batch.id, 50)],
    )

    assert not result.success
    assert result.message == "Insufficient quantity for 26003BA. Available: 100, Requested: 110"


@pytest.mark.django_db
@pytest.mark.parametrize(
    "lines,message",
    [
        ([], "At least one line item is required"),
        ([5, 0], "Quantity must be positive (line 2)"),
    ],
)
def test_shape_validation_messages(stocked, lines, message):
    batch, warehouse, _ = stocked
    inputs = [DocumentLineInput(batch.id, qty) for qty in lines]
    before = _counts()

    result = create_document(header=_header(warehouse, LocationFactory()), lines=inputs)

    assert (result.success, result.message) == (False, message)
    assert _counts() == before


@pytest.mark.django_db
def test_same_source_and_destination_is_rejected(stocked):
    batch, warehouse, _ = stocked
    result = create_document(header=_header(warehouse, warehouse), lines=[DocumentLineInput(batch.id, 1)])
    assert result.message == "Source and destination locations must be different"


@pytest.mark.django_db
def test_missing_locations_are_rejected(stocked):
    batch, warehouse, _ = stocked
    header = DocumentHeader(doc_date=DAY, source_location_id=999999, dest_location_id=warehouse.id)
    assert create_document(header=header, lines=[DocumentLineInput(batch.id, 1)]).message == "Source location not found"

    header = DocumentHeader(doc_date=DAY, source_location_id=warehouse.id, dest_location_id=999999)
    result = create_document(header=header, lines=[DocumentLineInput(batch.id, 1)])
    assert result.message == "Destination location not found"


@pytest.mark.django_db
def test_duplicate_document_number_is_rejected(stocked):
    batch, warehouse, _ = stocked
    hospital = LocationFactory()
    first = create_document(header=_header(warehouse, hospital, doc_no="DC-1"), lines=[DocumentLineInput(batch.id, 1)])
    assert first.success

    again = create_document(header=_header(warehouse, hospital, doc_no="DC-1"), lines=[DocumentLineInput(batch.id, 1)])
    assert again.message == "Document number DC-1 already exists"


@pytest.mark.django_db
def test_blank_document_number_is_generated_from_type_and_id(stocked):
    batch, warehouse, _ = stocked
    header = _header(warehouse, LocationFactory(), doc_no="  ")
    result = create_document(header=header, lines=[DocumentLineInput(batch.id, 1)])
    doc = Document.objects.get(id=result.doc_id)
    assert doc.doc_no == f"OUT-{doc.id:06d}"


@pytest.mark.django_db
def test_ticket_sequence_continues_within_document_and_across_documents(stocked):
    batch, warehouse, _ = stocked
    second = ChallanLineFactory(qty_received=10)
    receive(second, warehouse=warehouse)
    hospital = LocationFactory()

    first = create_document(
        header=_header(warehouse, hospital),
        lines=[DocumentLineInput(batch.id, 5), DocumentLineInput(second.id, 5)],
    )
    codes = list(
        DocumentLine.objects.filter(document_id=first.doc_id).order_by("id").values_list("ticket_code", flat=True)
    )
    assert codes == ["TKT-20240101-0001", "TKT-20240101-0002"]

    later = create_document(header=_header(warehouse, PartnerFactory()), lines=[DocumentLineInput(batch.id, 5)])
    assert DocumentLine.objects.get(document_id=later.doc_id).ticket_code == "TKT-20240101-0003"

    next_day = create_document(
        header=_header(warehouse, hospital, doc_date=date(2024, 1, 2)), lines=[DocumentLineInput(batch.id, 5)]
    )
    assert DocumentLine.objects.get(document_id=next_day.doc_id).ticket_code == "TKT-20240102-0001"


@pytest.mark.django_db
def test_generated_ticket_skips_explicit_codes_sharing_the_prefix(stocked):
    batch, warehouse, _ = stocked
    second = ChallanLineFactory(qty_received=10)
    receive(second, warehouse=warehouse)
    hospital = LocationFactory()

    first = create_document(header=_header(warehouse, hospital), lines=[DocumentLineInput(batch.id, 5)])
    assert DocumentLine.objects.get(document_id=first.doc_id).ticket_code == "TKT-20240101-0001"

    create_document(
        header=_header(warehouse, hospital),
        lines=[DocumentLineInput(batch.id, 5, ticket_code="TKT-20240101-0001-B")],
    )

    generated = create_document(header=_header(warehouse, hospital), lines=[DocumentLineInput(second.id, 5)])
    assert generated.success, generated.message
    assert DocumentLine.objects.get(document_id=generated.doc_id).ticket_code == "TKT-20240101-0002"
    assert DocumentLine.objects.filter(ticket_code="TKT-20240101-0001").count() == 1


@pytest.mark.django_db
def test_highest_ticket_sequence_reads_numeric_suffixes_only(stocked):
    batch, warehouse, _ = stocked
    hospital = LocationFactory()
    prefix = "TKT-20240101-"

    assert highest_ticket_sequence(prefix) is None
    for code in ("TKT-20240101-0009", "TKT-20240101-0009-B", "TKT-20240101-10000", "TKT-20240102-20000", "CUSTOM-1"):
        move(batch, warehouse, hospital, 1, ticket_code=code)

    assert highest_ticket_sequence(prefix) == 10000


@pytest.mark.django_db
def test_explicit_ticket_code_wins_and_inbound_without_history_has_none(stocked):
    batch, warehouse, _ = stocked
    hospital = LocationFactory()
    partner = PartnerFactory()

    explicit = create_document(
        header=_header(warehouse, hospital), lines=[DocumentLineInput(batch.id, 5, ticket_code="CUSTOM-1")]
    )
    assert DocumentLine.objects.get(document_id=explicit.doc_id).ticket_code == "CUSTOM-1"

    # Moving between field locations carries the code the batch arrived with
    onward = create_document(header=_header(hospital, partner), lines=[DocumentLineInput(batch.id, 5)])
    assert DocumentLine.objects.get(document_id=onward.doc_id).ticket_code == "CUSTOM-1"

    # Warehouse to supplier never generates a ticket
    company = CompanyFactory(supplier="Karl Storz")
    returned = create_document(header=_header(warehouse, company), lines=[DocumentLineInput(batch.id, 5)])
    assert DocumentLine.objects.get(document_id=returned.doc_id).ticket_code is None


@pytest.mark.django_db
def test_accepted_documents_never_drive_a_location_negative(stocked):
    batch, warehouse, _ = stocked
    hospital = LocationFactory()
    assert create_document(header=_header(warehouse, hospital), lines=[DocumentLineInput(batch.id, 100)]).success
    assert not create_document(header=_header(warehouse, hospital), lines=[DocumentLineInput(batch.id, 1)]).success
    assert available_at_location(batch.id, warehouse.id) == 0
    assert available_at_location(batch.id, hospital.id) == 100


@pytest.mark.django_db
def test_listing_cache_is_invalidated_on_commit(stocked, django_capture_on_commit_callbacks):
    batch, warehouse, _ = stocked
    with django_capture_on_commit_callbacks() as callbacks:
        result = create_document(header=_header(warehouse, LocationFactory()), lines=[DocumentLineInput(batch.id, 1)])
    assert result.success
    assert len(callbacks) == 1


# EOF
