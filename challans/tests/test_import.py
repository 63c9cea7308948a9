from datetime import date
from decimal import Decimal

import pytest
from challans.models import Challan, ChallanLine, Item
from challans.services import import_challan, normalize_rows, parse_delivery_date
from django.core.management import CommandError, call_command
from documents.models import Document
from inventory.selectors import list_inventory
from locations.models import Location
from locations.tests.factories import UserFactory
from rest_framework.test import APIClient


def _rows():
    return [
        {
            "delivery_number": "8001234567",
            "delivery_date": "2024-01-01",
            "material_code": "26003BA",
            "material_description": "Telescope 0 deg",
            "hsn_code": "9018",
            "qty": "30",
            "unit_cost": "1500.00",
        },
        {
            "delivery_number": "8001234567",
            "delivery_date": "2024-01-01",
            "material_code": "11101",
            "material_description": "Light cable",
            "qty": 2,
        },
        {"delivery_number": "8001234568", "material_code": "26003BA", "qty": 5},
        # skipped: no qty, no material, no delivery number
        {"delivery_number": "8001234569", "material_code": "26003BA", "qty": 0},
        {"delivery_number": "8001234569", "material_code": "", "qty": 4},
        {"delivery_number": "", "material_code": "26003BA", "qty": 4},
    ]


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, None),
        ("", None),
        ("2024-01-15", date(2024, 1, 15)),
        ("2024-01-15T10:00:00", date(2024, 1, 15)),
        (45292, date(2024, 1, 1)),
        (date(2024, 3, 1), date(2024, 3, 1)),
        ("not a date", None),
    ],
)
def test_parse_delivery_date(value, expected):
    assert parse_delivery_date(value) == expected


def test_normalize_rows_drops_incomplete_rows():
    rows = normalize_rows(_rows())
    assert [(r.delivery_number, r.material_code, r.qty) for r in rows] == [
        ("8001234567", "26003BA", 30),
        ("8001234567", "11101", 2),
        ("8001234568", "26003BA", 5),
    ]
    assert rows[0].unit_cost == Decimal("1500.00")


@pytest.mark.django_db
def test_import_registers_batches_and_books_them_into_warehouse():
    result = import_challan(supplier_name="Karl Storz", rows=_rows(), doc_date=date(2024, 1, 2))

    assert result.success
    assert result.message == "Successfully imported 3 lines across 2 delivery numbers"
    assert result.lines_imported == 3

    warehouse = Location.objects.get(is_primary_warehouse=True)
    company = Location.objects.get(name="Company:Karl Storz")
    assert company.kind == "company"
    assert company.supplier_name == "Karl Storz"

    doc = Document.objects.get(id=result.doc_id)
    assert doc.doc_type == "in"
    assert doc.doc_no == f"IN-{doc.id:06d}"
    assert (doc.source_location_id, doc.dest_location_id) == (company.id, warehouse.id)
    assert doc.lines.count() == 3

    assert Item.objects.count() == 2
    assert Challan.objects.filter(supplier_name="Karl Storz").count() == 2
    assert sorted(ChallanLine.objects.values_list("qty_received", flat=True)) == [2, 5, 30]
    assert {(r.material_code, r.qty_at_warehouse, r.outstanding) for r in list_inventory()} == {
        ("26003BA", 30, 30),
        ("11101", 2, 2),
        ("26003BA", 5, 5),
    }


@pytest.mark.django_db
def test_reimport_reuses_locations_items_and_challans():
    import_challan(supplier_name="Karl Storz", rows=_rows()[:1])
    result = import_challan(supplier_name="Karl Storz", rows=_rows()[:1])

    assert result.success
    assert Location.objects.count() == 2
    assert Item.objects.count() == 1
    assert Challan.objects.count() == 1
    assert ChallanLine.objects.count() == 2


@pytest.mark.django_db
@pytest.mark.parametrize(
    "supplier,rows,message",
    [
        ("  ", [{"delivery_number": "1", "material_code": "A", "qty": 1}], "Supplier name is required"),
        ("Karl Storz", [{"delivery_number": "1", "material_code": "A", "qty": 0}],
         "No valid rows to import (need material code, qty > 0, and delivery number)"),
    ],
)
def test_import_failures_write_nothing(supplier, rows, message):
    result = import_challan(supplier_name=supplier, rows=rows)
    assert (result.success, result.message) == (False, message)
    assert Document.objects.count() == 0
    assert ChallanLine.objects.count() == 0


@pytest.mark.django_db
def test_import_challan_command_reads_csv(tmp_path):
    path = tmp_path / "challan.csv"
    path.write_text(
        "Delivery Number,Delivery Date,Material Code,Material Description,HSN Code,QTY,Unit Cost\n"
        "8001234567,2024-01-01,26003BA,Telescope 0 deg,9018,30,1500\n"
        "8001234567,2024-01-01,11101,Light cable,9018,2,90\n",
        encoding="utf-8",
    )

    call_command("import_challan", str(path), "--supplier", "Karl Storz")

    assert ChallanLine.objects.count() == 2
    assert Document.objects.get().counterparty_name == "Karl Storz"


@pytest.mark.django_db
def test_import_challan_command_reports_failures(tmp_path):
    with pytest.raises(CommandError):
        call_command("import_challan", str(tmp_path / "missing.csv"), "--supplier", "Karl Storz")

    empty = tmp_path / "empty.csv"
    empty.write_text("Delivery Number,Material Code,QTY\n", encoding="utf-8")
    with pytest.raises(CommandError, match="No valid rows"):
        call_command("import_challan", str(empty), "--supplier", "Karl Storz")


@pytest.mark.django_db
def test_challan_import_api():
    client = APIClient()
    payload = {"supplier_name": "Karl Storz", "rows": _rows()[:3]}
    assert client.post("/api/v1/challans/import/", payload, format="json").status_code in (401, 403)

    client.force_authenticate(user=UserFactory())
    resp = client.post("/api/v1/challans/import/", payload, format="json")
    assert resp.status_code == 201
    assert resp.json()["lines_imported"] == 3

    bad = client.post(
        "/api/v1/challans/import/",
        {"supplier_name": "Karl Storz", "rows": [{"delivery_number": "", "material_code": "X", "qty": 1}]},
        format="json",
    )
    assert bad.status_code == 400
    assert bad.json()["detail"].startswith("No valid rows")


# EOF
