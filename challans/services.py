"""Challan import: register received batches and book them into the warehouse.

Parsing spreadsheets into rows is the caller's concern; this service takes
already-mapped rows for one supplier.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Mapping, Optional

from common.cache import invalidate_listings
from common.choices import DocType, LocationKind
from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone
from django.utils.dateparse import parse_date
from documents.models import Document, DocumentLine
from locations.services import company_location_name, ensure_location

from .models import Challan, ChallanLine, Item

logger = logging.getLogger("challan.imports")

# Spreadsheet serial dates count days from 1899-12-30
EXCEL_EPOCH = date(1899, 12, 30)


class ChallanImportError(Exception):
    """Raised when an import cannot proceed; the transaction is rolled back."""


@dataclass(frozen=True)
class ChallanRow:
    delivery_number: str
    material_code: str
    qty: int
    delivery_date: Optional[date] = None
    material_description: str = ""
    hsn_code: str = ""
    unit_cost: Decimal = Decimal("0")
    item_number: str = ""


@dataclass(frozen=True)
class ImportResult:
    success: bool
    message: str
    doc_id: Optional[int] = None
    lines_imported: int = 0


def parse_delivery_date(value) -> Optional[date]:
    """Accept a date, an ISO string, or a spreadsheet serial day number."""

    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float, Decimal)):
        return EXCEL_EPOCH + timedelta(days=int(value))
    text = str(value).strip()
    try:
        return parse_date(text[:10])
    except ValueError:
        return None


def _to_decimal(value) -> Decimal:
    try:
        return Decimal(str(value)) if value not in (None, "") else Decimal("0")
    except InvalidOperation:
        return Decimal("0")


def _to_int(value) -> int:
    try:
        return int(Decimal(str(value)))
    except (InvalidOperation, ValueError):
        return 0


def normalize_rows(rows: Iterable[Mapping]) -> List[ChallanRow]:
    """Clean raw row mappings, dropping rows without material code, delivery number or qty."""

    cleaned = []
    for raw in rows:
        row = ChallanRow(
            delivery_number=str(raw.get("delivery_number") or "").strip(),
            material_code=str(raw.get("material_code") or "").strip(),
            qty=_to_int(raw.get("qty")),
            delivery_date=parse_delivery_date(raw.get("delivery_date")),
            material_description=str(raw.get("material_description") or "").strip(),
            hsn_code=str(raw.get("hsn_code") or "").strip(),
            unit_cost=_to_decimal(raw.get("unit_cost")),
            item_number=str(raw.get("item_number") or "").strip(),
        )
        if row.material_code and row.delivery_number and row.qty > 0:
            cleaned.append(row)
    return cleaned


def _upsert_items(rows: List[ChallanRow]) -> dict:
    descriptions = {}
    for row in rows:
        descriptions[row.material_code] = row.material_description or None
    Item.objects.bulk_create(
        [Item(material_code=code, description=desc) for code, desc in descriptions.items()],
        update_conflicts=True,
        unique_fields=["material_code"],
        update_fields=["description"],
    )
    return dict(Item.objects.filter(material_code__in=list(descriptions)).values_list("material_code", "id"))


def _ensure_challans(supplier_name: str, rows: List[ChallanRow]) -> dict:
    first_by_delivery = {}
    for row in rows:
        first_by_delivery.setdefault(row.delivery_number, row)
    existing = set(
        Challan.objects.filter(supplier_name=supplier_name, delivery_number__in=list(first_by_delivery)).values_list(
            "delivery_number", flat=True
        )
    )
    Challan.objects.bulk_create(
        [
            Challan(supplier_name=supplier_name, delivery_number=number, delivery_date=row.delivery_date)
            for number, row in first_by_delivery.items()
            if number not in existing
        ]
    )
    return dict(
        Challan.objects.filter(supplier_name=supplier_name, delivery_number__in=list(first_by_delivery)).values_list(
            "delivery_number", "id"
        )
    )


def import_challan(*, supplier_name: str, rows: Iterable[Mapping], doc_date: Optional[date] = None) -> ImportResult:
    """Register a supplier's delivery rows and move them company -> warehouse.

    Creates missing items and challans, one challan line per row, and a
    single inbound document carrying every line. All or nothing.
    """

    supplier_name = (supplier_name or "").strip()
    if not supplier_name:
        return ImportResult(False, "Supplier name is required")
    valid = normalize_rows(rows)
    if not valid:
        return ImportResult(False, "No valid rows to import (need material code, qty > 0, and delivery number)")

    deliveries = list(dict.fromkeys(row.delivery_number for row in valid))
    try:
        with transaction.atomic():
            warehouse = ensure_location(name=settings.WAREHOUSE_LOCATION_NAME, kind=LocationKind.WAREHOUSE)
            company = ensure_location(name=company_location_name(supplier_name), kind=LocationKind.COMPANY)
            if warehouse.kind != LocationKind.WAREHOUSE or company.kind != LocationKind.COMPANY:
                raise ChallanImportError("Existing locations have unexpected kinds; check location setup")

            item_ids = _upsert_items(valid)
            challan_ids = _ensure_challans(supplier_name, valid)
            challan_lines = [
                ChallanLine.objects.create(
                    challan_id=challan_ids[row.delivery_number],
                    item_id=item_ids[row.material_code],
                    item_number=row.item_number or None,
                    hsn_code=row.hsn_code or None,
                    unit_cost=row.unit_cost,
                    qty_received=row.qty,
                )
                for row in valid
            ]

            document = Document.objects.create(
                doc_type=DocType.IN,
                doc_date=doc_date or timezone.localdate(),
                source_location=company,
                dest_location=warehouse,
                counterparty_name=supplier_name,
                notes=f"Imported {len(deliveries)} delivery numbers: {', '.join(deliveries)}",
            )
            document.doc_no = f"IN-{document.id:06d}"
            document.save(update_fields=["doc_no", "updated_at"])

            DocumentLine.objects.bulk_create(
                [
                    DocumentLine(
                        document=document,
                        challan_line=line,
                        qty=row.qty,
                        material_code=row.material_code,
                        material_description=row.material_description or None,
                        company_delivery_no=row.delivery_number,
                        company_delivery_date=row.delivery_date,
                    )
                    for row, line in zip(valid, challan_lines)
                ]
            )
            transaction.on_commit(invalidate_listings)
    except ChallanImportError as exc:
        return ImportResult(False, str(exc))
    except DatabaseError as exc:
        logger.exception("challan.import_failed", extra={"event": "challan.import_failed", "supplier": supplier_name})
        return ImportResult(False, f"Import failed: {exc}")

    logger.info(
        "challan.imported",
        extra={
            "event": "challan.imported",
            "supplier": supplier_name,
            "document_id": document.id,
            "deliveries": len(deliveries),
            "lines": len(challan_lines),
        },
    )
    return ImportResult(
        True,
        f"Successfully imported {len(challan_lines)} lines across {len(deliveries)} delivery numbers",
        document.id,
        len(challan_lines),
    )


# EOF
