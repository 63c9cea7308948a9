"""Document services: validated, atomic creation of movement documents.

A document moves quantities of one or more batches from a source location
to a destination location. Creation validates everything up front and
writes the header and all lines in a single transaction.
"""

import logging
import re
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from challans.models import ChallanLine
from common.cache import invalidate_listings
from common.choices import DocType, FIELD_KINDS, LocationKind
from django.conf import settings
from django.db import DatabaseError, transaction
from inventory.selectors import batch_available_at_location
from locations.models import Location
from locations.services import supplier_name_from_location_name

from .models import Document, DocumentLine

logger = logging.getLogger("challan.documents")


class DocumentError(Exception):
    """Raised when a document fails validation; nothing has been written."""


@dataclass(frozen=True)
class DocumentHeader:
    doc_date: date
    source_location_id: int
    dest_location_id: int
    doc_no: Optional[str] = None
    counterparty_name: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class DocumentLineInput:
    challan_line_id: int
    qty: int
    ticket_code: Optional[str] = None


@dataclass(frozen=True)
class DocumentResult:
    success: bool
    message: str
    doc_id: Optional[int] = None


def determine_doc_type(dest_kind: Optional[str]) -> str:
    """Infer the document type from where the goods are going.

    warehouse -> in, company -> return, anything else (partner/hospital) -> out.
    """

    kind = (dest_kind or "").strip().lower()
    if kind == LocationKind.WAREHOUSE:
        return DocType.IN
    if kind == LocationKind.COMPANY:
        return DocType.RETURN
    return DocType.OUT


def ticket_prefix(on: date) -> str:
    return f"{settings.TICKET_CODE_PREFIX}-{on:%Y%m%d}-"


def highest_ticket_sequence(prefix: str) -> Optional[int]:
    """Highest numeric sequence already issued under ``prefix``, or None.

    Codes under the prefix whose suffix is not purely digits (explicit codes
    such as ``TKT-20240101-0001-B``) are ignored.
    """

    codes = (
        DocumentLine.objects.filter(ticket_code__regex=rf"^{re.escape(prefix)}[0-9]+$")
        .order_by()
        .values_list("ticket_code", flat=True)
        .distinct()
    )
    sequences = [int(code[len(prefix) :]) for code in codes]
    return max(sequences, default=None)


def find_existing_tickets(challan_line_ids: Iterable[int], source_location_id) -> Dict[int, str]:
    """Most recent ticket code that moved each batch into ``source_location_id``."""

    rows = (
        DocumentLine.objects.filter(
            challan_line_id__in=list(challan_line_ids),
            document__dest_location_id=source_location_id,
            ticket_code__isnull=False,
        )
        .exclude(ticket_code="")
        .order_by("-document__doc_date", "-document_id", "-id")
        .values_list("challan_line_id", "ticket_code")
    )
    tickets: Dict[int, str] = {}
    for challan_line_id, code in rows:
        tickets.setdefault(challan_line_id, code)
    return tickets


def _validate_shape(header: DocumentHeader, lines: Sequence[DocumentLineInput]) -> None:
    if str(header.source_location_id) == str(header.dest_location_id):
        raise DocumentError("Source and destination locations must be different")
    if not lines:
        raise DocumentError("At least one line item is required")
    for index, line in enumerate(lines, start=1):
        if int(line.qty) <= 0:
            raise DocumentError(f"Quantity must be positive (line {index})")


def _load_locations(header: DocumentHeader):
    found = Location.objects.in_bulk([header.source_location_id, header.dest_location_id])
    source = found.get(int(header.source_location_id))
    dest = found.get(int(header.dest_location_id))
    if source is None:
        raise DocumentError("Source location not found")
    if dest is None:
        raise DocumentError("Destination location not found")
    return source, dest


def _requested_by_batch(lines: Sequence[DocumentLineInput]) -> "OrderedDict[int, int]":
    requested: "OrderedDict[int, int]" = OrderedDict()
    for line in lines:
        key = int(line.challan_line_id)
        requested[key] = requested.get(key, 0) + int(line.qty)
    return requested


def _check_availability(requested, batches, source: Location) -> None:
    availability = batch_available_at_location(requested.keys(), source.id)
    for batch_id, qty in requested.items():
        available = availability.get(batch_id, 0)
        if qty > available:
            batch = batches.get(batch_id)
            label = batch.item.material_code if batch else str(batch_id)
            raise DocumentError(f"Insufficient quantity for {label}. Available: {available}, Requested: {qty}")


def _check_return_suppliers(requested, batches, dest: Location) -> None:
    expected = dest.supplier_name or supplier_name_from_location_name(dest.name)
    mismatched = []
    for batch_id in requested:
        batch = batches.get(batch_id)
        if batch is None:
            continue
        if batch.challan.supplier_name != expected:
            mismatched.append(f"{batch.item.material_code} (from {batch.challan.supplier_name})")
    if mismatched:
        raise DocumentError(
            f"Cannot return items to {expected}. "
            f"The following items belong to different suppliers: {', '.join(mismatched)}"
        )


def _assign_tickets(
    lines: Sequence[DocumentLineInput], source: Location, dest: Location, doc_date: date
) -> List[Optional[str]]:
    """Resolve a ticket code per line: explicit, carried forward, generated, or none."""

    existing = find_existing_tickets({int(line.challan_line_id) for line in lines}, source.id)
    generate = source.kind == LocationKind.WAREHOUSE and dest.kind in FIELD_KINDS
    prefix = ticket_prefix(doc_date)
    sequence = None

    codes: List[Optional[str]] = []
    for line in lines:
        code = (line.ticket_code or "").strip() or None
        if code is None:
            code = existing.get(int(line.challan_line_id))
        if code is None and generate:
            if sequence is None:
                # Generated tickets always leave a warehouse; locking those rows serializes numbering
                list(
                    Location.objects.select_for_update()
                    .filter(kind=LocationKind.WAREHOUSE)
                    .order_by("id")
                    .values_list("id", flat=True)
                )
                sequence = highest_ticket_sequence(prefix) or 0
            sequence += 1
            code = f"{prefix}{sequence:04d}"
        codes.append(code)
    return codes


def create_document(*, header: DocumentHeader, lines: Sequence[DocumentLineInput]) -> DocumentResult:
    """Validate and record a movement document.

    Validation failures return ``success=False`` with a message naming the
    offending material and quantities; no rows are written in that case.
    The header and its lines are inserted atomically while the involved
    batch rows are locked, so concurrent documents cannot jointly
    over-allocate a batch.
    """

    try:
        _validate_shape(header, lines)
        doc_no = (header.doc_no or "").strip() or None

        with transaction.atomic():
            source, dest = _load_locations(header)
            if doc_no and Document.objects.filter(doc_no=doc_no).exists():
                raise DocumentError(f"Document number {doc_no} already exists")

            requested = _requested_by_batch(lines)
            batches = {
                batch.id: batch
                for batch in ChallanLine.objects.select_for_update(of=("self",))
                .select_related("challan", "item")
                .filter(id__in=list(requested))
                .order_by("id")
            }
            _check_availability(requested, batches, source)

            doc_type = determine_doc_type(dest.kind)
            if doc_type == DocType.RETURN:
                _check_return_suppliers(requested, batches, dest)

            codes = _assign_tickets(lines, source, dest, header.doc_date)

            document = Document.objects.create(
                doc_no=doc_no,
                doc_type=doc_type,
                doc_date=header.doc_date,
                source_location=source,
                dest_location=dest,
                counterparty_name=header.counterparty_name,
                notes=header.notes,
            )
            if doc_no is None:
                document.doc_no = f"{doc_type.upper()}-{document.id:06d}"
                document.save(update_fields=["doc_no", "updated_at"])

            DocumentLine.objects.bulk_create(
                [
                    DocumentLine(
                        document=document,
                        challan_line_id=int(line.challan_line_id),
                        ticket_code=code,
                        qty=int(line.qty),
                        material_code=batches[int(line.challan_line_id)].item.material_code,
                        material_description=batches[int(line.challan_line_id)].item.description,
                        company_delivery_no=batches[int(line.challan_line_id)].challan.delivery_number,
                        company_delivery_date=batches[int(line.challan_line_id)].challan.delivery_date,
                    )
                    for line, code in zip(lines, codes)
                ]
            )
            transaction.on_commit(invalidate_listings)
    except DocumentError as exc:
        logger.info(
            "document.rejected",
            extra={
                "event": "document.rejected",
                "source_location_id": header.source_location_id,
                "dest_location_id": header.dest_location_id,
                "reason": str(exc),
            },
        )
        return DocumentResult(False, str(exc))
    except DatabaseError as exc:
        logger.exception(
            "document.create_failed",
            extra={
                "event": "document.create_failed",
                "source_location_id": header.source_location_id,
                "dest_location_id": header.dest_location_id,
            },
        )
        return DocumentResult(False, f"Failed to create document: {exc}")

    logger.info(
        "document.created",
        extra={
            "event": "document.created",
            "document_id": document.id,
            "doc_no": document.doc_no,
            "doc_type": doc_type,
            "line_count": len(lines),
            "tickets": sorted({c for c in codes if c}),
        },
    )
    return DocumentResult(True, "Document created successfully", document.id)


# EOF
