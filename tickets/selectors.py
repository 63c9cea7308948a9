"""Ticket lifecycle: derived from document lines sharing a ticket code.

Tickets have no table. Every read groups the lines carrying a code and
replays them in document-date order to find where the ticket is now.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from itertools import groupby
from typing import List, Optional

from common.choices import CUSTODY_KINDS, FIELD_KINDS, TicketStatus
from django.db.models import Q
from documents.models import DocumentLine
from inventory.ledger import Movement, positive_holdings, replay_balances

logger = logging.getLogger("challan.tickets")


@dataclass(frozen=True)
class TicketMovement:
    id: int
    doc_id: int
    doc_no: Optional[str]
    doc_date: date
    doc_type: str
    from_location: str
    from_location_kind: str
    to_location: str
    to_location_kind: str
    qty: int


@dataclass(frozen=True)
class TicketHolding:
    location_id: int
    location: str
    location_kind: str
    qty: int


@dataclass(frozen=True)
class TicketSummary:
    ticket_code: str
    material_code: str
    material_description: Optional[str]
    delivery_number: str
    current_location_id: Optional[int]
    current_location: Optional[str]
    current_location_kind: Optional[str]
    qty_at_location: int
    total_qty: int
    status: str
    created_date: Optional[date]


@dataclass(frozen=True)
class TicketDetail(TicketSummary):
    movements: List[TicketMovement] = field(default_factory=list)
    holdings: List[TicketHolding] = field(default_factory=list)


def _ticket_lines():
    return (
        DocumentLine.objects.filter(ticket_code__isnull=False)
        .exclude(ticket_code="")
        .select_related("document", "document__source_location", "document__dest_location")
        .order_by("ticket_code", "document__doc_date", "document_id", "id")
    )


def status_for_kind(kind: Optional[str]) -> str:
    """Closed once back in warehouse or supplier custody; active otherwise."""

    return TicketStatus.CLOSED if kind in CUSTODY_KINDS else TicketStatus.ACTIVE


def replay_ticket(ticket_code: str, lines: List[DocumentLine]) -> TicketDetail:
    """Replay a ticket's lines (already in date order) into its current state."""

    locations = {}
    movements = []
    for line in lines:
        doc = line.document
        locations.setdefault(doc.source_location_id, doc.source_location)
        locations.setdefault(doc.dest_location_id, doc.dest_location)
        movements.append(
            TicketMovement(
                id=line.id,
                doc_id=doc.id,
                doc_no=doc.doc_no,
                doc_date=doc.doc_date,
                doc_type=doc.doc_type,
                from_location=doc.source_location.name,
                from_location_kind=doc.source_location.kind,
                to_location=doc.dest_location.name,
                to_location_kind=doc.dest_location.kind,
                qty=int(line.qty),
            )
        )

    first = lines[0]
    # The ticket is born holding its first quantity at the origin
    balances = replay_balances(
        (
            Movement(
                challan_line_id=line.challan_line_id,
                source_id=line.document.source_location_id,
                dest_id=line.document.dest_location_id,
                qty=int(line.qty),
            )
            for line in lines
        ),
        opening={first.document.source_location_id: int(first.qty)},
    )
    holding_ids = positive_holdings(balances)
    holdings = [
        TicketHolding(
            location_id=loc_id,
            location=locations[loc_id].name,
            location_kind=locations[loc_id].kind,
            qty=balances[loc_id],
        )
        for loc_id in holding_ids
    ]

    # Any quantity still in the field keeps the ticket there
    in_field = [h for h in holdings if h.location_kind in FIELD_KINDS]
    current = (in_field or holdings)[0]
    if len(holdings) > 1:
        logger.info(
            "ticket.split_holdings",
            extra={"event": "ticket.split_holdings", "ticket_code": ticket_code, "locations": len(holdings)},
        )

    return TicketDetail(
        ticket_code=ticket_code,
        material_code=first.material_code or "",
        material_description=first.material_description,
        delivery_number=first.company_delivery_no or "",
        current_location_id=current.location_id,
        current_location=current.location,
        current_location_kind=current.location_kind,
        qty_at_location=current.qty,
        total_qty=int(first.qty),
        status=status_for_kind(current.location_kind),
        created_date=min(line.document.doc_date for line in lines),
        movements=movements,
        holdings=holdings,
    )


def _summary(detail: TicketDetail) -> TicketSummary:
    return TicketSummary(
        ticket_code=detail.ticket_code,
        material_code=detail.material_code,
        material_description=detail.material_description,
        delivery_number=detail.delivery_number,
        current_location_id=detail.current_location_id,
        current_location=detail.current_location,
        current_location_kind=detail.current_location_kind,
        qty_at_location=detail.qty_at_location,
        total_qty=detail.total_qty,
        status=detail.status,
        created_date=detail.created_date,
    )


def list_tickets(search: Optional[str] = None, active_only: bool = False) -> List[TicketSummary]:
    """List every ticket with its current location and status.

    Active tickets come first, then by ticket code descending (newest first).
    """

    qs = _ticket_lines()
    if search:
        term = search.strip()
        matching = (
            DocumentLine.objects.filter(ticket_code__isnull=False)
            .filter(
                Q(ticket_code__icontains=term)
                | Q(material_code__icontains=term)
                | Q(company_delivery_no__icontains=term)
            )
            .order_by()
            .values("ticket_code")
        )
        qs = qs.filter(ticket_code__in=matching)

    tickets = []
    for code, group in groupby(qs, key=lambda line: line.ticket_code):
        summary = _summary(replay_ticket(code, list(group)))
        if active_only and summary.status != TicketStatus.ACTIVE:
            continue
        tickets.append(summary)

    tickets.sort(key=lambda t: t.ticket_code, reverse=True)
    tickets.sort(key=lambda t: t.status != TicketStatus.ACTIVE)
    return tickets


def ticket_detail(ticket_code: str) -> Optional[TicketDetail]:
    """Full state and movement history of one ticket, or None if no line carries it."""

    if not ticket_code:
        return None
    lines = list(_ticket_lines().filter(ticket_code=ticket_code))
    if not lines:
        return None
    return replay_ticket(ticket_code, lines)


# EOF
