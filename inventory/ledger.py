"""Pure ledger arithmetic over movement rows.

Nothing here touches the database: selectors fetch rows and hand them to
these functions, and tests can drive them with in-memory fixtures.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from common.choices import LocationKind


@dataclass(frozen=True)
class Movement:
    """A single movement of ``qty`` units of one batch between two locations."""

    challan_line_id: int
    source_id: int
    dest_id: int
    qty: int
    source_kind: str = ""
    dest_kind: str = ""


@dataclass(frozen=True)
class Split:
    qty_at_warehouse: int
    qty_out: int
    qty_returned: int
    outstanding: int


@dataclass(frozen=True)
class AvailableItem:
    challan_line_id: int
    delivery_number: str
    delivery_date: Optional[date]
    material_code: str
    material_description: Optional[str]
    hsn_code: Optional[str]
    available_qty: int
    unit_cost: Optional[Decimal]
    supplier_name: str


@dataclass(frozen=True)
class InventoryRow:
    challan_line_id: int
    delivery_number: str
    delivery_date: Optional[date]
    supplier_name: str
    material_code: str
    material_description: Optional[str]
    hsn_code: Optional[str]
    qty_received: int
    qty_at_warehouse: int
    qty_out: int
    qty_returned: int
    outstanding: int


@dataclass(frozen=True)
class OutstandingRow:
    challan_line_id: int
    material_code: str
    description: Optional[str]
    delivery_number: str
    supplier_name: str
    initial_qty: int
    returned_qty: int
    outstanding_qty: int


def is_return(source_kind: str, dest_kind: str) -> bool:
    """True for a movement that sends goods back to a supplier.

    The initial import (company -> warehouse) never counts, nor does any
    company -> company transfer.
    """

    return dest_kind == LocationKind.COMPANY and source_kind != LocationKind.COMPANY


def net_available(
    ids: Iterable[int], inbound: Mapping[int, int], outbound: Mapping[int, int]
) -> Dict[int, int]:
    """Combine per-batch inbound/outbound totals into net availability (missing = 0)."""

    return {i: int(inbound.get(i, 0)) - int(outbound.get(i, 0)) for i in ids}


def available_from_movements(movements: Iterable[Movement], location_id: int) -> Dict[int, int]:
    """Net quantity per batch at ``location_id`` computed from raw movements."""

    result: Dict[int, int] = {}
    for m in movements:
        if m.dest_id == location_id:
            result[m.challan_line_id] = result.get(m.challan_line_id, 0) + m.qty
        if m.source_id == location_id:
            result[m.challan_line_id] = result.get(m.challan_line_id, 0) - m.qty
    return result


def returned_from_movements(movements: Iterable[Movement]) -> Dict[int, int]:
    totals: Dict[int, int] = {}
    for m in movements:
        if is_return(m.source_kind, m.dest_kind):
            totals[m.challan_line_id] = totals.get(m.challan_line_id, 0) + m.qty
    return totals


def replay_balances(movements: Iterable[Movement], opening: Optional[Mapping[int, int]] = None) -> Dict[int, int]:
    """Signed per-location balance after replaying movements in order.

    ``opening`` seeds balances before the first movement. Keys keep
    first-touch order, which callers rely on for tie-breaking.
    """

    balances: Dict[int, int] = dict(opening or {})
    for m in movements:
        balances[m.source_id] = balances.get(m.source_id, 0) - m.qty
        balances[m.dest_id] = balances.get(m.dest_id, 0) + m.qty
    return balances


def split_received(qty_received: int, qty_at_warehouse: int, qty_returned: int) -> Split:
    """Partition a batch's received quantity into warehouse / out / returned.

    ``qty_out`` is the residual held by partners or hospitals, clamped at
    zero so anomalies never surface as negative stock.
    """

    qty_at_warehouse = int(qty_at_warehouse)
    qty_returned = int(qty_returned)
    qty_out = max(0, int(qty_received) - qty_at_warehouse - qty_returned)
    return Split(
        qty_at_warehouse=qty_at_warehouse,
        qty_out=qty_out,
        qty_returned=qty_returned,
        outstanding=qty_at_warehouse + qty_out,
    )


def positive_holdings(balances: Mapping[int, int]) -> List[int]:
    """Location ids with a strictly positive balance, in first-touch order."""

    return [loc for loc, qty in balances.items() if qty > 0]


# EOF
