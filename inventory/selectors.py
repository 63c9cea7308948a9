"""Selectors for the inventory ledger.

Availability, per-batch inventory breakdown and outstanding-to-supplier
figures, all recomputed on read from document lines.
"""

from typing import Dict, Iterable, List, Optional

from challans.models import ChallanLine
from common.choices import LocationKind
from django.db.models import IntegerField, OuterRef, Q, Subquery, Sum, Value
from django.db.models.functions import Coalesce
from documents.models import DocumentLine
from locations.selectors import get_primary_warehouse

from .ledger import AvailableItem, InventoryRow, OutstandingRow, net_available, split_received


def _normalize_ids(challan_line_ids: Iterable) -> List[int]:
    return list(dict.fromkeys(int(i) for i in challan_line_ids))


def _totals_by_batch(qs) -> Dict[int, int]:
    rows = qs.order_by().values("challan_line_id").annotate(total=Sum("qty"))
    return {row["challan_line_id"]: int(row["total"] or 0) for row in rows}


def batch_available_at_location(challan_line_ids: Iterable, location_id) -> Dict[int, int]:
    """Net quantity of each batch at a location: moved in minus moved out.

    Issues one aggregate query per direction regardless of how many ids are
    requested. Ids without any movement map to 0.
    """

    ids = _normalize_ids(challan_line_ids)
    if not ids:
        return {}
    base = DocumentLine.objects.filter(challan_line_id__in=ids)
    inbound = _totals_by_batch(base.filter(document__dest_location_id=location_id))
    outbound = _totals_by_batch(base.filter(document__source_location_id=location_id))
    return net_available(ids, inbound, outbound)


def available_at_location(challan_line_id, location_id) -> int:
    ids = _normalize_ids([challan_line_id])
    return batch_available_at_location(ids, location_id).get(ids[0], 0)


def returned_totals(challan_line_ids: Iterable) -> Dict[int, int]:
    """Quantity of each batch moved back to a company from a non-company origin."""

    ids = _normalize_ids(challan_line_ids)
    if not ids:
        return {}
    qs = DocumentLine.objects.filter(
        challan_line_id__in=ids,
        document__dest_location__kind=LocationKind.COMPANY,
    ).exclude(document__source_location__kind=LocationKind.COMPANY)
    return _totals_by_batch(qs)


def available_inventory(location_id) -> List[AvailableItem]:
    """Every batch currently present (qty > 0) at a location, with its details."""

    ids = list(
        DocumentLine.objects.filter(document__dest_location_id=location_id)
        .order_by()
        .values_list("challan_line_id", flat=True)
        .distinct()
    )
    if not ids:
        return []
    availability = batch_available_at_location(ids, location_id)
    lines = ChallanLine.objects.filter(id__in=ids).select_related("challan", "item")
    items = [
        AvailableItem(
            challan_line_id=line.id,
            delivery_number=line.challan.delivery_number,
            delivery_date=line.challan.delivery_date,
            material_code=line.item.material_code,
            material_description=line.item.description,
            hsn_code=line.hsn_code,
            available_qty=availability.get(line.id, 0),
            unit_cost=line.unit_cost,
            supplier_name=line.challan.supplier_name,
        )
        for line in lines
        if availability.get(line.id, 0) > 0
    ]
    return sorted(items, key=lambda i: (i.delivery_number, i.material_code))


def _search_filter(search: str) -> Q:
    return (
        Q(challan__delivery_number__icontains=search)
        | Q(item__material_code__icontains=search)
        | Q(item__description__icontains=search)
    )


def list_inventory(search: Optional[str] = None) -> List[InventoryRow]:
    """Break every batch's received quantity down by where it currently is.

    Search narrows the batches before any availability is computed.
    Returns an empty list when no primary warehouse is configured.
    """

    warehouse = get_primary_warehouse()
    if warehouse is None:
        return []

    qs = ChallanLine.objects.select_related("challan", "item").order_by(
        "challan__delivery_number", "item__material_code", "id"
    )
    if search:
        qs = qs.filter(_search_filter(search.strip()))
    lines = list(qs)
    if not lines:
        return []

    ids = [line.id for line in lines]
    at_warehouse = batch_available_at_location(ids, warehouse.id)
    returned = returned_totals(ids)

    rows = []
    for line in lines:
        split = split_received(line.qty_received, at_warehouse.get(line.id, 0), returned.get(line.id, 0))
        rows.append(
            InventoryRow(
                challan_line_id=line.id,
                delivery_number=line.challan.delivery_number,
                delivery_date=line.challan.delivery_date,
                supplier_name=line.challan.supplier_name,
                material_code=line.item.material_code,
                material_description=line.item.description,
                hsn_code=line.hsn_code,
                qty_received=line.qty_received,
                qty_at_warehouse=split.qty_at_warehouse,
                qty_out=split.qty_out,
                qty_returned=split.qty_returned,
                outstanding=split.outstanding,
            )
        )
    return rows


def _sum_subquery(qs):
    summed = qs.order_by().values("challan_line").annotate(total=Sum("qty")).values("total")
    return Coalesce(Subquery(summed, output_field=IntegerField()), Value(0))


def outstanding_queryset(delivery_number: Optional[str] = None):
    """Batches annotated with warehouse, returned and received quantities.

    One query: the per-batch sums are correlated subqueries.
    """

    warehouse = get_primary_warehouse()
    lines_for_batch = DocumentLine.objects.filter(challan_line=OuterRef("pk"))
    returned = lines_for_batch.filter(document__dest_location__kind=LocationKind.COMPANY).exclude(
        document__source_location__kind=LocationKind.COMPANY
    )
    if warehouse is not None:
        wh_in = _sum_subquery(lines_for_batch.filter(document__dest_location_id=warehouse.id))
        wh_out = _sum_subquery(lines_for_batch.filter(document__source_location_id=warehouse.id))
    else:
        wh_in = wh_out = Value(0)

    qs = ChallanLine.objects.select_related("challan", "item").annotate(
        returned_qty=_sum_subquery(returned),
        warehouse_in=wh_in,
        warehouse_out=wh_out,
    )
    if delivery_number:
        qs = qs.filter(challan__delivery_number__icontains=delivery_number.strip())
    return qs.order_by("challan__delivery_number", "item__material_code", "id")


def list_outstanding(delivery_number: Optional[str] = None) -> List[OutstandingRow]:
    """Per batch, what has not yet gone back to its supplier (only positive rows)."""

    rows = []
    for line in outstanding_queryset(delivery_number):
        split = split_received(
            line.qty_received,
            int(line.warehouse_in) - int(line.warehouse_out),
            int(line.returned_qty),
        )
        if split.outstanding <= 0:
            continue
        rows.append(
            OutstandingRow(
                challan_line_id=line.id,
                material_code=line.item.material_code,
                description=line.item.description,
                delivery_number=line.challan.delivery_number,
                supplier_name=line.challan.supplier_name,
                initial_qty=line.qty_received,
                returned_qty=split.qty_returned,
                outstanding_qty=split.outstanding,
            )
        )
    return rows


# EOF
