"""Inventory read endpoints: per-batch breakdown, outstanding, availability."""

from common.cache import cached_listing
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema
from rest_framework import generics
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import batch_available_at_location, list_inventory, list_outstanding
from .serializers import AvailabilityQuerySerializer, InventoryRowSerializer, OutstandingRowSerializer


class InventoryHealthView(APIView):
    throttle_classes = []

    @extend_schema(
        tags=["Inventory Endpoints"],
        summary="Inventory health",
        description="Simple healthcheck endpoint for the inventory app",
        examples=[OpenApiExample("Health OK", value={"status": "ok", "app": "inventory"})],
    )
    def get(self, request):
        return Response({"status": "ok", "app": "inventory"})


class InventoryListView(generics.ListAPIView):
    throttle_scope = "ledger"
    serializer_class = InventoryRowSerializer

    @extend_schema(
        tags=["Inventory Endpoints"],
        summary="Inventory by batch",
        description=(
            "Every received batch with quantities at the warehouse, out with partners/hospitals, "
            "returned to the supplier, and outstanding. Filter: search (delivery number, material code "
            "or description; case-insensitive)."
        ),
        parameters=[OpenApiParameter(name="search", required=False, type=str)],
        examples=[
            OpenApiExample(
                "Inventory",
                value={
                    "results": [
                        {
                            "challan_line_id": 1,
                            "delivery_number": "8001234567",
                            "delivery_date": "2024-01-01",
                            "supplier_name": "Karl Storz",
                            "material_code": "26003BA",
                            "material_description": "Telescope 0 deg",
                            "hsn_code": "9018",
                            "qty_received": 100,
                            "qty_at_warehouse": 70,
                            "qty_out": 0,
                            "qty_returned": 30,
                            "outstanding": 70,
                        }
                    ]
                },
            )
        ],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    def get_queryset(self):
        search = (self.request.query_params.get("search") or "").strip() or None
        return cached_listing("inventory", {"search": search}, lambda: list_inventory(search))


class OutstandingListView(generics.ListAPIView):
    throttle_scope = "ledger"
    serializer_class = OutstandingRowSerializer

    @extend_schema(
        tags=["Inventory Endpoints"],
        summary="Outstanding to supplier",
        description="Batches with quantity not yet returned to the supplier. Filter: delivery_number (substring).",
        parameters=[OpenApiParameter(name="delivery_number", required=False, type=str)],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    def get_queryset(self):
        delivery_number = (self.request.query_params.get("delivery_number") or "").strip() or None
        return cached_listing(
            "outstanding", {"delivery_number": delivery_number}, lambda: list_outstanding(delivery_number)
        )


class AvailabilityView(APIView):
    throttle_scope = "ledger"

    @extend_schema(
        tags=["Inventory Endpoints"],
        summary="Batch availability at a location",
        description="Net quantity (moved in minus moved out) of each requested batch at the location.",
        parameters=[AvailabilityQuerySerializer],
        examples=[OpenApiExample("Availability", value={"location_id": 1, "available": {"10": 70, "11": 0}})],
    )
    def get(self, request):
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        location_id = query.validated_data["location_id"]
        available = batch_available_at_location(query.validated_data["challan_line_ids"], location_id)
        return Response({"location_id": location_id, "available": {str(k): v for k, v in available.items()}})


# EOF
