"""Location API: list, upsert by name, detail and update by id, and items available at a location."""

from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer
from inventory.selectors import available_inventory
from inventory.serializers import AvailableItemSerializer
from rest_framework import generics, status
from rest_framework import serializers as rf_serializers
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import get_location, list_active_locations
from .serializers import LocationSerializer, LocationUpdateSerializer, LocationUpsertSerializer
from .services import update_location, upsert_location


class LocationListView(generics.ListAPIView):
    """List active locations; POST creates or updates a location by name."""

    permission_classes = [IsAuthenticatedOrReadOnly]
    serializer_class = LocationSerializer
    pagination_class = None
    throttle_scope = "ledger"

    def get_queryset(self):
        qs = list_active_locations()
        kind = self.request.query_params.get("kind")
        if kind:
            qs = qs.filter(kind=kind)
        return qs

    @extend_schema(
        tags=["Locations"],
        summary="List locations",
        description="Active locations ordered by name. Filter: kind (warehouse/company/partner/hospital).",
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Locations"],
        summary="Create or update a location",
        description=(
            "Creates a location by name. Re-submitting an existing name updates its kind "
            "and any optional field provided instead of creating a duplicate."
        ),
        request=LocationUpsertSerializer,
        responses={
            200: inline_serializer(
                name="LocationUpsertResponse",
                fields={"id": rf_serializers.IntegerField(), "detail": rf_serializers.CharField()},
            ),
            400: inline_serializer(name="LocationUpsertError", fields={"detail": rf_serializers.CharField()}),
        },
        examples=[OpenApiExample("Created", value={"id": 3, "detail": "Location created successfully"})],
    )
    def post(self, request):
        serializer = LocationUpsertSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = upsert_location(**serializer.validated_data)
        if not result.success:
            return Response({"detail": result.message}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"id": result.location_id, "detail": result.message}, status=status.HTTP_200_OK)


class LocationDetailView(APIView):
    """Fetch a location; PATCH updates its contact details."""

    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_scope = "ledger"

    @extend_schema(tags=["Locations"], summary="Get location", responses={200: LocationSerializer})
    def get(self, request, location_id: int):
        location = get_location(location_id)
        if location is None:
            return Response({"detail": "Not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(LocationSerializer(location).data)

    @extend_schema(
        tags=["Locations"],
        summary="Update location details",
        description="Updates GSTIN, address and contact of a location by id. Name and kind are changed via upsert.",
        request=LocationUpdateSerializer,
        responses={200: LocationSerializer},
    )
    def patch(self, request, location_id: int):
        serializer = LocationUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        result = update_location(location_id, **serializer.validated_data)
        if not result.success:
            code = status.HTTP_404_NOT_FOUND if result.message == "Location not found" else status.HTTP_400_BAD_REQUEST
            return Response({"detail": result.message}, status=code)
        return Response(LocationSerializer(get_location(result.location_id)).data)


class LocationAvailableItemsView(APIView):
    """Batches currently present at a location (qty > 0)."""

    throttle_scope = "ledger"

    @extend_schema(
        tags=["Locations"],
        summary="Items available at a location",
        description="Every batch with a positive balance at the location, sorted by delivery number then material.",
        responses={200: AvailableItemSerializer(many=True)},
    )
    def get(self, request, location_id: int):
        location = get_location(location_id)
        if location is None:
            return Response({"detail": "Not found."}, status=status.HTTP_404_NOT_FOUND)
        items = available_inventory(location.id)
        return Response(AvailableItemSerializer(items, many=True).data)


# EOF
