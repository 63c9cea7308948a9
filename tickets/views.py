"""Ticket endpoints: list with status and detail with movement history."""

from common.cache import cached_listing
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import list_tickets, ticket_detail
from .serializers import TicketDetailSerializer, TicketSummarySerializer

TRUTHY = {"1", "true", "yes", "on"}


class TicketListView(generics.ListAPIView):
    throttle_scope = "ledger"
    serializer_class = TicketSummarySerializer

    @extend_schema(
        tags=["Tickets"],
        summary="List tickets",
        description=(
            "Every ticket with its current location and status, active first then newest code first. "
            "Filters: search (ticket code, material code or delivery number), active_only (true/false)."
        ),
        parameters=[
            OpenApiParameter(name="search", required=False, type=str),
            OpenApiParameter(name="active_only", required=False, type=bool),
        ],
        examples=[
            OpenApiExample(
                "Tickets",
                value={
                    "results": [
                        {
                            "ticket_code": "TKT-20240101-0001",
                            "material_code": "26003BA",
                            "material_description": "Telescope 0 deg",
                            "delivery_number": "8001234567",
                            "current_location_id": 4,
                            "current_location": "City Hospital",
                            "current_location_kind": "hospital",
                            "qty_at_location": 30,
                            "total_qty": 30,
                            "status": "active",
                            "created_date": "2024-01-01",
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
        active_only = (self.request.query_params.get("active_only") or "").lower() in TRUTHY
        return cached_listing(
            "tickets",
            {"search": search, "active_only": active_only},
            lambda: list_tickets(search=search, active_only=active_only),
        )


class TicketDetailView(APIView):
    throttle_scope = "ledger"

    @extend_schema(
        tags=["Tickets"],
        summary="Ticket detail",
        description="Current state of a ticket and every movement carrying its code, oldest first.",
        responses={200: TicketDetailSerializer},
    )
    def get(self, request, ticket_code: str):
        detail = ticket_detail(ticket_code)
        if detail is None:
            return Response({"detail": "Not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(TicketDetailSerializer(detail).data)


# EOF
