"""Challan import endpoint."""

from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import ChallanImportSerializer
from .services import import_challan


class ChallanImportView(APIView):
    """Register a supplier delivery and receive it into the warehouse."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "ledger_import"

    @extend_schema(
        tags=["Challans"],
        summary="Import challan rows",
        description=(
            "Creates batches for every valid row (material code, delivery number and qty > 0) and "
            "one inbound document from the supplier's company location to the warehouse."
        ),
        request=ChallanImportSerializer,
        responses={
            201: inline_serializer(
                name="ChallanImportResponse",
                fields={
                    "doc_id": rf_serializers.IntegerField(),
                    "lines_imported": rf_serializers.IntegerField(),
                    "detail": rf_serializers.CharField(),
                },
            ),
            400: inline_serializer(name="ChallanImportError", fields={"detail": rf_serializers.CharField()}),
        },
        examples=[
            OpenApiExample(
                "Imported",
                value={
                    "doc_id": 1,
                    "lines_imported": 2,
                    "detail": "Successfully imported 2 lines across 1 delivery numbers",
                },
            )
        ],
    )
    def post(self, request):
        serializer = ChallanImportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = import_challan(supplier_name=data["supplier_name"], rows=data["rows"], doc_date=data.get("doc_date"))
        if not result.success:
            return Response({"detail": result.message}, status=status.HTTP_400_BAD_REQUEST)
        return Response(
            {"doc_id": result.doc_id, "lines_imported": result.lines_imported, "detail": result.message},
            status=status.HTTP_201_CREATED,
        )


# EOF
