"""Document API: list, create, and detail of movement documents."""

from django.http import Http404
from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer
from rest_framework import generics, status
from rest_framework import serializers as rf_serializers
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from .filters import DocumentFilter
from .selectors import get_document, list_documents
from .serializers import DocumentCreateSerializer, DocumentListSerializer, DocumentSerializer
from .services import DocumentHeader, DocumentLineInput, create_document


class DocumentListView(generics.ListAPIView):
    """List documents; POST records a new movement document."""

    permission_classes = [IsAuthenticatedOrReadOnly]
    serializer_class = DocumentListSerializer
    filterset_class = DocumentFilter
    throttle_scope = "ledger"

    def get_queryset(self):
        return list_documents(search=(self.request.query_params.get("search") or "").strip() or None)

    @extend_schema(
        tags=["Documents"],
        summary="List documents",
        description=(
            "Documents newest first. Filters: doc_type (in/out/return), date_from, date_to (ISO dates), "
            "location (source or destination id), doc_no (substring), search (doc no or counterparty)."
        ),
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Documents"],
        summary="Create document",
        description=(
            "Moves quantities of batches from the source to the destination location. The document type "
            "is inferred from the destination (warehouse: in, company: return, partner/hospital: out). "
            "Tickets are carried forward from the source location or generated when goods leave the "
            "warehouse for a partner or hospital."
        ),
        request=DocumentCreateSerializer,
        responses={
            201: inline_serializer(
                name="DocumentCreatedResponse",
                fields={"id": rf_serializers.IntegerField(), "detail": rf_serializers.CharField()},
            ),
            400: inline_serializer(name="DocumentCreateError", fields={"detail": rf_serializers.CharField()}),
        },
        examples=[
            OpenApiExample("Created", value={"id": 12, "detail": "Document created successfully"}),
            OpenApiExample(
                "Insufficient",
                value={"detail": "Insufficient quantity for 26003BA. Available: 30, Requested: 50"},
                status_codes=["400"],
            ),
        ],
    )
    def post(self, request):
        serializer = DocumentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        header = DocumentHeader(
            doc_no=data.get("doc_no"),
            doc_date=data["doc_date"],
            source_location_id=data["source_location_id"],
            dest_location_id=data["dest_location_id"],
            counterparty_name=data.get("counterparty_name"),
            notes=data.get("notes"),
        )
        lines = [
            DocumentLineInput(
                challan_line_id=line["challan_line_id"],
                qty=line["qty"],
                ticket_code=line.get("ticket_code"),
            )
            for line in data["lines"]
        ]
        result = create_document(header=header, lines=lines)
        if not result.success:
            return Response({"detail": result.message}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"id": result.doc_id, "detail": result.message}, status=status.HTTP_201_CREATED)


class DocumentDetailView(generics.RetrieveAPIView):
    serializer_class = DocumentSerializer
    throttle_scope = "ledger"

    def get_object(self):
        document = get_document(self.kwargs["doc_id"])
        if document is None:
            raise Http404("Not found.")
        return document

    @extend_schema(tags=["Documents"], summary="Get document", description="A document with all of its lines.")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


# EOF
