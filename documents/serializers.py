"""Serializers for movement documents."""

from rest_framework import serializers

from .models import Document, DocumentLine


class DocumentLineSerializer(serializers.ModelSerializer):
    class Meta:
        model = DocumentLine
        fields = [
            "id",
            "challan_line",
            "ticket_code",
            "qty",
            "material_code",
            "material_description",
            "company_delivery_no",
            "company_delivery_date",
        ]
        read_only_fields = fields


class DocumentSerializer(serializers.ModelSerializer):
    """Read-only document with its source/destination names and lines."""

    source_location_name = serializers.CharField(source="source_location.name", read_only=True)
    source_location_kind = serializers.CharField(source="source_location.kind", read_only=True)
    dest_location_name = serializers.CharField(source="dest_location.name", read_only=True)
    dest_location_kind = serializers.CharField(source="dest_location.kind", read_only=True)
    lines = DocumentLineSerializer(many=True, read_only=True)

    class Meta:
        model = Document
        fields = [
            "id",
            "doc_no",
            "doc_type",
            "doc_date",
            "source_location",
            "source_location_name",
            "source_location_kind",
            "dest_location",
            "dest_location_name",
            "dest_location_kind",
            "counterparty_name",
            "notes",
            "created_at",
            "lines",
        ]
        read_only_fields = fields


class DocumentListSerializer(serializers.ModelSerializer):
    source_location_name = serializers.CharField(source="source_location.name", read_only=True)
    dest_location_name = serializers.CharField(source="dest_location.name", read_only=True)
    line_count = serializers.IntegerField(read_only=True)
    total_qty = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Document
        fields = [
            "id",
            "doc_no",
            "doc_type",
            "doc_date",
            "source_location",
            "source_location_name",
            "dest_location",
            "dest_location_name",
            "counterparty_name",
            "line_count",
            "total_qty",
        ]
        read_only_fields = fields


class DocumentLineInputSerializer(serializers.Serializer):
    challan_line_id = serializers.IntegerField()
    qty = serializers.IntegerField(min_value=1)
    ticket_code = serializers.CharField(max_length=32, required=False, allow_blank=True, allow_null=True)


class DocumentCreateSerializer(serializers.Serializer):
    """Write serializer for a new document.

    There is no ``doc_type`` field: the type is always inferred server-side.
    Empty ``lines`` is accepted here so the service reports it.
    """

    doc_no = serializers.CharField(max_length=64, required=False, allow_blank=True)
    doc_date = serializers.DateField()
    source_location_id = serializers.IntegerField()
    dest_location_id = serializers.IntegerField()
    counterparty_name = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    lines = DocumentLineInputSerializer(many=True)


# EOF
