"""Serializers for derived ticket records."""

from rest_framework import serializers


class TicketSummarySerializer(serializers.Serializer):
    ticket_code = serializers.CharField()
    material_code = serializers.CharField()
    material_description = serializers.CharField(allow_null=True)
    delivery_number = serializers.CharField()
    current_location_id = serializers.IntegerField(allow_null=True)
    current_location = serializers.CharField(allow_null=True)
    current_location_kind = serializers.CharField(allow_null=True)
    qty_at_location = serializers.IntegerField()
    total_qty = serializers.IntegerField()
    status = serializers.CharField()
    created_date = serializers.DateField(allow_null=True)


class TicketMovementSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    doc_id = serializers.IntegerField()
    doc_no = serializers.CharField(allow_null=True)
    doc_date = serializers.DateField()
    doc_type = serializers.CharField()
    from_location = serializers.CharField()
    from_location_kind = serializers.CharField()
    to_location = serializers.CharField()
    to_location_kind = serializers.CharField()
    qty = serializers.IntegerField()


class TicketHoldingSerializer(serializers.Serializer):
    location_id = serializers.IntegerField()
    location = serializers.CharField()
    location_kind = serializers.CharField()
    qty = serializers.IntegerField()


class TicketDetailSerializer(TicketSummarySerializer):
    """Ticket state plus its full ordered movement history."""

    movements = TicketMovementSerializer(many=True)
    holdings = TicketHoldingSerializer(many=True)


# EOF
