"""Serializers for inventory read models.

Read-only; the rows are plain dataclasses computed by the selectors.
"""

from rest_framework import serializers


class AvailableItemSerializer(serializers.Serializer):
    challan_line_id = serializers.IntegerField()
    delivery_number = serializers.CharField()
    delivery_date = serializers.DateField(allow_null=True)
    material_code = serializers.CharField()
    material_description = serializers.CharField(allow_null=True)
    hsn_code = serializers.CharField(allow_null=True)
    available_qty = serializers.IntegerField()
    unit_cost = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    supplier_name = serializers.CharField()


class InventoryRowSerializer(serializers.Serializer):
    """Where each batch's received quantity currently is."""

    challan_line_id = serializers.IntegerField()
    delivery_number = serializers.CharField()
    delivery_date = serializers.DateField(allow_null=True)
    supplier_name = serializers.CharField()
    material_code = serializers.CharField()
    material_description = serializers.CharField(allow_null=True)
    hsn_code = serializers.CharField(allow_null=True)
    qty_received = serializers.IntegerField()
    qty_at_warehouse = serializers.IntegerField()
    qty_out = serializers.IntegerField()
    qty_returned = serializers.IntegerField()
    outstanding = serializers.IntegerField()


class OutstandingRowSerializer(serializers.Serializer):
    challan_line_id = serializers.IntegerField()
    material_code = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    delivery_number = serializers.CharField()
    supplier_name = serializers.CharField()
    initial_qty = serializers.IntegerField()
    returned_qty = serializers.IntegerField()
    outstanding_qty = serializers.IntegerField()


class AvailabilityQuerySerializer(serializers.Serializer):
    """Query params for the availability lookup."""

    location_id = serializers.IntegerField()
    challan_line_ids = serializers.CharField(help_text="Comma-separated batch ids")

    def validate_challan_line_ids(self, value):
        try:
            return [int(part) for part in value.split(",") if part.strip()]
        except ValueError:
            raise serializers.ValidationError("Expected comma-separated integers")


# EOF
