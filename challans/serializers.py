"""Serializers for challan import."""

from rest_framework import serializers


class ChallanRowSerializer(serializers.Serializer):
    """One delivered line, already mapped from the supplier's export columns."""

    delivery_number = serializers.CharField(allow_blank=True)
    material_code = serializers.CharField(allow_blank=True)
    qty = serializers.DecimalField(max_digits=12, decimal_places=3)
    delivery_date = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    material_description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    hsn_code = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    unit_cost = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    item_number = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ChallanImportSerializer(serializers.Serializer):
    supplier_name = serializers.CharField(max_length=200)
    doc_date = serializers.DateField(required=False)
    rows = ChallanRowSerializer(many=True, allow_empty=False)


# EOF
