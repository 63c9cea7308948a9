"""Serializers for locations."""

from common.choices import LocationKind
from rest_framework import serializers

from .models import Location


class LocationSerializer(serializers.ModelSerializer):
    """Read-only representation of a location."""

    class Meta:
        model = Location
        fields = [
            "id",
            "name",
            "kind",
            "is_active",
            "is_primary_warehouse",
            "supplier_name",
            "gstin",
            "address",
            "contact",
        ]
        read_only_fields = fields


class LocationUpsertSerializer(serializers.Serializer):
    """Write serializer: create a location by name or update the existing one."""

    name = serializers.CharField(max_length=200)
    kind = serializers.ChoiceField(choices=LocationKind.choices)
    gstin = serializers.CharField(max_length=20, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    contact = serializers.CharField(max_length=200, required=False, allow_blank=True)



class LocationUpdateSerializer(serializers.Serializer):
    """Contact details editable on an existing location; omitted fields are untouched."""

    gstin = serializers.CharField(max_length=20, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    contact = serializers.CharField(max_length=200, required=False, allow_blank=True)


# EOF
