"""Admin registrations for locations app."""

from django.contrib import admin

from .models import Location


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "kind", "is_active", "is_primary_warehouse", "supplier_name", "gstin")
    list_filter = ("kind", "is_active")
    search_fields = ("name", "supplier_name", "gstin")


# EOF
