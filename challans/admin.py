"""Admin registrations for challans app."""

from django.contrib import admin

from .models import Challan, ChallanLine, Item


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ("id", "material_code", "description", "uom")
    search_fields = ("material_code", "description")


class ChallanLineInline(admin.TabularInline):
    model = ChallanLine
    extra = 0
    fields = ("item", "item_number", "hsn_code", "unit_cost", "qty_received")
    readonly_fields = ("qty_received",)


@admin.register(Challan)
class ChallanAdmin(admin.ModelAdmin):
    list_display = ("id", "supplier_name", "delivery_number", "delivery_date", "created_at")
    list_filter = ("supplier_name",)
    search_fields = ("delivery_number", "supplier_name")
    inlines = [ChallanLineInline]


# EOF
