"""Admin registrations for documents app.

Document lines are the movement log; the admin shows them read-only.
"""

from django.contrib import admin

from .models import Document, DocumentLine


class DocumentLineInline(admin.TabularInline):
    model = DocumentLine
    extra = 0
    can_delete = False
    fields = ("challan_line", "material_code", "qty", "ticket_code", "company_delivery_no")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ("id", "doc_no", "doc_type", "doc_date", "source_location", "dest_location", "created_at")
    list_filter = ("doc_type",)
    search_fields = ("doc_no", "counterparty_name")
    readonly_fields = ("doc_type", "source_location", "dest_location")
    inlines = [DocumentLineInline]

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(DocumentLine)
class DocumentLineAdmin(admin.ModelAdmin):
    list_display = ("id", "document", "material_code", "qty", "ticket_code", "created_at")
    search_fields = ("ticket_code", "material_code", "company_delivery_no")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# EOF
