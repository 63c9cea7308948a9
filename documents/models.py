"""Movement documents: the append-only log every stock figure is derived from."""

from common.choices import DocType
from common.models import TimeStampedModel
from django.db import models


class Document(TimeStampedModel):
    """Header grouping one or more movement lines between two locations.

    ``doc_type`` is inferred from the destination kind at creation time.
    """

    TYPE_IN = DocType.IN
    TYPE_OUT = DocType.OUT
    TYPE_RETURN = DocType.RETURN
    TYPE_CHOICES = DocType.choices

    doc_no = models.CharField(max_length=64, unique=True, null=True, blank=True)
    doc_type = models.CharField(max_length=16, choices=TYPE_CHOICES, db_index=True)
    doc_date = models.DateField(db_index=True)
    source_location = models.ForeignKey(
        "locations.Location", on_delete=models.PROTECT, related_name="outbound_documents"
    )
    dest_location = models.ForeignKey("locations.Location", on_delete=models.PROTECT, related_name="inbound_documents")
    counterparty_name = models.CharField(max_length=200, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    class Meta:
        ordering = ["-doc_date", "-id"]
        constraints = [
            models.CheckConstraint(
                name="document_source_ne_dest",
                condition=~models.Q(source_location=models.F("dest_location")),
            ),
        ]
        indexes = [
            models.Index(fields=["source_location", "doc_date"], name="document_source_date_idx"),
            models.Index(fields=["dest_location", "doc_date"], name="document_dest_date_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.doc_no or self.id} {self.doc_type}"


class ImmutableLineError(Exception):
    pass


class DocumentLine(TimeStampedModel):
    """One movement of ``qty`` units of a batch; immutable once written."""

    document = models.ForeignKey(Document, on_delete=models.PROTECT, related_name="lines")
    challan_line = models.ForeignKey("challans.ChallanLine", on_delete=models.PROTECT, related_name="movements")
    ticket_code = models.CharField(max_length=32, null=True, blank=True, db_index=True)
    qty = models.IntegerField()
    # Snapshot of batch details at the time of movement
    material_code = models.CharField(max_length=64, null=True, blank=True)
    material_description = models.CharField(max_length=255, null=True, blank=True)
    company_delivery_no = models.CharField(max_length=64, null=True, blank=True)
    company_delivery_date = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ["document_id", "id"]
        constraints = [
            models.CheckConstraint(name="document_line_qty_positive", condition=models.Q(qty__gt=0)),
        ]
        indexes = [
            models.Index(fields=["challan_line", "document"], name="docline_batch_document_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"DocumentLine<{self.id}> {self.challan_line_id} q={self.qty} t={self.ticket_code or '-'}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableLineError("Document lines cannot be modified")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableLineError("Document lines cannot be deleted")


# EOF
