"""Batch registry: supplier delivery challans and their received lines.

A ``ChallanLine`` is the unit every movement refers to (a *batch*). Its
``qty_received`` is fixed at import; all later quantity change is expressed
as document lines, never by editing the batch.
"""

from common.models import TimeStampedModel
from django.db import models


class Item(TimeStampedModel):
    material_code = models.CharField(max_length=64, unique=True)
    description = models.CharField(max_length=255, null=True, blank=True)
    uom = models.CharField(max_length=16, default="NOS")

    class Meta:
        ordering = ["material_code"]

    def __str__(self) -> str:  # pragma: no cover
        return self.material_code


class Challan(TimeStampedModel):
    supplier_name = models.CharField(max_length=200, db_index=True)
    delivery_number = models.CharField(max_length=64, db_index=True)
    delivery_date = models.DateField(null=True, blank=True)
    raw_doc_ref = models.CharField(max_length=255, null=True, blank=True)

    class Meta:
        ordering = ["delivery_number"]
        constraints = [
            models.UniqueConstraint(fields=["supplier_name", "delivery_number"], name="unique_challan_per_supplier"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.supplier_name} / {self.delivery_number}"


class ChallanLine(TimeStampedModel):
    challan = models.ForeignKey(Challan, on_delete=models.PROTECT, related_name="lines")
    item = models.ForeignKey(Item, on_delete=models.PROTECT, related_name="challan_lines")
    item_number = models.CharField(max_length=32, null=True, blank=True)
    hsn_code = models.CharField(max_length=16, null=True, blank=True)
    unit_cost = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    qty_received = models.IntegerField()

    class Meta:
        ordering = ["challan__delivery_number", "item__material_code", "id"]
        constraints = [
            models.CheckConstraint(name="qty_received_positive", condition=models.Q(qty_received__gt=0)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"ChallanLine<{self.id}> {self.item_id} q={self.qty_received}"

    def save(self, *args, **kwargs):
        if self.pk is not None and not self._state.adding:
            original = type(self).objects.filter(pk=self.pk).values_list("qty_received", flat=True).first()
            if original is not None and original != self.qty_received:
                raise ValueError("qty_received is immutable once set")
        super().save(*args, **kwargs)


# EOF
