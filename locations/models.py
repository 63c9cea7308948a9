"""Locations: places that hold stock (warehouse, supplier company, partner, hospital)."""

from common.choices import LocationKind
from common.models import TimeStampedModel
from django.db import models


class Location(TimeStampedModel):
    KIND_WAREHOUSE = LocationKind.WAREHOUSE
    KIND_COMPANY = LocationKind.COMPANY
    KIND_PARTNER = LocationKind.PARTNER
    KIND_HOSPITAL = LocationKind.HOSPITAL
    KIND_CHOICES = LocationKind.choices

    name = models.CharField(max_length=200, unique=True)
    kind = models.CharField(max_length=16, choices=KIND_CHOICES, db_index=True)
    is_active = models.BooleanField(default=True)
    # The single controlled holding point all inventory is measured against
    is_primary_warehouse = models.BooleanField(default=False)
    # Company locations only: supplier whose goods this location takes back
    supplier_name = models.CharField(max_length=200, blank=True)
    gstin = models.CharField(max_length=20, null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    contact = models.CharField(max_length=200, null=True, blank=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["is_primary_warehouse"],
                condition=models.Q(is_primary_warehouse=True),
                name="unique_primary_warehouse",
            ),
            models.CheckConstraint(
                name="primary_warehouse_kind",
                condition=models.Q(is_primary_warehouse=False) | models.Q(kind=LocationKind.WAREHOUSE),
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.name} ({self.kind})"

    @property
    def is_company(self) -> bool:
        return self.kind == LocationKind.COMPANY


# EOF
