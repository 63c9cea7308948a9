"""Shared enumerations and choices used across apps."""

from django.db import models


class LocationKind(models.TextChoices):
    WAREHOUSE = "warehouse", "Warehouse"
    COMPANY = "company", "Company"
    PARTNER = "partner", "Partner"
    HOSPITAL = "hospital", "Hospital"


# Kinds that hold material "in the field" (outside controlled custody)
FIELD_KINDS = frozenset({LocationKind.PARTNER, LocationKind.HOSPITAL})

# Kinds in which a ticket counts as resolved
CUSTODY_KINDS = frozenset({LocationKind.WAREHOUSE, LocationKind.COMPANY})


class DocType(models.TextChoices):
    """Document types, inferred from the destination location kind."""

    IN = "in", "Inbound"
    OUT = "out", "Outbound"
    RETURN = "return", "Return"


class TicketStatus(models.TextChoices):
    """Derived lifecycle status of a ticket."""

    ACTIVE = "active", "Active"
    CLOSED = "closed", "Closed"
