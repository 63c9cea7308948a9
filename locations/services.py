"""Location services: create-on-demand and upsert by name."""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from common.cache import invalidate_listings
from common.choices import LocationKind
from django.conf import settings
from django.db import DatabaseError, transaction

from .models import Location

logger = logging.getLogger("challan.locations")


class LocationError(Exception):
    """Raised for location mutation failures."""


@dataclass(frozen=True)
class LocationResult:
    success: bool
    message: str
    location_id: Optional[int] = None


def company_location_name(supplier_name: str) -> str:
    """Return the location name used for a supplier's company location."""

    return f"{settings.COMPANY_LOCATION_PREFIX}{supplier_name}"


def supplier_name_from_location_name(name: str) -> str:
    """Strip the configured company prefix (case-insensitive) from a location name."""

    prefix = settings.COMPANY_LOCATION_PREFIX
    if not prefix:
        return name
    return re.sub(rf"^{re.escape(prefix)}", "", name, count=1, flags=re.IGNORECASE)


def _identity_fields(*, name: str, kind: str) -> dict:
    # Derived once when a location is created or re-kinded, never re-parsed on reads
    return {
        "supplier_name": supplier_name_from_location_name(name) if kind == LocationKind.COMPANY else "",
        "is_primary_warehouse": kind == LocationKind.WAREHOUSE and name == settings.WAREHOUSE_LOCATION_NAME,
    }


@transaction.atomic
def ensure_location(*, name: str, kind: str) -> Location:
    """Return the location with this name, creating it with ``kind`` if missing."""

    location = Location.objects.select_for_update().filter(name=name).first()
    if location is not None:
        return location
    location = Location.objects.create(name=name, kind=kind, **_identity_fields(name=name, kind=kind))
    logger.info(
        "location.created",
        extra={"event": "location.created", "location_id": location.id, "kind": kind},
    )
    return location


def upsert_location(
    *,
    name: str,
    kind: str,
    gstin: Optional[str] = None,
    address: Optional[str] = None,
    contact: Optional[str] = None,
) -> LocationResult:
    """Create a location by name, or update an existing one.

    Re-submitting an existing name updates its kind (when changed) and any
    optional field that was provided; blank optional fields are left as-is.
    """

    name = (name or "").strip()
    if not name:
        return LocationResult(False, "Location name is required")
    if kind not in LocationKind.values:
        return LocationResult(False, f"Unknown location kind: {kind}")

    try:
        with transaction.atomic():
            existing = Location.objects.select_for_update().filter(name=name).first()
            if existing is None:
                location = Location.objects.create(
                    name=name,
                    kind=kind,
                    gstin=gstin or None,
                    address=address or None,
                    contact=contact or None,
                    **_identity_fields(name=name, kind=kind),
                )
                logger.info(
                    "location.created",
                    extra={"event": "location.created", "location_id": location.id, "kind": kind},
                )
                return LocationResult(True, "Location created successfully", location.id)

            update_fields = []
            if existing.kind != kind:
                if existing.is_primary_warehouse:
                    raise LocationError("Cannot change the kind of the primary warehouse")
                existing.kind = kind
                for field, value in _identity_fields(name=name, kind=kind).items():
                    setattr(existing, field, value)
                update_fields += ["kind", "supplier_name", "is_primary_warehouse"]
                # Derived listings classify movements by location kind
                transaction.on_commit(invalidate_listings)
            for field, value in (("gstin", gstin), ("address", address), ("contact", contact)):
                if value:
                    setattr(existing, field, value)
                    update_fields.append(field)
            if update_fields:
                existing.save(update_fields=update_fields + ["updated_at"])
                logger.info(
                    "location.updated",
                    extra={"event": "location.updated", "location_id": existing.id, "fields": update_fields},
                )
            return LocationResult(True, "Location updated", existing.id)
    except LocationError as exc:
        return LocationResult(False, str(exc))
    except DatabaseError as exc:
        logger.exception("location.upsert_failed", extra={"event": "location.upsert_failed", "location_name": name})
        return LocationResult(False, f"Failed to save location: {exc}")


def update_location(
    location_id,
    *,
    gstin: Optional[str] = None,
    address: Optional[str] = None,
    contact: Optional[str] = None,
) -> LocationResult:
    """Update the contact details of a location by id.

    Only fields that are provided (not None) are written; an empty string
    clears the field. Name and kind are not editable here.
    """

    changes = {
        field: (value or None)
        for field, value in (("gstin", gstin), ("address", address), ("contact", contact))
        if value is not None
    }
    try:
        with transaction.atomic():
            location = Location.objects.select_for_update().filter(id=location_id).first()
            if location is None:
                raise LocationError("Location not found")
            for field, value in changes.items():
                setattr(location, field, value)
            if changes:
                location.save(update_fields=list(changes) + ["updated_at"])
                logger.info(
                    "location.updated",
                    extra={"event": "location.updated", "location_id": location.id, "fields": list(changes)},
                )
    except LocationError as exc:
        return LocationResult(False, str(exc))
    except DatabaseError as exc:
        logger.exception("location.update_failed", extra={"event": "location.update_failed", "location_id": location_id})
        return LocationResult(False, f"Failed to save location: {exc}")
    return LocationResult(True, "Location updated", location.id)


# EOF
