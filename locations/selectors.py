"""Selectors for locations."""

from typing import Optional

from django.db.models import QuerySet

from .models import Location


def list_active_locations() -> QuerySet[Location]:
    return Location.objects.filter(is_active=True).order_by("name")


def get_location(location_id) -> Optional[Location]:
    """Return a location by id, or None if it does not exist."""

    try:
        return Location.objects.get(id=location_id)
    except (Location.DoesNotExist, ValueError, TypeError):
        return None


def get_location_by_name(name: str) -> Optional[Location]:
    try:
        return Location.objects.get(name=name)
    except Location.DoesNotExist:
        return None


def get_primary_warehouse() -> Optional[Location]:
    """Return the canonical warehouse every inventory figure is measured at."""

    return Location.objects.filter(is_primary_warehouse=True).first()


# EOF
