"""Django app configuration for the Locations app."""

from django.apps import AppConfig


class LocationsConfig(AppConfig):
    """AppConfig for stock-holding locations."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "locations"
