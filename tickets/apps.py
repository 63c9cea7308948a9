"""Django app configuration for the Tickets app."""

from django.apps import AppConfig


class TicketsConfig(AppConfig):
    """AppConfig for derived ticket tracking (no models of its own)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "tickets"
