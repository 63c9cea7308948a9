"""Django app configuration for the Challans app."""

from django.apps import AppConfig


class ChallansConfig(AppConfig):
    """AppConfig for the batch registry (supplier delivery challans)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "challans"
