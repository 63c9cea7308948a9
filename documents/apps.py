"""Django app configuration for the Documents app."""

from django.apps import AppConfig


class DocumentsConfig(AppConfig):
    """AppConfig for movement documents (the append-only movement log)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "documents"
