from django.apps import AppConfig


class EventeaseConfig(AppConfig):
    """App config for the EventEase catalog and attendance app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "eventease"
    verbose_name = "EventEase"
