from django.apps import AppConfig


class CoreConfig(AppConfig):
    """
    Configuration for Core application

    This app contains:
        - TimeStampedModel (base of every API resource)
        - Company + Contact, Lookup models
        - QueryPipeline (query string → filtered/sorted/paged QuerySet)
        - JSON error middleware and response helpers
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core'
