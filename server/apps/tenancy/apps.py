"""Django app configuration for tenancy app."""

from django.apps import AppConfig


class TenancyConfig(AppConfig):
    """Configuration for tenancy app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.tenancy'
    verbose_name = 'Tenancy'
