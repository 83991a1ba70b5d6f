"""Database models for tenancy app."""

from typing import Final, final, override

from django.conf import settings
from django.db import models

# Constants for field max lengths
_TENANT_ID_MAX_LENGTH: Final = 64
_NAME_MAX_LENGTH: Final = 255


@final
class Tenant(models.Model):
    """Isolation boundary grouping folders, files and members.

    Every folder and file belongs to exactly one tenant and lookups
    are always scoped to one tenant.
    """

    id = models.SlugField(
        primary_key=True,
        max_length=_TENANT_ID_MAX_LENGTH,
        help_text='Stable tenant identifier (e.g. "default")',
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Tenant'  # type: ignore[mutable-override]
        verbose_name_plural = 'Tenants'  # type: ignore[mutable-override]
        ordering = ['id']

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.id


@final
class Member(models.Model):
    """Links an authenticated Django user to its tenant.

    The identity handed to the files core is built from this row:
    the user's email is the identity id.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='member',
        primary_key=True,
    )

    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.CASCADE,
        related_name='members',
        db_index=True,
    )

    display_name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        blank=True,
        default='',
    )

    class Meta:
        """Model metadata."""

        verbose_name = 'Member'  # type: ignore[mutable-override]
        verbose_name_plural = 'Members'  # type: ignore[mutable-override]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.tenant_id}:{self.user.email}'
