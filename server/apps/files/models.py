"""Database models for files app."""

import uuid
from typing import Final, final, override

from django.core.exceptions import ValidationError
from django.db import models

from server.apps.tenancy.models import Tenant

# Constants for field max lengths
_ID_MAX_LENGTH: Final = 64
_NAME_MAX_LENGTH: Final = 255
_OWNER_MAX_LENGTH: Final = 254  # Email length
_STORAGE_KEY_MAX_LENGTH: Final = 1024  # S3 key length limit
_MIME_TYPE_MAX_LENGTH: Final = 255
_CHOICE_MAX_LENGTH: Final = 16


def generate_id() -> str:
    """Generate a new opaque record id."""
    return uuid.uuid4().hex


class Visibility(models.TextChoices):
    """Read exposure of a folder or file."""

    PRIVATE = 'private', 'Private'
    PUBLIC = 'public', 'Public'


class FileStatus(models.TextChoices):
    """Lifecycle status of a file record."""

    PENDING = 'pending', 'Pending'
    READY = 'ready', 'Ready'


class ActiveQuerySet(models.QuerySet):
    """QuerySet with tenant scoping helpers."""

    def for_tenant(self, tenant_id: str) -> 'ActiveQuerySet':
        """Restrict rows to a single tenant.

        Args:
            tenant_id: Tenant to scope to.

        Returns:
            Filtered QuerySet.
        """
        return self.filter(tenant_id=tenant_id)


class ActiveManager(models.Manager.from_queryset(ActiveQuerySet)):  # type: ignore[misc]
    """Default manager that hides soft-deleted rows."""

    @override
    def get_queryset(self) -> ActiveQuerySet:
        """Exclude rows with ``deleted_at`` set."""
        return super().get_queryset().filter(deleted_at__isnull=True)


@final
class Folder(models.Model):
    """Folder grouping files inside a tenant.

    A folder's visibility is the default for files placed in it.
    ``owner_id`` is None for tenant-root/shared folders that have no
    single owner; such folders accept writes from any tenant member.
    """

    id = models.CharField(
        primary_key=True,
        max_length=_ID_MAX_LENGTH,
        default=generate_id,
        editable=False,
    )

    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.CASCADE,
        related_name='folders',
        db_index=True,
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
    )

    visibility = models.CharField(
        max_length=_CHOICE_MAX_LENGTH,
        choices=Visibility.choices,
        default=Visibility.PRIVATE,
    )

    owner_id = models.CharField(
        max_length=_OWNER_MAX_LENGTH,
        null=True,
        blank=True,
        default=None,
        db_index=True,
        help_text='Owner identity; empty for shared tenant folders',
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = ActiveManager()
    all_objects = models.Manager()

    class Meta:
        """Model metadata."""

        verbose_name = 'Folder'  # type: ignore[mutable-override]
        verbose_name_plural = 'Folders'  # type: ignore[mutable-override]
        ordering = ['name']
        base_manager_name = 'all_objects'

        indexes = [
            models.Index(
                fields=['tenant', 'owner_id'],
                name='folders_tenant_owner_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.tenant_id}:{self.name}'

    @property
    def is_shared(self) -> bool:
        """Whether the folder has no single owner."""
        return self.owner_id is None


@final
class File(models.Model):
    """File metadata; the bytes live in S3-compatible storage.

    ``storage_key`` is the opaque object key in the bucket. It is
    distinct from ``id`` and follows the pattern
    ``users/{owner_id}/{folder_id}/{file_id}{ext}`` for uploads.
    """

    id = models.CharField(
        primary_key=True,
        max_length=_ID_MAX_LENGTH,
        default=generate_id,
        editable=False,
    )

    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.CASCADE,
        related_name='files',
        db_index=True,
    )

    # Folder row may be removed out of band; reads still use file fields
    folder = models.ForeignKey(
        Folder,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='files',
    )

    owner_id = models.CharField(
        max_length=_OWNER_MAX_LENGTH,
        db_index=True,
        help_text='Identity that uploaded the file',
    )

    visibility = models.CharField(
        max_length=_CHOICE_MAX_LENGTH,
        choices=Visibility.choices,
        default=Visibility.PRIVATE,
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        help_text='Display file name',
    )

    storage_key = models.CharField(
        max_length=_STORAGE_KEY_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Object key in storage',
    )

    size_bytes = models.BigIntegerField(
        default=0,
        help_text='File size in bytes',
    )

    mime_type = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
        blank=True,
        default='',
    )

    status = models.CharField(
        max_length=_CHOICE_MAX_LENGTH,
        choices=FileStatus.choices,
        default=FileStatus.PENDING,
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = ActiveManager()
    all_objects = models.Manager()

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering = ['-created_at']
        base_manager_name = 'all_objects'

        indexes = [
            # Optimize folder listing queries
            models.Index(
                fields=['tenant', 'folder'],
                name='files_tenant_folder_idx',
            ),
            models.Index(
                fields=['tenant', 'owner_id'],
                name='files_tenant_owner_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.tenant_id}:{self.name}'

    @override
    def clean(self) -> None:
        """Validate that ready files point at a stored object.

        Raises:
            ValidationError: If status is ready and storage key is empty.
        """
        super().clean()
        if self.status == FileStatus.READY and not self.storage_key:
            raise ValidationError(
                {'storage_key': 'Ready files must have a storage key.'},
            )
