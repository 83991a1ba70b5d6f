"""Django admin configuration for files app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.files.models import File, Folder

_KIB = 1024


class DeletedListFilter(admin.SimpleListFilter):
    """Filter rows by trash state."""

    title = 'trash'
    parameter_name = 'in_trash'

    def lookups(
        self,
        request: HttpRequest,
        model_admin: admin.ModelAdmin,
    ) -> tuple[tuple[str, str], ...]:
        """Available filter values."""
        return (('yes', 'In trash'), ('no', 'Live'))

    def queryset(self, request: HttpRequest, queryset: QuerySet) -> QuerySet:
        """Apply the selected filter value."""
        if self.value() == 'yes':
            return queryset.filter(deleted_at__isnull=False)
        if self.value() == 'no':
            return queryset.filter(deleted_at__isnull=True)
        return queryset


@admin.register(Folder)
class FolderAdmin(admin.ModelAdmin[Folder]):
    """Admin interface for Folder model.

    Shared tenant folders are created here by leaving the owner empty.
    """

    list_display = [
        'name',
        'tenant',
        'visibility',
        'owner_display',
        'created_at',
        'deleted_at',
    ]

    list_filter = ['tenant', 'visibility', DeletedListFilter]

    search_fields = ['id', 'name', 'owner_id']

    readonly_fields = ['id', 'created_at', 'updated_at']

    def owner_display(self, obj: Folder) -> str:
        """Display owner, or a marker for shared folders.

        Args:
            obj: Folder instance.

        Returns:
            Owner identity or '(shared)'.
        """
        return obj.owner_id if obj.owner_id is not None else '(shared)'
    owner_display.short_description = 'Owner'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[Folder]:
        """Include folders in trash.

        Args:
            request: HTTP request.

        Returns:
            QuerySet over all folders.
        """
        return Folder.all_objects.select_related('tenant')

    def save_model(
        self,
        request: HttpRequest,
        obj: Folder,
        form: object,
        change: bool,  # noqa: FBT001
    ) -> None:
        """Store a blank owner as None (shared folder)."""
        if not obj.owner_id:
            obj.owner_id = None
        super().save_model(request, obj, form, change)


@admin.register(File)
class FileAdmin(admin.ModelAdmin[File]):
    """Admin interface for File model."""

    list_display = [
        'name',
        'tenant',
        'folder',
        'owner_id',
        'visibility',
        'status',
        'size_display',
        'created_at',
    ]

    list_filter = [
        'tenant',
        'visibility',
        'status',
        DeletedListFilter,
    ]

    search_fields = [
        'id',
        'name',
        'owner_id',
        'storage_key',
    ]

    readonly_fields = [
        'id',
        'storage_key',
        'size_bytes',
        'mime_type',
        'created_at',
        'updated_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('id', 'name', 'tenant', 'folder', 'owner_id'),
        }),
        ('Access', {
            'fields': ('visibility', 'status'),
        }),
        ('Storage', {
            'fields': ('storage_key', 'size_bytes', 'mime_type'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'deleted_at'),
        }),
    )

    def size_display(self, obj: File) -> str:
        """Display file size in human-readable format.

        Args:
            obj: File instance.

        Returns:
            Formatted size string (e.g., '1.5 MB', '234 KB').
        """
        size_bytes = obj.size_bytes

        # Convert to appropriate unit
        if size_bytes < _KIB:
            return f'{size_bytes} B'
        if size_bytes < _KIB ** 2:
            return f'{size_bytes / _KIB:.1f} KB'
        if size_bytes < _KIB ** 3:
            return f'{size_bytes / _KIB ** 2:.1f} MB'
        return f'{size_bytes / _KIB ** 3:.1f} GB'
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[File]:
        """Include files in trash and optimize with select_related.

        Args:
            request: HTTP request.

        Returns:
            QuerySet over all files.
        """
        return File.all_objects.select_related('tenant', 'folder')
