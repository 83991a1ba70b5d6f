"""Tenant-scoped lookups of folder and file metadata.

Tenant scoping is applied in the query itself and soft-deleted rows
are excluded by the default manager, so a row of another tenant or a
row in trash can never be returned from here.
"""

import logging

from server.apps.files.models import File, Folder

logger = logging.getLogger(__name__)


def get_file(tenant_id: str, file_id: str) -> File | None:
    """Get a live file by id within a tenant.

    Args:
        tenant_id: Tenant of the requester.
        file_id: File id.

    Returns:
        File instance, or None if absent, deleted or in another tenant.
    """
    file_instance = (
        File.objects
        .for_tenant(tenant_id)
        .filter(id=file_id)
        .first()
    )
    if file_instance is None:
        logger.debug('File lookup missed: tenant=%s id=%s', tenant_id, file_id)
    return file_instance


def get_folder(tenant_id: str, folder_id: str) -> Folder | None:
    """Get a live folder by id within a tenant.

    Args:
        tenant_id: Tenant of the requester.
        folder_id: Folder id.

    Returns:
        Folder instance, or None if absent, deleted or in another tenant.
    """
    folder = (
        Folder.objects
        .for_tenant(tenant_id)
        .filter(id=folder_id)
        .first()
    )
    if folder is None:
        logger.debug(
            'Folder lookup missed: tenant=%s id=%s',
            tenant_id,
            folder_id,
        )
    return folder
