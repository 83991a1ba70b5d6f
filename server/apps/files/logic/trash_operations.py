"""Business logic for trash (soft delete) operations.

Nothing is physically removed here: soft deletion only sets
``deleted_at`` and the stored object stays where it is.
"""

import logging
from typing import TYPE_CHECKING

from django.utils import timezone

from server.apps.files.exceptions import (
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
)
from server.apps.files.logic.access import (
    REASON_FORBIDDEN_OWNER,
    Operation,
    decide,
    ensure_allowed,
)
from server.apps.files.logic.metadata_store import get_file, get_folder
from server.apps.files.models import File, Folder

if TYPE_CHECKING:
    from server.apps.tenancy.identity import Identity

logger = logging.getLogger(__name__)

_TIMESTAMP_FIELDS = ('deleted_at', 'updated_at')


def soft_delete_file(identity: 'Identity', file_id: str | None) -> File:
    """Move a file to trash.

    Only the file owner may delete it.

    Args:
        identity: Requesting identity.
        file_id: ID of file to soft delete.

    Returns:
        Updated File instance.

    Raises:
        InvalidRequestError: If file_id is missing.
        NotFoundError: If the file does not exist in the tenant.
        ForbiddenError: If the identity does not own the file.
    """
    if not file_id:
        raise InvalidRequestError('File id is required.')

    file_instance = get_file(identity.tenant_id, file_id)
    if file_instance is None:
        raise NotFoundError('File not found.')

    ensure_allowed(
        decide(identity, Operation.WRITE, file=file_instance),
        forbidden_message='Only the file owner can delete this file.',
        not_found_message='File not found.',
    )

    file_instance.deleted_at = timezone.now()
    file_instance.save(update_fields=_TIMESTAMP_FIELDS)

    logger.info('File moved to trash: %s (ID: %s)', file_instance.name, file_id)
    return file_instance


def restore_file(identity: 'Identity', file_id: str | None) -> File:
    """Restore a file from trash.

    Args:
        identity: Requesting identity.
        file_id: ID of file to restore.

    Returns:
        Updated File instance.

    Raises:
        InvalidRequestError: If file_id is missing.
        NotFoundError: If the file is not in the tenant's trash.
        ForbiddenError: If the identity does not own the file.
    """
    if not file_id:
        raise InvalidRequestError('File id is required.')

    file_instance = (
        File.all_objects
        .filter(
            tenant_id=identity.tenant_id,
            id=file_id,
            deleted_at__isnull=False,
        )
        .first()
    )
    if file_instance is None:
        raise NotFoundError('File not found in trash.')

    ensure_allowed(
        decide(identity, Operation.WRITE, file=file_instance),
        forbidden_message='Only the file owner can restore this file.',
        not_found_message='File not found in trash.',
    )

    file_instance.deleted_at = None
    file_instance.save(update_fields=_TIMESTAMP_FIELDS)

    logger.info('File restored from trash: %s (ID: %s)', file_instance.name, file_id)
    return file_instance


def soft_delete_folder(identity: 'Identity', folder_id: str | None) -> Folder:
    """Move a folder to trash.

    Files inside keep their own records and stay readable by their
    own visibility rules.

    Args:
        identity: Requesting identity.
        folder_id: ID of folder to soft delete.

    Returns:
        Updated Folder instance.

    Raises:
        InvalidRequestError: If folder_id is missing.
        NotFoundError: If the folder does not exist in the tenant.
        ForbiddenError: If the folder is shared or the identity
            may not write to it.
    """
    if not folder_id:
        raise InvalidRequestError('Folder id is required.')

    folder = get_folder(identity.tenant_id, folder_id)
    if folder is None:
        raise NotFoundError('Folder not found.')

    if folder.is_shared:
        raise ForbiddenError(
            'Shared folders cannot be deleted.',
            reason=REASON_FORBIDDEN_OWNER,
        )

    ensure_allowed(
        decide(identity, Operation.WRITE, folder=folder),
        forbidden_message='Only the folder owner can delete this folder.',
        not_found_message='Folder not found.',
    )

    folder.deleted_at = timezone.now()
    folder.save(update_fields=_TIMESTAMP_FIELDS)

    logger.info('Folder moved to trash: %s (ID: %s)', folder.name, folder_id)
    return folder
