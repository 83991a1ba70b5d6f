"""Business logic for folder operations."""

import logging
from typing import TYPE_CHECKING

from server.apps.files.exceptions import InvalidRequestError, NotFoundError
from server.apps.files.logic.access import (
    Operation,
    can_read,
    decide,
    ensure_allowed,
)
from server.apps.files.logic.file_operations import parse_visibility
from server.apps.files.logic.metadata_store import get_folder
from server.apps.files.models import File, Folder, Visibility

if TYPE_CHECKING:
    from server.apps.tenancy.identity import Identity

logger = logging.getLogger(__name__)


def create_folder(
    identity: 'Identity',
    name: str,
    visibility: str | None = None,
) -> Folder:
    """Create a folder owned by the identity.

    Shared folders without an owner are created by administrators,
    not through this operation.

    Args:
        identity: Creating identity, becomes the owner.
        name: Folder name.
        visibility: 'private' (default) or 'public'.

    Returns:
        Created Folder instance.

    Raises:
        InvalidRequestError: If name is empty or visibility is unknown.
    """
    folder_name = (name or '').strip()
    if not folder_name:
        raise InvalidRequestError('Folder name is required.')

    folder = Folder.objects.create(
        tenant_id=identity.tenant_id,
        name=folder_name,
        visibility=parse_visibility(visibility) or Visibility.PRIVATE,
        owner_id=identity.id,
    )
    logger.info(
        'Folder created: %s by %s (ID: %s)',
        folder_name,
        identity.id,
        folder.id,
    )
    return folder


def list_folder(identity: 'Identity', folder_id: str | None) -> list[File]:
    """List the files of a folder the identity may read.

    Args:
        identity: Requesting identity.
        folder_id: Folder id.

    Returns:
        Readable files in the folder, newest first.

    Raises:
        InvalidRequestError: If folder_id is missing.
        NotFoundError: If the folder does not exist in the tenant.
        ForbiddenError: If the identity may not read the folder.
    """
    if not folder_id:
        raise InvalidRequestError('Folder id is required.')

    folder = get_folder(identity.tenant_id, folder_id)
    if folder is None:
        raise NotFoundError('Folder not found.')

    ensure_allowed(
        decide(identity, Operation.READ, folder=folder),
        forbidden_message='You do not have access to this folder.',
        not_found_message='Folder not found.',
    )

    files = folder.files.for_tenant(identity.tenant_id).order_by('-created_at')
    return [
        file_instance
        for file_instance in files
        if can_read(identity, file_instance)
    ]
