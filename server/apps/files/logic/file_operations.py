"""Business logic for file uploads."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from django.conf import settings
from django.core.files.base import File as DjangoFile
from django.core.files.storage import default_storage
from django.db import transaction

from server.apps.files.exceptions import InvalidRequestError, NotFoundError
from server.apps.files.infrastructure.metadata import (
    build_storage_key,
    detect_mime_type,
    get_file_size,
)
from server.apps.files.logic.access import Operation, decide, ensure_allowed
from server.apps.files.logic.metadata_store import get_folder
from server.apps.files.models import File, FileStatus, Visibility, generate_id

if TYPE_CHECKING:
    from server.apps.files.infrastructure.storage import FileStorage
    from server.apps.tenancy.identity import Identity

logger = logging.getLogger(__name__)


def _get_storage() -> 'FileStorage':
    """Get the configured default storage backend.

    Returns:
        FileStorage instance with proper S3 configuration.
    """
    return default_storage  # type: ignore[return-value]


def parse_visibility(raw_visibility: str | None) -> Visibility | None:
    """Parse a visibility value sent by a client.

    Args:
        raw_visibility: 'private', 'public', or empty/None.

    Returns:
        Visibility, or None when no value was sent.

    Raises:
        InvalidRequestError: If the value is not a known visibility.
    """
    if not raw_visibility:
        return None
    try:
        return Visibility(raw_visibility)
    except ValueError as error:
        raise InvalidRequestError(
            f'Unknown visibility: {raw_visibility}',
        ) from error


def upload_file(
    identity: 'Identity',
    folder_id: str | None,
    uploaded_file: Any,
    visibility: str | None = None,
) -> File:
    """Store an uploaded file in a folder and create its record.

    Only identities allowed to write to the folder may upload. The
    file inherits the folder's visibility unless one is given.

    Transaction safety: Upload to storage first, then create DB record.
    If DB transaction fails, the uploaded object is deleted from
    storage (rollback).

    Args:
        identity: Uploading identity, becomes the file owner.
        folder_id: Destination folder id.
        uploaded_file: File-like object with a ``name``.
        visibility: Optional visibility override.

    Returns:
        Created File instance (status ready).

    Raises:
        InvalidRequestError: If input is missing, empty or too large.
        NotFoundError: If the folder does not exist in the tenant.
        ForbiddenError: If the identity may not write to the folder.
        Exception: If upload or DB operation fails.
    """
    if not folder_id:
        raise InvalidRequestError('Folder id is required.')
    if uploaded_file is None:
        raise InvalidRequestError('A file is required.')

    filename = Path(getattr(uploaded_file, 'name', None) or '').name
    if not filename:
        raise InvalidRequestError('The uploaded file must have a name.')

    requested_visibility = parse_visibility(visibility)

    file_size = get_file_size(uploaded_file)
    if file_size == 0:
        raise InvalidRequestError('The uploaded file is empty.')
    if file_size > settings.FILES_MAX_UPLOAD_BYTES:
        raise InvalidRequestError(
            f'File exceeds the upload limit of '
            f'{settings.FILES_MAX_UPLOAD_BYTES} bytes.',
        )

    folder = get_folder(identity.tenant_id, folder_id)
    if folder is None:
        raise NotFoundError('Folder not found.')

    decision = decide(identity, Operation.WRITE, folder=folder)
    if not decision.allowed:
        logger.warning(
            'Upload denied (%s): identity=%s folder=%s',
            decision.reason,
            identity.id,
            folder.id,
        )
    ensure_allowed(
        decision,
        forbidden_message=(
            'Only the folder owner can upload to this shared folder.'
        ),
        not_found_message='Folder not found.',
    )

    file_id = generate_id()
    mime_type = detect_mime_type(
        filename,
        getattr(uploaded_file, 'content_type', None),
    )
    storage_key = build_storage_key(identity.id, folder.id, file_id, filename)

    # The storage backend stores content_type as object metadata
    content = DjangoFile(uploaded_file, name=filename)
    content.content_type = mime_type  # type: ignore[attr-defined]

    storage = _get_storage()

    # Step 1: Upload to storage first
    saved_key = storage.save(storage_key, content)

    # Step 2: Create database record (in transaction)
    try:
        with transaction.atomic():
            file_instance = File.objects.create(
                id=file_id,
                tenant_id=identity.tenant_id,
                folder=folder,
                owner_id=identity.id,
                visibility=requested_visibility or folder.visibility,
                name=filename,
                storage_key=saved_key,
                size_bytes=file_size,
                mime_type=mime_type,
                status=FileStatus.READY,
            )
    except Exception:
        # Rollback: Delete object from storage since DB transaction failed
        logger.exception(
            'Database transaction failed, rolling back storage upload: %s',
            saved_key,
        )
        storage.rollback_upload(saved_key)
        raise

    logger.info(
        'File uploaded: %s by %s into folder %s (ID: %s)',
        filename,
        identity.id,
        folder.id,
        file_instance.id,
    )
    return file_instance
