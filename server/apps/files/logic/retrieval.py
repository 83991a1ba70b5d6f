"""Retrieval of stored file content for an identity.

Steps: metadata lookup, read decision, blob fetch, then content type
and filename resolution. Every failure ends the pipeline with one of
the typed errors from ``server.apps.files.exceptions``.
"""

import dataclasses
import logging
from typing import TYPE_CHECKING, Final

from django.core.files.storage import default_storage
from django.utils.http import content_disposition_header

from server.apps.files.exceptions import (
    InvalidRequestError,
    NotFoundError,
    StorageIntegrityError,
)
from server.apps.files.logic.access import Operation, decide, ensure_allowed
from server.apps.files.logic.metadata_store import get_file

if TYPE_CHECKING:
    from server.apps.files.infrastructure.storage import FileStorage
    from server.apps.tenancy.identity import Identity

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE: Final = 'text/plain; charset=utf-8'
DEFAULT_FILENAME: Final = 'document.txt'

# Responses carry user data and must not be stored by intermediaries
_CACHE_CONTROL: Final = 'private, no-store'


@dataclasses.dataclass(frozen=True, slots=True)
class FileDownload:
    """Content ready to be sent back inline.

    Attributes:
        content: File bytes.
        content_type: Resolved content type.
        filename: Resolved display filename.
    """

    content: bytes
    content_type: str
    filename: str
    cache_control: str = _CACHE_CONTROL

    @property
    def content_disposition(self) -> str:
        """Inline Content-Disposition header value.

        ASCII names are sent quoted, other names as RFC 5987
        ``filename*``.
        """
        return content_disposition_header(
            as_attachment=False,
            filename=self.filename,
        )


def _get_storage() -> 'FileStorage':
    """Get the configured default storage backend.

    Returns:
        FileStorage instance with proper S3 configuration.
    """
    return default_storage  # type: ignore[return-value]


def retrieve_file(identity: 'Identity', file_id: str | None) -> FileDownload:
    """Fetch a file's content if the identity may read it.

    Args:
        identity: Requesting identity.
        file_id: Id of the requested file.

    Returns:
        FileDownload with bytes, content type and filename.

    Raises:
        InvalidRequestError: If file_id is missing.
        NotFoundError: If the file or its stored object does not exist.
        ForbiddenError: If the identity may not read the file.
        StorageIntegrityError: If the record has no storage key.
    """
    if not file_id:
        raise InvalidRequestError('File id is required.')

    file_instance = get_file(identity.tenant_id, file_id)
    if file_instance is None:
        raise NotFoundError('File not found.')

    decision = decide(identity, Operation.READ, file=file_instance)
    if not decision.allowed:
        logger.warning(
            'Read denied (%s): identity=%s file=%s',
            decision.reason,
            identity.id,
            file_id,
        )
    ensure_allowed(
        decision,
        forbidden_message='You do not have access to this file.',
        not_found_message='File not found.',
    )

    if not file_instance.storage_key:
        logger.error(
            'File record without storage key: id=%s status=%s',
            file_id,
            file_instance.status,
        )
        raise StorageIntegrityError('File is missing its storage reference.')

    stored = _get_storage().fetch_object(file_instance.storage_key)
    if stored is None:
        logger.error(
            'Stored object missing for file %s: %s',
            file_id,
            file_instance.storage_key,
        )
        raise NotFoundError('Stored file not found.')

    logger.info('Serving file %s to %s', file_id, identity.id)
    return FileDownload(
        content=stored.content,
        content_type=stored.content_type or DEFAULT_CONTENT_TYPE,
        filename=file_instance.name or DEFAULT_FILENAME,
    )
