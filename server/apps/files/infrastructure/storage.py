"""Custom storage backend for S3-compatible storage."""

import dataclasses
import logging
from typing import Any, Final, final, override

from botocore.exceptions import ClientError
from storages.backends.s3 import S3Storage
from storages.utils import clean_name

logger = logging.getLogger(__name__)

# S3 error codes meaning the object does not exist
_MISSING_OBJECT_CODES: Final = frozenset(('NoSuchKey', '404', 'NotFound'))

# Content type S3 reports for objects stored without one
_PLACEHOLDER_CONTENT_TYPE: Final = 'binary/octet-stream'


@dataclasses.dataclass(frozen=True, slots=True)
class StoredObject:
    """Object read back from storage.

    Attributes:
        content: Raw object bytes.
        content_type: Content type stored with the object, if any.
    """

    content: bytes
    content_type: str | None


@final
class FileStorage(S3Storage):
    """Custom S3 storage backend for tenant files.

    Extends django-storages S3Storage with:
    - Object reads that expose the stored content type
    - Transaction rollback support for failed DB operations
    - Enhanced error logging
    """

    @override
    def save(  # noqa: WPS211
        self,
        name: str,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Save file to S3 with error handling and logging.

        The object's content type is taken from ``content.content_type``
        when present (uploaded files), else guessed from the name.

        Args:
            name: Storage key for the file.
            content: File content (file-like object).
            max_length: Optional maximum length for the filename.

        Returns:
            Actual storage key used (may differ from name if conflicts).

        Raises:
            Exception: If S3 upload fails.
        """
        try:
            logger.info('Uploading file to storage: %s', name)
            saved_name = super().save(name, content, max_length)
            logger.info('Successfully uploaded file: %s', saved_name)
        except Exception:
            logger.exception('Failed to upload file to storage: %s', name)
            raise
        else:
            return saved_name

    @override
    def delete(self, name: str) -> None:
        """Delete file from S3 with error handling and logging.

        Args:
            name: Storage key of file to delete.

        Raises:
            Exception: If S3 delete fails.
        """
        try:
            logger.info('Deleting file from storage: %s', name)
            super().delete(name)
            logger.info('Successfully deleted file: %s', name)
        except Exception:
            logger.exception('Failed to delete file from storage: %s', name)
            raise

    def fetch_object(self, name: str) -> StoredObject | None:
        """Read an object and its stored content type.

        Args:
            name: Storage key of the object.

        Returns:
            StoredObject, or None if no object exists under the key.

        Raises:
            ClientError: For S3 failures other than a missing object.
        """
        key = self._normalize_name(clean_name(name))
        try:
            response = self.bucket.Object(key).get()
        except ClientError as error:
            if error.response.get('Error', {}).get('Code') in _MISSING_OBJECT_CODES:
                logger.warning('Object not found in storage: %s', name)
                return None
            logger.exception('Failed to read object from storage: %s', name)
            raise

        body = response['Body']
        try:
            content = body.read()
        finally:
            body.close()

        content_type = response.get('ContentType') or None
        if content_type == _PLACEHOLDER_CONTENT_TYPE:
            content_type = None

        logger.debug('Read %d bytes from storage: %s', len(content), name)
        return StoredObject(content=content, content_type=content_type)

    def rollback_upload(self, name: str) -> None:
        """Delete uploaded file for DB transaction rollback.

        This method is called when a database transaction fails after
        a file has been successfully uploaded to S3. It attempts to
        delete the file to maintain consistency.

        This is a best-effort operation - if deletion fails, the error
        is logged but not raised, as the DB rollback has already occurred.

        Args:
            name: Storage key of file to delete.
        """
        try:
            logger.warning('Rolling back upload, deleting file: %s', name)
            self.delete(name)
            logger.info('Successfully rolled back file upload: %s', name)
        except Exception:
            # The object stays in storage without a database record
            logger.exception(
                'Failed to rollback upload, orphaned file: %s',
                name,
            )
