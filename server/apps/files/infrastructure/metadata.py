"""Metadata helpers for stored files."""

import mimetypes
from pathlib import Path
from typing import Any, Final

_DEFAULT_MIME_TYPE: Final = 'application/octet-stream'


def detect_mime_type(filename: str, declared: str | None = None) -> str:
    """Detect MIME type for an upload.

    The content type declared by the client wins when present,
    otherwise the type is guessed from the filename extension.

    Args:
        filename: Filename with extension.
        declared: Content type sent with the upload, if any.

    Returns:
        MIME type string (e.g., 'text/plain', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    if declared:
        return declared
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return _DEFAULT_MIME_TYPE
    return mime_type


def get_file_extension(filename: str) -> str:
    """Get file extension from filename.

    Args:
        filename: Filename (e.g., 'document.pdf').

    Returns:
        Extension with dot, lowercase (e.g., '.pdf').
        Returns empty string if no extension.
    """
    return Path(filename).suffix.lower()


def build_storage_key(
    owner_id: str,
    folder_id: str,
    file_id: str,
    filename: str,
) -> str:
    """Build the object key for an uploaded file.

    Example: ('u@example.com', 'docs', 'f1', 'notes.txt')
        -> 'users/u@example.com/docs/f1.txt'

    Args:
        owner_id: Identity uploading the file.
        folder_id: Destination folder id.
        file_id: New file record id.
        filename: Original filename (only the extension is kept).

    Returns:
        Storage key.
    """
    extension = get_file_extension(filename)
    return f'users/{owner_id}/{folder_id}/{file_id}{extension}'


def get_file_size(file_obj: Any) -> int:
    """Get file size from file object.

    Args:
        file_obj: File-like object.

    Returns:
        File size in bytes.
    """
    if getattr(file_obj, 'size', None) is not None:
        return file_obj.size
    file_size = len(file_obj.read())
    file_obj.seek(0)
    return file_size

