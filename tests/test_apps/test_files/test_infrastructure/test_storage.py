"""Tests for the S3 storage backend."""

from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError
from django.conf import settings
from django.core.files.base import ContentFile
from storages.backends.s3 import S3Storage

from server.apps.files.infrastructure.storage import FileStorage


@pytest.fixture
def storage(mock_s3):
    """Storage backend bound to the mocked bucket.

    Returns:
        FileStorage instance.
    """
    return FileStorage(**settings.STORAGES['default']['OPTIONS'])


def test_fetch_object(storage, put_object):
    """Objects come back with their bytes and content type."""
    put_object('users/u/docs/f1.txt', b'hello', content_type='text/plain')

    stored = storage.fetch_object('users/u/docs/f1.txt')

    assert stored is not None
    assert stored.content == b'hello'
    assert stored.content_type == 'text/plain'


def test_fetch_object_without_content_type(storage, put_object):
    """S3 placeholder content type is reported as absent."""
    put_object('users/u/docs/f1.bin', b'\x00\x01')

    stored = storage.fetch_object('users/u/docs/f1.bin')

    assert stored.content == b'\x00\x01'
    assert stored.content_type is None


def test_fetch_object_missing(storage):
    """Missing keys resolve to None."""
    assert storage.fetch_object('users/u/docs/missing.txt') is None


def test_fetch_object_other_errors_propagate(storage):
    """S3 failures other than a missing key are raised."""
    error = ClientError(
        {'Error': {'Code': 'AccessDenied', 'Message': 'Access Denied'}},
        'GetObject',
    )

    with patch.object(type(storage.bucket), 'Object', side_effect=error):
        with pytest.raises(ClientError):
            storage.fetch_object('users/u/docs/f1.txt')


def test_save_uses_content_type(storage):
    """Uploads keep the content type attached to the content."""
    content = ContentFile(b'# Title', name='readme.md')
    content.content_type = 'text/markdown'

    saved_key = storage.save('users/u/docs/f1.md', content)
    stored = storage.fetch_object(saved_key)

    assert saved_key == 'users/u/docs/f1.md'
    assert stored.content == b'# Title'
    assert stored.content_type == 'text/markdown'


def test_rollback_upload(storage, put_object):
    """Rollback removes the uploaded object."""
    put_object('users/u/docs/f1.txt', b'hello')

    storage.rollback_upload('users/u/docs/f1.txt')

    assert not storage.exists('users/u/docs/f1.txt')


def test_rollback_upload_swallows_errors(storage):
    """Rollback failures are logged, not raised."""
    with patch.object(S3Storage, 'delete', side_effect=RuntimeError('boom')):
        storage.rollback_upload('users/u/docs/f1.txt')
