"""Tests for metadata utilities."""

from io import BytesIO

from django.core.files.base import ContentFile

from server.apps.files.infrastructure.metadata import (
    build_storage_key,
    detect_mime_type,
    get_file_extension,
    get_file_size,
)


def test_detect_mime_type():
    """Test MIME type detection from filename."""
    assert detect_mime_type('test.pdf') == 'application/pdf'
    assert detect_mime_type('test.txt') == 'text/plain'
    assert detect_mime_type('test.png') == 'image/png'


def test_detect_mime_type_prefers_declared():
    """Declared content type wins over the extension."""
    assert detect_mime_type('notes.txt', 'text/markdown') == 'text/markdown'
    assert detect_mime_type('notes.txt', '') == 'text/plain'


def test_detect_mime_type_unknown():
    """Test MIME type detection for unknown extension."""
    assert detect_mime_type('test.unknown') == 'application/octet-stream'


def test_get_file_extension():
    """Test extension extraction."""
    assert get_file_extension('report.PDF') == '.pdf'
    assert get_file_extension('archive.tar.gz') == '.gz'
    assert get_file_extension('README') == ''


def test_build_storage_key():
    """Keys embed owner, folder and record id, not the display name."""
    key = build_storage_key('u@example.com', 'docs', 'f1', 'My Notes.TXT')

    assert key == 'users/u@example.com/docs/f1.txt'


def test_build_storage_key_without_extension():
    """Names without extension produce bare ids."""
    assert build_storage_key('u', 'docs', 'f1', 'Makefile') == 'users/u/docs/f1'


def test_get_file_size_uses_size_attribute():
    """Django file objects report their size directly."""
    assert get_file_size(ContentFile(b'12345')) == 5


def test_get_file_size_reads_and_rewinds():
    """Plain file objects are measured and rewound."""
    file_obj = BytesIO(b'abcdef')

    assert get_file_size(file_obj) == 6
    assert file_obj.read() == b'abcdef'

