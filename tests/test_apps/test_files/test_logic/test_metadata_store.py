"""Tests for tenant-scoped metadata lookups."""

import pytest
from django.utils import timezone

from server.apps.files.logic.metadata_store import get_file, get_folder
from server.apps.files.models import Folder


@pytest.mark.django_db
def test_get_file_in_tenant(tenant, make_file):
    """Files resolve within their tenant."""
    file_instance = make_file(id='file-1')

    assert get_file(tenant.id, 'file-1') == file_instance


@pytest.mark.django_db
def test_get_file_other_tenant(other_tenant, make_file):
    """Files never resolve from another tenant."""
    make_file(id='file-1')

    assert get_file(other_tenant.id, 'file-1') is None


@pytest.mark.django_db
def test_get_file_excludes_trash(tenant, make_file):
    """Soft-deleted files do not resolve."""
    make_file(id='file-1', deleted_at=timezone.now())

    assert get_file(tenant.id, 'file-1') is None


@pytest.mark.django_db
def test_get_file_unknown(tenant):
    """Unknown ids resolve to None."""
    assert get_file(tenant.id, 'missing') is None


@pytest.mark.django_db
def test_get_folder_scoping(tenant, other_tenant, make_folder):
    """Folders resolve only in their tenant and only while live."""
    folder = make_folder(id='docs')
    make_folder(id='old', deleted_at=timezone.now())

    assert get_folder(tenant.id, 'docs') == folder
    assert get_folder(other_tenant.id, 'docs') is None
    assert get_folder(tenant.id, 'old') is None
    assert Folder.all_objects.filter(id='old').exists()
