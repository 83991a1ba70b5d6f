"""Shared fixtures for files app tests."""

from collections.abc import Callable
from typing import Any, Final

import boto3
import pytest
from django.contrib.auth import get_user_model
from moto import mock_aws

from server.apps.files.models import File, FileStatus, Folder, Visibility
from server.apps.tenancy.identity import Identity
from server.apps.tenancy.models import Member, Tenant

User = get_user_model()

BUCKET_NAME: Final = 'marble-files'

USER_EMAIL: Final = 'user@example.com'
OWNER_EMAIL: Final = 'owner@example.com'


@pytest.fixture
def tenant(db):
    """Create the default tenant.

    Returns:
        Tenant instance.
    """
    return Tenant.objects.create(id='default', name='Default')


@pytest.fixture
def other_tenant(db):
    """Create a second tenant for isolation tests.

    Returns:
        Tenant instance.
    """
    return Tenant.objects.create(id='acme', name='Acme')


@pytest.fixture
def identity(tenant):
    """Identity of the requesting user.

    Returns:
        Identity in the default tenant.
    """
    return Identity(id=USER_EMAIL, display_name='Test User', tenant_id=tenant.id)


@pytest.fixture
def owner_identity(tenant):
    """Identity of another user in the same tenant.

    Returns:
        Identity in the default tenant.
    """
    return Identity(id=OWNER_EMAIL, display_name='Owner', tenant_id=tenant.id)


@pytest.fixture
def foreign_identity(other_tenant):
    """Identity with the same id but in another tenant.

    Returns:
        Identity in the second tenant.
    """
    return Identity(
        id=USER_EMAIL,
        display_name='Test User',
        tenant_id=other_tenant.id,
    )


@pytest.fixture
def user(tenant):
    """Create test user who is a member of the default tenant.

    Returns:
        User instance for testing.
    """
    user = User.objects.create_user(
        username='testuser',
        password='testpass123',
        email=USER_EMAIL,
    )
    Member.objects.create(user=user, tenant=tenant, display_name='Test User')
    return user


@pytest.fixture
def mock_s3():
    """Mock S3 service with marble-files bucket.

    Yields:
        boto3 S3 resource with marble-files bucket created.
    """
    with mock_aws():
        # Create S3 resource
        conn = boto3.resource('s3', region_name='us-east-1')

        # Create bucket
        conn.create_bucket(Bucket=BUCKET_NAME)

        yield conn


@pytest.fixture
def put_object(mock_s3) -> Callable[..., None]:
    """Write an object straight into the mocked bucket.

    Returns:
        Function (key, body, content_type=None) storing the object.
    """

    def factory(key: str, body: bytes, content_type: str | None = None) -> None:
        extra: dict[str, Any] = {}
        if content_type is not None:
            extra['ContentType'] = content_type
        mock_s3.Bucket(BUCKET_NAME).put_object(Key=key, Body=body, **extra)

    return factory


@pytest.fixture
def make_folder(tenant) -> Callable[..., Folder]:
    """Factory for folders in the default tenant.

    Returns:
        Function creating a Folder.
    """

    def factory(**kwargs: Any) -> Folder:
        kwargs.setdefault('tenant', tenant)
        kwargs.setdefault('name', 'Folder')
        kwargs.setdefault('visibility', Visibility.PRIVATE)
        return Folder.objects.create(**kwargs)

    return factory


@pytest.fixture
def make_file(tenant) -> Callable[..., File]:
    """Factory for ready files in the default tenant.

    Returns:
        Function creating a File.
    """

    def factory(**kwargs: Any) -> File:
        kwargs.setdefault('tenant', tenant)
        kwargs.setdefault('name', 'notes.txt')
        kwargs.setdefault('owner_id', USER_EMAIL)
        kwargs.setdefault('visibility', Visibility.PRIVATE)
        kwargs.setdefault('status', FileStatus.READY)
        kwargs.setdefault('mime_type', 'text/plain')
        kwargs.setdefault('size_bytes', 12)
        return File.objects.create(**kwargs)

    return factory
