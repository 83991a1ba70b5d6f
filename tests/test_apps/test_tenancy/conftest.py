"""Shared fixtures for tenancy app tests."""

import pytest
from django.contrib.auth import get_user_model

from server.apps.tenancy.models import Tenant

User = get_user_model()


@pytest.fixture
def tenant(db):
    """Create the default tenant.

    Returns:
        Tenant instance.
    """
    return Tenant.objects.create(id='default', name='Default')


@pytest.fixture
def make_user(db):
    """Factory for Django users.

    Returns:
        Function creating a User.
    """

    def factory(username='member', email='member@example.com', **kwargs):
        return User.objects.create_user(
            username=username,
            password='testpass123',
            email=email,
            **kwargs,
        )

    return factory
