"""Tests for access decisions."""

import pytest

from server.apps.files.exceptions import ForbiddenError, NotFoundError
from server.apps.files.logic.access import (
    REASON_FORBIDDEN_ACCESS,
    REASON_FORBIDDEN_OWNER,
    REASON_NOT_FOUND,
    Decision,
    Operation,
    can_read,
    can_write,
    decide,
    ensure_allowed,
)
from server.apps.files.models import File, Folder, Visibility
from server.apps.tenancy.identity import Identity

USER = Identity(id='user@example.com', display_name='User', tenant_id='default')
FOREIGN_USER = Identity(
    id='user@example.com',
    display_name='User',
    tenant_id='acme',
)


def _folder(owner_id, visibility=Visibility.PUBLIC, tenant_id='default'):
    return Folder(
        id='folder-1',
        tenant_id=tenant_id,
        name='Folder',
        owner_id=owner_id,
        visibility=visibility,
    )


def _file(owner_id, visibility=Visibility.PRIVATE, tenant_id='default'):
    return File(
        id='file-1',
        tenant_id=tenant_id,
        owner_id=owner_id,
        visibility=visibility,
        name='notes.txt',
        storage_key='users/x/folder-1/file-1.txt',
    )


@pytest.mark.parametrize('owner_id', ['user@example.com', 'other@example.com'])
def test_read_public_file_allowed_regardless_of_owner(owner_id):
    """Public files are readable by anyone in the tenant."""
    decision = decide(
        USER,
        Operation.READ,
        file=_file(owner_id, Visibility.PUBLIC),
    )

    assert decision == Decision.allow()


def test_read_private_file_of_other_owner_denied():
    """Private files of someone else are denied with an access reason."""
    decision = decide(USER, Operation.READ, file=_file('other@example.com'))

    assert not decision.allowed
    assert decision.reason == REASON_FORBIDDEN_ACCESS


def test_read_private_file_of_owner_allowed():
    """Owners read their own private files."""
    decision = decide(USER, Operation.READ, file=_file('user@example.com'))

    assert decision.allowed


def test_read_ignores_folder_visibility():
    """Reads of an existing file use only the file's own fields."""
    private_folder = _folder('other@example.com', Visibility.PRIVATE)

    decision = decide(
        USER,
        Operation.READ,
        file=_file('other@example.com', Visibility.PUBLIC),
        folder=private_folder,
    )

    assert decision.allowed


def test_write_public_folder_of_other_owner_denied():
    """A shared drop-box can be seen by all but written only by its owner."""
    decision = decide(
        USER,
        Operation.WRITE,
        folder=_folder('owner@example.com', Visibility.PUBLIC),
    )

    assert not decision.allowed
    assert 'owner' in decision.reason


def test_write_public_folder_of_own_allowed():
    """Owners write to their public folders."""
    decision = decide(
        USER,
        Operation.WRITE,
        folder=_folder('user@example.com', Visibility.PUBLIC),
    )

    assert decision.allowed


@pytest.mark.parametrize('visibility', [Visibility.PUBLIC, Visibility.PRIVATE])
def test_write_shared_folder_allowed_for_any_member(visibility):
    """Folders without an owner accept writes from any tenant member."""
    decision = decide(USER, Operation.WRITE, folder=_folder(None, visibility))

    assert decision.allowed


def test_write_private_folder_of_other_owner_denied():
    """Private folders accept writes only from their owner."""
    decision = decide(
        USER,
        Operation.WRITE,
        folder=_folder('owner@example.com', Visibility.PRIVATE),
    )

    assert decision.reason == REASON_FORBIDDEN_OWNER


def test_write_file_of_other_owner_denied():
    """Even public files can only be changed by their owner."""
    decision = decide(
        USER,
        Operation.WRITE,
        file=_file('owner@example.com', Visibility.PUBLIC),
    )

    assert decision.reason == REASON_FORBIDDEN_OWNER


@pytest.mark.parametrize('operation', [Operation.READ, Operation.WRITE])
def test_cross_tenant_is_not_found(operation):
    """Cross-tenant targets are hidden, never reported as forbidden."""
    public_file = _file('user@example.com', Visibility.PUBLIC)
    shared_folder = _folder(None)

    assert decide(FOREIGN_USER, operation, file=public_file).reason == (
        REASON_NOT_FOUND
    )
    assert decide(FOREIGN_USER, operation, folder=shared_folder).reason == (
        REASON_NOT_FOUND
    )


def test_cross_tenant_folder_wins_over_owner_check():
    """Tenant mismatch is evaluated before ownership."""
    decision = decide(
        USER,
        Operation.WRITE,
        folder=_folder('owner@example.com', tenant_id='acme'),
    )

    assert decision.reason == REASON_NOT_FOUND


def test_read_folder_listing_rules():
    """Folder reads follow visibility, shared folders are tenant-wide."""
    assert decide(USER, Operation.READ, folder=_folder(None, Visibility.PRIVATE)).allowed
    assert decide(
        USER,
        Operation.READ,
        folder=_folder('owner@example.com', Visibility.PUBLIC),
    ).allowed
    assert decide(
        USER,
        Operation.READ,
        folder=_folder('owner@example.com', Visibility.PRIVATE),
    ).reason == REASON_FORBIDDEN_ACCESS


def test_decide_without_target_raises():
    """A decision needs something to decide about."""
    with pytest.raises(ValueError, match='file or a folder'):
        decide(USER, Operation.READ)


def test_predicates_are_independent():
    """Visibility drives reads, ownership drives writes."""
    public_owned_by_other = _folder('owner@example.com', Visibility.PUBLIC)

    assert can_read(USER, public_owned_by_other) is True
    assert can_write(USER, public_owned_by_other) is False


def test_ensure_allowed_maps_reasons():
    """Denials turn into typed errors."""
    ensure_allowed(
        Decision.allow(),
        forbidden_message='nope',
        not_found_message='missing',
    )

    with pytest.raises(NotFoundError, match='missing'):
        ensure_allowed(
            Decision.deny(REASON_NOT_FOUND),
            forbidden_message='nope',
            not_found_message='missing',
        )

    with pytest.raises(ForbiddenError, match='nope') as exc_info:
        ensure_allowed(
            Decision.deny(REASON_FORBIDDEN_OWNER),
            forbidden_message='nope',
            not_found_message='missing',
        )
    assert exc_info.value.reason == REASON_FORBIDDEN_OWNER
