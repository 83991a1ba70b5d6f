"""Access decisions for folders and files.

Visibility controls who may read, ownership controls who may write.
The two axes are independent: a public folder owned by someone is
readable by the whole tenant but only its owner may add files to it.

``decide`` is a pure function of its arguments and holds no state.
"""

import dataclasses
import enum
import logging
from typing import TYPE_CHECKING, Final

from server.apps.files.exceptions import ForbiddenError, NotFoundError
from server.apps.files.models import Visibility

if TYPE_CHECKING:
    from server.apps.files.models import File, Folder
    from server.apps.tenancy.identity import Identity

logger = logging.getLogger(__name__)

# Reason tags attached to denials
REASON_NOT_FOUND: Final = 'not_found'
REASON_FORBIDDEN_OWNER: Final = 'forbidden: owner'
REASON_FORBIDDEN_ACCESS: Final = 'forbidden: access'


class Operation(enum.StrEnum):
    """Operation an identity requests on a resource."""

    READ = 'read'
    WRITE = 'write'


@dataclasses.dataclass(frozen=True, slots=True)
class Decision:
    """Outcome of an access decision.

    Attributes:
        allowed: Whether the operation may proceed.
        reason: Reason tag when denied, None when allowed.
    """

    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> 'Decision':
        """Allowing decision."""
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> 'Decision':
        """Denying decision with a reason tag."""
        return cls(allowed=False, reason=reason)


def is_owner(identity: 'Identity', owner_id: str | None) -> bool:
    """Check whether the identity is the given owner.

    A missing owner never matches.
    """
    return owner_id is not None and owner_id == identity.id


def can_read(identity: 'Identity', resource: 'File | Folder') -> bool:
    """Visibility predicate for reads.

    Public resources are readable tenant-wide. Private ones only by
    their owner, except shared folders (no owner) which the whole
    tenant can see.

    Args:
        identity: Requesting identity.
        resource: File or folder being read.

    Returns:
        True if the identity may read the resource.
    """
    if resource.visibility == Visibility.PUBLIC:
        return True
    if resource.owner_id is None:
        return True
    return is_owner(identity, resource.owner_id)


def can_write(identity: 'Identity', resource: 'File | Folder') -> bool:
    """Ownership predicate for writes.

    Visibility plays no part here. A resource without an owner
    (tenant-root/shared folder) accepts writes from any member.

    Args:
        identity: Requesting identity.
        resource: File or folder being written.

    Returns:
        True if the identity may write to the resource.
    """
    if resource.owner_id is None:
        return True
    return is_owner(identity, resource.owner_id)


def _same_tenant(identity: 'Identity', *resources: 'File | Folder | None') -> bool:
    return all(
        resource.tenant_id == identity.tenant_id
        for resource in resources
        if resource is not None
    )


def decide(
    identity: 'Identity',
    operation: Operation,
    file: 'File | None' = None,
    folder: 'Folder | None' = None,
) -> Decision:
    """Decide whether an identity may perform an operation.

    Rules are evaluated in order and the first match wins:

    1. Tenant mismatch with the file or folder: deny ``not_found``.
    2. Write: the destination folder (if given) and then the file
       (if given) must pass ``can_write``, else ``forbidden: owner``.
    3. Read: the file (if given) must pass ``can_read``, else
       ``forbidden: access``. The folder is only consulted for reads
       when no file is given (folder listing).
    4. Otherwise allow.

    Args:
        identity: Requesting identity.
        operation: Requested operation.
        file: Target file metadata, if it exists.
        folder: Folder metadata; for writes the destination folder.

    Returns:
        Decision.

    Raises:
        ValueError: If neither a file nor a folder is given.
    """
    if file is None and folder is None:
        raise ValueError('Access decision needs a file or a folder')

    if not _same_tenant(identity, file, folder):
        decision = Decision.deny(REASON_NOT_FOUND)
    elif operation == Operation.WRITE:
        decision = _decide_write(identity, file, folder)
    else:
        decision = _decide_read(identity, file, folder)

    logger.debug(
        'Access %s for %s on file=%s folder=%s: %s',
        operation,
        identity.id,
        file.id if file is not None else None,
        folder.id if folder is not None else None,
        decision.reason or 'allowed',
    )
    return decision


def _decide_write(
    identity: 'Identity',
    file: 'File | None',
    folder: 'Folder | None',
) -> Decision:
    if folder is not None and not can_write(identity, folder):
        return Decision.deny(REASON_FORBIDDEN_OWNER)
    if file is not None and not can_write(identity, file):
        return Decision.deny(REASON_FORBIDDEN_OWNER)
    return Decision.allow()


def _decide_read(
    identity: 'Identity',
    file: 'File | None',
    folder: 'Folder | None',
) -> Decision:
    # An existing file is judged by its own fields only
    target = file if file is not None else folder
    if not can_read(identity, target):
        return Decision.deny(REASON_FORBIDDEN_ACCESS)
    return Decision.allow()


def ensure_allowed(
    decision: Decision,
    *,
    forbidden_message: str,
    not_found_message: str,
) -> None:
    """Turn a denying decision into the matching typed error.

    Args:
        decision: Decision to check.
        forbidden_message: Message for ownership/visibility denials.
        not_found_message: Message for tenant mismatches.

    Raises:
        NotFoundError: If the decision hides the resource.
        ForbiddenError: If the decision denies rights.
    """
    if decision.allowed:
        return
    if decision.reason == REASON_NOT_FOUND:
        raise NotFoundError(not_found_message)
    raise ForbiddenError(forbidden_message, reason=decision.reason or '')
