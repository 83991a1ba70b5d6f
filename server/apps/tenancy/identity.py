"""Resolution of request users into identities for the files core.

Credential verification happens upstream (Django authentication).
This module only turns an already authenticated user into the
read-only ``Identity`` value the access logic consumes.
"""

import dataclasses
import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, Final

from django.http import HttpRequest, HttpResponse, JsonResponse

from server.apps.tenancy.models import Member

logger = logging.getLogger(__name__)

_HTTP_UNAUTHORIZED: Final = 401


@dataclasses.dataclass(frozen=True, slots=True)
class Identity:
    """Verified identity of a requester.

    Attributes:
        id: Stable identifier (the member's email).
        display_name: Human readable name.
        tenant_id: Tenant the identity belongs to.
    """

    id: str
    display_name: str
    tenant_id: str


def identity_from_user(user: Any) -> Identity | None:
    """Build an identity from an authenticated Django user.

    Args:
        user: ``request.user`` (may be anonymous).

    Returns:
        Identity, or None when the user is anonymous, inactive,
        has no email or is not a member of any tenant.
    """
    if not user.is_authenticated or not user.is_active:
        return None

    try:
        member = Member.objects.select_related('user').get(user=user)
    except Member.DoesNotExist:
        logger.warning('Authenticated user without tenant: %s', user.pk)
        return None

    if not member.user.email:
        logger.warning('Member without email cannot act: %s', user.pk)
        return None

    return Identity(
        id=member.user.email,
        display_name=member.display_name or member.user.get_username(),
        tenant_id=member.tenant_id,
    )


def identity_required(
    view: Callable[..., HttpResponse],
) -> Callable[..., HttpResponse]:
    """Resolve the request identity or answer 401.

    The wrapped view receives the identity as its second argument.
    """

    @wraps(view)
    def wrapper(
        request: HttpRequest,
        *args: Any,
        **kwargs: Any,
    ) -> HttpResponse:
        identity = identity_from_user(request.user)
        if identity is None:
            return JsonResponse(
                {'error': 'Authentication required.'},
                status=_HTTP_UNAUTHORIZED,
            )
        return view(request, identity, *args, **kwargs)

    return wrapper
