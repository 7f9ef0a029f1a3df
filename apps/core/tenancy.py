# apps/core/tenancy.py

"""
Request identity for commands

Commands never look at the request directly; they receive a RequestContext
built here from the authenticated user. A missing tenant or actor means
the request is unauthorized.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RequestContext:
    """Who is acting, and inside which organization"""

    org_id: str
    user_id: str
    user_name: str = ''
    user_image: str = ''

    @property
    def is_complete(self) -> bool:
        return bool(self.org_id) and bool(self.user_id)


def context_for_user(user) -> Optional[RequestContext]:
    """
    Build the context for a user object

    Returns None for anonymous users and users without an active
    organization.
    """
    if user is None or not user.is_authenticated:
        return None

    context = RequestContext(
        org_id=user.org_id,
        user_id=str(user.pk),
        user_name=user.display_name,
        user_image=user.image_url,
    )
    return context if context.is_complete else None


def get_request_context(request) -> Optional[RequestContext]:
    """Context for the current request (None when unauthorized)"""
    return context_for_user(getattr(request, 'user', None))
