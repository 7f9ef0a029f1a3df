# apps/core/permissions.py

from functools import wraps

from django.http import JsonResponse

from .tenancy import context_for_user, get_request_context


class PlanifyPermissions:
    """
    Tenant isolation rules

    A board is visible to a user only when it belongs to the
    organization the user is acting in.
    """

    @staticmethod
    def is_org_member(user):
        """Authenticated and acting inside an organization"""
        return context_for_user(user) is not None

    @staticmethod
    def can_access_board(user, board):
        """Board belongs to the user's active organization"""
        context = context_for_user(user)
        return context is not None and board.org_id == context.org_id


# View decorators

def org_required(view_func):
    """
    Require an authenticated user with an active organization

    JSON views get a 401 instead of a redirect. The RequestContext is
    attached to the request as ``request.tenant``.
    """

    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        context = get_request_context(request)
        if context is None:
            return JsonResponse({'error': 'Unauthorized'}, status=401)

        request.tenant = context
        return view_func(request, *args, **kwargs)

    return wrapped_view


def board_access_required(view_func):
    """
    Load the board from ``board_id`` scoped to the caller's organization

    Expects org_required to have run first. Boards of other
    organizations are reported as missing.
    """

    @wraps(view_func)
    def wrapped_view(request, board_id, *args, **kwargs):
        from apps.board.models import Board

        try:
            board = Board.objects.get(id=board_id, org_id=request.tenant.org_id)
        except Board.DoesNotExist:
            return JsonResponse({'error': 'Board not found'}, status=404)

        request.board = board
        return view_func(request, board_id, *args, **kwargs)

    return wrapped_view
