# apps/board/views.py

import json
import logging

from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST
from django_htmx.http import trigger_client_event

from apps.core.actions import FAILED, INVALID, NOT_FOUND, QUOTA_EXCEEDED, UNAUTHORIZED
from apps.core.permissions import board_access_required, org_required

from . import actions
from .aggregate import get_board_aggregate, serialize_card
from .models import Card

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    UNAUTHORIZED: 401,
    NOT_FOUND: 404,
    INVALID: 400,
    FAILED: 400,
    QUOTA_EXCEEDED: 403,
}


class BadPayload(ValueError):
    pass


def read_payload(request, **url_values):
    """
    Command input from a JSON body or form data

    Values captured from the URL override the body.
    """
    if request.content_type == 'application/json':
        try:
            data = json.loads(request.body or b'{}')
        except json.JSONDecodeError:
            raise BadPayload('Invalid JSON')
        if not isinstance(data, dict):
            raise BadPayload('Invalid JSON')
    else:
        data = request.POST.dict()

    data.update(url_values)
    return data


def command_response(request, result, event_params=None):
    """
    JSON response for an ActionResult

    htmx requests also get a board:refresh client event on success.
    """
    if not result.ok:
        return JsonResponse(result.to_dict(), status=STATUS_BY_CODE.get(result.code, 400))

    response = JsonResponse(result.to_dict())
    if request.htmx:
        trigger_client_event(response, 'board:refresh', event_params or {})
    return response


def run_command(request, command, **url_values):
    try:
        data = read_payload(request, **url_values)
    except BadPayload as e:
        return JsonResponse({'error': str(e)}, status=400)

    result = command(request.tenant, data)
    return command_response(request, result, {'board_id': data.get('board_id') or data.get('id')})


# === BOARD ===

@require_GET
@org_required
@board_access_required
def board_detail(request, board_id):
    """
    Board aggregate: lists ordered by position, each with its cards
    """
    aggregate = get_board_aggregate(request.tenant.org_id, board_id)
    if aggregate is None:
        return JsonResponse({'error': 'Board not found'}, status=404)

    aggregate['websocket_group'] = f'board_{board_id}'
    return JsonResponse({'data': aggregate})


@require_POST
@org_required
def create_board(request):
    return run_command(request, actions.create_board)


@require_POST
@org_required
def update_board(request, board_id):
    return run_command(request, actions.update_board, id=board_id)


@require_POST
@org_required
def delete_board(request, board_id):
    return run_command(request, actions.delete_board, id=board_id)


@require_POST
@org_required
def copy_board(request, board_id):
    return run_command(request, actions.copy_board, id=board_id)


# === LIST ===

@require_POST
@org_required
def create_list(request, board_id):
    return run_command(request, actions.create_list, board_id=board_id)


@require_POST
@org_required
def update_list(request, board_id):
    return run_command(request, actions.update_list, board_id=board_id)


@require_POST
@org_required
def delete_list(request, board_id):
    return run_command(request, actions.delete_list, board_id=board_id)


@require_POST
@org_required
def copy_list(request, board_id):
    return run_command(request, actions.copy_list, board_id=board_id)


@require_POST
@org_required
def reorder_lists(request, board_id):
    """
    Persist the full reordered list set after a drag
    """
    return run_command(request, actions.update_list_order, board_id=board_id)


# === CARD ===

@require_POST
@org_required
def create_card(request, board_id):
    return run_command(request, actions.create_card, board_id=board_id)


@require_POST
@org_required
def update_card(request, board_id):
    return run_command(request, actions.update_card, board_id=board_id)


@require_POST
@org_required
def delete_card(request, board_id):
    return run_command(request, actions.delete_card, board_id=board_id)


@require_POST
@org_required
def copy_card(request, board_id):
    return run_command(request, actions.copy_card, board_id=board_id)


@require_POST
@org_required
def reorder_cards(request, board_id):
    """
    Persist reordered cards, including moves across lists
    """
    return run_command(request, actions.update_card_order, board_id=board_id)


@require_GET
@org_required
def card_detail(request, card_id):
    """
    Card with the title of its list (card modal)
    """
    card = Card.objects.select_related('list').filter(
        id=card_id,
        list__board__org_id=request.tenant.org_id,
    ).first()

    if card is None:
        return JsonResponse({'error': 'Card not found'}, status=404)

    data = serialize_card(card)
    data['list'] = {'title': card.list.title}
    return JsonResponse({'data': data})
