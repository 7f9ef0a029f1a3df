# apps/board/consumers.py

import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.conf import settings
from django.utils import timezone

from apps.core.permissions import PlanifyPermissions
from apps.core.tenancy import context_for_user

from .aggregate import build_board_aggregate
from .cache import board_group_name
from .models import Board
from .sync import handle_drop

logger = logging.getLogger(__name__)


class BoardConsumer(AsyncWebsocketConsumer):
    """
    WebSocket for one board

    Server events:
    - board_refresh: a command changed the board, clients re-fetch it

    Client messages:
    - ping: heartbeat, answered with pong
    - sync_board: ask for the authoritative board
    - drop: submit a drag and drop result (see apps.board.sync)
    """

    async def connect(self):
        """
        Join the board group after checking tenant access
        """
        self.board_id = int(self.scope['url_route']['kwargs']['board_id'])
        self.board_group_name = board_group_name(self.board_id)
        self.user = self.scope['user']

        if not self.user.is_authenticated:
            logger.warning("WebSocket rejected: anonymous user on board %s", self.board_id)
            await self.close()
            return

        has_access = await self.check_board_access()
        if not has_access:
            logger.warning("WebSocket rejected: %s has no access to board %s", self.user.username, self.board_id)
            await self.close()
            return

        await self.channel_layer.group_add(
            self.board_group_name,
            self.channel_name
        )
        await self.accept()

        await self.send_json({
            'type': 'connected',
            'board_id': self.board_id,
            'heartbeat_interval': settings.PLANIFY_WS_HEARTBEAT_INTERVAL,
        })

        logger.info("WebSocket connected: %s on board %s", self.user.username, self.board_id)

    async def disconnect(self, close_code):
        if hasattr(self, 'board_group_name'):
            await self.channel_layer.group_discard(
                self.board_group_name,
                self.channel_name
            )

        logger.info("WebSocket disconnected from board %s (code %s)", getattr(self, 'board_id', None), close_code)

    async def receive(self, text_data=None, bytes_data=None):
        """
        Dispatch client messages by type
        """
        try:
            data = json.loads(text_data)
        except (TypeError, json.JSONDecodeError):
            logger.error("Invalid JSON received on board %s", self.board_id)
            await self.send_json({'type': 'error', 'error': 'Invalid JSON'})
            return

        message_type = data.get('type')

        if message_type == 'ping':
            await self.send_json({'type': 'pong', 'timestamp': self.get_timestamp()})

        elif message_type == 'sync_board':
            board_data = await self.get_board_state()
            await self.send_json({
                'type': 'board_sync',
                'board_data': board_data,
                'timestamp': self.get_timestamp()
            })

        elif message_type == 'drop':
            reply = await self.apply_drop(data.get('drop') or {})
            reply['timestamp'] = self.get_timestamp()
            await self.send_json(reply)

        else:
            await self.send_json({'type': 'error', 'error': f'Unknown message type: {message_type}'})

    # === Group events ===

    async def board_refresh(self, event):
        """
        A command changed the board
        """
        await self.send_json({
            'type': 'board_refresh',
            'message': event['message']
        })

    # === Helpers ===

    async def send_json(self, content):
        await self.send(text_data=json.dumps(content))

    @database_sync_to_async
    def check_board_access(self):
        board = Board.objects.filter(id=self.board_id).first()
        return board is not None and PlanifyPermissions.can_access_board(self.user, board)

    @database_sync_to_async
    def get_board_state(self):
        """
        Authoritative board, bypassing the cache
        """
        context = context_for_user(self.user)
        if context is None:
            return None
        return build_board_aggregate(context.org_id, self.board_id)

    @database_sync_to_async
    def apply_drop(self, drop_data):
        context = context_for_user(self.user)
        if context is None:
            return {'type': 'error', 'error': 'Unauthorized'}
        return handle_drop(context, self.board_id, drop_data)

    def get_timestamp(self):
        return timezone.now().isoformat()
