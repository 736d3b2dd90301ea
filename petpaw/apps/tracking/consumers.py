import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer

from .broadcast import group_name
from .services import get_snapshot

logger = logging.getLogger(__name__)


class SubjectTrackingConsumer(AsyncWebsocketConsumer):
    """
    Live updates for one ride or order. Sends a snapshot on connect, then
    relays ``status_update`` and ``location_update`` group messages.
    """

    kind = None

    async def connect(self):
        self.subject_id = self.scope["url_route"]["kwargs"]["subject_id"]
        self.group_name = group_name(self.kind, self.subject_id)

        snapshot = await self.get_snapshot()
        if snapshot is None:
            logger.info(f"Rejecting tracking socket for unknown {self.kind} {self.subject_id}")
            await self.close()
            return

        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        await self.send(text_data=json.dumps({"type": "snapshot", "data": snapshot}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or "")
        except json.JSONDecodeError:
            return

        message_type = data.get("type") if isinstance(data, dict) else None
        if message_type == "ping":
            await self.send(text_data=json.dumps({"type": "pong"}))
        elif message_type == "refresh":
            snapshot = await self.get_snapshot()
            await self.send(text_data=json.dumps({"type": "snapshot", "data": snapshot}))

    async def status_update(self, event):
        await self.send(text_data=json.dumps({"type": "status_update", "data": event["data"]}))

    async def location_update(self, event):
        await self.send(text_data=json.dumps({"type": "location_update", "data": event["data"]}))

    @database_sync_to_async
    def get_snapshot(self):
        return get_snapshot(self.kind, self.subject_id)


class RideTrackingConsumer(SubjectTrackingConsumer):
    kind = "ride"


class OrderTrackingConsumer(SubjectTrackingConsumer):
    kind = "order"
