"""
In-process registry of open notification connections.

Maps a user id to the WebSocket connections that user has open. Pushes are
fire-and-forget: ``publish`` schedules a send on each connection's event
loop and returns immediately, from any thread. A failed send is logged and
dropped; it never reaches the caller and is never retried.
"""

import asyncio
import json
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Set

from app.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class Channel:
    """One open connection and the event loop that owns it."""

    user_id: str
    websocket: Any
    loop: asyncio.AbstractEventLoop


class NotificationHub:
    """Registry of open channels keyed by user id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._channels: Dict[str, Set[Channel]] = {}

    def register(
        self,
        user_id: str,
        websocket: Any,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> Channel:
        """
        Register a connection for a user.

        Must be called from the connection's event loop unless ``loop`` is
        given explicitly.
        """
        channel = Channel(user_id, websocket, loop or asyncio.get_running_loop())
        with self._lock:
            self._channels.setdefault(user_id, set()).add(channel)
        logger.debug("Notification channel registered", extra={"user_id": user_id})
        return channel

    def unregister(self, channel: Channel) -> None:
        with self._lock:
            channels = self._channels.get(channel.user_id)
            if channels is None:
                return
            channels.discard(channel)
            if not channels:
                del self._channels[channel.user_id]
        logger.debug("Notification channel unregistered", extra={"user_id": channel.user_id})

    def connection_count(self, user_id: Optional[str] = None) -> int:
        with self._lock:
            if user_id is not None:
                return len(self._channels.get(user_id, ()))
            return sum(len(channels) for channels in self._channels.values())

    def publish(self, user_ids: Iterable[str], payload: Dict[str, Any]) -> int:
        """
        Push a payload to every open channel of the given users.

        Returns:
            Number of sends scheduled
        """
        message = json.dumps(payload, default=str)
        with self._lock:
            targets = [
                channel
                for user_id in set(user_ids)
                for channel in self._channels.get(user_id, ())
            ]

        scheduled = 0
        for channel in targets:
            coro = self._send(channel, message)
            try:
                asyncio.run_coroutine_threadsafe(coro, channel.loop)
                scheduled += 1
            except RuntimeError as e:
                # Loop already closed; the connection is gone
                coro.close()
                logger.debug(f"Dropping notification channel: {e}", extra={"user_id": channel.user_id})
                self.unregister(channel)
        return scheduled

    async def _send(self, channel: Channel, message: str) -> None:
        try:
            await channel.websocket.send_text(message)
        except Exception as e:
            logger.debug(
                f"Notification push failed: {type(e).__name__}",
                extra={"user_id": channel.user_id},
            )


notification_hub = NotificationHub()
