"""Live update channels: one bounded queue per listener, fanned out on every change."""
import asyncio
import json
import logging
from typing import AsyncIterator, Callable, Optional, Set

from moodpoll.config import CHANNEL_QUEUE_SIZE
from moodpoll.models.poll import Snapshot

logger = logging.getLogger(__name__)

# Comment line; event-stream consumers ignore it
KEEPALIVE_FRAME = ":keep-alive\n\n"

EVENT_HELLO = "hello"
EVENT_UPDATE = "update"


def format_event(payload: dict) -> str:
    """Frame a payload as a single `data:` event."""
    return f"data: {json.dumps(payload, separators=(',', ':'))}\n\n"


class ChannelClosed(Exception):
    """Listener can no longer take messages."""


class Channel:
    """Outbound message queue for one connected listener."""

    def __init__(self, max_pending: int = CHANNEL_QUEUE_SIZE) -> None:
        self._queue: asyncio.Queue[Optional[str]] = asyncio.Queue(maxsize=max_pending)
        self.closed = False

    def send(self, message: str) -> None:
        """Queue a framed message without waiting. Raises ChannelClosed when the listener is stalled."""
        if self.closed:
            raise ChannelClosed("channel is closed")
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            raise ChannelClosed("listener is not draining its queue") from None

    def close(self) -> None:
        """Drop anything pending and wake the reader with the end-of-stream marker."""
        if self.closed:
            return
        self.closed = True
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(None)

    async def receive(self) -> Optional[str]:
        """Next framed message, or None once the channel is closed."""
        return await self._queue.get()

    def pending(self) -> int:
        return self._queue.qsize()


class ChannelManager:
    """Registry of open channels.

    `snapshot` is called at most once per broadcast and never when no channel
    is open. A channel that fails a write is dropped as if it had disconnected;
    the failure is not raised to whoever triggered the broadcast.
    """

    def __init__(
        self,
        snapshot: Callable[[], Snapshot],
        max_pending: int = CHANNEL_QUEUE_SIZE,
    ) -> None:
        self._snapshot = snapshot
        self._max_pending = max_pending
        self._channels: Set[Channel] = set()

    def __len__(self) -> int:
        return len(self._channels)

    def __contains__(self, channel: Channel) -> bool:
        return channel in self._channels

    def subscribe(self) -> Channel:
        """Open a channel; its first message is a `hello` snapshot of the current state."""
        channel = Channel(self._max_pending)
        channel.send(format_event(self._snapshot().to_event(EVENT_HELLO)))
        self._channels.add(channel)
        logger.info("Listener connected (%d open)", len(self._channels))
        return channel

    def unsubscribe(self, channel: Channel) -> None:
        channel.close()
        if channel in self._channels:
            self._channels.discard(channel)
            logger.info("Listener disconnected (%d open)", len(self._channels))

    def _fan_out(self, message: str) -> int:
        sent = 0
        for channel in list(self._channels):
            try:
                channel.send(message)
                sent += 1
            except ChannelClosed as e:
                logger.warning("Dropping listener: %s", e)
                self.unsubscribe(channel)
        return sent

    def broadcast(self) -> int:
        """Push an `update` snapshot to every open channel. Returns how many received it."""
        if not self._channels:
            return 0
        return self._fan_out(format_event(self._snapshot().to_event(EVENT_UPDATE)))

    def tick(self) -> bool:
        """Periodic re-broadcast; does nothing while nobody is listening."""
        if not self._channels:
            return False
        self.broadcast()
        return True

    def keep_alive(self) -> int:
        return self._fan_out(KEEPALIVE_FRAME)

    async def stream(self) -> AsyncIterator[str]:
        """Subscribe and yield framed messages until the consumer stops iterating
        or the channel is dropped, which ends the response."""
        channel = self.subscribe()
        try:
            while True:
                message = await channel.receive()
                if message is None:
                    return
                yield message
        finally:
            self.unsubscribe(channel)
