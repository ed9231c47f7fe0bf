"""Notifications emitted by command handlers, and their websocket fan-out."""
import asyncio
import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Protocol

from fastapi import WebSocket

logger = logging.getLogger(__name__)

# Notification types
SHOW_BUSY = "showBusy"
HIDE_BUSY = "hideBusy"
PUSH_UI_CONFIG = "pushUiConfig"
TOAST = "toast"


class Notifier(Protocol):
    """Where command handlers report progress and results."""

    def show_busy(self) -> None: ...

    def hide_busy(self) -> None: ...

    def push_ui_config(self, snapshot: dict[str, Any]) -> None: ...

    def toast(self, level: str, title: str, message: str) -> None: ...


@dataclass
class Notification:
    type: str
    data: dict[str, Any] = field(default_factory=dict)


class EventQueue:
    """Notifier that queues notifications until the caller drains them."""

    def __init__(self) -> None:
        self._events: list[Notification] = []

    def show_busy(self) -> None:
        self._events.append(Notification(SHOW_BUSY))

    def hide_busy(self) -> None:
        self._events.append(Notification(HIDE_BUSY))

    def push_ui_config(self, snapshot: dict[str, Any]) -> None:
        self._events.append(Notification(PUSH_UI_CONFIG, snapshot))

    def toast(self, level: str, title: str, message: str) -> None:
        self._events.append(Notification(TOAST, {"level": level, "title": title, "message": message}))

    def drain(self) -> list[Notification]:
        events, self._events = self._events, []
        return events


class RealtimeHub:
    """Broadcasts notifications to connected websocket clients."""

    def __init__(self) -> None:
        self._clients: set[WebSocket] = set()
        self._lock = asyncio.Lock()

    async def connect(self, ws: WebSocket) -> None:
        async with self._lock:
            self._clients.add(ws)
        await ws.accept()

    async def disconnect(self, ws: WebSocket) -> None:
        async with self._lock:
            self._clients.discard(ws)

    async def broadcast(self, events: list[Notification]) -> None:
        async with self._lock:
            clients = list(self._clients)
        if not clients or not events:
            return

        dead: list[WebSocket] = []
        for ws in clients:
            try:
                for event in events:
                    await ws.send_text(json.dumps(asdict(event)))
            except Exception as e:
                logger.debug(f"Dropping websocket client: {e}")
                dead.append(ws)
        if dead:
            async with self._lock:
                for ws in dead:
                    self._clients.discard(ws)
