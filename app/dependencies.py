"""Shared helpers for the API routes."""
import logging
from dataclasses import asdict
from typing import Callable, Optional

from fastapi import HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from sinks.models import TokenCommand

from app.commands import SinkCommands
from app.snapshot import UISnapshot

logger = logging.getLogger(__name__)


def get_commands(request: Request) -> SinkCommands:
    """Get the command handlers of the running app."""
    return request.app.state.commands


def _run(commands: SinkCommands, events, handler, cmd: TokenCommand):
    """Run a handler and collect exactly the notifications it emitted."""
    with commands.lock:
        try:
            snapshot = handler(cmd)
        finally:
            emitted = events.drain()
        return snapshot, emitted, commands.session.token


async def dispatch(
    request: Request,
    handler: Callable[[TokenCommand], Optional[UISnapshot]],
    cmd: TokenCommand
) -> dict:
    """
    Run a command handler and deliver the notifications it emitted.

    The handler runs in the threadpool so a switch scan does not block the
    event loop. Notifications are broadcast to websocket subscribers and also
    returned in the response body.
    """
    state = request.app.state
    try:
        snapshot, events, token = await run_in_threadpool(
            _run, state.commands, state.events, handler, cmd
        )
    except Exception as e:
        logger.exception(f"Command {handler.__name__} crashed")
        raise HTTPException(status_code=500, detail=str(e))

    await state.hub.broadcast(events)
    return {
        "accepted": snapshot is not None,
        "token": token,
        "events": [asdict(e) for e in events],
    }
