"""Settings view API routes: snapshot, refresh, cancel and live events."""
from fastapi import APIRouter, Depends, HTTPException, Request, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool

from sinks.exceptions import ReadError, WriteError
from sinks.models import TokenCommand

from app.commands import SinkCommands
from app.dependencies import dispatch, get_commands
from app.snapshot import UIConfigProvider, UISnapshot

router = APIRouter()


def get_ui_provider(request: Request) -> UIConfigProvider:
    """Get the provider of the settings descriptor."""
    return request.app.state.ui_provider


@router.get("/ui-config", response_model=UISnapshot)
async def get_ui_config(scan: bool = True, provider: UIConfigProvider = Depends(get_ui_provider)):
    """Get the settings descriptor, optionally rescanning all switches."""
    try:
        return await run_in_threadpool(provider.get_ui_config, full_scan=scan)
    except ReadError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except WriteError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/refresh")
async def refresh(request: Request, cmd: TokenCommand,
                  commands: SinkCommands = Depends(get_commands)):
    """Rescan all switches and push a fresh settings view."""
    return await dispatch(request, commands.refresh, cmd)


@router.post("/cancel")
async def cancel(request: Request, cmd: TokenCommand,
                 commands: SinkCommands = Depends(get_commands)):
    """Leave add/edit mode without saving."""
    return await dispatch(request, commands.cancel, cmd)


@router.websocket("/events")
async def events(ws: WebSocket):
    """Stream notifications (busy, settings view, toasts) to the UI."""
    hub = ws.app.state.hub
    await hub.connect(ws)
    try:
        while True:
            await ws.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await hub.disconnect(ws)
