"""Speaker settings API routes."""
from fastapi import APIRouter, Depends, Request

from sinks.models import SpeakerCommand, TargetCommand, TokenCommand

from app.commands import SinkCommands
from app.dependencies import dispatch, get_commands

router = APIRouter()


@router.post("/speakers/add")
async def add_speaker(request: Request, cmd: TokenCommand,
                      commands: SinkCommands = Depends(get_commands)):
    """Open the add-speaker form."""
    return await dispatch(request, commands.add_speaker, cmd)


@router.post("/speakers/edit")
async def edit_speaker(request: Request, cmd: TargetCommand,
                       commands: SinkCommands = Depends(get_commands)):
    """Open the edit form for a speaker."""
    return await dispatch(request, commands.edit_speaker, cmd)


@router.post("/speakers/save-new")
async def save_new_speaker(request: Request, cmd: SpeakerCommand,
                           commands: SinkCommands = Depends(get_commands)):
    """Validate and store a new speaker."""
    return await dispatch(request, commands.save_new_speaker, cmd)


@router.post("/speakers/save")
async def save_speaker(request: Request, cmd: SpeakerCommand,
                       commands: SinkCommands = Depends(get_commands)):
    """Validate and store changes to an existing speaker."""
    return await dispatch(request, commands.save_speaker, cmd)


@router.post("/speakers/delete")
async def delete_speaker(request: Request, cmd: TargetCommand,
                         commands: SinkCommands = Depends(get_commands)):
    """Delete a speaker (already confirmed by the user)."""
    return await dispatch(request, commands.delete_speaker, cmd)
