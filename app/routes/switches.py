"""Switch settings API routes."""
from fastapi import APIRouter, Depends, Request

from sinks.models import SwitchCommand, TargetCommand, TokenCommand

from app.commands import SinkCommands
from app.dependencies import dispatch, get_commands

router = APIRouter()


@router.post("/switches/add")
async def add_switch(request: Request, cmd: TokenCommand,
                     commands: SinkCommands = Depends(get_commands)):
    """Open the add-switch form."""
    return await dispatch(request, commands.add_switch, cmd)


@router.post("/switches/edit")
async def edit_switch(request: Request, cmd: TargetCommand,
                      commands: SinkCommands = Depends(get_commands)):
    """Open the edit form for a switch."""
    return await dispatch(request, commands.edit_switch, cmd)


@router.post("/switches/save-new")
async def save_new_switch(request: Request, cmd: SwitchCommand,
                          commands: SinkCommands = Depends(get_commands)):
    """Validate and store a new switch."""
    return await dispatch(request, commands.save_new_switch, cmd)


@router.post("/switches/save")
async def save_switch(request: Request, cmd: SwitchCommand,
                      commands: SinkCommands = Depends(get_commands)):
    """Validate and store changes to an existing switch."""
    return await dispatch(request, commands.save_switch, cmd)


@router.post("/switches/delete")
async def delete_switch(request: Request, cmd: TargetCommand,
                        commands: SinkCommands = Depends(get_commands)):
    """Delete a switch (already confirmed by the user) and unbind its speakers."""
    return await dispatch(request, commands.delete_switch, cmd)
