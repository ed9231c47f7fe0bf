"""Data models for switches, speakers and the persisted document."""
from enum import IntEnum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Speaker.sw value for a speaker not bound to any switch
UNASSIGNED = -1


class SwitchStatus(IntEnum):
    """Last known state of a switch."""
    SCAN_ERROR = -5
    NO_IP = -3
    UNKNOWN = -1
    OFF = 0
    ON = 1


class Switch(BaseModel):
    """Network-controlled power outlet."""
    id: int = Field(description="Switch id (allocated from indices.switches)")
    name: str = Field(description="Display name")
    ip: str = Field(default="", description="IPv4 address of the switch")
    mac: str = Field(default="", description="MAC address")
    enabled: bool = Field(default=False, description="Whether the switch is in use")
    on: bool = Field(default=False, description="Requested power state")
    status: int = Field(default=int(SwitchStatus.UNKNOWN), description="Last scanned status")
    reachable: bool = Field(default=False, description="Whether the last full scan reached the switch")


class Speaker(BaseModel):
    """Audio output sink, optionally powered through a switch."""
    id: int = Field(description="Speaker id (allocated from indices.speakers)")
    name: str = Field(description="Display name")
    sw: int = Field(default=UNASSIGNED, description="Id of the powering switch (-1 = unassigned)")
    device: str = Field(default="", description="ALSA output device")
    mixer: str = Field(default="", description="ALSA mixer name")
    control: str = Field(default="", description="ALSA mixer control")
    playing: bool = Field(default=False, description="Whether the speaker is currently playing")


class Indices(BaseModel):
    """Next id to allocate per entity kind."""
    switches: int = 0
    speakers: int = 0


class Document(BaseModel):
    """The persisted configuration document."""
    model_config = ConfigDict(extra="allow")

    switches: list[Switch] = Field(default_factory=list)
    speakers: list[Speaker] = Field(default_factory=list)
    indices: Indices = Field(default_factory=Indices)

    def find_switch(self, switch_id: int) -> Union[Switch, None]:
        for sw in self.switches:
            if sw.id == switch_id:
                return sw
        return None

    def find_speaker(self, speaker_id: int) -> Union[Speaker, None]:
        for speaker in self.speakers:
            if speaker.id == speaker_id:
                return speaker
        return None


# --- Commands ---

class TokenCommand(BaseModel):
    """Command carrying only the session token."""
    token: int = Field(description="Token of the snapshot the client acted on")


class TargetCommand(TokenCommand):
    """Command addressed to one entity."""
    id: int = Field(description="Target entity id (-1 for a new entity)")


class SwitchCommand(TargetCommand):
    """Submitted switch values (save and save-new)."""
    name: str = ""
    ip: str = ""
    mac: str = ""
    enabled: bool = False
    on: bool = False
    status: int = int(SwitchStatus.UNKNOWN)


class SpeakerCommand(TargetCommand):
    """Submitted speaker values (save and save-new)."""
    name: str = ""
    sw: int = UNASSIGNED
    device: str = ""
    mixer: str = ""
    control: str = ""
    playing: bool = False

    @field_validator("sw", mode="before")
    @classmethod
    def _unwrap_switch_choice(cls, value: Any) -> Any:
        # The switch picker echoes back {"id": ..., "name": ...}
        if isinstance(value, dict):
            return value.get("id", UNASSIGNED)
        if value is None:
            return UNASSIGNED
        return value
