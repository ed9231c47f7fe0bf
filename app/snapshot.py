"""UI snapshot: the settings descriptor built from the configuration document.

A snapshot lists switches and speakers, and for every element carries the
actions the UI may send back. Each action embeds the session token the
snapshot was built with, so a click on an outdated snapshot is rejected.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from pydantic import BaseModel, Field

from sinks.models import UNASSIGNED, Document, Speaker, Switch, SwitchStatus

from app.scanner import SwitchScanner, apply_scan_results
from app.store import DocumentStore

logger = logging.getLogger(__name__)

VIEW = "view"
ADD = "add"
EDIT = "edit"


class Confirm(BaseModel):
    """Confirmation the UI must obtain before sending the action."""
    title: str
    message: str


class Action(BaseModel):
    """A UI control and the command it sends."""
    id: str = Field(description="Control identifier")
    method: str = Field(description="Command path under /api")
    data: dict[str, Any] = Field(default_factory=dict, description="Command body")
    confirm: Optional[Confirm] = None


class SwitchView(Switch):
    edit: Action
    save: Action
    delete: Action


class SpeakerView(Speaker):
    switch_name: str = ""
    edit: Action
    save: Action
    delete: Action


class SwitchChoice(BaseModel):
    id: int
    name: str


class SwitchSection(BaseModel):
    id: str = "switches_definitions"
    content: list[SwitchView] = Field(default_factory=list)
    add: Action
    save_new: Optional[Action] = None
    in_add_mode: bool = False
    in_edit_mode: bool = False
    edit_id: int = -1
    errors: list[str] = Field(default_factory=list)


class SpeakerSection(BaseModel):
    id: str = "speakers_definitions"
    content: list[SpeakerView] = Field(default_factory=list)
    switches: list[SwitchChoice] = Field(default_factory=list)
    add: Action
    save_new: Optional[Action] = None
    in_add_mode: bool = False
    in_edit_mode: bool = False
    edit_id: int = -1
    errors: list[str] = Field(default_factory=list)


class UISnapshot(BaseModel):
    token: int
    switches: SwitchSection
    speakers: SpeakerSection
    cancel: Action
    refresh: Action


@dataclass
class SectionMode:
    """Mode of one entity list: viewing, adding, or editing one entity.

    `draft` holds the values to prefill the add/edit form with (the submitted
    values when validation failed), `errors` the validation messages.
    """
    mode: str = VIEW
    target_id: int = -1
    draft: Optional[dict[str, Any]] = None
    errors: list[str] = field(default_factory=list)

    @classmethod
    def adding(cls, draft: dict[str, Any], errors: Optional[list[str]] = None) -> "SectionMode":
        return cls(ADD, -1, draft, list(errors or []))

    @classmethod
    def editing(
        cls,
        target_id: int,
        draft: Optional[dict[str, Any]] = None,
        errors: Optional[list[str]] = None
    ) -> "SectionMode":
        return cls(EDIT, target_id, draft, list(errors or []))


def blank_switch() -> dict[str, Any]:
    """Defaults for the add-switch form."""
    return {"id": -1, "name": "", "ip": "", "mac": "", "enabled": False, "on": False,
            "status": int(SwitchStatus.UNKNOWN)}


def blank_speaker() -> dict[str, Any]:
    """Defaults for the add-speaker form."""
    return {"id": -1, "name": "", "sw": UNASSIGNED, "device": "", "mixer": "", "control": "",
            "playing": False}


def _action(action_id: str, method: str, token: int, confirm: Optional[Confirm] = None,
            **data: Any) -> Action:
    return Action(id=action_id, method=method, data={"token": token, **data}, confirm=confirm)


def _delete_confirm(name: str) -> Confirm:
    return Confirm(title="Delete Confirmation", message=f"Are you sure you want to delete {name}?")


def _switch_section(doc: Document, token: int, mode: SectionMode) -> SwitchSection:
    content = []
    for idx, sw in enumerate(doc.switches):
        values = sw.model_dump()
        if not sw.ip.strip():
            values.update(status=int(SwitchStatus.NO_IP), reachable=False)

        save_data = {k: values[k] for k in ("id", "name", "ip", "mac", "enabled", "on", "status")}
        if mode.mode == EDIT and mode.target_id == sw.id and mode.draft is not None:
            save_data = dict(mode.draft)
        save_data.pop("token", None)

        content.append(SwitchView(
            **values,
            edit=_action(f"switch_{idx}_edit", "switches/edit", token, id=sw.id),
            save=_action(f"switch_{idx}_save", "switches/save", token, **save_data),
            delete=_action(f"switch_{idx}_delete", "switches/delete", token,
                           confirm=_delete_confirm(sw.name), id=sw.id),
        ))

    section = SwitchSection(
        content=content,
        add=_action("switch_add", "switches/add", token),
        in_add_mode=mode.mode == ADD,
        in_edit_mode=mode.mode == EDIT,
        edit_id=mode.target_id if mode.mode == EDIT else -1,
        errors=mode.errors,
    )
    if mode.mode == ADD:
        draft = {k: v for k, v in (mode.draft or blank_switch()).items() if k != "token"}
        section.save_new = _action("switch_saveNew", "switches/save-new", token, **draft)
    return section


def _speaker_section(doc: Document, token: int, mode: SectionMode) -> SpeakerSection:
    switch_names = {sw.id: sw.name for sw in doc.switches}
    content = []
    for idx, speaker in enumerate(doc.speakers):
        values = speaker.model_dump()

        save_data = dict(values)
        if mode.mode == EDIT and mode.target_id == speaker.id and mode.draft is not None:
            save_data = dict(mode.draft)
        save_data.pop("token", None)

        content.append(SpeakerView(
            **values,
            switch_name=switch_names.get(speaker.sw, ""),
            edit=_action(f"speaker_{idx}_edit", "speakers/edit", token, id=speaker.id),
            save=_action(f"speaker_{idx}_save", "speakers/save", token, **save_data),
            delete=_action(f"speaker_{idx}_delete", "speakers/delete", token,
                           confirm=_delete_confirm(speaker.name), id=speaker.id),
        ))

    section = SpeakerSection(
        content=content,
        switches=[SwitchChoice(id=sw.id, name=sw.name) for sw in doc.switches],
        add=_action("speaker_add", "speakers/add", token),
        in_add_mode=mode.mode == ADD,
        in_edit_mode=mode.mode == EDIT,
        edit_id=mode.target_id if mode.mode == EDIT else -1,
        errors=mode.errors,
    )
    if mode.mode == ADD:
        draft = {k: v for k, v in (mode.draft or blank_speaker()).items() if k != "token"}
        section.save_new = _action("speaker_saveNew", "speakers/save-new", token, **draft)
    return section


def render_snapshot(
    doc: Document,
    token: int,
    switches: Optional[SectionMode] = None,
    speakers: Optional[SectionMode] = None
) -> UISnapshot:
    """Build the UI descriptor for a document. Performs no I/O."""
    return UISnapshot(
        token=token,
        switches=_switch_section(doc, token, switches or SectionMode()),
        speakers=_speaker_section(doc, token, speakers or SectionMode()),
        cancel=_action("configured_sinks_cancel_add_edit", "cancel", token),
        refresh=_action("configured_sinks_refresh", "refresh", token),
    )


class UIConfigProvider(Protocol):
    """Supplies the settings UI descriptor to the host."""

    def get_ui_config(self, full_scan: bool = True) -> UISnapshot: ...


class SnapshotBuilder:
    """Loads the document, optionally scans switches, and renders a snapshot."""

    def __init__(self, store: DocumentStore, scanner: SwitchScanner):
        self.store = store
        self.scanner = scanner

    def build(
        self,
        token: int,
        scan: bool = False,
        switches: Optional[SectionMode] = None,
        speakers: Optional[SectionMode] = None
    ) -> UISnapshot:
        """
        Build a snapshot.

        Args:
            token: Session token to embed in every action
            scan: Probe every switch and persist the results; otherwise reuse stored statuses
            switches: Mode of the switch list
            speakers: Mode of the speaker list

        Raises:
            ReadError: If the document cannot be loaded
            WriteError: If scan results cannot be persisted
        """
        doc = self.store.load()
        if scan:
            apply_scan_results(doc, self.scanner.scan(doc.switches))
            self.store.save(doc)
        return render_snapshot(doc, token, switches, speakers)
