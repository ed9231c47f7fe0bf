"""Command handlers for the switch and speaker settings UI.

Every command carries the token of the snapshot the user acted on. A command
with any other token is dropped without a notification; an accepted command
advances the token before it builds the next snapshot.
"""
import functools
import logging
import threading
from dataclasses import dataclass
from typing import Optional

from sinks.exceptions import (
    EntityNotFoundError,
    ReadError,
    StaleTokenError,
    ValidationError,
    WriteError,
)
from sinks.models import (
    UNASSIGNED,
    Speaker,
    SpeakerCommand,
    Switch,
    SwitchCommand,
    SwitchStatus,
    TargetCommand,
    TokenCommand,
)
from sinks.validators import format_errors, validate_speaker, validate_switch

from app.notifier import Notifier
from app.snapshot import (
    SectionMode,
    SnapshotBuilder,
    UISnapshot,
    blank_speaker,
    blank_switch,
    render_snapshot,
)
from app.store import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Command sequence of the settings UI."""
    token: int = 0

    def check(self, token: int) -> None:
        if token != self.token:
            raise StaleTokenError(self.token, token)

    def advance(self) -> int:
        self.token += 1
        return self.token


def command(func):
    """Guard a handler with the session token and report store failures."""
    @functools.wraps(func)
    def wrapper(self: "SinkCommands", cmd: TokenCommand) -> Optional[UISnapshot]:
        with self.lock:
            try:
                self.session.check(cmd.token)
            except StaleTokenError as e:
                logger.debug(f"Ignoring {func.__name__}: {e}")
                return None

            self.session.advance()
            self._busy = False
            try:
                return func(self, cmd)
            except ReadError as e:
                logger.error(f"{func.__name__} failed: {e}")
                self._fail("Config Read Error", str(e))
            except WriteError as e:
                logger.error(f"{func.__name__} failed: {e}")
                self._fail("Config Write Error", str(e))
            except EntityNotFoundError as e:
                logger.warning(f"{func.__name__}: {e}")
                self._fail("Not Found", str(e), push_view=True)
            return None
    return wrapper


class SinkCommands:
    """Handlers for the add/edit/save/delete/refresh/cancel commands."""

    def __init__(
        self,
        store: DocumentStore,
        snapshots: SnapshotBuilder,
        notifier: Notifier,
        session: Optional[Session] = None
    ):
        self.store = store
        self.snapshots = snapshots
        self.notifier = notifier
        self.session = session or Session()
        self.lock = threading.RLock()
        self._busy = False

    # --- Notification helpers ---

    def _show_busy(self) -> None:
        self._busy = True
        self.notifier.show_busy()

    def _hide_busy(self) -> None:
        if self._busy:
            self._busy = False
            self.notifier.hide_busy()

    def _push(self, snapshot: UISnapshot) -> UISnapshot:
        self.notifier.push_ui_config(snapshot.model_dump())
        return snapshot

    def _push_latest(self, message: Optional[str] = None) -> UISnapshot:
        """Rescan, push the view-mode snapshot and report success."""
        snapshot = self._push(self.snapshots.build(self.session.token, scan=True))
        self._hide_busy()
        if message:
            self.notifier.toast("success", "Success", message)
        return snapshot

    def _reject(self, error: ValidationError, **modes: SectionMode) -> UISnapshot:
        """Re-render the form with the submitted values and the violations."""
        logger.info(f"Rejected input: {error}")
        snapshot = self._push(self.snapshots.build(self.session.token, **modes))
        self._hide_busy()
        self.notifier.toast("error", "Input Error", format_errors(error.messages))
        return snapshot

    def _fail(self, title: str, message: str, push_view: bool = False) -> None:
        if push_view:
            try:
                self._push(self.snapshots.build(self.session.token))
            except (ReadError, WriteError) as e:
                logger.error(f"Could not rebuild settings view: {e}")
        self._hide_busy()
        self.notifier.toast("error", title, message)

    # --- Read path ---

    def get_ui_config(self, full_scan: bool = True) -> UISnapshot:
        """Build the current view-mode snapshot without consuming a token."""
        with self.lock:
            return self.snapshots.build(self.session.token, scan=full_scan)

    # --- Shared commands ---

    @command
    def refresh(self, cmd: TokenCommand) -> UISnapshot:
        self._show_busy()
        return self._push_latest()

    @command
    def cancel(self, cmd: TokenCommand) -> UISnapshot:
        self._show_busy()
        snapshot = self._push(self.snapshots.build(self.session.token))
        self._hide_busy()
        return snapshot

    # --- Switches ---

    @command
    def add_switch(self, cmd: TokenCommand) -> UISnapshot:
        return self._push(self.snapshots.build(
            self.session.token, switches=SectionMode.adding(blank_switch())
        ))

    @command
    def edit_switch(self, cmd: TargetCommand) -> UISnapshot:
        doc = self.store.load()
        if doc.find_switch(cmd.id) is None:
            raise EntityNotFoundError("switch", cmd.id)
        return self._push(render_snapshot(
            doc, self.session.token, switches=SectionMode.editing(cmd.id)
        ))

    @command
    def save_new_switch(self, cmd: SwitchCommand) -> UISnapshot:
        self._show_busy()
        try:
            with self.store.edit() as doc:
                errors = validate_switch(cmd, doc.switches)
                if errors:
                    raise ValidationError(errors)

                new_switch = Switch(
                    id=doc.indices.switches,
                    name=cmd.name.strip(),
                    ip=cmd.ip.strip(),
                    mac=cmd.mac.strip(),
                    enabled=False,
                    on=False,
                    status=int(SwitchStatus.UNKNOWN),
                )
                doc.indices.switches += 1
                doc.switches.append(new_switch)
        except ValidationError as e:
            return self._reject(e, switches=SectionMode.adding(cmd.model_dump(), e.messages))

        logger.info(f"Added switch {new_switch.id} ({new_switch.name}, {new_switch.ip})")
        return self._push_latest("New switch added!")

    @command
    def save_switch(self, cmd: SwitchCommand) -> UISnapshot:
        self._show_busy()
        try:
            with self.store.edit() as doc:
                target = doc.find_switch(cmd.id)
                if target is None:
                    raise EntityNotFoundError("switch", cmd.id)
                errors = validate_switch(cmd, doc.switches, exclude_id=cmd.id)
                if errors:
                    raise ValidationError(errors)

                target.name = cmd.name.strip()
                target.ip = cmd.ip.strip()
                target.mac = cmd.mac.strip()
                target.enabled = cmd.enabled
        except ValidationError as e:
            return self._reject(
                e, switches=SectionMode.editing(cmd.id, cmd.model_dump(), e.messages)
            )

        logger.info(f"Saved switch {cmd.id}")
        return self._push_latest("Switch saved!")

    @command
    def delete_switch(self, cmd: TargetCommand) -> UISnapshot:
        self._show_busy()
        with self.store.edit() as doc:
            remaining = [sw for sw in doc.switches if sw.id != cmd.id]
            if len(remaining) == len(doc.switches):
                logger.warning(f"Switch {cmd.id} not found, nothing to delete")
            doc.switches = remaining
            # Speakers stay, they just lose their switch
            for speaker in doc.speakers:
                if speaker.sw == cmd.id:
                    speaker.sw = UNASSIGNED

        logger.info(f"Deleted switch {cmd.id}")
        return self._push_latest("Switch deleted!")

    # --- Speakers ---

    @command
    def add_speaker(self, cmd: TokenCommand) -> UISnapshot:
        return self._push(self.snapshots.build(
            self.session.token, speakers=SectionMode.adding(blank_speaker())
        ))

    @command
    def edit_speaker(self, cmd: TargetCommand) -> UISnapshot:
        doc = self.store.load()
        if doc.find_speaker(cmd.id) is None:
            raise EntityNotFoundError("speaker", cmd.id)
        return self._push(render_snapshot(
            doc, self.session.token, speakers=SectionMode.editing(cmd.id)
        ))

    @command
    def save_new_speaker(self, cmd: SpeakerCommand) -> UISnapshot:
        self._show_busy()
        try:
            with self.store.edit() as doc:
                errors = validate_speaker(cmd, doc.speakers, doc.switches)
                if errors:
                    raise ValidationError(errors)

                new_speaker = Speaker(
                    id=doc.indices.speakers,
                    name=cmd.name.strip(),
                    sw=cmd.sw,
                    device=cmd.device.strip(),
                    mixer=cmd.mixer.strip(),
                    control=cmd.control.strip(),
                    playing=False,
                )
                doc.indices.speakers += 1
                doc.speakers.append(new_speaker)
        except ValidationError as e:
            return self._reject(e, speakers=SectionMode.adding(cmd.model_dump(), e.messages))

        logger.info(f"Added speaker {new_speaker.id} ({new_speaker.name})")
        return self._push_latest("New speaker added!")

    @command
    def save_speaker(self, cmd: SpeakerCommand) -> UISnapshot:
        self._show_busy()
        try:
            with self.store.edit() as doc:
                target = doc.find_speaker(cmd.id)
                if target is None:
                    raise EntityNotFoundError("speaker", cmd.id)
                errors = validate_speaker(cmd, doc.speakers, doc.switches, exclude_id=cmd.id)
                if errors:
                    raise ValidationError(errors)

                target.name = cmd.name.strip()
                target.sw = cmd.sw
                target.device = cmd.device.strip()
                target.mixer = cmd.mixer.strip()
                target.control = cmd.control.strip()
        except ValidationError as e:
            return self._reject(
                e, speakers=SectionMode.editing(cmd.id, cmd.model_dump(), e.messages)
            )

        logger.info(f"Saved speaker {cmd.id}")
        return self._push_latest("Speaker saved!")

    @command
    def delete_speaker(self, cmd: TargetCommand) -> UISnapshot:
        self._show_busy()
        with self.store.edit() as doc:
            doc.speakers = [s for s in doc.speakers if s.id != cmd.id]

        logger.info(f"Deleted speaker {cmd.id}")
        return self._push_latest("Speaker deleted!")
