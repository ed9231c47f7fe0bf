"""Tests for the speaker command handlers."""
from sinks.models import SpeakerCommand, TargetCommand, TokenCommand, UNASSIGNED

from app.commands import SinkCommands
from app.notifier import EventQueue
from app.store import DocumentStore


class TestAddSpeaker:
    """Test adding speakers."""

    def test_add_opens_form(self, commands: SinkCommands) -> None:
        snapshot = commands.add_speaker(TokenCommand(token=0))
        assert snapshot.speakers.in_add_mode is True
        assert snapshot.speakers.save_new.data["sw"] == UNASSIGNED
        assert snapshot.switches.in_add_mode is False

    def test_save_new(self, commands: SinkCommands, seeded_store: DocumentStore, events: EventQueue) -> None:
        cmd = SpeakerCommand(token=0, id=-1, name="Patio Speaker", sw=7, device="hw:2,0",
                             mixer="Digital", control="Master")

        commands.save_new_speaker(cmd)

        doc = seeded_store.load()
        assert doc.indices.speakers == 3
        patio = doc.find_speaker(2)
        assert (patio.name, patio.sw, patio.device) == ("Patio Speaker", 7, "hw:2,0")
        assert patio.playing is False
        assert events.drain()[-1].data["message"] == "New speaker added!"

    def test_unknown_switch_rejected(self, commands: SinkCommands, seeded_store: DocumentStore) -> None:
        cmd = SpeakerCommand(token=0, id=-1, name="Patio Speaker", sw=42)

        snapshot = commands.save_new_speaker(cmd)

        assert snapshot.speakers.errors == ["Switch does not exist."]
        assert snapshot.speakers.in_add_mode is True
        assert seeded_store.load().indices.speakers == 2


class TestEditSpeaker:
    """Test editing speakers."""

    def test_edit_opens_form(self, commands: SinkCommands) -> None:
        snapshot = commands.edit_speaker(TargetCommand(token=0, id=1))
        assert snapshot.speakers.in_edit_mode is True
        assert snapshot.speakers.edit_id == 1

    def test_save(self, commands: SinkCommands, seeded_store: DocumentStore) -> None:
        cmd = SpeakerCommand(token=0, id=1, name="Desk Monitors", sw=UNASSIGNED, device="hw:3,0")

        commands.save_speaker(cmd)

        desk = seeded_store.load().find_speaker(1)
        assert desk.sw == UNASSIGNED
        assert desk.device == "hw:3,0"

    def test_duplicate_name(self, commands: SinkCommands, seeded_store: DocumentStore) -> None:
        cmd = SpeakerCommand(token=0, id=1, name="Bookshelf", sw=7)

        snapshot = commands.save_speaker(cmd)

        assert snapshot.speakers.errors == ["Name is not unique."]
        assert snapshot.speakers.edit_id == 1
        assert seeded_store.load().find_speaker(1).name == "Desk Monitors"

    def test_save_unknown_speaker(self, commands: SinkCommands, events: EventQueue) -> None:
        assert commands.save_speaker(SpeakerCommand(token=0, id=9, name="Ghost Speaker")) is None
        assert events.drain()[-1].data["title"] == "Not Found"


def test_delete_speaker(commands: SinkCommands, seeded_store: DocumentStore) -> None:
    commands.delete_speaker(TargetCommand(token=0, id=0))

    doc = seeded_store.load()
    assert [s.id for s in doc.speakers] == [1]
    assert [sw.id for sw in doc.switches] == [3, 7]
    assert doc.indices.speakers == 2
