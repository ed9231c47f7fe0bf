"""Tests for document and command models."""
from sinks.models import UNASSIGNED, Document, SpeakerCommand, SwitchStatus


class TestSpeakerCommand:
    """Test the sw field of speaker commands."""

    def test_plain_id(self) -> None:
        assert SpeakerCommand(token=1, id=0, name="Bookshelf", sw=3).sw == 3

    def test_switch_choice_is_unwrapped(self) -> None:
        """The UI echoes the picked switch back as {id, name}."""
        cmd = SpeakerCommand.model_validate(
            {"token": 1, "id": 0, "name": "Bookshelf", "sw": {"id": 3, "name": "Living Room"}}
        )
        assert cmd.sw == 3

    def test_missing_switch_is_unassigned(self) -> None:
        cmd = SpeakerCommand.model_validate({"token": 1, "id": 0, "name": "Bookshelf", "sw": None})
        assert cmd.sw == UNASSIGNED


class TestDocument:
    """Test the persisted document model."""

    def test_defaults(self) -> None:
        doc = Document()
        assert doc.switches == []
        assert doc.speakers == []
        assert doc.indices.switches == 0
        assert doc.indices.speakers == 0

    def test_unknown_keys_survive(self) -> None:
        doc = Document.model_validate({"switches": [], "speakers": [], "indices": {}, "zones": [{"id": 1}]})
        assert doc.model_dump()["zones"] == [{"id": 1}]

    def test_find(self) -> None:
        doc = Document.model_validate({
            "switches": [{"id": 4, "name": "Porch Light"}],
            "speakers": [{"id": 2, "name": "Porch Speaker", "sw": 4}],
        })
        assert doc.find_switch(4).name == "Porch Light"
        assert doc.find_switch(5) is None
        assert doc.find_speaker(2).sw == 4
        assert doc.find_speaker(0) is None

    def test_switch_status_defaults_to_unknown(self) -> None:
        doc = Document.model_validate({"switches": [{"id": 4, "name": "Porch Light"}]})
        assert doc.switches[0].status == SwitchStatus.UNKNOWN
        assert doc.switches[0].reachable is False
