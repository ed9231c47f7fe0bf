"""Tests for the JSON document store."""
import json
import stat
from pathlib import Path

import pytest

from sinks.exceptions import ReadError, WriteError
from sinks.models import Document, Switch

from app.store import DocumentStore

from conftest import make_document


class TestLoad:
    """Test loading the persisted document."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ReadError):
            DocumentStore(tmp_path / "absent.json").load()

    def test_empty_file(self, config_path: Path) -> None:
        config_path.write_text("")
        with pytest.raises(ReadError):
            DocumentStore(config_path).load()

    def test_invalid_json(self, config_path: Path) -> None:
        config_path.write_text("{not json")
        with pytest.raises(ReadError):
            DocumentStore(config_path).load()

    def test_wrong_shape(self, config_path: Path) -> None:
        config_path.write_text(json.dumps({"switches": [{"name": "no id"}]}))
        with pytest.raises(ReadError):
            DocumentStore(config_path).load()

    def test_loads_document(self, seeded_store: DocumentStore) -> None:
        doc = seeded_store.load()
        assert [sw.id for sw in doc.switches] == [3, 7]
        assert doc.indices.switches == 8


class TestInit:
    """Test creating the initial document."""

    def test_creates_empty_document(self, config_path: Path) -> None:
        store = DocumentStore(config_path)
        assert store.init_document() is True
        assert store.load() == Document()

    def test_keeps_existing_file(self, seeded_store: DocumentStore) -> None:
        assert seeded_store.init_document() is False
        assert len(seeded_store.load().switches) == 2

    def test_does_not_repair_corrupt_file(self, config_path: Path) -> None:
        config_path.write_text("")
        store = DocumentStore(config_path)
        assert store.init_document() is False
        with pytest.raises(ReadError):
            store.load()


class TestSave:
    """Test writing the document."""

    def test_round_trip(self, seeded_store: DocumentStore) -> None:
        """save(load()) keeps the logical content."""
        before = json.loads(seeded_store.path.read_text())
        seeded_store.save(seeded_store.load())
        assert json.loads(seeded_store.path.read_text()) == before
        assert seeded_store.load() == make_document()

    def test_no_temp_files_left(self, seeded_store: DocumentStore) -> None:
        seeded_store.save(seeded_store.load())
        assert [p.name for p in seeded_store.path.parent.iterdir()] == ["config.json"]

    def test_keeps_file_mode(self, seeded_store: DocumentStore) -> None:
        seeded_store.path.chmod(0o644)
        seeded_store.save(seeded_store.load())
        assert stat.S_IMODE(seeded_store.path.stat().st_mode) == 0o644

    def test_write_failure(self, tmp_path: Path) -> None:
        store = DocumentStore(tmp_path / "missing-dir" / "config.json")
        with pytest.raises(WriteError):
            store.save(Document())


class TestEdit:
    """Test the read-modify-write helper."""

    def test_saves_on_success(self, seeded_store: DocumentStore) -> None:
        with seeded_store.edit() as doc:
            doc.switches.append(Switch(id=8, name="Attic Plug"))
        assert seeded_store.load().find_switch(8) is not None

    def test_discards_on_error(self, seeded_store: DocumentStore) -> None:
        with pytest.raises(RuntimeError):
            with seeded_store.edit() as doc:
                doc.switches.clear()
                raise RuntimeError("abort")
        assert len(seeded_store.load().switches) == 2
