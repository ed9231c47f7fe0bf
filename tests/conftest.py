"""Test fixtures for configured sinks tests."""
from pathlib import Path

import httpx
import pytest

from sinks import SwitchStatusClient
from sinks.models import Document, Indices, Speaker, Switch

from app.commands import SinkCommands
from app.notifier import EventQueue
from app.scanner import SwitchScanner
from app.snapshot import SnapshotBuilder
from app.store import DocumentStore


class FakeSwitchNetwork:
    """Stub LAN of smart switches, keyed by IP.

    IPs without a registered response refuse the connection.
    """

    def __init__(self) -> None:
        self.responses: dict[str, httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def power(self, ip: str, value) -> None:
        """Register a switch answering with the given Status.Power value."""
        self.responses[ip] = httpx.Response(200, json={"Status": {"Power": value, "Topic": "tasmota"}})

    def reply(self, ip: str, response: httpx.Response) -> None:
        self.responses[ip] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.get(request.url.host)
        if response is None:
            raise httpx.ConnectError("Connection refused", request=request)
        return response

    def client_factory(self) -> SwitchStatusClient:
        return SwitchStatusClient(timeout=1.0, transport=httpx.MockTransport(self.handler))


def make_document() -> Document:
    """Return a document with two switches and two speakers."""
    return Document(
        switches=[
            Switch(id=3, name="Living Room", ip="192.168.1.20", mac="AA:BB:CC:DD:EE:20"),
            Switch(id=7, name="Office Plug", ip="192.168.1.21", mac="AA:BB:CC:DD:EE:21", enabled=True),
        ],
        speakers=[
            Speaker(id=0, name="Bookshelf", sw=3, device="hw:0,0", mixer="PCM", control="Master"),
            Speaker(id=1, name="Desk Monitors", sw=7, device="hw:1,0"),
        ],
        indices=Indices(switches=8, speakers=2),
    )


@pytest.fixture
def network() -> FakeSwitchNetwork:
    """Return an empty stub switch network."""
    return FakeSwitchNetwork()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config.json"


@pytest.fixture
def store(config_path: Path) -> DocumentStore:
    """Return a store holding an empty document."""
    store = DocumentStore(config_path)
    store.init_document()
    return store


@pytest.fixture
def seeded_store(store: DocumentStore) -> DocumentStore:
    """Return a store holding make_document()."""
    store.save(make_document())
    return store


@pytest.fixture
def scanner(network: FakeSwitchNetwork) -> SwitchScanner:
    return SwitchScanner(network.client_factory, max_workers=4)


@pytest.fixture
def events() -> EventQueue:
    return EventQueue()


@pytest.fixture
def commands(seeded_store: DocumentStore, scanner: SwitchScanner, events: EventQueue) -> SinkCommands:
    """Return command handlers over the seeded document."""
    return SinkCommands(seeded_store, SnapshotBuilder(seeded_store, scanner), events)
