"""
Pytest configuration and fixtures.
"""
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import List, Optional

from definer.commands.dispatcher import CommandDispatcher
from definer.core.interfaces import IDefinitionEditor, IFileIO, IRenderer
from definer.core.models import Definition, EditorValues, ResultDescriptor, StyleClass
from definer.glossary.serialization import dumps
from definer.glossary.storage import MemoryStorage
from definer.glossary.store import DefinitionStore


class RecordingRenderer(IRenderer):
    """Keeps every rendered descriptor."""

    def __init__(self):
        self.rendered: List[ResultDescriptor] = []
        self.clears = 0

    def render(self, descriptor: ResultDescriptor) -> None:
        self.rendered.append(descriptor)

    def clear(self) -> None:
        self.rendered = []
        self.clears += 1

    @property
    def last(self) -> ResultDescriptor:
        return self.rendered[-1]

    def styles(self) -> List[StyleClass]:
        return [d.style for d in self.rendered]


class FakeEditor(IDefinitionEditor):
    """Editor whose field values are set directly by the test."""

    def __init__(self):
        self._open = False
        self.opened_with: Optional[Definition] = None
        self.values = EditorValues()
        self.messages: List[str] = []

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self, definition: Optional[Definition] = None) -> None:
        self._open = True
        self.opened_with = definition
        self.values = EditorValues.from_definition(definition) if definition else EditorValues()

    def close(self) -> None:
        self._open = False

    def get_values(self) -> EditorValues:
        return self.values

    def set_message(self, message: str) -> None:
        self.messages.append(message)

    def fill(self, term="", aliases="", tags="", definition=""):
        self.values = EditorValues.from_raw(term, aliases, tags, definition)


class FakeFileIO(IFileIO):
    """Holds import callbacks until the test completes them."""

    def __init__(self):
        self.callbacks = []
        self.downloads = []

    def request_import(self, on_loaded) -> None:
        self.callbacks.append(on_loaded)

    def save_download(self, filename: str, content: bytes) -> None:
        self.downloads.append((filename, content))

    def complete(self, text: str):
        return self.callbacks.pop(0)(text)


@pytest.fixture
def temp_dir():
    """Create temporary directory."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_definitions():
    """Small collection used across tests."""
    return [
        Definition("vector", "An element of a vector space.", aliases=["vec"], tags=["linear-algebra"]),
        Definition("matrix", "A rectangular array of numbers.", aliases=["matrices"], tags=["Linear-Algebra"]),
        Definition("derivative", "Instantaneous rate of change.", tags=["calculus"]),
        Definition("Integral", "Signed area under a curve.", aliases=["antiderivative"], tags=["calculus"]),
    ]


@pytest.fixture
def storage(sample_definitions):
    return MemoryStorage(dumps(sample_definitions))


@pytest.fixture
def store(storage):
    store = DefinitionStore(storage, defaults=list)
    store.load()
    return store


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def editor():
    return FakeEditor()


@pytest.fixture
def file_io():
    return FakeFileIO()


@pytest.fixture
def dispatcher(store, renderer, editor, file_io):
    return CommandDispatcher(store, renderer, editor, file_io)


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch, tmp_path):
    """Setup test environment variables."""
    monkeypatch.setenv("TESTING", "true")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in ("DEFINER_CONFIG", "DEFINER_DATA_PATH", "DEFINER_EXPORT_DIR", "DEFINER_SUGGESTION_THRESHOLD"):
        monkeypatch.delenv(name, raising=False)
