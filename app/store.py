"""JSON document store for switch and speaker configuration."""
import json
import logging
import os
import stat
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from pydantic import ValidationError as SchemaError

from sinks.exceptions import ReadError, WriteError
from sinks.models import Document

logger = logging.getLogger(__name__)


class DocumentStore:
    """Owns read-modify-write access to the persisted configuration document.

    Nothing is cached between calls: every command reloads the file so it
    always sees the latest persisted state.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def init_document(self) -> bool:
        """Create an empty document if none exists yet. Returns True if created."""
        if self.path.exists():
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.save(Document())
        logger.info(f"Created empty configuration at {self.path}")
        return True

    def load(self) -> Document:
        """
        Read and parse the persisted document.

        Raises:
            ReadError: If the file is missing, empty, not JSON or not a valid document
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ReadError(f"Failed to read {self.path}: {e}") from e

        if not raw.strip():
            raise ReadError(f"Configuration file {self.path} is empty")

        try:
            return Document.model_validate(json.loads(raw))
        except json.JSONDecodeError as e:
            raise ReadError(f"Configuration file {self.path} is not valid JSON: {e}") from e
        except SchemaError as e:
            raise ReadError(f"Configuration file {self.path} is malformed: {e}") from e

    def save(self, doc: Document) -> None:
        """
        Overwrite the persisted document.

        The document is written to a temp file next to the target and moved
        into place, so a concurrent load never sees a partial write.

        Raises:
            WriteError: If the document could not be written
        """
        data = doc.model_dump_json(indent=2)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            # mkstemp creates 0600; keep the mode of the file being replaced
            if self.path.exists():
                os.chmod(tmp_name, stat.S_IMODE(self.path.stat().st_mode))
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise WriteError(f"Failed to write {self.path}: {e}") from e
        logger.debug(f"Saved configuration to {self.path}")

    @contextmanager
    def edit(self) -> Iterator[Document]:
        """Context manager for a read-modify-write cycle.

        Yields the loaded document; it is saved only if the block completes
        without raising.
        """
        doc = self.load()
        yield doc
        self.save(doc)
