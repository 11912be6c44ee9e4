import copy
import json
import logging
import os
import tempfile
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from assessment_platform.core.config import settings
from assessment_platform.core.exceptions import StorageError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string with a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JSONCollection:
    """
    An ordered collection of documents persisted as a single JSON array.

    Every mutation runs under the collection lock, builds the new snapshot,
    writes it to a temp file and renames it over the target. The in-memory
    snapshot is only swapped once the file is in place, so a failed write
    leaves both the file and memory untouched. Reads never take the lock.
    """

    def __init__(self, name: str, path: Path, timestamp_field: str = "createdAt"):
        self.name = name
        self.path = path
        self.timestamp_field = timestamp_field
        self._lock = threading.RLock()
        self._documents: List[Document] = self._load()

    @property
    def lock(self) -> threading.RLock:
        """Write lock, for callers that validate against the current document before updating."""
        return self._lock

    def _load(self) -> List[Document]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load {self.name} from {self.path}: {e}")
            raise StorageError(f"Failed to load {self.name}") from e

        if not isinstance(data, list) or not all(isinstance(doc, dict) for doc in data):
            logger.error(f"Collection file {self.path} does not hold a JSON array of objects")
            raise StorageError(f"Failed to load {self.name}")
        return data

    def _write(self, documents: List[Document]) -> None:
        fd, tmp_path = tempfile.mkstemp(prefix=f".{self.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(documents, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            logger.error(f"Failed to save {self.name}: {e}")
            raise StorageError(f"Failed to save {self.name}") from e
        logger.debug(f"Saved {len(documents)} documents to {self.path}")

    def _commit(self, documents: List[Document]) -> None:
        self._write(documents)
        self._documents = documents

    def _new_key(self) -> str:
        existing = {doc.get("id") for doc in self._documents}
        key = uuid.uuid4().hex
        while key in existing:
            key = uuid.uuid4().hex
        return key

    def _index_of(self, key: str) -> int:
        for index, doc in enumerate(self._documents):
            if doc.get("id") == key:
                return index
        return -1

    # Reads

    def all(self) -> List[Document]:
        """Snapshot copy of every document in insertion order."""
        return copy.deepcopy(self._documents)

    def get(self, key: str) -> Optional[Document]:
        for doc in self._documents:
            if doc.get("id") == key:
                return copy.deepcopy(doc)
        return None

    def find(self, predicate: Callable[[Document], bool]) -> List[Document]:
        return [copy.deepcopy(doc) for doc in self._documents if predicate(doc)]

    def count(self) -> int:
        return len(self._documents)

    # Writes

    def insert(self, fields: Document) -> Document:
        """Store a new document, assigning its id and timestamp."""
        with self._lock:
            document = copy.deepcopy(fields)
            document["id"] = self._new_key()
            document[self.timestamp_field] = utc_now()
            self._commit(self._documents + [document])
        return copy.deepcopy(document)

    def update(self, key: str, fields: Document) -> Optional[Document]:
        """Merge non-None fields into an existing document. Returns None on a miss."""
        with self._lock:
            index = self._index_of(key)
            if index == -1:
                return None

            changes = {
                field: copy.deepcopy(value)
                for field, value in fields.items()
                if value is not None and field not in ("id", self.timestamp_field)
            }
            updated = {**self._documents[index], **changes, "updatedAt": utc_now()}

            documents = list(self._documents)
            documents[index] = updated
            self._commit(documents)
        return copy.deepcopy(updated)

    def delete(self, key: str) -> bool:
        with self._lock:
            index = self._index_of(key)
            if index == -1:
                return False
            documents = self._documents[:index] + self._documents[index + 1:]
            self._commit(documents)
        return True

    def replace_all(self, documents: List[Document]) -> None:
        with self._lock:
            self._commit(copy.deepcopy(documents))


class JSONDatabase:
    """Flat-file store holding the questions, assessments and submissions collections."""

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)
        self._ensure_data_directory()
        self._collections: Dict[str, JSONCollection] = {
            "questions": JSONCollection("questions", self._file_path("questions")),
            "assessments": JSONCollection("assessments", self._file_path("assessments")),
            "submissions": JSONCollection(
                "submissions", self._file_path("submissions"), timestamp_field="submittedAt"
            ),
        }

    def _ensure_data_directory(self) -> None:
        try:
            if not self.data_dir.exists():
                self.data_dir.mkdir(parents=True, exist_ok=True)
                logger.info(f"Created data directory: {self.data_dir}")
        except OSError as e:
            logger.error(f"Cannot create data directory {self.data_dir}: {e}")
            raise StorageError("Failed to initialise data directory") from e

    def _file_path(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def has_collection(self, name: str) -> bool:
        return name in self._collections

    def collection(self, name: str) -> JSONCollection:
        if name not in self._collections:
            raise KeyError(f"Unknown collection: {name}")
        return self._collections[name]

    def counts(self) -> Dict[str, int]:
        return {name: col.count() for name, col in self._collections.items()}

    def backup(self) -> Dict[str, List[Document]]:
        """Deep copy of every collection."""
        return {name: col.all() for name, col in self._collections.items()}

    def restore(self, data: Dict[str, List[Document]]) -> None:
        """Replace every collection with the given documents and persist them."""
        for name, col in self._collections.items():
            col.replace_all(data.get(name, []))
        logger.info(f"Restored collections: {self.counts()}")

    def clear(self) -> None:
        for col in self._collections.values():
            col.replace_all([])
        logger.info("Cleared all collections")


class DatabaseManager:
    """Singleton holder for the process-wide JSONDatabase."""

    _instance = None
    _db = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def get_database(self) -> JSONDatabase:
        """Get or open the database."""
        if self._db is None:
            self._db = JSONDatabase(settings.DATA_DIR)
            logger.info(f"Database opened at {settings.DATA_DIR}: {self._db.counts()}")
        return self._db


# Database dependency for FastAPI
def get_db() -> JSONDatabase:
    """FastAPI dependency to get database instance."""
    return DatabaseManager().get_database()
