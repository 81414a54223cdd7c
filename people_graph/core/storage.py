"""
Person storage with JSON persistence
Handles all keyed operations on the people collection

This module is part of people_graph.core - the entity store layer.
It provides the PersonStore interface and two implementations:
- InMemoryPersonStore: dict of documents keyed by name
- JsonPersonStore: the same, persisted to a JSON file after every mutation

Concurrency Safety:
- Uses threading.RLock so every store call is atomic on its own
- rename_with_references holds the lock across the reference rewrite and
  the re-key, so a rename is one atomic store call
- Mutations build the next state aside and swap it in only after it has been
  persisted; a failed write leaves memory matching the file
- Uses a sidecar lock file (<json>.lock, fcntl on Unix, msvcrt on Windows)
  so processes sharing the JSON file serialize their writes and reads
- Implements atomic writes via temp file + rename

"Not found" is an expected outcome here: lookups and updates return None
instead of raising. Only a duplicate insert or a rename onto a taken name
raises (ConflictError).
"""

import json
import logging
import os
import sys
import tempfile
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .errors import ConflictError, StoreFailureError
from .models import Person

logger = logging.getLogger(__name__)


# Cross-platform file locking
if sys.platform == 'win32':
    import msvcrt

    def _lock_file(f, exclusive=True):
        """Acquire file lock on Windows."""
        msvcrt.locking(f.fileno(), msvcrt.LK_NBLCK if exclusive else msvcrt.LK_LOCK, 1)

    def _unlock_file(f):
        """Release file lock on Windows."""
        msvcrt.locking(f.fileno(), msvcrt.LK_UNLCK, 1)
else:
    import fcntl

    def _lock_file(f, exclusive=True):
        """Acquire file lock on Unix."""
        fcntl.flock(f, fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)

    def _unlock_file(f):
        """Release file lock on Unix."""
        fcntl.flock(f, fcntl.LOCK_UN)


@contextmanager
def _locked(lock_path: Path, exclusive: bool = True):
    """Hold an OS lock on lock_path, creating the file if needed."""
    with open(lock_path, 'a+', encoding='utf-8') as f:
        _lock_file(f, exclusive=exclusive)
        try:
            yield
        finally:
            _unlock_file(f)


# Fields that update_fields is allowed to touch
UPDATABLE_FIELDS = {'name', 'relation', 'location'}


class PersonStore(ABC):
    """Keyed collection of Person records. The graph service is its only caller."""

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[Person]:
        """Exact-match lookup. Returns None when absent."""

    @abstractmethod
    def find_many_by_names(self, names: Iterable[str]) -> List[Person]:
        """Return the existing people whose name is in names. Unknown names are omitted."""

    @abstractmethod
    def find_all(self) -> List[Person]:
        """Full scan, for inspection only."""

    @abstractmethod
    def insert(self, person: Person) -> Person:
        """Insert a new person. Raises ConflictError if the name is taken."""

    @abstractmethod
    def update_fields(self, name: str, fields: Dict[str, Any]) -> Optional[Person]:
        """Apply only the given fields. Returns the updated person or None."""

    @abstractmethod
    def replace_connections(self, name: str, connections: List[str]) -> Optional[Person]:
        """Overwrite the full connection list of one person. Returns it, or None if absent."""

    @abstractmethod
    def rename_references_in_all_connections(self, old_name: str, new_name: str) -> int:
        """Replace old_name with new_name in every connection list. Returns people affected."""

    def rename_with_references(self, old_name: str, fields: Dict[str, Any]) -> Optional[Person]:
        """
        Rename a person and retarget every reference to it.

        References are rewritten first, then the person is re-keyed with the
        remaining fields applied. Raises ConflictError before any write if the
        new name is taken. Returns None if old_name is absent.

        This default runs the two steps back to back; stores with a lock
        override it to hold that lock across both.
        """
        new_name = fields.get('name', old_name)
        if self.find_by_name(old_name) is None:
            return None
        if new_name == old_name:
            return self.update_fields(old_name, fields)
        if self.find_by_name(new_name) is not None:
            raise ConflictError(new_name)

        affected = self.rename_references_in_all_connections(old_name, new_name)
        updated = self.update_fields(old_name, fields)
        logger.info(
            "Renamed '%s' -> '%s' (%d connection lists updated)",
            old_name, new_name, affected,
        )
        return updated


class InMemoryPersonStore(PersonStore):
    """
    Stores people in a dict keyed by name.

    Thread-safety:
    - All public methods are protected by _lock (threading.RLock)
    - Records are copied on the way in and out, so callers never hold
      references to stored state
    - Writes are copy-on-write: the next dict is persisted, then swapped in
    """

    def __init__(self):
        # RLock allows same thread to acquire lock multiple times (reentrant)
        self._lock = threading.RLock()
        self.people: Dict[str, Person] = {}  # name -> Person
        self._batch_depth = 0

    def _persist(self, people: Dict[str, Person]) -> None:
        """Hook called with the next state before it is swapped in. Nothing to do in memory."""

    def _commit(self, people: Dict[str, Person]) -> None:
        # Inside a batch the outermost _batch persists once
        if not self._batch_depth:
            self._persist(people)
        self.people = people

    @contextmanager
    def _batch(self):
        """Group several writes under the lock into one persisted commit."""
        with self._lock:
            snapshot = self.people
            self._batch_depth += 1
            try:
                yield
            except Exception:
                self.people = snapshot
                raise
            finally:
                self._batch_depth -= 1

            if not self._batch_depth and self.people is not snapshot:
                try:
                    self._persist(self.people)
                except StoreFailureError:
                    self.people = snapshot
                    raise

    def find_by_name(self, name: str) -> Optional[Person]:
        with self._lock:
            person = self.people.get(name)
            return person.model_copy(deep=True) if person else None

    def find_many_by_names(self, names: Iterable[str]) -> List[Person]:
        wanted = set(names)
        with self._lock:
            return [
                person.model_copy(deep=True)
                for name, person in self.people.items()
                if name in wanted
            ]

    def find_all(self) -> List[Person]:
        with self._lock:
            return [person.model_copy(deep=True) for person in self.people.values()]

    def insert(self, person: Person) -> Person:
        with self._lock:
            if person.name in self.people:
                raise ConflictError(person.name)

            stored = person.model_copy(deep=True)
            people = dict(self.people)
            people[stored.name] = stored
            self._commit(people)

            logger.info("Inserted person '%s'", stored.name)
            return stored.model_copy(deep=True)

    def update_fields(self, name: str, fields: Dict[str, Any]) -> Optional[Person]:
        """
        Update scalar fields of an existing person.

        Unknown keys are ignored. If 'name' changes, the document is re-keyed;
        re-keying onto a name held by another person raises ConflictError
        rather than overwriting it.
        """
        with self._lock:
            current = self.people.get(name)
            if current is None:
                return None

            updates = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
            new_name = updates.get('name', name)
            if new_name != name and new_name in self.people:
                raise ConflictError(new_name)

            updated = Person.model_validate({**current.to_dict(), **updates})

            people = dict(self.people)
            if new_name != name:
                del people[name]
            people[updated.name] = updated
            self._commit(people)

            return updated.model_copy(deep=True)

    def replace_connections(self, name: str, connections: List[str]) -> Optional[Person]:
        with self._lock:
            person = self.people.get(name)
            if person is None:
                return None

            updated = person.model_copy(update={'connections': list(connections)})
            people = dict(self.people)
            people[name] = updated
            self._commit(people)

            return updated.model_copy(deep=True)

    def rename_references_in_all_connections(self, old_name: str, new_name: str) -> int:
        with self._lock:
            affected = 0
            people = {}
            for name, person in self.people.items():
                if old_name in person.connections:
                    person = person.model_copy(update={'connections': [
                        new_name if conn == old_name else conn
                        for conn in person.connections
                    ]})
                    affected += 1
                people[name] = person

            if affected:
                self._commit(people)

            logger.info(
                "Renamed references '%s' -> '%s' in %d connection lists",
                old_name, new_name, affected,
            )
            return affected

    def rename_with_references(self, old_name: str, fields: Dict[str, Any]) -> Optional[Person]:
        with self._batch():
            return super().rename_with_references(old_name, fields)


class JsonPersonStore(InMemoryPersonStore):
    """
    Person store persisted as a single JSON document collection.

    File layout: {"people": [{name, relation, location, connections}, ...],
                  "metadata": {...}}

    Locked: a sidecar <json>.lock file is held exclusively while saving and
    shared while loading, so processes on the same file never interleave a
    write with another write or a read.
    Atomic: writes go to a temp file first, then are renamed into place.
    """

    def __init__(self, json_path: str = "people.json"):
        """
        Initialize JsonPersonStore.

        Args:
            json_path: Path to the JSON file for persistence. Created empty
                       if it does not exist.
        """
        super().__init__()
        self.json_path = Path(json_path)
        self.lock_path = self.json_path.with_name(self.json_path.name + '.lock')
        self.metadata: Dict[str, Any] = {
            "version": "1.0",
            "collection": "people",
        }
        self.load()

    def _persist(self, people: Dict[str, Person]) -> None:
        self.save(people)

    def load(self) -> None:
        """
        Load the collection from the JSON file.

        Raises:
            StoreFailureError: if the file cannot be read or parsed
        """
        with self._lock:
            if not self.json_path.exists():
                logger.info("No people file found at %s, creating new empty collection", self.json_path)
                self.save({})
                self.people = {}
                return

            try:
                with _locked(self.lock_path, exclusive=False):
                    with open(self.json_path, 'r', encoding='utf-8') as f:
                        data = json.load(f)

                if not isinstance(data, dict):
                    raise ValueError("expected a JSON object at the top level")

                people = {}
                for person_data in data.get('people', []):
                    person = Person.from_dict(person_data)
                    people[person.name] = person
            except (OSError, ValueError) as e:
                logger.error("Error loading people from %s: %s", self.json_path, e)
                raise StoreFailureError(f"Could not load {self.json_path}: {e}") from e

            metadata = data.get('metadata')
            if isinstance(metadata, dict):
                self.metadata = {**self.metadata, **metadata}

            self.people = people
            logger.info("Loaded %d people from %s", len(self.people), self.json_path)

    def save(self, people: Optional[Dict[str, Person]] = None) -> None:
        """
        Save a collection to the JSON file.

        Args:
            people: The state to write. Defaults to the current collection.

        Raises:
            StoreFailureError: if the file cannot be written
        """
        with self._lock:
            if people is None:
                people = self.people

            data = {
                'people': [person.to_dict() for person in people.values()],
                'metadata': {
                    **self.metadata,
                    'last_updated': datetime.now(timezone.utc).isoformat(),
                },
            }

            temp_path = None
            try:
                self.json_path.parent.mkdir(parents=True, exist_ok=True)

                with _locked(self.lock_path, exclusive=True):
                    temp_fd, temp_path = tempfile.mkstemp(
                        suffix='.json',
                        prefix='people_',
                        dir=self.json_path.parent,
                    )
                    with os.fdopen(temp_fd, 'w', encoding='utf-8') as f:
                        json.dump(data, f, indent=2, ensure_ascii=False)
                        f.flush()
                        os.fsync(f.fileno())

                    os.replace(temp_path, self.json_path)
            except OSError as e:
                if temp_path and os.path.exists(temp_path):
                    os.unlink(temp_path)
                logger.error("Error saving people to %s: %s", self.json_path, e)
                raise StoreFailureError(f"Could not save {self.json_path}: {e}") from e

            logger.debug("Saved %d people to %s", len(people), self.json_path)

    def reload(self) -> None:
        """
        Reload the collection from disk, discarding any in-memory changes.

        Useful for refreshing state after external modifications.
        """
        self.load()
