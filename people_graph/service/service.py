"""
PeopleGraphService - Graph consistency layer for the acquaintance graph.

This module composes PersonStore calls into the externally visible
operations, independent of the transport protocol.

Key design principles:
- The store is injected; there is no module-level state
- Nothing is cached between calls; every operation re-reads the store
- Connection targets are validated strictly on write and resolved
  leniently on read (dangling references are simply omitted)
- Renames propagate to every connection list before the person itself
  is renamed. Both steps run inside one store call
  (PersonStore.rename_with_references) under the store's lock, so no other
  request observes or interleaves with a partially applied rename.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from people_graph.core import (
    Location,
    Person,
    PersonConflictError,
    PersonNotFoundError,
    PersonStore,
    PersonUpdate,
)

logger = logging.getLogger(__name__)


@dataclass
class NeighborhoodResult:
    """A person together with the resolved records of its connections."""
    subject: Person
    neighbors: List[Person] = field(default_factory=list)


class PeopleGraphService:
    """
    Central service class for all acquaintance graph operations.

    Wraps a PersonStore and provides:
    - Neighborhood queries
    - Connection edits (idempotent add/remove)
    - Partial updates with rename propagation
    - Creation with name uniqueness
    """

    def __init__(self, store: PersonStore):
        """
        Initialize PeopleGraphService with a PersonStore instance.

        Args:
            store: The store used for every read and write
        """
        self._store = store

    @property
    def store(self) -> PersonStore:
        """Access the underlying store (for advanced use cases)."""
        return self._store

    def _require(self, name: str, message: str = "Person not found") -> Person:
        person = self._store.find_by_name(name)
        if person is None:
            raise PersonNotFoundError(name, message)
        return person

    # ==================== Queries ====================

    def list_people(self) -> List[Person]:
        """Return every stored person (inspection and testing only)."""
        return self._store.find_all()

    def resolve_person_with_neighbors(self, name: str) -> NeighborhoodResult:
        """
        Look up a person and the records of everyone it connects to.

        Connections naming people that do not exist are left out of
        neighbors without error.

        Raises:
            PersonNotFoundError: if no person has this name
        """
        subject = self._require(name)
        neighbors = self._store.find_many_by_names(set(subject.connections))

        dangling = len(set(subject.connections)) - len(neighbors)
        if dangling:
            logger.debug("Person '%s' has %d dangling connection(s)", name, dangling)

        return NeighborhoodResult(subject=subject, neighbors=neighbors)

    # ==================== Connection edits ====================

    def add_connection(self, name: str, target_name: str) -> Person:
        """
        Append target_name to the connections of name.

        Both people must exist. Adding an existing connection is a no-op.

        Raises:
            PersonNotFoundError: if either person is missing
        """
        person = self._require(name)
        self._require(target_name, "Connection person not found")

        if target_name in person.connections:
            return person

        updated = self._store.replace_connections(name, person.connections + [target_name])
        if updated is None:
            raise PersonNotFoundError(name)

        logger.info("CONNECT: '%s' -> '%s'", name, target_name)
        return updated

    def remove_connection(self, name: str, target_name: str) -> Person:
        """
        Remove target_name from the connections of name.

        Removing a connection that is not present leaves the person unchanged.

        Raises:
            PersonNotFoundError: if the person is missing
        """
        person = self._require(name)

        if target_name not in person.connections:
            return person

        connections = [conn for conn in person.connections if conn != target_name]
        updated = self._store.replace_connections(name, connections)
        if updated is None:
            raise PersonNotFoundError(name)

        logger.info("DISCONNECT: '%s' -> '%s'", name, target_name)
        return updated

    # ==================== Create / update ====================

    def rename_person(self, name: str, update: PersonUpdate) -> Person:
        """
        Apply a partial update, propagating a name change store-wide.

        Fields not provided in update are left untouched. When the name
        changes, every connection list referencing the old name is
        retargeted first, then the person itself is updated, atomically
        with respect to other store calls.

        Raises:
            PersonNotFoundError: if the person is missing
            PersonConflictError: if the new name belongs to another person
        """
        self._require(name)
        fields = update.provided_fields()
        new_name = update.new_name

        if new_name is not None and new_name != name:
            updated = self._store.rename_with_references(name, fields)
            logger.info("RENAME: '%s' -> '%s'", name, new_name)
        else:
            updated = self._store.update_fields(name, fields)

        if updated is None:
            # Removed by a concurrent request after the lookup above
            raise PersonNotFoundError(name)

        logger.info("UPDATE: '%s' fields=%s", updated.name, sorted(fields))
        return updated

    update_person = rename_person

    def create_person(
        self,
        name: str,
        relation: str = "",
        location: Optional[Location] = None,
    ) -> Person:
        """
        Create a person with no connections.

        Raises:
            PersonConflictError: if a person with this name exists
        """
        if self._store.find_by_name(name) is not None:
            raise PersonConflictError(name)

        person = self._store.insert(
            Person(name=name, relation=relation, location=location, connections=[])
        )
        logger.info("CREATE: '%s'", name)
        return person
