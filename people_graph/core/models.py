"""
Data model for the acquaintance graph.

A Person is the only entity. It is keyed by its unique name and carries
a free-text relation label, an optional location and an ordered list of
outgoing connections (names of other people).

This module is part of people_graph.core and has no HTTP or storage
dependencies.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class Location(BaseModel):
    """Geographic coordinates. Either coordinate may be missing."""
    lat: Optional[float] = None
    lon: Optional[float] = None


class Person(BaseModel):
    """A named entity with descriptive attributes and outgoing connections"""
    name: str = Field(..., min_length=1)
    relation: str = ""
    location: Optional[Location] = None
    connections: List[str] = Field(default_factory=list)

    @field_validator('relation', mode='before')
    @classmethod
    def validate_relation(cls, v):
        """Treat a missing relation as empty text."""
        return "" if v is None else v

    def to_dict(self) -> dict:
        """Convert to dict for JSON storage"""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict) -> 'Person':
        """Create from dict (JSON)"""
        return cls(**data)


class PersonUpdate(BaseModel):
    """
    Partial update for a Person.

    Only fields that were explicitly provided are applied, so omitting a
    field never clears it. An explicit ``location: null`` is applied.
    """
    name: Optional[str] = Field(None, min_length=1)
    relation: Optional[str] = None
    location: Optional[Location] = None

    def provided_fields(self) -> Dict[str, Any]:
        """Return only the explicitly provided fields, ready to store."""
        fields: Dict[str, Any] = {}
        for key in self.model_fields_set:
            value = getattr(self, key)
            if key == 'name' and value is None:
                continue
            if key == 'relation' and value is None:
                value = ""
            fields[key] = value
        return fields

    @property
    def new_name(self) -> Optional[str]:
        return self.name if 'name' in self.model_fields_set else None
