"""
Lifecycle state of clinic entities.

An entity is either ``Unsaved`` (built for a creation form or a create
request, no row yet) or ``Persisted`` with the id the database assigned.
The record store decides between INSERT and UPDATE from this state rather
than from a nullable id.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Unsaved:
    """No row yet; the database assigns the id on insert."""


@dataclass(frozen=True)
class Persisted:
    id: int


EntityState = Union[Unsaved, Persisted]


def state_of(instance) -> EntityState:
    """Return the lifecycle state of a model instance."""
    if instance._state.adding or instance.pk is None:
        return Unsaved()
    return Persisted(instance.pk)
