"""
Visit workflows.

A visit can be addressed through its owner and pet (the pet's first
recorded visit) or by its own id.  Both routes go through
:func:`resolve_visit` so they cannot drift apart.
"""
from __future__ import annotations

from typing import Optional

from django.utils import timezone

from clinic.models import Visit
from clinic.services.store import RecordStore


def resolve_visit(store: RecordStore, *, visit_id: Optional[int] = None,
                  owner_id: Optional[int] = None, pet_id: Optional[int] = None) -> Visit:
    """Find a visit by id, or the first visit of an owner's pet.

    When addressed through a pet that has no visits yet, an unsaved visit
    for that pet is returned.  With no address at all the result is an
    empty unsaved visit.
    """
    if visit_id is not None:
        return store.find_visit(visit_id)
    if owner_id is None or pet_id is None:
        return Visit()
    pet = store.find_pet(store.find_owner(owner_id), pet_id)
    return store.first_visit_for_pet(pet) or Visit(pet=pet)


def create_visit(store: RecordStore, owner_id: int, pet_id: int, **fields) -> Visit:
    pet = store.find_pet(store.find_owner(owner_id), pet_id)
    return store.save(Visit(pet=pet, **fields))


def update_visit(store: RecordStore, visit_id: int, **fields) -> Visit:
    """Overwrite a visit and stamp it as visited now.

    Every edit refreshes ``visited_at``, whatever the body contains.
    """
    visit = resolve_visit(store, visit_id=visit_id)
    for name, value in fields.items():
        setattr(visit, name, value)
    visit.pk = visit_id
    visit.visited_at = timezone.now()
    return store.save(visit)
