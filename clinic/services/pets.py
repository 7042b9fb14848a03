"""
Pet workflows.

Names are unique per owner, compared case-insensitively.  Duplicate
detection runs alongside field validation so the caller receives every
violation at once.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import List, Optional

from django.db import IntegrityError, transaction

from clinic.exceptions import DuplicateEntity, ValidationFailed, Violation, flatten_errors
from clinic.models import Owner, Pet
from clinic.serializers.text import clean_text
from clinic.services.store import RecordStore

logger = logging.getLogger(__name__)

DUPLICATE_NAME = {'field': 'name', 'message': 'already exists', 'code': 'duplicate'}


def new_pet(owner: Owner) -> Pet:
    """Empty, unsaved pet bound to ``owner``."""
    return Pet(owner=owner)


def _submitted_name(serializer) -> str:
    if serializer.errors:
        data = serializer.initial_data
        raw = data.get('name') if isinstance(data, Mapping) else None
        return clean_text(raw) if isinstance(raw, str) else ''
    return serializer.validated_data.get('name') or ''


def _check(store: RecordStore, owner: Owner, serializer, pet: Optional[Pet] = None) -> None:
    violations: List[Violation] = flatten_errors(serializer.errors)
    name = _submitted_name(serializer)
    if name and store.find_pet_by_name(owner, name, exclude=pet) is not None:
        logger.info('rejected duplicate pet name %r for owner %s', name, owner.pk)
        raise DuplicateEntity(violations + [DUPLICATE_NAME])
    if violations:
        raise ValidationFailed(violations)


@transaction.atomic
def add_pet(store: RecordStore, owner: Owner, serializer) -> Pet:
    """Create a pet for ``owner`` from a serializer that has run ``is_valid()``."""
    _check(store, owner, serializer)
    pet = Pet(owner=owner, **serializer.validated_data)
    try:
        return store.save(pet)
    except IntegrityError:
        raise DuplicateEntity([DUPLICATE_NAME])


@transaction.atomic
def update_pet(store: RecordStore, owner: Owner, pet: Pet, serializer) -> Pet:
    """Apply a validated update to ``pet``; the URL decides its id and owner."""
    _check(store, owner, serializer, pet=pet)
    pet_id = pet.pk
    for name, value in serializer.validated_data.items():
        setattr(pet, name, value)
    pet.pk = pet_id
    pet.owner = owner
    try:
        return store.save(pet)
    except IntegrityError:
        raise DuplicateEntity([DUPLICATE_NAME])
