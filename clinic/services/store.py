"""
Record store: the persistence boundary of the clinic.

Handlers and page queries receive a :class:`RecordStore` instance from
:func:`get_record_store` and never talk to model managers themselves.
:class:`OrmRecordStore` is the Django ORM implementation; another class
can be plugged in through the ``CLINIC_RECORD_STORE`` setting.
"""
from __future__ import annotations

import datetime
import logging
from typing import List, Optional

from django.conf import settings
from django.db import transaction
from django.db.models.functions import Substr
from django.utils.module_loading import import_string

from clinic.exceptions import NotFound
from clinic.models import Owner, Pet, PetType, Vet, Visit
from clinic.services.pagination import Page, PageRequest, paginate
from clinic.services.state import Persisted, Unsaved

logger = logging.getLogger(__name__)


class RecordStore:
    """Interface of the persistence layer used by the API."""

    def find_owner(self, owner_id: int) -> Owner:
        raise NotImplementedError

    def find_owners_by_last_name(self, prefix: str, request: PageRequest) -> Page:
        raise NotImplementedError

    def find_pet_types(self) -> List[PetType]:
        raise NotImplementedError

    def find_pet_type(self, type_id: int) -> PetType:
        raise NotImplementedError

    def find_pet(self, owner: Owner, pet_id: int) -> Pet:
        raise NotImplementedError

    def find_pet_by_name(self, owner: Owner, name: str, exclude: Optional[Pet] = None) -> Optional[Pet]:
        raise NotImplementedError

    def find_pets(self, request: PageRequest) -> Page:
        raise NotImplementedError

    def find_visit(self, visit_id: int) -> Visit:
        raise NotImplementedError

    def first_visit_for_pet(self, pet: Pet) -> Optional[Visit]:
        raise NotImplementedError

    def find_scheduled(self, on: datetime.date) -> List[Visit]:
        raise NotImplementedError

    def find_visits(self, request: PageRequest) -> Page:
        raise NotImplementedError

    def find_vets(self, request: PageRequest) -> Page:
        raise NotImplementedError

    def save(self, entity):
        raise NotImplementedError


class OrmRecordStore(RecordStore):

    def find_owner(self, owner_id: int) -> Owner:
        owner = Owner.objects.prefetch_related('pets__type', 'pets__visits').filter(id=owner_id).first()
        if owner is None:
            raise NotFound('owner', owner_id)
        return owner

    def find_owners_by_last_name(self, prefix: str, request: PageRequest) -> Page:
        qs = Owner.objects.prefetch_related('pets__type', 'pets__visits')
        if prefix:
            # Equality on a substring keeps the match case-sensitive on every
            # backend; LIKE is case-insensitive on SQLite.
            qs = qs.annotate(last_name_prefix=Substr('last_name', 1, len(prefix))).filter(last_name_prefix=prefix)
        return paginate(qs.order_by('id'), request)

    def find_pet_types(self) -> List[PetType]:
        return list(PetType.objects.order_by('name'))

    def find_pet_type(self, type_id: int) -> PetType:
        pet_type = PetType.objects.filter(id=type_id).first()
        if pet_type is None:
            raise NotFound('pet type', type_id)
        return pet_type

    def find_pet(self, owner: Owner, pet_id: int) -> Pet:
        pet = Pet.objects.select_related('type', 'owner').prefetch_related('visits').filter(owner=owner, id=pet_id).first()
        if pet is None:
            raise NotFound('pet', pet_id)
        return pet

    def find_pet_by_name(self, owner: Owner, name: str, exclude: Optional[Pet] = None) -> Optional[Pet]:
        qs = Pet.objects.filter(owner=owner, name__iexact=name)
        if exclude is not None and exclude.pk is not None:
            qs = qs.exclude(pk=exclude.pk)
        return qs.first()

    def find_pets(self, request: PageRequest) -> Page:
        qs = Pet.objects.select_related('type', 'owner').prefetch_related('visits').order_by('id')
        return paginate(qs, request)

    def find_visit(self, visit_id: int) -> Visit:
        visit = Visit.objects.select_related('pet').filter(id=visit_id).first()
        if visit is None:
            raise NotFound('visit', visit_id)
        return visit

    def first_visit_for_pet(self, pet: Pet) -> Optional[Visit]:
        return Visit.objects.select_related('pet').filter(pet=pet).order_by('id').first()

    def find_scheduled(self, on: datetime.date) -> List[Visit]:
        return list(Visit.objects.select_related('pet').filter(date=on).order_by('visited_at', 'id'))

    def find_visits(self, request: PageRequest) -> Page:
        return paginate(Visit.objects.select_related('pet').order_by('date', 'id'), request)

    def find_vets(self, request: PageRequest) -> Page:
        return paginate(Vet.objects.prefetch_related('specialties').order_by('last_name', 'first_name', 'id'), request)

    @transaction.atomic
    def save(self, entity):
        state = entity.state
        if isinstance(state, Unsaved):
            # Ids are assigned by the database, never by the caller.
            entity.pk = None
            entity.save(force_insert=True)
            logger.info('created %s %s', type(entity).__name__.lower(), entity.pk)
        elif isinstance(state, Persisted):
            entity.save(force_update=True)
            logger.info('updated %s %s', type(entity).__name__.lower(), state.id)
        return entity


def get_record_store() -> RecordStore:
    """Build the store configured by ``CLINIC_RECORD_STORE``."""
    return import_string(settings.CLINIC_RECORD_STORE)()
