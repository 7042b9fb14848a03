"""
List queries behind the paginated endpoints.

Each function takes the store explicitly, converts the client's 1-based
page number and filter into a store request and returns a :class:`Page`
(or, for the date-scoped visit list, a plain list).
"""
from __future__ import annotations

import datetime
from typing import List, Optional, Union

from django.utils import timezone

from clinic.models import Visit
from clinic.services.pagination import Page, page_request
from clinic.services.store import RecordStore


def find_owners(store: RecordStore, page: int = 1, last_name: Optional[str] = None) -> Page:
    # No filter and an empty filter are the same query: every owner.
    if last_name is None:
        last_name = ''
    return store.find_owners_by_last_name(last_name, page_request(page))


def find_pets(store: RecordStore, page: int = 1) -> Page:
    return store.find_pets(page_request(page))


def find_vets(store: RecordStore, page: int = 1) -> Page:
    return store.find_vets(page_request(page))


def find_all_visits(store: RecordStore, page: int = 1) -> Page:
    return store.find_visits(page_request(page))


def find_visits_on(store: RecordStore, on: Union[datetime.date, datetime.datetime, None] = None) -> List[Visit]:
    """Visits scheduled for one day, today unless ``on`` is given.

    A datetime is reduced to its calendar date; the time of day never
    narrows the result.
    """
    if on is None:
        on = timezone.localdate()
    elif isinstance(on, datetime.datetime):
        on = timezone.localtime(on).date() if timezone.is_aware(on) else on.date()
    return store.find_scheduled(on)
