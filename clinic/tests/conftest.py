import pytest
from django.core.cache import cache

from clinic.models import Owner, PetType
from clinic.services.store import OrmRecordStore


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def store():
    return OrmRecordStore()


@pytest.fixture
def dog(db):
    return PetType.objects.create(name='dog')


@pytest.fixture
def owner(db):
    return Owner.objects.create(first_name='George', last_name='Franklin', city='Madison', telephone='6085551023')
