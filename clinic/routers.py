"""
URL mappings for the pet clinic API.

Every endpoint lives under ``/api/v1/``.  Trailing slashes are omitted,
and creation and edit forms are addressed with ``/new`` and ``/edit``
suffixes.
"""
from django.urls import path, include

from .views import health
from .views.owners import list_owners, owner_new, owner_detail, owner_edit
from .views.pets import list_pet_types, list_pets, pet_new, pet_detail, pet_edit
from .views.visits import list_visits, pet_visit, visit_detail, visit_edit
from .views.vets import list_vets


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Owners
    path('api/v1/owners', list_owners, name='owner-list'),
    path('api/v1/owners/new', owner_new, name='owner-new'),
    path('api/v1/owners/<int:owner_id>', owner_detail, name='owner-detail'),
    path('api/v1/owners/<int:owner_id>/edit', owner_edit, name='owner-edit'),
    # Pets
    path('api/v1/pettypes', list_pet_types, name='pettype-list'),
    path('api/v1/pets', list_pets, name='pet-list'),
    path('api/v1/owners/<int:owner_id>/pets/new', pet_new, name='pet-new'),
    path('api/v1/owners/<int:owner_id>/pets/<int:pet_id>', pet_detail, name='pet-detail'),
    path('api/v1/owners/<int:owner_id>/pets/<int:pet_id>/edit', pet_edit, name='pet-edit'),
    # Visits
    path('api/v1/visits', list_visits, name='visit-list'),
    path('api/v1/owners/<int:owner_id>/pets/<int:pet_id>/visits/new', pet_visit, name='pet-visit'),
    path('api/v1/visits/<int:visit_id>', visit_detail, name='visit-detail'),
    path('api/v1/visits/<int:visit_id>/edit', visit_edit, name='visit-edit'),
    # Vets
    path('api/v1/vets', list_vets, name='vet-list'),
]
