"""
Integration tests for the pet clinic API.

These tests drive the endpoints through DRF's APIClient: owner, pet and
visit creation and editing, validation errors, duplicate pet names and
the two ways of addressing a visit.

To run the tests:

```
pytest -q clinic/tests
```
"""
import datetime

from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from ..models import Owner, Pet, PetType, Specialty, Vet, Visit


class ClinicAPITests(APITestCase):
    def setUp(self) -> None:
        """Create pet types and one owner with a pet that has one visit."""
        self.cat = PetType.objects.create(name='cat')
        self.dog = PetType.objects.create(name='dog')
        self.owner = Owner.objects.create(
            first_name='Jean', last_name='Coleman', address='105 N. Lake St.', city='Monona', telephone='6085552654',
        )
        self.pet = Pet.objects.create(name='Max', type=self.cat, owner=self.owner, birth_date=datetime.date(2012, 9, 4))
        self.visit = Visit.objects.create(pet=self.pet, date=datetime.date(2013, 1, 1), description='rabies shot')

    def test_create_owner_ignores_client_id(self):
        response = self.client.post(
            '/api/v1/owners/new',
            {'id': 99, 'firstName': 'Betty', 'lastName': 'Davis', 'telephone': '6085551749'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertNotEqual(response.data['id'], 99)
        self.assertEqual(response.data['lastName'], 'Davis')
        self.assertEqual(response.data['pets'], [])
        self.assertTrue(Owner.objects.filter(id=response.data['id'], last_name='Davis').exists())
        self.assertFalse(Owner.objects.filter(id=99).exists())

    def test_create_owner_reports_every_violation(self):
        response = self.client.post('/api/v1/owners/new', {'lastName': '', 'telephone': '12ab'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['ok'])
        self.assertEqual(response.data['error']['code'], 'invalid')
        fields = {v['field'] for v in response.data['error']['violations']}
        self.assertEqual(fields, {'lastName', 'telephone'})
        self.assertEqual(Owner.objects.count(), 1)

    def test_new_owner_form_is_empty(self):
        response = self.client.get('/api/v1/owners/new')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['id'])
        self.assertEqual(response.data['lastName'], '')
        self.assertEqual(response.data['pets'], [])

    def test_owner_detail_includes_pets_and_visits(self):
        response = self.client.get(f'/api/v1/owners/{self.owner.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['firstName'], 'Jean')
        self.assertEqual([p['name'] for p in response.data['pets']], ['Max'])
        self.assertEqual(response.data['pets'][0]['type'], {'id': self.cat.id, 'name': 'cat'})
        self.assertEqual(response.data['pets'][0]['visits'][0]['description'], 'rabies shot')

    def test_unknown_owner_is_not_found(self):
        response = self.client.get('/api/v1/owners/4242')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error']['code'], 'not_found')
        self.assertIn('4242', response.data['error']['message'])

    def test_update_owner_path_id_wins(self):
        response = self.client.post(
            f'/api/v1/owners/{self.owner.id}/edit',
            {'id': 99, 'firstName': 'Jean', 'lastName': 'Coleman-Black', 'city': 'Madison'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], self.owner.id)
        self.owner.refresh_from_db()
        self.assertEqual(self.owner.last_name, 'Coleman-Black')
        self.assertEqual(self.owner.city, 'Madison')
        self.assertFalse(Owner.objects.filter(id=99).exists())
        self.assertEqual(Owner.objects.count(), 1)

    def test_update_owner_validation_is_client_error(self):
        response = self.client.post(f'/api/v1/owners/{self.owner.id}/edit', {'lastName': ''}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.owner.refresh_from_db()
        self.assertEqual(self.owner.last_name, 'Coleman')

    def test_markup_is_stripped_from_names(self):
        response = self.client.post('/api/v1/owners/new', {'lastName': '<b>Black</b>'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['lastName'], 'Black')

    def test_pet_types_sorted_by_name(self):
        PetType.objects.create(name='bird')
        response = self.client.get('/api/v1/pettypes')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([t['name'] for t in response.data], ['bird', 'cat', 'dog'])

    def test_create_pet(self):
        response = self.client.post(
            f'/api/v1/owners/{self.owner.id}/pets/new',
            {'name': 'Samantha', 'typeId': self.dog.id, 'birthDate': '2012-09-04'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['ownerId'], self.owner.id)
        self.assertEqual(response.data['type']['name'], 'dog')
        self.assertEqual(response.data['birthDate'], '2012-09-04')
        self.assertEqual(response.data['visits'], [])
        self.assertEqual(self.owner.pets.count(), 2)

    def test_duplicate_pet_name_rejected(self):
        response = self.client.post(
            f'/api/v1/owners/{self.owner.id}/pets/new', {'name': 'max', 'typeId': self.dog.id}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['code'], 'duplicate')
        self.assertIn({'field': 'name', 'message': 'already exists', 'code': 'duplicate'}, response.data['error']['violations'])
        self.assertEqual(Pet.objects.count(), 1)

    def test_duplicate_reported_with_other_violations(self):
        response = self.client.post(f'/api/v1/owners/{self.owner.id}/pets/new', {'name': 'Max'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        fields = [v['field'] for v in response.data['error']['violations']]
        self.assertIn('typeId', fields)
        self.assertIn('name', fields)

    def test_same_pet_name_allowed_for_other_owner(self):
        other = Owner.objects.create(last_name='Black')
        response = self.client.post(
            f'/api/v1/owners/{other.id}/pets/new', {'name': 'Max', 'typeId': self.dog.id}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_new_pet_form_bound_to_owner(self):
        response = self.client.get(f'/api/v1/owners/{self.owner.id}/pets/new')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['id'])
        self.assertEqual(response.data['ownerId'], self.owner.id)
        self.assertIsNone(response.data['type'])
        self.assertEqual(response.data['visits'], [])

    def test_pet_of_other_owner_not_found(self):
        other = Owner.objects.create(last_name='Black')
        response = self.client.get(f'/api/v1/owners/{other.id}/pets/{self.pet.id}')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_pet_keeps_path_ids(self):
        other = Owner.objects.create(last_name='Black')
        response = self.client.post(
            f'/api/v1/owners/{self.owner.id}/pets/{self.pet.id}/edit',
            {'id': 77, 'name': 'Maximus', 'ownerId': other.id},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.pet.refresh_from_db()
        self.assertEqual(self.pet.name, 'Maximus')
        self.assertEqual(self.pet.owner_id, self.owner.id)
        self.assertEqual(self.pet.type_id, self.cat.id)
        self.assertFalse(Pet.objects.filter(id=77).exists())

    def test_update_pet_to_sibling_name_rejected(self):
        Pet.objects.create(name='Samantha', type=self.cat, owner=self.owner)
        response = self.client.post(
            f'/api/v1/owners/{self.owner.id}/pets/{self.pet.id}/edit', {'name': 'SAMANTHA'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['code'], 'duplicate')
        self.pet.refresh_from_db()
        self.assertEqual(self.pet.name, 'Max')

    def test_create_pet_with_non_object_body_rejected(self):
        for body in ([], ['Rex'], 'Rex'):
            response = self.client.post(f'/api/v1/owners/{self.owner.id}/pets/new', body, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, body)
            self.assertEqual(response.data['error']['code'], 'invalid')
            self.assertEqual(response.data['error']['violations'][0]['field'], '')
        self.assertEqual(Pet.objects.count(), 1)

    def test_update_pet_with_non_object_body_rejected(self):
        response = self.client.post(f'/api/v1/owners/{self.owner.id}/pets/{self.pet.id}/edit', [1], format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['code'], 'invalid')
        self.pet.refresh_from_db()
        self.assertEqual(self.pet.name, 'Max')

    def test_create_pet_with_unknown_type_rejected(self):
        response = self.client.post(
            f'/api/v1/owners/{self.owner.id}/pets/new', {'name': 'Rex', 'typeId': 999}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn(
            {'field': 'typeId', 'message': 'pet type 999 does not exist', 'code': 'does_not_exist'},
            response.data['error']['violations'],
        )
        self.assertEqual(Pet.objects.count(), 1)

    def test_update_pet_changes_type(self):
        response = self.client.post(
            f'/api/v1/owners/{self.owner.id}/pets/{self.pet.id}/edit', {'name': 'Max', 'typeId': self.dog.id}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['type']['name'], 'dog')
        self.pet.refresh_from_db()
        self.assertEqual(self.pet.type_id, self.dog.id)

    def test_visit_resolves_same_through_pet_and_id(self):
        via_pet = self.client.get(f'/api/v1/owners/{self.owner.id}/pets/{self.pet.id}/visits/new')
        via_id = self.client.get(f'/api/v1/visits/{self.visit.id}')
        self.assertEqual(via_pet.status_code, status.HTTP_200_OK)
        self.assertEqual(via_id.status_code, status.HTTP_200_OK)
        self.assertEqual(via_pet.data, via_id.data)
        self.assertEqual(via_id.data['id'], self.visit.id)

    def test_pet_without_visits_resolves_blank_visit(self):
        pet = Pet.objects.create(name='Samantha', type=self.cat, owner=self.owner)
        response = self.client.get(f'/api/v1/owners/{self.owner.id}/pets/{pet.id}/visits/new')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['id'])
        self.assertEqual(response.data['petId'], pet.id)
        self.assertEqual(response.data['date'], timezone.localdate().isoformat())
        self.assertIsNone(response.data['visitedTimestamp'])

    def test_create_visit(self):
        response = self.client.post(
            f'/api/v1/owners/{self.owner.id}/pets/{self.pet.id}/visits/new',
            {'date': '2024-03-04', 'description': 'neutered'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['petId'], self.pet.id)
        self.assertIsNone(response.data['visitedTimestamp'])
        self.assertEqual(self.pet.visits.count(), 2)

    def test_create_visit_requires_description(self):
        response = self.client.post(
            f'/api/v1/owners/{self.owner.id}/pets/{self.pet.id}/visits/new', {'date': '2024-03-04'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual([v['field'] for v in response.data['error']['violations']], ['description'])

    def test_edit_visit_stamps_visited_time(self):
        before = timezone.now()
        response = self.client.post(
            f'/api/v1/visits/{self.visit.id}/edit', {'id': 555, 'description': 'rabies shot given'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], self.visit.id)
        self.assertIsNotNone(response.data['visitedTimestamp'])
        self.visit.refresh_from_db()
        self.assertEqual(self.visit.description, 'rabies shot given')
        self.assertEqual(self.visit.pet_id, self.pet.id)
        self.assertGreaterEqual(self.visit.visited_at, before.replace(microsecond=0))
        self.assertFalse(Visit.objects.filter(id=555).exists())

    def test_visits_default_to_today(self):
        today = timezone.localdate()
        Visit.objects.create(pet=self.pet, date=today, description='today')
        Visit.objects.create(pet=self.pet, date=today - datetime.timedelta(days=1), description='yesterday')
        response = self.client.get('/api/v1/visits')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([v['description'] for v in response.data], ['today'])

    def test_visits_show_all_is_paginated(self):
        for i in range(6):
            Visit.objects.create(pet=self.pet, date=datetime.date(2020, 1, 1 + i), description=f'visit {i}')
        response = self.client.get('/api/v1/visits', {'showAll': 'true', 'page': 2})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalElements'], 7)
        self.assertEqual(response.data['totalPages'], 2)
        self.assertEqual(response.data['pageNumber'], 2)
        self.assertEqual(len(response.data['items']), 2)

    def test_end_to_end_owner_pet_visit(self):
        owner = self.client.post('/api/v1/owners/new', {'lastName': 'Smith'}, format='json')
        self.assertEqual(owner.status_code, status.HTTP_201_CREATED)
        pet = self.client.post(
            f"/api/v1/owners/{owner.data['id']}/pets/new", {'name': 'Rex', 'typeId': self.dog.id}, format='json',
        )
        self.assertEqual(pet.status_code, status.HTTP_201_CREATED)
        visit = self.client.post(
            f"/api/v1/owners/{owner.data['id']}/pets/{pet.data['id']}/visits/new",
            {'date': '2024-01-01', 'description': 'checkup'},
            format='json',
        )
        self.assertEqual(visit.status_code, status.HTTP_201_CREATED)
        response = self.client.get('/api/v1/visits', {'date': '2024-01-01'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('checkup', [v['description'] for v in response.data])

    def test_vets_listing(self):
        surgery = Specialty.objects.create(name='surgery')
        vet = Vet.objects.create(first_name='Linda', last_name='Douglas')
        vet.specialties.add(surgery)
        Vet.objects.create(first_name='James', last_name='Carter')
        response = self.client.get('/api/v1/vets')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalElements'], 2)
        self.assertEqual([v['lastName'] for v in response.data['items']], ['Carter', 'Douglas'])
        self.assertEqual(response.data['items'][1]['specialties'], [{'id': surgery.id, 'name': 'surgery'}])

    def test_healthz(self):
        response = self.client.get('/healthz')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {'ok': True, 'db': True})
