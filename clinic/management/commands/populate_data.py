"""
Management command to populate the database with reference and demo data.

Reference data (pet types, specialties, vets) is always ensured.  Owners,
pets and visits are only added with ``--demo``.  Running the command
twice creates nothing new.
"""
from datetime import date, timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from clinic.models import Owner, Pet, PetType, Specialty, Vet, Visit

PET_TYPES = ['bird', 'cat', 'dog', 'hamster', 'lizard', 'snake']

SPECIALTIES = ['radiology', 'surgery', 'dentistry']

VETS = [
    ('James', 'Carter', []),
    ('Helen', 'Leary', ['radiology']),
    ('Linda', 'Douglas', ['surgery', 'dentistry']),
    ('Rafael', 'Ortega', ['surgery']),
    ('Henry', 'Stevens', ['radiology']),
    ('Sharon', 'Jenkins', []),
]

OWNERS = [
    ('George', 'Franklin', '110 W. Liberty St.', 'Madison', '6085551023', [('Leo', 'cat', date(2010, 9, 7))]),
    ('Betty', 'Davis', '638 Cardinal Ave.', 'Sun Prairie', '6085551749', [('Basil', 'hamster', date(2012, 8, 6))]),
    ('Eduardo', 'Rodriquez', '2693 Commerce St.', 'McFarland', '6085558763',
     [('Rosy', 'dog', date(2011, 4, 17)), ('Jewel', 'dog', date(2010, 3, 7))]),
    ('Harold', 'Davis', '563 Friendly St.', 'Windsor', '6085553198', [('Iggy', 'lizard', date(2010, 11, 30))]),
    ('Peter', 'McTavish', '2387 S. Fair Way', 'Madison', '6085552765', [('George', 'snake', date(2010, 1, 20))]),
    ('Jean', 'Coleman', '105 N. Lake St.', 'Monona', '6085552654',
     [('Samantha', 'cat', date(2012, 9, 4)), ('Max', 'cat', date(2012, 9, 4))]),
    ('Jeff', 'Black', '1450 Oak Blvd.', 'Monona', '6085555387', [('Lucky', 'bird', date(2011, 8, 6))]),
    ('Maria', 'Escobito', '345 Maple St.', 'Madison', '6085557683', [('Mulligan', 'dog', date(2007, 2, 24))]),
    ('David', 'Schroeder', '2749 Blackhawk Trail', 'Madison', '6085559435', [('Freddy', 'bird', date(2010, 3, 9))]),
    ('Carlos', 'Estaban', '2335 Independence La.', 'Waunakee', '6085555487',
     [('Lucky', 'dog', date(2010, 6, 24)), ('Sly', 'cat', date(2012, 6, 8))]),
]


class Command(BaseCommand):
    help = 'Populate database with pet types, vets and, with --demo, sample owners'

    def add_arguments(self, parser):
        parser.add_argument('--demo', action='store_true', help='also create demo owners, pets and visits')

    @transaction.atomic
    def handle(self, *args, **options):
        types = self.create_pet_types()
        specialties = self.create_specialties()
        self.create_vets(specialties)
        if options['demo']:
            pets = self.create_owners(types)
            self.create_visits(pets)
        self.stdout.write(self.style.SUCCESS('Reference data ensured.'))

    def create_pet_types(self):
        types = {}
        for name in PET_TYPES:
            types[name], created = PetType.objects.get_or_create(name=name)
            if created:
                self.stdout.write(f'pet type: {name}')
        return types

    def create_specialties(self):
        return {name: Specialty.objects.get_or_create(name=name)[0] for name in SPECIALTIES}

    def create_vets(self, specialties):
        for first_name, last_name, names in VETS:
            vet, created = Vet.objects.get_or_create(first_name=first_name, last_name=last_name)
            if created:
                vet.specialties.set([specialties[n] for n in names])
                self.stdout.write(f'vet: {first_name} {last_name}')

    def create_owners(self, types):
        pets = []
        for first_name, last_name, address, city, telephone, owner_pets in OWNERS:
            owner, _ = Owner.objects.get_or_create(
                first_name=first_name, last_name=last_name,
                defaults={'address': address, 'city': city, 'telephone': telephone},
            )
            for name, type_name, birth_date in owner_pets:
                pet, _ = Pet.objects.get_or_create(
                    owner=owner, name=name,
                    defaults={'type': types[type_name], 'birth_date': birth_date},
                )
                pets.append(pet)
        self.stdout.write(f'owners: {len(OWNERS)}, pets: {len(pets)}')
        return pets

    def create_visits(self, pets):
        today = timezone.localdate()
        # Two visits today, two tomorrow.
        for offset, pet in enumerate(pets[:4]):
            Visit.objects.get_or_create(
                pet=pet, description='rabies shot' if offset % 2 else 'checkup',
                defaults={'date': today + timedelta(days=offset // 2)},
            )
