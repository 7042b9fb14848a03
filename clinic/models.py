"""
Database models for the pet clinic backend.

Owners own pets, pets own visits, and every pet references one shared
:class:`PetType`.  Veterinarians and their specialties are reference data
listed by the API but never edited through it.
"""
from __future__ import annotations

from django.db import models
from django.utils import timezone

from clinic.services.state import state_of


class ClinicModel(models.Model):
    """Abstract base exposing the entity lifecycle state."""

    class Meta:
        abstract = True

    @property
    def state(self):
        return state_of(self)


class PetType(ClinicModel):
    """Kind of animal (cat, dog, ...).  Shared by many pets."""
    name = models.CharField(max_length=80, unique=True)

    class Meta:
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class Owner(ClinicModel):
    first_name = models.CharField(max_length=30, blank=True)
    # Prefix searches on the owner list filter by this column
    last_name = models.CharField(max_length=30, db_index=True)
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=80, blank=True)
    telephone = models.CharField(max_length=20, blank=True)

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Pet(ClinicModel):
    """A pet belongs to exactly one owner and owns its visits.

    Pet names are unique within one owner's pets.  The unique constraint
    guards exact duplicates; the case-insensitive rule is enforced by the
    pet service before saving.
    """
    name = models.CharField(max_length=30)
    birth_date = models.DateField(null=True, blank=True)
    type = models.ForeignKey(PetType, on_delete=models.PROTECT, related_name='pets')
    owner = models.ForeignKey(Owner, on_delete=models.CASCADE, related_name='pets')

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['owner', 'name'], name='unique_pet_name_per_owner'),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.type_id})"


class Visit(ClinicModel):
    """A scheduled visit of a pet.

    ``date`` is the day the visit is scheduled for; ``visited_at`` stays
    empty until the visit is recorded as having taken place.
    """
    date = models.DateField(default=timezone.localdate, db_index=True)
    description = models.CharField(max_length=255)
    visited_at = models.DateTimeField(null=True, blank=True)
    pet = models.ForeignKey(Pet, on_delete=models.CASCADE, related_name='visits')

    class Meta:
        ordering = ['date', 'id']

    def __str__(self) -> str:
        return f"{self.date} {self.description}"


class Specialty(ClinicModel):
    name = models.CharField(max_length=80, unique=True)

    class Meta:
        ordering = ['name']
        verbose_name_plural = 'specialties'

    def __str__(self) -> str:
        return self.name


class Vet(ClinicModel):
    first_name = models.CharField(max_length=30)
    last_name = models.CharField(max_length=30)
    specialties = models.ManyToManyField(Specialty, blank=True, related_name='vets')

    class Meta:
        ordering = ['last_name', 'first_name', 'id']

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}"
