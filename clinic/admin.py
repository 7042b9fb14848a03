"""
Django admin registrations for the clinic models.

Registering the models here lets staff inspect and correct records via
the ``/admin/`` URL during development.
"""

from django.contrib import admin

from .models import Owner, Pet, PetType, Specialty, Vet, Visit


@admin.register(PetType)
class PetTypeAdmin(admin.ModelAdmin):
    list_display = ('id', 'name')
    search_fields = ('name',)


class PetInline(admin.TabularInline):
    model = Pet
    extra = 0


@admin.register(Owner)
class OwnerAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name', 'city', 'telephone')
    search_fields = ('first_name', 'last_name', 'telephone')
    inlines = [PetInline]


@admin.register(Pet)
class PetAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'type', 'owner', 'birth_date')
    list_filter = ('type',)
    search_fields = ('name', 'owner__last_name')


@admin.register(Visit)
class VisitAdmin(admin.ModelAdmin):
    list_display = ('id', 'date', 'pet', 'description', 'visited_at')
    list_filter = ('date',)
    search_fields = ('description', 'pet__name')


@admin.register(Specialty)
class SpecialtyAdmin(admin.ModelAdmin):
    list_display = ('id', 'name')


@admin.register(Vet)
class VetAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name')
    search_fields = ('first_name', 'last_name')
    filter_horizontal = ('specialties',)
