"""Clinic application for the pet clinic backend.

This package contains models, serializers, services, views and route
registrations for owners, pets, visits and veterinarians.
"""
