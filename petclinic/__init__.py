"""Django project package for the pet clinic backend."""
