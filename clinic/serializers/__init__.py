"""DRF serializers for clinic request bodies, query strings and responses."""
