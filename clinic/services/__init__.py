"""Domain services of the clinic app: persistence, page queries and entity workflows."""
