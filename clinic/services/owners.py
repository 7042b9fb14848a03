from clinic.models import Owner
from clinic.services.store import RecordStore


def new_owner() -> Owner:
    """Empty, unsaved owner used to pre-populate a creation form."""
    return Owner()


def create_owner(store: RecordStore, **fields) -> Owner:
    return store.save(Owner(**fields))


def update_owner(store: RecordStore, owner: Owner, **fields) -> Owner:
    """Overwrite ``owner`` with validated fields and save it.

    ``owner`` was resolved from the URL; its id is never taken from the
    request body.
    """
    owner_id = owner.pk
    for name, value in fields.items():
        setattr(owner, name, value)
    owner.pk = owner_id
    return store.save(owner)
