import uuid


def new_id() -> str:
    return str(uuid.uuid4())


def normalize_id(value: str) -> str | None:
    """Canonical form of a record id, or None when it is not one."""
    try:
        return str(uuid.UUID(value))
    except (TypeError, ValueError, AttributeError):
        return None
