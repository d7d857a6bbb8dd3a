import uuid

from jobboard.errors import InvalidIdError


def new_id() -> str:
    return str(uuid.uuid4())


def validate_id(value: str, label: str = "") -> str:
    """Return the canonical form of ``value`` or raise InvalidIdError."""
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, AttributeError, TypeError):
        name = f"{label} " if label else ""
        raise InvalidIdError(f"Invalid {name}ID")
