import uuid

from shared.errors import ValidationError


def new_id() -> str:
    return str(uuid.uuid4())


def ensure_valid_id(value, label: str) -> str:
    """Normalize `value` to a canonical UUID string or raise ValidationError."""
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label} ID")
