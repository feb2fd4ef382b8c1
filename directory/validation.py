"""
Input coercion shared by the directory services.

Everything here runs before any store round-trip and raises
ValidationFailure on malformed input.
"""

from typing import Any, Dict, Type, TypeVar, Union
from datetime import datetime, timezone
from pydantic import BaseModel, ValidationError
from core.exceptions import ValidationFailure

M = TypeVar("M", bound=BaseModel)


def parse_input(model: Type[M], data: Union[M, Dict[str, Any], None]) -> M:
    """Validate a dict (or pass through an instance) as the given schema"""
    if isinstance(data, model):
        return data
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationFailure(
            f"Expected an object for {model.__name__}",
            context={"received": type(data).__name__}
        )
    try:
        return model(**data)
    except ValidationError as e:
        field_errors = {
            ".".join(str(part) for part in err["loc"]) or "__root__": err["msg"]
            for err in e.errors()
        }
        raise ValidationFailure(
            f"Invalid {model.__name__}",
            context={"field_errors": field_errors},
            original_exception=e
        )


# Ids and page numbers must fit the store's 32-bit INTEGER columns
MAX_INT = 2**31 - 1


def _coerce_int(value: Any, name: str) -> int:
    """Accept ints, integral floats and digit strings within MAX_INT"""
    if isinstance(value, bool):
        raise ValidationFailure(f"{name} must be an integer", context={name: value})
    if isinstance(value, float) and not value.is_integer():
        raise ValidationFailure(f"{name} must be an integer", context={name: value})
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationFailure(f"{name} must be an integer", context={name: value})
    if number > MAX_INT:
        raise ValidationFailure(f"{name} is out of range", context={name: value})
    return number


def coerce_id(value: Any, name: str = "id") -> int:
    """Accept positive integer ids given as ints or digit strings"""
    number = _coerce_int(value, name)
    if number < 1:
        raise ValidationFailure(f"{name} must be >= 1", context={name: value})
    return number


def coerce_page(value: Any) -> int:
    page = _coerce_int(value, "page")
    if page < 1:
        raise ValidationFailure("page must be >= 1", context={"page": page})
    return page


def coerce_timestamp(value: Any) -> datetime:
    """
    Parse a datetime or ISO-8601 string into a naive UTC datetime,
    the representation the store uses.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValidationFailure("Invalid ISO-8601 timestamp", context={"since": value})
    if not isinstance(value, datetime):
        raise ValidationFailure("Timestamp required", context={"since": value})
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
