"""
Input validation utilities for request payloads
"""
from typing import Any, Dict, Iterable, Optional

from museum_nav.core.exceptions import ValidationError


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_required_fields(data: Dict[str, Any], required: Iterable[str]) -> None:
    """
    Ensure every required field is present and non-empty

    Raises:
        ValidationError: Listing all missing fields
    """
    missing = [f for f in required if data.get(f) is None or data.get(f) == ""]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            details={"missing_fields": missing},
        )


def is_valid_coordinate_pair(lat: Any, lng: Any) -> bool:
    return (
        _is_number(lat)
        and _is_number(lng)
        and -90.0 <= lat <= 90.0
        and -180.0 <= lng <= 180.0
    )


INVALID_COORDINATES = "Invalid coordinates. Latitude must be between -90 and 90, longitude between -180 and 180"


def validate_coordinates(lat: Any, lng: Any, message: str = INVALID_COORDINATES) -> None:
    """
    Validate a latitude/longitude pair

    Raises:
        ValidationError: If either value is not a number or out of range
    """
    if not is_valid_coordinate_pair(lat, lng):
        raise ValidationError(message)


def validate_positive_id(value: Any, name: str) -> int:
    """
    Coerce and validate a positive integer identifier

    Returns:
        The identifier as int
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {name}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {name}")
    if number <= 0 or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"Invalid {name}")
    return number


def validate_rating(value: Any) -> float:
    if not _is_number(value) or not 0 <= value <= 5:
        raise ValidationError("Invalid rating. Rating must be a number between 0 and 5")
    return value


def validate_walking_speed(value: Optional[Any]) -> Optional[float]:
    """None means "use the stored estimate"; anything else must be a positive number."""
    if value is None or value == "":
        return None
    try:
        speed = float(value)
    except (TypeError, ValueError):
        raise ValidationError("walkingSpeed must be a positive number")
    if speed <= 0 or speed != speed:
        raise ValidationError("walkingSpeed must be a positive number")
    return speed
