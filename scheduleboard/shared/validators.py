"""Shared validation utilities"""

import re
from typing import Optional

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


def is_valid_time(value) -> bool:
    """True for a wall-clock "HH:MM" string (00:00 to 23:59)"""
    return isinstance(value, str) and TIME_PATTERN.match(value) is not None


def time_to_minutes(value: str) -> int:
    """
    Convert "HH:MM" to minutes since midnight.

    Raises:
        ValueError: If the value is not a valid "HH:MM" string
    """
    match = TIME_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return int(match.group(1)) * 60 + int(match.group(2))


def duration_minutes(start_time: str, end_time: str) -> int:
    return time_to_minutes(end_time) - time_to_minutes(start_time)


def validate_time_range(start_time: Optional[str], end_time: Optional[str]) -> list[dict]:
    """
    Validate a same-day time range.

    Returns:
        A list of {"field", "message"} errors, empty when the range is valid
    """
    errors = []
    if not is_valid_time(start_time):
        errors.append({"field": "startTime", "message": "startTime must be HH:MM"})
    if not is_valid_time(end_time):
        errors.append({"field": "endTime", "message": "endTime must be HH:MM"})
    if not errors and time_to_minutes(start_time) >= time_to_minutes(end_time):
        errors.append({"field": "endTime", "message": "endTime must be after startTime"})
    return errors


def validate_hex_color(color: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a #RRGGBB color to lowercase.

    Raises:
        ValueError: If color format is invalid
    """
    if color is None:
        return color
    color = color.strip()
    if not HEX_COLOR_PATTERN.match(color):
        raise ValueError("Color must be in #RRGGBB format")
    return color.lower()


def normalize_initials(initials: Optional[str]) -> Optional[str]:
    """
    Strip and upper-case professional initials.

    Raises:
        ValueError: If initials are empty or longer than 4 characters
    """
    if initials is None:
        return initials
    initials = initials.strip().upper()
    if not 1 <= len(initials) <= 4:
        raise ValueError("Initials must have between 1 and 4 characters")
    return initials


def initials_from_name(name: str) -> str:
    """Derive initials from the first and last words of a name, skipping titles like "Prof." """
    words = [w for w in re.split(r"\s+", name.strip()) if w and not w.endswith(".")]
    if not words:
        return "?"
    if len(words) == 1:
        return words[0][:2].upper()
    return (words[0][0] + words[-1][0]).upper()
