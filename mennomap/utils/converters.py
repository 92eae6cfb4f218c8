"""
Converters module - Data conversion helpers for MennoMap.
"""

from typing import Any, Optional


def to_year(value: Any) -> Optional[int]:
    """
    Normalize a year value to an integer.

    GeoJSON exports carry years as ints, floats ("1927.0") or strings
    depending on the tool that produced them. Every year comparison goes
    through this function so that "1930" and 1930 compare equal.

    Args:
        value: Raw year value from a feature property, slider or form field

    Returns:
        The year as int, or None if the value is missing or not a whole number
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return int(value) if value.is_integer() else None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None

    return None


def make_feature_id(layer: str, index: int) -> str:
    """Build the stable identifier of the index-th feature in a layer."""
    return f"{layer}-{index}"
