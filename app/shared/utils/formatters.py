# 📄 File: app/shared/utils/formatters.py

# 🧭 Purpose (Layman Explanation):
# Turns raw values into the friendly text and numbers shown to pet owners and caregivers.

# 🧪 Purpose (Technical Summary):
# Response formatting helpers: location labels, short order references,
# and rating averages.

# 🔄 Connected Modules / Calls From:
# Used by: caregiving schedule, admin order notifications, store product listings

from typing import Iterable, Optional, Union

Number = Union[int, float]


def format_location(area: Optional[str], city: Optional[str], fallback: str = "Not specified") -> str:
    """Format "area, city"; the city alone when there is no area, the fallback without a city."""
    if not city:
        return fallback
    if area:
        return f"{area}, {city}"
    return city


def short_id(identifier: str, length: int = 8) -> str:
    """Short reference for an id, e.g. in order notifications."""
    return str(identifier)[:length]


def average(values: Iterable[Number]) -> float:
    """Arithmetic mean, 0 for no values."""
    values = list(values)
    if not values:
        return 0
    return sum(values) / len(values)
