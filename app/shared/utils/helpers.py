# 📄 File: app/shared/utils/helpers.py

# 🧭 Purpose (Layman Explanation):
# Small shortcuts used all over the app, like getting "now" in UTC and comparing
# two addresses without caring about upper or lower case.

# 🧪 Purpose (Technical Summary):
# General purpose helpers: timezone-aware timestamps, location normalisation
# and case-insensitive city/area matching, numeric clamping.

# 🔗 Dependencies:
# - datetime: timezone-aware timestamps
# - typing: Type hints

# 🔄 Connected Modules / Calls From:
# Used by: SQLAlchemy model defaults, community posts (lower-cased city/area),
# caregiving local jobs, vet_care nearby vets, pet_shop compatibility scoring

from datetime import datetime, timezone
from typing import Optional, Union
from uuid import uuid4


def new_id() -> str:
    """String UUID primary key."""
    return str(uuid4())


def utc_now() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes from clients as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def normalize_location(value: Optional[str]) -> Optional[str]:
    """
    Normalise a city or area for storage and comparison.

    Returns None for missing or blank values.
    """
    if value is None:
        return None
    value = value.strip()
    return value.lower() if value else None


def same_location(
    city_a: Optional[str],
    area_a: Optional[str],
    city_b: Optional[str],
    area_b: Optional[str],
) -> bool:
    """True when both city and area match, ignoring case. Missing parts never match."""
    city_a, area_a = normalize_location(city_a), normalize_location(area_a)
    city_b, area_b = normalize_location(city_b), normalize_location(area_b)
    if not (city_a and area_a and city_b and area_b):
        return False
    return city_a == city_b and area_a == area_b


def clamp(value: Union[int, float], min_val: Union[int, float], max_val: Union[int, float]) -> Union[int, float]:
    """Clamp value between min and max."""
    return max(min_val, min(value, max_val))
