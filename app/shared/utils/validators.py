# 📄 File: app/shared/utils/validators.py

# 🧭 Purpose (Layman Explanation):
# Checks that the data people send to PetVally is complete and makes sense
# before we try to save it.

# 🧪 Purpose (Technical Summary):
# Request data validators shared by the routers: first missing required field,
# rating range, and the vet chat `imageData` form field parser.

# 🔗 Dependencies:
# - json: parsing the imageData form field
# - app.shared.core.exceptions: ValidationError

# 🔄 Connected Modules / Calls From:
# Used by: community and admin routers (required fields), store and caregiving
# services (ratings), vet_care vetchat endpoint (image data)

import json
from typing import Any, Dict, Iterable, Mapping, Optional

from app.shared.core.exceptions import ValidationError

RATING_MIN = 1
RATING_MAX = 5


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def first_missing_field(data: Mapping[str, Any], fields: Iterable[str]) -> Optional[str]:
    """
    Return the first field in `fields` that is absent or blank in `data`.

    Zero and False are present values.
    """
    for field in fields:
        if _is_blank(data.get(field)):
            return field
    return None


def require_fields(data: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Raise `Missing required field: X` for the first missing field."""
    missing = first_missing_field(data, fields)
    if missing:
        raise ValidationError(f"Missing required field: {missing}", field=missing)


def validate_rating(rating: Any, message: str = "Rating must be between 1 and 5") -> int:
    """Validate a 1..5 star rating and return it as int."""
    if isinstance(rating, bool):
        raise ValidationError(message, field="rating")
    try:
        value = int(rating)
    except (TypeError, ValueError):
        raise ValidationError(message, field="rating")
    if value != rating and not isinstance(rating, str):
        # 4.5 is not a star rating
        raise ValidationError(message, field="rating")
    if value < RATING_MIN or value > RATING_MAX:
        raise ValidationError(message, field="rating")
    return value


def parse_image_data(raw: Optional[str]) -> Optional[Dict[str, str]]:
    """
    Parse the vet chat `imageData` form field: JSON `{"base64": ..., "mimeType": ...}`.

    Returns None when the field is absent.

    Raises:
        ValueError: If the field is not valid JSON or lacks base64/mimeType
    """
    if raw is None or raw == "":
        return None

    parsed = json.loads(raw)
    if not isinstance(parsed, dict):
        raise ValueError("imageData must be an object")

    data = parsed.get("base64")
    mime_type = parsed.get("mimeType")
    if not isinstance(data, str) or not data or not isinstance(mime_type, str) or not mime_type:
        raise ValueError("imageData requires base64 and mimeType")

    # Data URLs carry their own prefix
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]

    return {"base64": data, "mimeType": mime_type}
