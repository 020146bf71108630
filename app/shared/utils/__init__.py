# 📄 File: app/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# A toolbox of small helpers (logging, checks on incoming data, formatting) used everywhere in PetVally.

# 🧪 Purpose (Technical Summary):
# Shared utilities package: structured logging, request data validators,
# location helpers and response formatters.

# 🔄 Connected Modules / Calls From:
# Used by: app.main, middleware, every module's services and routers

from .logging import get_logger, log_context, setup_logging
from .helpers import as_utc, new_id, normalize_location, same_location, utc_now
from .validators import first_missing_field, parse_image_data, require_fields, validate_rating
from .formatters import average, format_location, short_id

__all__ = [
    "get_logger",
    "log_context",
    "setup_logging",
    "as_utc",
    "new_id",
    "normalize_location",
    "same_location",
    "utc_now",
    "first_missing_field",
    "parse_image_data",
    "require_fields",
    "validate_rating",
    "average",
    "format_location",
    "short_id",
]
