# 📄 File: app/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell PetVally how to connect to its database
# and outside services, and how to behave in each environment.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization with exports for settings management
# and the declarative database base.
#
# 🔗 Dependencies:
# - settings.py (application settings)
# - database.py (declarative base and metadata)
#
# 🔄 Connected Modules / Calls From:
# - app.main (application startup)
# - All modules requiring configuration

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
