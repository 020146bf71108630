# 📄 File: app/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The main entry point that tells Python this 'app' folder contains the PetVally application code
# and sets up the basic version and package information.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version info and package metadata
# for the PetVally FastAPI application.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - main.py (application entry point)
# - Package imports throughout the application

"""
PetVally - Pet Adoption, Store and Caregiving Platform

Backend API connecting pet owners, caregivers and an admin back-office:
pet shop, product store, caregiving jobs, community posts, vet care and AI vet chat.
"""

__version__ = "1.0.0"
__title__ = "PetVally Backend API"
__description__ = "Pet adoption, store, caregiving and vet care platform"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]
