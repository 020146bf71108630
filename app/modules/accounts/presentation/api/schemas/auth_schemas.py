# 📄 File: app/modules/accounts/presentation/api/schemas/auth_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes the sign-up and login forms for pet owners, caregivers and admins.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request schemas for registration and login. Fields are optional at the schema level;
# the auth service answers "Missing required fields" for absent or blank values.
#
# 🔄 Connected Modules / Calls From:
# - accounts users/caregivers/admin auth endpoints

from datetime import datetime
from typing import Optional

from app.shared.core.schemas import APIModel


class RegisterRequest(APIModel):
    """Owner or caregiver registration payload."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(APIModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AdminLoginRequest(APIModel):
    username: Optional[str] = None
    password: Optional[str] = None


class AccountSummary(APIModel):
    """Account as returned right after registration."""

    id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class AdminResponse(APIModel):
    id: str
    username: str
