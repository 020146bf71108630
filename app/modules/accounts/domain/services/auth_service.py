# 📄 File: app/modules/accounts/domain/services/auth_service.py
# 🧭 Purpose (Layman Explanation): 
# Handles signing up and logging in for pet owners, caregivers and admins, and makes sure the
# admin account exists when the app starts.
# 🧪 Purpose (Technical Summary): 
# Domain service implementing registration (unique email, bcrypt hash), credential checks and
# role-tagged JWT issuing, plus the startup admin bootstrap.
# 🔗 Dependencies: 
# Account repositories, app.shared.core.security
# 🔄 Connected Modules / Calls From: 
# accounts auth endpoints, app.main lifespan (admin bootstrap)

import logging
from typing import Optional, Tuple

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.accounts.infrastructure.database.admin_repository_impl import AdminRepositoryImpl
from app.modules.accounts.infrastructure.database.caregiver_repository_impl import CaregiverRepositoryImpl
from app.modules.accounts.infrastructure.database.models import AdminModel, CaregiverModel, UserModel
from app.modules.accounts.infrastructure.database.user_repository_impl import UserRepositoryImpl
from app.shared.config.settings import get_settings
from app.shared.core.exceptions import AuthenticationError, DuplicateResourceError, ValidationError
from app.shared.core.security import Role, get_security_manager
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields"


def _require(*values: Optional[str]) -> None:
    if any(value is None or not str(value).strip() for value in values):
        raise ValidationError(MISSING_FIELDS_MESSAGE)


class AuthService:
    """
    Domain service for account registration and login.

    Business rules:
    - Emails are unique per account type and compared lower-cased
    - Passwords are stored as bcrypt hashes only
    - Tokens carry id, name, email and the role tag
    """

    def __init__(
        self,
        user_repository: UserRepositoryImpl = Depends(),
        caregiver_repository: CaregiverRepositoryImpl = Depends(),
        admin_repository: AdminRepositoryImpl = Depends(),
    ):
        self.user_repository = user_repository
        self.caregiver_repository = caregiver_repository
        self.admin_repository = admin_repository
        self.security = get_security_manager()

    # ------------------------------------------------------------------
    # Pet owners
    # ------------------------------------------------------------------

    async def register_user(self, name: Optional[str], email: Optional[str], password: Optional[str]) -> UserModel:
        """
        Register a pet owner.

        Raises:
            ValidationError: Missing name, email or password
            DuplicateResourceError: Email already registered
        """
        _require(name, email, password)
        email = email.strip().lower()

        if await self.user_repository.get_by_email(email):
            raise DuplicateResourceError("User with this email already exists", resource_type="user", field="email")

        user = await self.user_repository.create(
            name=name.strip(),
            email=email,
            password=self.security.get_password_hash(password),
        )
        logger.log_user_action("register", user.id, resource="user")
        return user

    async def login_user(self, email: Optional[str], password: Optional[str]) -> Tuple[UserModel, str]:
        """
        Check owner credentials and issue a user token.

        Raises:
            ValidationError: Missing email or password
            AuthenticationError: Unknown email or wrong password
        """
        _require(email, password)
        user = await self.user_repository.get_by_email(email)
        if user is None or not self.security.verify_password(password, user.password):
            logger.info("Failed user login attempt")
            raise AuthenticationError("Invalid email or password")

        token = self.security.create_access_token(
            {"id": user.id, "name": user.name, "email": user.email},
            Role.USER,
        )
        logger.log_user_action("login", user.id, resource="user")
        return user, token

    # ------------------------------------------------------------------
    # Caregivers
    # ------------------------------------------------------------------

    async def register_caregiver(
        self, name: Optional[str], email: Optional[str], password: Optional[str]
    ) -> CaregiverModel:
        _require(name, email, password)
        email = email.strip().lower()

        if await self.caregiver_repository.get_by_email(email):
            raise DuplicateResourceError(
                "Caregiver with this email already exists", resource_type="caregiver", field="email"
            )

        caregiver = await self.caregiver_repository.create(
            name=name.strip(),
            email=email,
            password=self.security.get_password_hash(password),
            bio="",
        )
        logger.log_user_action("register", caregiver.id, resource="caregiver")
        return caregiver

    async def login_caregiver(self, email: Optional[str], password: Optional[str]) -> Tuple[CaregiverModel, str]:
        _require(email, password)
        caregiver = await self.caregiver_repository.get_by_email(email)
        if caregiver is None or not self.security.verify_password(password, caregiver.password):
            logger.info("Failed caregiver login attempt")
            raise AuthenticationError("Invalid email or password")

        token = self.security.create_access_token(
            {"id": caregiver.id, "name": caregiver.name, "email": caregiver.email},
            Role.CAREGIVER,
        )
        logger.log_user_action("login", caregiver.id, resource="caregiver")
        return caregiver, token

    # ------------------------------------------------------------------
    # Admins
    # ------------------------------------------------------------------

    async def login_admin(self, username: Optional[str], password: Optional[str]) -> Tuple[AdminModel, str]:
        _require(username, password)
        admin = await self.admin_repository.get_by_username(username.strip())
        if admin is None or not self.security.verify_password(password, admin.password):
            logger.warning("Failed admin login attempt")
            raise AuthenticationError("Invalid username or password")

        token = self.security.create_access_token({"id": admin.id, "username": admin.username}, Role.ADMIN)
        logger.log_user_action("login", admin.id, resource="admin")
        return admin, token


async def bootstrap_admin(session: AsyncSession) -> Optional[AdminModel]:
    """
    Create the configured admin account if it does not exist yet.

    Uses ADMIN_USERNAME / ADMIN_PASSWORD; does nothing when either is unset.
    """
    settings = get_settings()
    if not settings.ADMIN_USERNAME or not settings.ADMIN_PASSWORD:
        logger.info("Admin bootstrap skipped (ADMIN_USERNAME/ADMIN_PASSWORD not set)")
        return None

    repository = AdminRepositoryImpl(session=session)
    if await repository.get_by_username(settings.ADMIN_USERNAME):
        return None

    password_hash = get_security_manager().get_password_hash(settings.ADMIN_PASSWORD)
    return await repository.create(settings.ADMIN_USERNAME, password_hash)
