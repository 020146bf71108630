# 📄 File: app/modules/accounts/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how the three kinds of PetVally accounts are stored: pet owners (users),
# caregivers who look after pets, and back-office admins.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the accounts module: `users` (profile plus adoption preferences),
# `caregivers` (profile, hourly rate, verification, earnings) and `admins`.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.config.database (DatabaseBase with naming convention)
#
# 🔄 Connected Modules / Calls From:
# - user/caregiver/admin repository implementations
# - Alembic migrations (schema generation)

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String, Text

from app.shared.config.database import DatabaseBase
from app.shared.utils.helpers import new_id, utc_now


# =============================================================================
# USER MODEL - pet owners
# =============================================================================

class UserModel(DatabaseBase):
    """
    SQLAlchemy model for pet owner accounts.

    Carries the profile shown on the owner's page and the preferences used
    by the pet shop compatibility score.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id, comment="Unique identifier for each user")
    name = Column(String(255), nullable=False, comment="Display name")
    email = Column(String(255), unique=True, nullable=False, index=True, comment="Login email (lower-cased)")
    password = Column(String(255), nullable=False, comment="Hashed password using bcrypt")
    image = Column(String(500), nullable=True, comment="Profile image URL")

    age = Column(Integer, nullable=True)
    country = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    area = Column(String(100), nullable=True)

    # Adoption preferences
    daily_availability = Column(Integer, nullable=False, default=1, comment="Hours per day available for a pet")
    has_outdoor_space = Column(Boolean, nullable=False, default=False)
    has_children = Column(Boolean, nullable=False, default=False)
    has_allergies = Column(Boolean, nullable=False, default=False)
    experience_level = Column(Integer, nullable=False, default=1, comment="Pet keeping experience 1-5")

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email})>"


# =============================================================================
# CAREGIVER MODEL
# =============================================================================

class CaregiverModel(DatabaseBase):
    """SQLAlchemy model for caregiver accounts."""
    __tablename__ = "caregivers"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False, comment="Hashed password using bcrypt")
    image = Column(String(500), nullable=True)

    country = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    area = Column(String(100), nullable=True)
    bio = Column(Text, nullable=False, default="")

    hourly_rate = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    verified = Column(Boolean, nullable=False, default=False, comment="Verified by an admin")
    total_earnings = Column(
        Numeric(10, 2, asdecimal=False),
        nullable=False,
        default=0,
        comment="Sum of requested amounts of completed jobs"
    )

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    def __repr__(self) -> str:
        return f"<CaregiverModel(id={self.id}, email={self.email})>"


# =============================================================================
# ADMIN MODEL
# =============================================================================

class AdminModel(DatabaseBase):
    """SQLAlchemy model for back-office admins."""
    __tablename__ = "admins"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(100), unique=True, nullable=False)
    password = Column(String(255), nullable=False, comment="Hashed password using bcrypt")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    def __repr__(self) -> str:
        return f"<AdminModel(id={self.id}, username={self.username})>"
