# 📄 File: app/modules/pet_shop/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how pets offered for adoption and the adoption orders placed on them are stored.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy models for `pets` (listing plus the traits used by compatibility scoring)
# and `pet_orders` (one user adopting one pet).
#
# 🔄 Connected Modules / Calls From:
# - pet_repository_impl.py, admin back-office, accounts user data page
# - Alembic migrations

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.shared.config.database import DatabaseBase
from app.shared.utils.helpers import new_id, utc_now


class PetModel(DatabaseBase):
    """
    Pet listed in the shop.

    Energy level, space required and maintenance are 1-5 scales.
    """
    __tablename__ = "pets"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    breed = Column(String(255), nullable=False)
    age = Column(Integer, nullable=False, comment="Age in years")
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    images = Column(String(500), nullable=False, comment="Image URL")
    is_available = Column(Boolean, nullable=False, default=True, index=True)
    bio = Column(Text, nullable=False)
    description = Column(Text, nullable=False)

    energy_level = Column(Integer, nullable=False)
    space_required = Column(Integer, nullable=False)
    maintenance = Column(Integer, nullable=False)
    child_friendly = Column(Boolean, nullable=False, default=False)
    allergy_safe = Column(Boolean, nullable=False, default=False)
    neutered = Column(Boolean, nullable=False, default=False)
    vaccinated = Column(Boolean, nullable=False, default=False)
    tags = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    def __repr__(self) -> str:
        return f"<PetModel(id={self.id}, name={self.name})>"


class PetOrderModel(DatabaseBase):
    """Adoption order of one pet by one user."""
    __tablename__ = "pet_orders"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    pet_id = Column(String(36), ForeignKey("pets.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    pet = relationship("PetModel", lazy="joined")
