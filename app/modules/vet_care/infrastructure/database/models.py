# 📄 File: app/modules/vet_care/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how the vet directory and the appointments owners book with those vets are stored.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy models for `vet_doctors` (specialties kept as a JSON list) and `appointments`.
#
# 🔄 Connected Modules / Calls From:
# - vet_care repositories
# - Alembic migrations

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.shared.config.database import DatabaseBase
from app.shared.utils.helpers import new_id, utc_now


class VetDoctorModel(DatabaseBase):
    """Veterinarian listed in the directory."""
    __tablename__ = "vet_doctors"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    image = Column(String(500), nullable=True)
    specialty = Column(JSON, nullable=False, default=list)
    country = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True, index=True)
    area = Column(String(100), nullable=True, index=True)
    contact = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    def __repr__(self) -> str:
        return f"<VetDoctorModel(id={self.id}, name={self.name})>"


class AppointmentModel(DatabaseBase):
    """Visit booked by an owner with a vet; `time` is the slot label chosen by the owner."""
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vet_id = Column(String(36), ForeignKey("vet_doctors.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    time = Column(String(50), nullable=False)
    reason = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    vet = relationship("VetDoctorModel", lazy="joined")
