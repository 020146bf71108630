# 📄 File: app/modules/caregiving/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how pet-sitting jobs posted by owners, caregivers' applications to those jobs and the
# reviews owners leave for caregivers are stored.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy models for `job_posts`, `job_applications` and `reviews`.
# A job goes OPEN -> ONGOING (caregiver selected) -> CLOSED; an application goes
# PENDING -> ACCEPTED/REJECTED and ACCEPTED -> COMPLETED when the job ends.
#
# 🔄 Connected Modules / Calls From:
# - caregiving repositories
# - Alembic migrations

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.shared.config.database import DatabaseBase
from app.shared.utils.helpers import new_id, utc_now


class JobStatus:
    OPEN = "OPEN"
    ONGOING = "ONGOING"
    CLOSED = "CLOSED"


class ApplicationStatus:
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"


class JobPostModel(DatabaseBase):
    """Pet-sitting job posted by an owner."""
    __tablename__ = "job_posts"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    country = Column(String(100), nullable=True)
    city = Column(String(100), nullable=False, index=True)
    area = Column(String(100), nullable=False, index=True)
    price_range_low = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    price_range_high = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default=JobStatus.OPEN, index=True)

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    selected_caregiver_id = Column(String(36), ForeignKey("caregivers.id"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    user = relationship("UserModel", lazy="joined")
    selected_caregiver = relationship("CaregiverModel", lazy="joined")

    def __repr__(self) -> str:
        return f"<JobPostModel(id={self.id}, title={self.title}, status={self.status})>"


class JobApplicationModel(DatabaseBase):
    """A caregiver's proposal for a job."""
    __tablename__ = "job_applications"
    __table_args__ = (
        UniqueConstraint("caregiver_id", "job_post_id", name="uq_job_applications_caregiver_job"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    proposal = Column(Text, nullable=False)
    requested_amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    status = Column(String(20), nullable=False, default=ApplicationStatus.PENDING, index=True)

    caregiver_id = Column(String(36), ForeignKey("caregivers.id", ondelete="CASCADE"), nullable=False, index=True)
    job_post_id = Column(String(36), ForeignKey("job_posts.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    caregiver = relationship("CaregiverModel", lazy="joined")
    job_post = relationship("JobPostModel", lazy="joined")


class ReviewModel(DatabaseBase):
    """An owner's review of a caregiver; one per owner and caregiver."""
    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("user_id", "caregiver_id", name="uq_reviews_user_caregiver"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    caregiver_id = Column(String(36), ForeignKey("caregivers.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    user = relationship("UserModel", lazy="joined")
