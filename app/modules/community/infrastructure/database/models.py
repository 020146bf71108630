# 📄 File: app/modules/community/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how the neighbourhood board is stored: posts about missing pets, posts offering pets
# for adoption, the upvotes and comments people leave on them and adoption applications.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy models for `missing_posts`, `donation_posts`, `upvotes`, `comments` and
# `adoption_forms`. Upvotes and comments point at exactly one post kind; city and area of
# posts are stored trimmed and lower-cased.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.config.database (DatabaseBase)
#
# 🔄 Connected Modules / Calls From:
# - community repositories
# - Alembic migrations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.shared.config.database import DatabaseBase
from app.shared.utils.helpers import new_id, utc_now


class MissingPostStatus:
    NOT_FOUND = "NOT_FOUND"
    FOUND = "FOUND"

    ALL = (NOT_FOUND, FOUND)


class AdoptionStatus:
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


# =============================================================================
# POSTS
# =============================================================================

class MissingPostModel(DatabaseBase):
    """A lost pet reported by its owner."""
    __tablename__ = "missing_posts"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    images = Column(String(500), nullable=False, comment="Image URL")
    country = Column(String(100), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    area = Column(String(100), nullable=False, index=True)
    species = Column(String(100), nullable=False)
    breed = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=MissingPostStatus.NOT_FOUND, index=True)
    upvotes_count = Column(Integer, nullable=False, default=0)

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    user = relationship("UserModel", lazy="joined")

    def __repr__(self) -> str:
        return f"<MissingPostModel(id={self.id}, title={self.title}, status={self.status})>"


class DonationPostModel(DatabaseBase):
    """A pet offered for adoption by its owner."""
    __tablename__ = "donation_posts"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    images = Column(String(500), nullable=False, comment="Image URL")
    country = Column(String(100), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    area = Column(String(100), nullable=False, index=True)
    species = Column(String(100), nullable=False)
    breed = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(20), nullable=False)
    vaccinated = Column(Boolean, nullable=False, default=False)
    neutered = Column(Boolean, nullable=False, default=False)
    is_available = Column(Boolean, nullable=False, default=True, index=True)
    upvotes_count = Column(Integer, nullable=False, default=0)

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    user = relationship("UserModel", lazy="joined")

    def __repr__(self) -> str:
        return f"<DonationPostModel(id={self.id}, title={self.title}, available={self.is_available})>"


# =============================================================================
# REACTIONS
# =============================================================================

class UpvoteModel(DatabaseBase):
    """One user's upvote on a missing or donation post."""
    __tablename__ = "upvotes"
    __table_args__ = (
        UniqueConstraint("user_id", "missing_post_id", name="uq_upvotes_user_missing_post"),
        UniqueConstraint("user_id", "donation_post_id", name="uq_upvotes_user_donation_post"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    missing_post_id = Column(String(36), ForeignKey("missing_posts.id", ondelete="CASCADE"), nullable=True, index=True)
    donation_post_id = Column(String(36), ForeignKey("donation_posts.id", ondelete="CASCADE"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)


class CommentModel(DatabaseBase):
    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=new_id)
    content = Column(Text, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    missing_post_id = Column(String(36), ForeignKey("missing_posts.id", ondelete="CASCADE"), nullable=True, index=True)
    donation_post_id = Column(String(36), ForeignKey("donation_posts.id", ondelete="CASCADE"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    user = relationship("UserModel", lazy="joined")


# =============================================================================
# ADOPTION
# =============================================================================

class AdoptionFormModel(DatabaseBase):
    """
    Application to adopt a donated pet, with a proposed meeting time.

    Accepting one form rejects the others and makes the post unavailable.
    """
    __tablename__ = "adoption_forms"
    __table_args__ = (
        UniqueConstraint("user_id", "donation_post_id", name="uq_adoption_forms_user_donation_post"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    description = Column(Text, nullable=False)
    meeting_schedule = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default=AdoptionStatus.PENDING, index=True)

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    donation_post_id = Column(String(36), ForeignKey("donation_posts.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    user = relationship("UserModel", lazy="joined")
    donation_post = relationship("DonationPostModel", lazy="joined")

    def __repr__(self) -> str:
        return f"<AdoptionFormModel(id={self.id}, status={self.status})>"
