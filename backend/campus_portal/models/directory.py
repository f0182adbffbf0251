import uuid
from enum import StrEnum

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_portal.models.base import Base, TimestampMixin
from campus_portal.models.constraints import email_format, max_length


class ReviewStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


def _uuid() -> str:
    return str(uuid.uuid4())


class Club(TimestampMixin, Base):
    __tablename__ = "clubs"
    __table_args__ = (
        max_length("name", 200, "club_name_length"),
        max_length("description", 2000, "club_description_length"),
        max_length("faculty_coordinator", 200, "faculty_coordinator_length"),
        max_length("recruitment_info", 2000, "recruitment_info_length"),
        email_format("faculty_email", "faculty_email_format"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    faculty_coordinator: Mapped[str] = mapped_column(Text, nullable=False)
    faculty_email: Mapped[str | None] = mapped_column(Text, nullable=True)
    recruitment_open: Mapped[bool | None] = mapped_column(Boolean, default=False, nullable=True)
    recruitment_info: Mapped[str | None] = mapped_column(Text, nullable=True)
    logo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), default=ReviewStatus.PENDING, nullable=False)
    approval_token: Mapped[str | None] = mapped_column(String(36), nullable=True)
    submitted_by: Mapped[str | None] = mapped_column(String(64), nullable=True)


class Shop(TimestampMixin, Base):
    __tablename__ = "shops"
    __table_args__ = (
        max_length("name", 200, "shop_name_length"),
        max_length("description", 2000, "shop_description_length"),
        max_length("location", 200, "shop_location_length"),
        max_length("contact", 200, "shop_contact_length"),
        max_length("category", 100, "category_length"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), default=ReviewStatus.PENDING, nullable=False)
    approval_token: Mapped[str | None] = mapped_column(String(36), nullable=True)
    submitted_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
