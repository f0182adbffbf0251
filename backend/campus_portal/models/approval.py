import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from campus_portal.models.base import Base, utcnow
from campus_portal.models.constraints import email_format


class PendingApproval(Base):
    __tablename__ = "pending_approvals"
    __table_args__ = (
        CheckConstraint("item_type IN ('shop', 'club')", name="approval_item_type"),
        CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="approval_status"),
        email_format("faculty_email", "approval_faculty_email_format", nullable=False, sentinel="pending"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    item_type: Mapped[str] = mapped_column(String(16), nullable=False)  # shop | club
    item_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    submitted_by: Mapped[str] = mapped_column(String(64), nullable=False)
    faculty_email: Mapped[str] = mapped_column(String(255), nullable=False, default="pending")
    approval_token: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    status: Mapped[str] = mapped_column(String(16), default="pending", nullable=False)  # pending | approved | rejected
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
