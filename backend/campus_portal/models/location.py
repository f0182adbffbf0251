import uuid

from sqlalchemy import CheckConstraint, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_portal.models.base import Base, TimestampMixin
from campus_portal.models.constraints import max_length


class CampusLocation(TimestampMixin, Base):
    __tablename__ = "campus_locations"
    __table_args__ = (
        max_length("name", 200, "location_name_length"),
        max_length("description", 2000, "location_description_length"),
        max_length("floor_info", 100, "floor_info_length"),
        CheckConstraint("latitude >= -90 AND latitude <= 90", name="latitude_range"),
        CheckConstraint("longitude >= -180 AND longitude <= 180", name="longitude_range"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False, default="other")
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    floor_info: Mapped[str | None] = mapped_column(Text, nullable=True)
