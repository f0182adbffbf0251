from campus_portal.models.base import Base, TimestampMixin
from campus_portal.models.directory import Club, ReviewStatus, Shop
from campus_portal.models.location import CampusLocation
from campus_portal.models.approval import PendingApproval

__all__ = [
    "Base", "TimestampMixin",
    "Club", "Shop", "ReviewStatus",
    "CampusLocation", "PendingApproval",
]
