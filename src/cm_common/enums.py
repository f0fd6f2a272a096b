"""Global enums: must match DB CHECK constraints exactly.

See alembic/versions/ for the constraint definitions.
"""

from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    LEADER = "leader"
    MEMBER = "member"


class ActiveStatus(str, Enum):
    """Members and ministries."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class EventStatus(str, Enum):
    SCHEDULED = "scheduled"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class StreamStatus(str, Enum):
    SCHEDULED = "scheduled"
    LIVE = "live"
    ENDED = "ended"
    CANCELLED = "cancelled"


class StreamPlatform(str, Enum):
    YOUTUBE = "youtube"
    FACEBOOK = "facebook"
    TWITCH = "twitch"
    ZOOM = "zoom"
    OTHER = "other"


class DonationType(str, Enum):
    OFFERING = "offering"
    TITHE = "tithe"
    SPECIAL = "special"
    OTHER = "other"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CHECK = "check"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    OTHER = "other"


class VisitType(str, Enum):
    HOME = "home"
    HOSPITAL = "hospital"
    PHONE = "phone"
    VIDEO = "video"
    OTHER = "other"


class PastoralVisitStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
