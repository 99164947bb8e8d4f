"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the auth provider's text id; never a UUID
    - All closed value sets encoded as Enums — no raw string matching
    - Principal is built per request and never persisted

Design Decisions:
    - str Enums: serialize to JSON and bind to String columns without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """User roles. Only ADMIN may call protected operations."""
    USER = "user"
    ADMIN = "admin"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Granularity(str, Enum):
    """Time-series bucketing unit."""
    HOUR = "hour"
    DAY = "day"


class AggregateKind(str, Enum):
    """How a sparse aggregate becomes a bucket value.

    COUNT fills gaps with 0; AVERAGE_MS converts milliseconds to whole
    seconds and fills gaps with None ("no data", not "measured zero").
    """
    COUNT = "count"
    AVERAGE_MS = "average_ms"


class Severity(str, Enum):
    """Announcement banner severity."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class GenerationStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class RoomType(str, Enum):
    LIVING_ROOM = "living_room"
    BEDROOM = "bedroom"
    KITCHEN = "kitchen"
    BATHROOM = "bathroom"
    OFFICE = "office"
    DINING_ROOM = "dining_room"
    KIDS_ROOM = "kids_room"
    HOME_OFFICE = "home_office"


class StagingStyle(str, Enum):
    MODERN = "modern"
    MIDCENTURY = "midcentury"
    SCANDINAVIAN = "scandinavian"
    LUXURY = "luxury"
    COASTAL = "coastal"
    INDUSTRIAL = "industrial"
    MINIMALIST = "minimalist"
    STANDARD = "standard"


class OperationType(str, Enum):
    STAGE_EMPTY = "stage_empty"
    REMOVE_FURNITURE = "remove_furniture"


class AuditAction(str, Enum):
    """Admin actions recorded in the audit trail."""
    ACCESS_ADMIN_DASHBOARD = "ACCESS_ADMIN_DASHBOARD"
    SEARCH_USERS = "SEARCH_USERS"
    VIEW_USER_PROFILE = "VIEW_USER_PROFILE"
    VIEW_PROJECTS_LIST = "VIEW_PROJECTS_LIST"
    VIEW_IMAGES_LIST = "VIEW_IMAGES_LIST"
    VIEW_AUDIT_LOGS = "VIEW_AUDIT_LOGS"
    UPDATE_SETTINGS = "UPDATE_SETTINGS"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class Principal:
    """Authenticated identity making a request."""
    id: UserId
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
