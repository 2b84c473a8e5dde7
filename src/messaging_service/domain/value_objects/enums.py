from __future__ import annotations

from enum import StrEnum


class UserRole(StrEnum):
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    PARENT = "PARENT"
    STUDENT = "STUDENT"


class MessageType(StrEnum):
    GENERAL = "GENERAL"
    ACADEMIC = "ACADEMIC"
    BEHAVIOR_REPORT = "BEHAVIOR_REPORT"
    MEETING_REQUEST = "MEETING_REQUEST"
    ATTENDANCE_ALERT = "ATTENDANCE_ALERT"
    GRADE_NOTIFICATION = "GRADE_NOTIFICATION"
    ANNOUNCEMENT = "ANNOUNCEMENT"


class Priority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @property
    def rank(self) -> int:
        """Severity order, LOW lowest."""
        return list(Priority).index(self)


class MessageMode(StrEnum):
    DIRECT = "direct"
    BROADCAST = "broadcast"
    ALL = "all"


class MailboxView(StrEnum):
    INBOX = "inbox"
    SENT = "sent"
    BROADCASTS = "broadcasts"
    ALL = "all"


# Broadcast target meaning "every role"; stored as NULL target_role.
ALL_ROLES = "ALL"
