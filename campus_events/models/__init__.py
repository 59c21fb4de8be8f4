"""
Database models package
"""

from .college import College
from .student import Student
from .event import Event, EventStatus, EventType
from .registration import Registration, RegistrationStatus
from .attendance import Attendance, AttendanceStatus
from .feedback import Feedback
from .admin import Admin, Role

__all__ = [
    "College",
    "Student",
    "Event",
    "EventStatus",
    "EventType",
    "Registration",
    "RegistrationStatus",
    "Attendance",
    "AttendanceStatus",
    "Feedback",
    "Admin",
    "Role",
]
