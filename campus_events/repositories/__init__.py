"""
Persistence access layer, one repository per entity
"""

from .base import BaseRepo
from .college import CollegeRepo
from .student import StudentRepo
from .event import EventRepo
from .registration import RegistrationRepo
from .attendance import AttendanceRepo
from .feedback import FeedbackRepo
from .admin import AdminRepo

__all__ = [
    "BaseRepo",
    "CollegeRepo",
    "StudentRepo",
    "EventRepo",
    "RegistrationRepo",
    "AttendanceRepo",
    "FeedbackRepo",
    "AdminRepo",
]
