"""Pulse database models."""

from pulse.models.base import Base
from pulse.models.attendee import Attendee
from pulse.models.feedback import Feedback, Experience

__all__ = [
    "Base",
    "Attendee",
    "Feedback",
    "Experience",
]
