"""Feedback model for attendee feedback submissions."""

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pulse.models.base import Base

if TYPE_CHECKING:
    from pulse.models.attendee import Attendee


class Experience(str, enum.Enum):
    """Overall event rating."""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class Feedback(Base):
    """Structured feedback from one attendee."""
    
    __tablename__ = "feedback"
    
    attendee_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("attendees.id"),
        index=True,
        nullable=False,
    )
    
    expectations: Mapped[str] = mapped_column(Text, nullable=False)
    experience: Mapped[Experience] = mapped_column(
        Enum(Experience, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    key_takeaways: Mapped[str] = mapped_column(Text, nullable=False)
    improvements: Mapped[str] = mapped_column(Text, nullable=False)
    
    attendee: Mapped["Attendee"] = relationship(
        "Attendee",
        back_populates="feedback",
    )
    
    def __repr__(self) -> str:
        return f"<Feedback {self.experience.value} from {self.attendee_id}>"
