"""Attendee model."""

from typing import TYPE_CHECKING, List

from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pulse.models.base import Base

if TYPE_CHECKING:
    from pulse.models.feedback import Feedback


class Attendee(Base):
    """A registered event participant, identified by a scannable token."""
    
    __tablename__ = "attendees"
    
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    
    # Scan code printed on the attendee's QR badge, never reassigned
    token: Mapped[str] = mapped_column(
        String(128),
        unique=True,
        index=True,
        nullable=False,
    )
    
    # Flips to True once, on the first accepted feedback
    has_submitted_feedback: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    
    feedback: Mapped[List["Feedback"]] = relationship(
        "Feedback",
        back_populates="attendee",
    )
    
    def __repr__(self) -> str:
        return f"<Attendee {self.email} ({self.token})>"
