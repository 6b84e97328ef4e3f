"""Request/response schemas shared by the API and the live feed."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel

from pulse.models import Experience


class CamelModel(BaseModel):
    """Serializes with camelCase keys, accepts camelCase or snake_case."""
    
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# --- Request Schemas ---

class RegisterAttendeeRequest(CamelModel):
    """Request to register a new attendee."""
    name: str = Field(..., min_length=1, max_length=200, description="Attendee's full name")
    email: EmailStr = Field(..., description="Attendee's email address")


class SubmitFeedbackRequest(CamelModel):
    """Request to submit feedback for an attendee."""
    attendee_id: uuid.UUID
    # Checked by the submission service after the attendee lookup
    expectations: Optional[str] = None
    experience: Optional[str] = None
    key_takeaways: Optional[str] = None
    improvements: Optional[str] = None


# --- Response Schemas ---

class AttendeeResponse(CamelModel):
    """Attendee data response."""
    id: uuid.UUID
    name: str
    email: str
    token: str
    has_submitted_feedback: bool
    created_at: datetime
    updated_at: datetime


class AttendeeSummary(CamelModel):
    """The attendee fields exposed alongside feedback."""
    id: uuid.UUID
    name: str


class FeedbackResponse(CamelModel):
    """Feedback data response."""
    id: uuid.UUID
    attendee_id: uuid.UUID
    expectations: str
    experience: Experience
    key_takeaways: str
    improvements: str
    created_at: datetime


class FeedbackListItem(FeedbackResponse):
    """Feedback with the submitting attendee's name."""
    attendee: AttendeeSummary


class ScanResponse(CamelModel):
    """Outcome of resolving a scanned code."""
    is_new_attendee: bool
    attendee: Optional[AttendeeResponse] = None
