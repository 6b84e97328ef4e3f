"""Pulse API routes."""

from pulse.api.attendees import AttendeesController, ScanController
from pulse.api.feedback import FeedbackController
from pulse.api.websocket import feedback_websocket

__all__ = ["AttendeesController", "ScanController", "FeedbackController", "feedback_websocket"]
