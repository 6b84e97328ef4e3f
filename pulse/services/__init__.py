"""Pulse business services."""

from pulse.services.broadcaster import FeedbackBroadcaster, NEW_FEEDBACK
from pulse.services.queries import FeedbackQueryService
from pulse.services.registration import RegistrationService, ScanResolution
from pulse.services.submission import FeedbackSubmissionService
from pulse.services.tokens import TokenGenerator, email_token, render_qr_svg

__all__ = [
    "FeedbackBroadcaster",
    "NEW_FEEDBACK",
    "FeedbackQueryService",
    "RegistrationService",
    "ScanResolution",
    "FeedbackSubmissionService",
    "TokenGenerator",
    "email_token",
    "render_qr_svg",
]
