"""Feedback API endpoints."""

import logging
from typing import List

from litestar import Controller, get, post
from sqlalchemy.ext.asyncio import AsyncSession

from pulse.schemas import FeedbackListItem, FeedbackResponse, SubmitFeedbackRequest
from pulse.services import FeedbackBroadcaster, FeedbackQueryService, FeedbackSubmissionService

logger = logging.getLogger("Pulse.feedback")


class FeedbackController(Controller):
    """API endpoints for feedback submission and review."""
    
    path = "/feedback"
    tags = ["feedback"]
    
    @post("/")
    async def submit_feedback(
        self,
        data: SubmitFeedbackRequest,
        session: AsyncSession,
        broadcaster: FeedbackBroadcaster,
    ) -> FeedbackResponse:
        """Submit an attendee's feedback."""
        logger.info(f"Feedback submitted for attendee {data.attendee_id}")
        
        feedback = await FeedbackSubmissionService(session, broadcaster).submit(
            attendee_id=data.attendee_id,
            expectations=data.expectations,
            experience=data.experience,
            key_takeaways=data.key_takeaways,
            improvements=data.improvements,
        )
        return FeedbackResponse.model_validate(feedback)
    
    @get("/")
    async def list_feedback(self, session: AsyncSession) -> List[FeedbackListItem]:
        """Get all feedback with attendee names."""
        feedback_list = await FeedbackQueryService(session).list_all()
        return [FeedbackListItem.model_validate(f) for f in feedback_list]
