"""Feedback submission."""

import logging
import uuid
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pulse.exceptions import ConflictError, DependencyFailure, NotFoundError, ValidationError
from pulse.models import Attendee, Experience, Feedback
from pulse.schemas import FeedbackResponse
from pulse.services.broadcaster import FeedbackBroadcaster, NEW_FEEDBACK
from pulse.utils.logging import error_log

logger = logging.getLogger("Pulse.feedback")


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required", field=field)
    return str(value)


def _parse_experience(value) -> Experience:
    try:
        return Experience(value)
    except ValueError:
        allowed = ", ".join(e.value for e in Experience)
        raise ValidationError(
            f"experience must be one of: {allowed}",
            field="experience",
        ) from None


class FeedbackSubmissionService:
    """Accepts one feedback per attendee and announces it to live viewers."""

    def __init__(self, session: AsyncSession, broadcaster: Optional[FeedbackBroadcaster] = None):
        self.session = session
        self.broadcaster = broadcaster

    async def submit(
        self,
        attendee_id: uuid.UUID,
        expectations: str,
        experience,
        key_takeaways: str,
        improvements: str,
    ) -> Feedback:
        """
        Persist feedback, mark the attendee as done, then broadcast it.

        The feedback insert and the flag update share one transaction, and the
        flag is only set where it is still false. A concurrent submission that
        loses that update is rolled back with ConflictError, so an attendee
        never ends up with two feedback rows.

        Raises:
            NotFoundError: Unknown attendee
            ConflictError: Attendee already submitted feedback
            ValidationError: Unknown experience value or blank text field
            DependencyFailure: The database failed
        """
        try:
            attendee = await self.session.get(Attendee, attendee_id)
        except SQLAlchemyError as e:
            error_log("Failed to load attendee", exc=e, context={"attendee_id": attendee_id})
            raise DependencyFailure("Could not load attendee") from e

        if not attendee:
            raise NotFoundError("Attendee not found", field="attendeeId")

        if attendee.has_submitted_feedback:
            raise ConflictError("Feedback already submitted", field="attendeeId")

        feedback = Feedback(
            attendee_id=attendee.id,
            expectations=_require_text(expectations, "expectations"),
            experience=_parse_experience(experience),
            key_takeaways=_require_text(key_takeaways, "keyTakeaways"),
            improvements=_require_text(improvements, "improvements"),
        )

        try:
            self.session.add(feedback)
            await self.session.flush()

            result = await self.session.execute(
                update(Attendee)
                .where(Attendee.id == attendee.id, Attendee.has_submitted_feedback == False)
                .values(has_submitted_feedback=True)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                await self.session.rollback()
                logger.info(f"Duplicate feedback from attendee {attendee_id} rejected")
                raise ConflictError("Feedback already submitted", field="attendeeId")

            await self.session.commit()
            await self.session.refresh(feedback)
        except SQLAlchemyError as e:
            await self.session.rollback()
            error_log("Failed to save feedback", exc=e, context={"attendee_id": attendee_id})
            raise DependencyFailure("Could not save feedback") from e

        logger.info(f"Feedback saved from attendee {attendee_id} ({feedback.experience.value})")

        self._announce(feedback)
        return feedback

    def _announce(self, feedback: Feedback) -> None:
        """Best-effort broadcast; failures are logged and never raised."""
        if self.broadcaster is None:
            return
        try:
            payload = FeedbackResponse.model_validate(feedback).model_dump(mode="json", by_alias=True)
            reached = self.broadcaster.publish({"type": NEW_FEEDBACK, "feedback": payload})
            logger.debug(f"New feedback {feedback.id} sent to {reached} viewer(s)")
        except Exception as e:
            error_log(
                "Failed to broadcast new feedback",
                exc=e,
                context={"feedback_id": feedback.id},
                level=logging.WARNING,
            )
