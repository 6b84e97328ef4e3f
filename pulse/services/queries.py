"""Read-side queries over feedback."""

from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pulse.exceptions import DependencyFailure
from pulse.models import Feedback
from pulse.utils.logging import error_log


class FeedbackQueryService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[Feedback]:
        """All feedback in storage order, each with its attendee loaded."""
        stmt = select(Feedback).options(selectinload(Feedback.attendee))
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            error_log("Failed to list feedback", exc=e)
            raise DependencyFailure("Could not load feedback") from e
        return list(result.scalars().all())
