"""Attendee registration and scan-code lookup."""

import logging
from dataclasses import dataclass
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pulse.config import DEFAULT_EVENT_SCAN_CODE
from pulse.exceptions import ConflictError, DependencyFailure, NotFoundError, ValidationError
from pulse.models import Attendee
from pulse.services.tokens import TokenGenerator, email_token
from pulse.utils.logging import error_log

logger = logging.getLogger("Pulse.attendees")


@dataclass
class ScanResolution:
    """What a scanned code refers to."""
    is_new_attendee: bool
    attendee: Optional[Attendee] = None


class RegistrationService:
    """
    Creates attendees and resolves scan tokens back to them.

    Args:
        session: Database session for this request
        token_generator: Maps an email to the attendee's scan token
        event_scan_code: The event-wide code that means "register a new attendee"
    """

    def __init__(
        self,
        session: AsyncSession,
        token_generator: TokenGenerator = email_token,
        event_scan_code: str = DEFAULT_EVENT_SCAN_CODE,
    ):
        self.session = session
        self.token_generator = token_generator
        self.event_scan_code = event_scan_code

    async def register(self, name: str, email: str) -> Attendee:
        """
        Register an attendee and issue their scan token.

        Raises:
            ValidationError: Name is blank or email is malformed
            ConflictError: Email (or its token) is already registered
            DependencyFailure: The database failed
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name is required", field="name")

        try:
            email = validate_email((email or "").strip(), check_deliverability=False).normalized
        except EmailNotValidError as e:
            raise ValidationError(f"Invalid email address: {e}", field="email") from e

        token = self.token_generator(email)
        if not token:
            raise ValidationError("Could not generate a scan token", field="email")
        if token == self.event_scan_code:
            raise ConflictError("Generated token collides with the event scan code", field="email")

        attendee = Attendee(name=name, email=email, token=token)
        self.session.add(attendee)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.info(f"Registration rejected, {email} is already registered")
            raise ConflictError(f"Attendee with email '{email}' is already registered", field="email") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            error_log("Failed to register attendee", exc=e, context={"email": email})
            raise DependencyFailure("Could not save attendee") from e

        await self.session.refresh(attendee)
        logger.info(f"Attendee registered: {attendee.name} <{attendee.email}>")
        return attendee

    async def lookup_by_token(self, token: str) -> Attendee:
        """Return the attendee owning `token` or raise NotFoundError."""
        if token == self.event_scan_code:
            raise NotFoundError("Attendee not found")

        try:
            result = await self.session.execute(select(Attendee).where(Attendee.token == token))
        except SQLAlchemyError as e:
            error_log("Failed to look up attendee", exc=e, context={"token": token})
            raise DependencyFailure("Could not look up attendee") from e

        attendee = result.scalar_one_or_none()
        if not attendee:
            raise NotFoundError("Attendee not found")
        return attendee

    async def resolve_scan(self, code: str) -> ScanResolution:
        """Resolve a scanned code: the event code starts registration, anything else is a token."""
        if code == self.event_scan_code:
            return ScanResolution(is_new_attendee=True)
        return ScanResolution(is_new_attendee=False, attendee=await self.lookup_by_token(code))
