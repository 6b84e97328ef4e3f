"""Attendee registration and scan API endpoints."""

import logging

from litestar import Controller, Response, get, post
from litestar.datastructures import State
from sqlalchemy.ext.asyncio import AsyncSession

from pulse.schemas import AttendeeResponse, RegisterAttendeeRequest, ScanResponse
from pulse.services import RegistrationService, render_qr_svg

logger = logging.getLogger("Pulse.attendees")


def registration_service(session: AsyncSession, state: State) -> RegistrationService:
    return RegistrationService(session, event_scan_code=state.settings.event_scan_code)


class AttendeesController(Controller):
    """API endpoints for attendee registration and lookup."""
    
    path = "/attendees"
    tags = ["attendees"]
    
    @post("/")
    async def register_attendee(
        self,
        data: RegisterAttendeeRequest,
        session: AsyncSession,
        state: State,
    ) -> AttendeeResponse:
        """Register an attendee and issue their scan token."""
        logger.info(f"Registering attendee {data.email} ({data.name})")
        attendee = await registration_service(session, state).register(data.name, str(data.email))
        return AttendeeResponse.model_validate(attendee)
    
    @get("/{token:str}")
    async def get_attendee(
        self,
        token: str,
        session: AsyncSession,
        state: State,
    ) -> AttendeeResponse:
        """Look up an attendee by scan token."""
        attendee = await registration_service(session, state).lookup_by_token(token)
        return AttendeeResponse.model_validate(attendee)
    
    @get("/{token:str}/qr", media_type="image/svg+xml")
    async def get_attendee_qr(
        self,
        token: str,
        session: AsyncSession,
        state: State,
    ) -> Response:
        """Render the attendee's scan token as an SVG QR code."""
        attendee = await registration_service(session, state).lookup_by_token(token)
        return Response(content=render_qr_svg(attendee.token), media_type="image/svg+xml")


class ScanController(Controller):
    """Resolves codes decoded by the QR scanner."""
    
    path = "/scan"
    tags = ["attendees"]
    
    @get("/{code:str}")
    async def resolve_scan(
        self,
        code: str,
        session: AsyncSession,
        state: State,
    ) -> ScanResponse:
        """Return the attendee for a scanned token, or flag the event code as a new registration."""
        resolution = await registration_service(session, state).resolve_scan(code)
        if resolution.is_new_attendee:
            logger.debug("Event code scanned, starting registration")
            return ScanResponse(is_new_attendee=True)
        return ScanResponse(
            is_new_attendee=False,
            attendee=AttendeeResponse.model_validate(resolution.attendee),
        )
