import pytest

from pulse.exceptions import ConflictError, NotFoundError, ValidationError
from pulse.services import RegistrationService, email_token


@pytest.mark.asyncio
async def test_register_issues_token_from_email(db_session):
    service = RegistrationService(db_session)
    attendee = await service.register("Ada", "ada@x.com")

    assert attendee.id is not None
    assert attendee.token == email_token("ada@x.com")
    assert attendee.has_submitted_feedback is False
    assert attendee.created_at is not None


@pytest.mark.asyncio
async def test_register_uses_injected_token_generator(db_session):
    service = RegistrationService(db_session, token_generator=lambda email: f"badge-{email}")
    attendee = await service.register("Grace", "grace@x.com")

    assert attendee.token == "badge-grace@x.com"
    assert (await service.lookup_by_token("badge-grace@x.com")).id == attendee.id


@pytest.mark.asyncio
async def test_register_same_email_twice_conflicts(db_session):
    service = RegistrationService(db_session)
    await service.register("Ada", "ada@x.com")

    with pytest.raises(ConflictError) as exc_info:
        await service.register("Ada Lovelace", "ada@x.com")
    assert exc_info.value.field == "email"

    # The session is still usable after the rollback
    assert (await service.lookup_by_token(email_token("ada@x.com"))).name == "Ada"


@pytest.mark.asyncio
async def test_register_token_collision_conflicts(db_session):
    service = RegistrationService(db_session, token_generator=lambda email: "same-token")
    await service.register("Ada", "ada@x.com")

    with pytest.raises(ConflictError):
        await service.register("Grace", "grace@x.com")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "name,email,field",
    [
        ("", "ada@x.com", "name"),
        ("  ", "ada@x.com", "name"),
        (None, "ada@x.com", "name"),
        ("Ada", "ada-at-x.com", "email"),
        ("Ada", "", "email"),
    ],
)
async def test_register_validates_input(db_session, name, email, field):
    service = RegistrationService(db_session)
    with pytest.raises(ValidationError) as exc_info:
        await service.register(name, email)
    assert exc_info.value.field == field


@pytest.mark.asyncio
async def test_token_equal_to_event_code_is_refused(db_session):
    service = RegistrationService(
        db_session,
        token_generator=lambda email: "EventCode",
        event_scan_code="EventCode",
    )
    with pytest.raises(ConflictError):
        await service.register("Ada", "ada@x.com")


@pytest.mark.asyncio
async def test_lookup_unknown_token(db_session):
    service = RegistrationService(db_session)
    with pytest.raises(NotFoundError):
        await service.lookup_by_token("missing")


@pytest.mark.asyncio
async def test_resolve_scan(db_session):
    service = RegistrationService(db_session, event_scan_code="EventCode")
    attendee = await service.register("Ada", "ada@x.com")

    event = await service.resolve_scan("EventCode")
    assert event.is_new_attendee is True
    assert event.attendee is None

    scanned = await service.resolve_scan(attendee.token)
    assert scanned.is_new_attendee is False
    assert scanned.attendee.id == attendee.id

    with pytest.raises(NotFoundError):
        await service.lookup_by_token("EventCode")
