"""
Unit tests for SubmitContactUseCase
"""
import pytest

from council_admin.app.use_cases.contacts import SubmitContactCommand, SubmitContactUseCase
from council_admin.domain.entities import ContactStatus, InquiryType
from tests.fixtures.fakes import StaticBotVerifier


def make_command(**overrides) -> SubmitContactCommand:
    values = dict(
        name="Sam Lee",
        email="sam@acme.com",
        phone="  ",
        organization="Acme Rowing Club",
        inquiry_type="HOSTING_EVENT",
        message="We would like to host the regional finals.",
        recaptcha_token="bot-token",
    )
    values.update(overrides)
    return SubmitContactCommand(**values)


@pytest.mark.asyncio
async def test_submit_contact_stores_submission(mock_uow, bot_verifier, email_sender):
    use_case = SubmitContactUseCase(mock_uow, bot_verifier, email_sender)

    result = await use_case.execute(make_command(), "203.0.113.7", "pytest-agent")

    assert result.is_ok()
    contact = mock_uow.contacts.create.call_args[0][0]
    assert result.value.id == str(contact.id)
    assert contact.status == ContactStatus.NEW
    assert contact.inquiry_type == InquiryType.HOSTING_EVENT
    assert contact.phone is None
    assert contact.ip_address == "203.0.113.7"
    assert contact.user_agent == "pytest-agent"
    assert bot_verifier.calls == [("bot-token", "contact")]
    assert email_sender.kinds() == ["contact"]


@pytest.mark.asyncio
async def test_submit_contact_bot_failure(mock_uow, email_sender):
    use_case = SubmitContactUseCase(mock_uow, StaticBotVerifier(success=False), email_sender)

    result = await use_case.execute(make_command(), "203.0.113.7", "pytest-agent")

    assert result.error.code == "BOT_VERIFICATION_FAILED"
    mock_uow.contacts.create.assert_not_called()


@pytest.mark.asyncio
async def test_submit_contact_notification_failure(mock_uow, bot_verifier, failing_email_sender):
    use_case = SubmitContactUseCase(mock_uow, bot_verifier, failing_email_sender)

    result = await use_case.execute(make_command(), "203.0.113.7", "pytest-agent")

    assert result.is_ok()
    mock_uow.commit.assert_awaited_once()


@pytest.mark.parametrize(
    "overrides",
    [
        {"message": "too short"},
        {"message": "x" * 2001},
        {"name": "S"},
        {"email": "not-an-email"},
        {"inquiry_type": "SPAM"},
    ],
)
def test_invalid_submission(overrides):
    with pytest.raises(ValueError):
        make_command(**overrides)
