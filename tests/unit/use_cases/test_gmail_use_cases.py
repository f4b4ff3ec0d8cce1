"""
Unit tests for the Gmail connection use cases
"""
import json
from datetime import timedelta

import pytest

from council_admin.adapter.services.encryption import AesGcmEncryptor
from council_admin.app.use_cases.gmail import (
    CompleteGmailOAuthUseCase,
    DisconnectGmailUseCase,
    GmailStatusUseCase,
    SendTestEmailUseCase,
    StartGmailOAuthCommand,
    StartGmailOAuthUseCase,
)
from council_admin.app.use_cases.gmail.dtos import GMAIL_CREDENTIAL_KEYS, GMAIL_OAUTH_STATE_KEY
from council_admin.domain.base import utcnow
from tests.fixtures.fakes import FakeOAuthClient

REDIRECT_URI = "http://localhost:8000/api/gmail/callback"


@pytest.fixture
def encryptor():
    return AesGcmEncryptor("k" * 32)


def pending_state(encryptor, state="s" * 64, expires_in=timedelta(minutes=10)):
    return json.dumps(
        {
            "state": state,
            "client_id": "client-id",
            "client_secret": encryptor.encrypt("client-secret"),
            "expires_at": (utcnow() + expires_in).isoformat(),
        }
    )


def upserts(mock_uow):
    return {call.args[0]: call.args[1] for call in mock_uow.settings.upsert.call_args_list}


@pytest.mark.asyncio
async def test_start_stores_encrypted_pending_state(mock_uow, encryptor):
    """Pending authorization is stored with an encrypted client secret"""
    use_case = StartGmailOAuthUseCase(mock_uow, FakeOAuthClient(), encryptor, REDIRECT_URI)

    result = await use_case.execute(
        StartGmailOAuthCommand(client_id="client-id", client_secret="client-secret")
    )

    assert result.is_ok()
    stored = json.loads(upserts(mock_uow)[GMAIL_OAUTH_STATE_KEY])
    assert len(stored["state"]) == 64
    assert stored["client_secret"] != "client-secret"
    assert encryptor.decrypt(stored["client_secret"]) == "client-secret"
    assert f"state={stored['state']}" in result.value.auth_url
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_complete_stores_credentials(mock_uow, encryptor, email_sender):
    # Arrange
    mock_uow.settings.get.return_value = pending_state(encryptor)
    oauth_client = FakeOAuthClient()
    use_case = CompleteGmailOAuthUseCase(
        mock_uow, oauth_client, encryptor, email_sender, REDIRECT_URI
    )

    # Act
    result = await use_case.execute("auth-code", "s" * 64)

    # Assert
    assert result.is_ok()
    assert result.value.connected_email == "council@acme.com"
    assert oauth_client.exchanges == [("client-id", "client-secret", "auth-code", REDIRECT_URI)]

    stored = upserts(mock_uow)
    assert set(stored) == set(GMAIL_CREDENTIAL_KEYS)
    assert stored["gmail_client_id"] == "client-id"
    assert encryptor.decrypt(stored["gmail_client_secret"]) == "client-secret"
    assert encryptor.decrypt(stored["gmail_refresh_token"]) == "refresh-abc"
    assert stored["gmail_connected_email"] == "council@acme.com"
    mock_uow.settings.delete.assert_awaited_once_with(GMAIL_OAUTH_STATE_KEY)
    assert email_sender.invalidations == 1


@pytest.mark.asyncio
async def test_complete_provider_error(mock_uow, encryptor, email_sender):
    use_case = CompleteGmailOAuthUseCase(
        mock_uow, FakeOAuthClient(), encryptor, email_sender, REDIRECT_URI
    )

    result = await use_case.execute(None, None, "access_denied")

    assert result.error.code == "PROVIDER_ERROR"
    assert result.error.message == "access_denied"


@pytest.mark.asyncio
async def test_complete_missing_params(mock_uow, encryptor, email_sender):
    use_case = CompleteGmailOAuthUseCase(
        mock_uow, FakeOAuthClient(), encryptor, email_sender, REDIRECT_URI
    )

    result = await use_case.execute("auth-code", None)

    assert result.error.code == "MISSING_PARAMS"


@pytest.mark.asyncio
async def test_complete_without_pending_state(mock_uow, encryptor, email_sender):
    use_case = CompleteGmailOAuthUseCase(
        mock_uow, FakeOAuthClient(), encryptor, email_sender, REDIRECT_URI
    )

    result = await use_case.execute("auth-code", "s" * 64)

    assert result.error.code == "INVALID_STATE"


@pytest.mark.asyncio
async def test_complete_state_mismatch_deletes_state(mock_uow, encryptor, email_sender):
    mock_uow.settings.get.return_value = pending_state(encryptor)
    oauth_client = FakeOAuthClient()
    use_case = CompleteGmailOAuthUseCase(
        mock_uow, oauth_client, encryptor, email_sender, REDIRECT_URI
    )

    result = await use_case.execute("auth-code", "t" * 64)

    assert result.error.code == "STATE_MISMATCH"
    mock_uow.settings.delete.assert_awaited_once_with(GMAIL_OAUTH_STATE_KEY)
    assert oauth_client.exchanges == []
    mock_uow.settings.upsert.assert_not_called()


@pytest.mark.asyncio
async def test_complete_expired_state(mock_uow, encryptor, email_sender):
    mock_uow.settings.get.return_value = pending_state(
        encryptor, expires_in=timedelta(minutes=-1)
    )
    use_case = CompleteGmailOAuthUseCase(
        mock_uow, FakeOAuthClient(), encryptor, email_sender, REDIRECT_URI
    )

    result = await use_case.execute("auth-code", "s" * 64)

    assert result.error.code == "STATE_MISMATCH"


@pytest.mark.asyncio
async def test_complete_exchange_failure(mock_uow, encryptor, email_sender):
    mock_uow.settings.get.return_value = pending_state(encryptor)
    use_case = CompleteGmailOAuthUseCase(
        mock_uow,
        FakeOAuthClient(exchange_error="invalid_grant"),
        encryptor,
        email_sender,
        REDIRECT_URI,
    )

    result = await use_case.execute("auth-code", "s" * 64)

    assert result.error.code == "EXCHANGE_FAILED"
    mock_uow.settings.upsert.assert_not_called()


@pytest.mark.asyncio
async def test_complete_without_refresh_token(mock_uow, encryptor, email_sender):
    mock_uow.settings.get.return_value = pending_state(encryptor)
    use_case = CompleteGmailOAuthUseCase(
        mock_uow, FakeOAuthClient(refresh_token=None), encryptor, email_sender, REDIRECT_URI
    )

    result = await use_case.execute("auth-code", "s" * 64)

    assert result.error.code == "NO_REFRESH_TOKEN"
    mock_uow.settings.upsert.assert_not_called()
    assert email_sender.invalidations == 0


@pytest.mark.asyncio
async def test_status_connected(mock_uow):
    mock_uow.settings.get_many.return_value = {
        "gmail_client_id": "client-id",
        "gmail_client_secret": "sealed",
        "gmail_refresh_token": "sealed",
        "gmail_connected_email": "council@acme.com",
        "gmail_connected_at": "2026-01-01T00:00:00",
    }

    result = await GmailStatusUseCase(mock_uow, has_env_config=True).execute()

    assert result.value.is_connected is True
    assert result.value.connected_email == "council@acme.com"
    assert result.value.using_env_config is False


@pytest.mark.asyncio
async def test_status_falls_back_to_environment(mock_uow):
    mock_uow.settings.get_many.return_value = {"gmail_client_id": "client-id"}

    result = await GmailStatusUseCase(mock_uow, has_env_config=True).execute()

    assert result.value.is_connected is False
    assert result.value.using_env_config is True


@pytest.mark.asyncio
async def test_disconnect_removes_credentials(mock_uow, email_sender):
    mock_uow.settings.delete_many.return_value = 5

    result = await DisconnectGmailUseCase(mock_uow, email_sender).execute()

    assert result.is_ok()
    removed = mock_uow.settings.delete_many.call_args[0][0]
    assert set(GMAIL_CREDENTIAL_KEYS) <= set(removed)
    assert GMAIL_OAUTH_STATE_KEY in removed
    mock_uow.commit.assert_awaited_once()
    assert email_sender.invalidations == 1


@pytest.mark.asyncio
async def test_send_test_email(email_sender):
    result = await SendTestEmailUseCase(email_sender).execute("ops@acme.com")

    assert result.is_ok()
    assert result.value.message == "Test email sent to ops@acme.com"
    assert email_sender.kinds() == ["test"]


@pytest.mark.asyncio
async def test_send_test_email_without_address(email_sender):
    result = await SendTestEmailUseCase(email_sender).execute(None)

    assert result.error.code == "EMAIL_REQUIRED"
    assert email_sender.sent == []


@pytest.mark.asyncio
async def test_send_test_email_delivery_failure(failing_email_sender):
    result = await SendTestEmailUseCase(failing_email_sender).execute("ops@acme.com")

    assert result.error.code == "EMAIL_SEND_FAILED"
    assert "Gmail credentials not configured" in result.error.message
