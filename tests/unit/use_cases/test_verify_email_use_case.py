"""
Unit tests for VerifyEmailUseCase
"""
from datetime import timedelta

import pytest

from council_admin.app.use_cases.auth import VerifyEmailUseCase
from council_admin.app.use_cases.auth.verify_email_use_case import hash_token
from council_admin.domain.base import utcnow
from tests.fixtures.factories import make_user


@pytest.mark.asyncio
async def test_verify_email_success(mock_uow, email_sender):
    """Valid token verifies the address and notifies the administrators"""
    # Arrange
    user = make_user(email_verification_token="tok-123")
    mock_uow.users.get_by_verification_token.return_value = user
    use_case = VerifyEmailUseCase(mock_uow, email_sender)

    # Act
    result = await use_case.execute("tok-123")

    # Assert
    assert result.is_ok()
    assert result.value.already_verified is False
    assert user.email_verified is True
    assert user.email_verification_token is None
    assert user.email_verification_expires_at is None
    assert user.redeemed_verification_token_hash == hash_token("tok-123")
    assert user.approved is False
    mock_uow.commit.assert_awaited_once()
    assert email_sender.sent == [("new_registration", ("Jane Doe", "jane@acme.com"))]


@pytest.mark.asyncio
async def test_verify_email_second_redemption_is_already_verified(mock_uow, email_sender):
    """Redeeming the same token twice reports already_verified"""
    mock_uow.users.get_by_redeemed_token_hash.return_value = make_user(
        email_verified=True,
        email_verification_token=None,
        redeemed_verification_token_hash=hash_token("tok-123"),
    )
    use_case = VerifyEmailUseCase(mock_uow, email_sender)

    result = await use_case.execute("tok-123")

    assert result.is_ok()
    assert result.value.already_verified is True
    mock_uow.users.get_by_redeemed_token_hash.assert_awaited_once_with(hash_token("tok-123"))
    mock_uow.commit.assert_not_called()
    assert email_sender.sent == []


@pytest.mark.asyncio
async def test_verify_email_unknown_token(mock_uow, email_sender):
    use_case = VerifyEmailUseCase(mock_uow, email_sender)

    result = await use_case.execute("nope")

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_verify_email_missing_token(mock_uow, email_sender):
    use_case = VerifyEmailUseCase(mock_uow, email_sender)

    result = await use_case.execute("")

    assert result.error.code == "INVALID_TOKEN"
    mock_uow.users.get_by_verification_token.assert_not_called()


@pytest.mark.asyncio
async def test_verify_email_expired_token_changes_nothing(mock_uow, email_sender):
    """Expired token leaves the account unverified"""
    user = make_user(
        email_verification_token="tok-123",
        email_verification_expires_at=utcnow() - timedelta(minutes=1),
    )
    mock_uow.users.get_by_verification_token.return_value = user
    use_case = VerifyEmailUseCase(mock_uow, email_sender)

    result = await use_case.execute("tok-123")

    assert result.error.code == "TOKEN_EXPIRED"
    assert user.email_verified is False
    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_verify_email_notification_failure_is_not_an_error(mock_uow, failing_email_sender):
    user = make_user(email_verification_token="tok-123")
    mock_uow.users.get_by_verification_token.return_value = user
    use_case = VerifyEmailUseCase(mock_uow, failing_email_sender)

    result = await use_case.execute("tok-123")

    assert result.is_ok()
    assert user.email_verified is True
