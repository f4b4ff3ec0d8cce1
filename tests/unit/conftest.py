from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.fixtures.fakes import RecordingEmailSender, StaticBotVerifier


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_verification_token = AsyncMock(return_value=None)
    uow.users.get_by_redeemed_token_hash = AsyncMock(return_value=None)
    uow.users.list_pending_approval = AsyncMock(return_value=[])
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.settings = MagicMock()
    uow.settings.get = AsyncMock(return_value=None)
    uow.settings.get_many = AsyncMock(return_value={})
    uow.settings.upsert = AsyncMock()
    uow.settings.delete = AsyncMock()
    uow.settings.delete_many = AsyncMock(return_value=0)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_by_token_hash = AsyncMock(return_value=None)
    uow.password_reset_tokens.update = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.consume_pending_for_user = AsyncMock(return_value=0)

    uow.contacts = MagicMock()
    uow.contacts.create = AsyncMock(side_effect=lambda contact: contact)

    return uow


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def failing_email_sender():
    return RecordingEmailSender(fail=True)


@pytest.fixture
def bot_verifier():
    return StaticBotVerifier()
