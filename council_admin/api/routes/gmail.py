from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse

from council_admin.api.error import ClientError, ServerError
from council_admin.api.utils.session import SessionPayload
from council_admin.app.services.email_sender import EmailSender
from council_admin.app.services.encryption import Encryptor
from council_admin.app.services.oauth_client import OAuthClient
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.app.use_cases.auth import SessionUser
from council_admin.app.use_cases.gmail import (
    CompleteGmailOAuthUseCase,
    DisconnectGmailUseCase,
    GmailAuthResponse,
    GmailDisconnectResponse,
    GmailStatusResponse,
    GmailStatusUseCase,
    SendTestEmailCommand,
    SendTestEmailResponse,
    SendTestEmailUseCase,
    StartGmailOAuthCommand,
    StartGmailOAuthUseCase,
)
from council_admin.depends import (
    get_config,
    get_current_session,
    get_email_sender,
    get_encryptor,
    get_oauth_client,
    get_unit_of_work,
    require_roles,
    resolve_session_user,
)
from council_admin.domain.entities import UserRole

router = APIRouter(prefix="/gmail", tags=["Gmail"])

require_super_admin = require_roles(UserRole.SUPER_ADMIN)

SETTINGS_PAGE = "/admin/settings?tab=email"


def _callback_url(config) -> str:
    return f"{config.SITE_URL.rstrip('/')}{config.API_PREFIX}/gmail/callback"


def _settings_redirect(config, **params: str) -> RedirectResponse:
    query = "".join(f"&{key}={quote(value, safe='')}" for key, value in params.items())
    return RedirectResponse(
        f"{config.SITE_URL.rstrip('/')}{SETTINGS_PAGE}{query}",
        status_code=status.HTTP_302_FOUND,
    )


@router.post("/auth", status_code=status.HTTP_200_OK, response_model=GmailAuthResponse)
async def start_gmail_oauth(
    request: StartGmailOAuthCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
    oauth_client: OAuthClient = Depends(get_oauth_client),
    encryptor: Encryptor = Depends(get_encryptor),
    config=Depends(get_config),
    admin: SessionUser = Depends(require_super_admin),
):
    """
    Start the Gmail connection (SUPER_ADMIN)

    Returns the Google consent URL the browser should be sent to.
    """
    use_case = StartGmailOAuthUseCase(uow, oauth_client, encryptor, _callback_url(config))
    result = await use_case.execute(request)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/callback")
async def gmail_oauth_callback(
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    session: Optional[SessionPayload] = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    oauth_client: OAuthClient = Depends(get_oauth_client),
    encryptor: Encryptor = Depends(get_encryptor),
    email_sender: EmailSender = Depends(get_email_sender),
    config=Depends(get_config),
):
    """
    Google redirect target. Always answers with a redirect to the email
    settings tab, carrying either success=connected or an error code.
    """
    user = await resolve_session_user(session, uow)
    if user is None or user.role != UserRole.SUPER_ADMIN.value:
        return _settings_redirect(config, error="unauthorized")

    use_case = CompleteGmailOAuthUseCase(
        uow, oauth_client, encryptor, email_sender, _callback_url(config)
    )
    result = await use_case.execute(code, state, error)

    if result.is_err():
        failure = result.error
        if failure.code == "PROVIDER_ERROR":
            return _settings_redirect(config, error=failure.message)
        return _settings_redirect(config, error=failure.code.lower())

    return _settings_redirect(config, success="connected")


@router.get("/status", status_code=status.HTTP_200_OK, response_model=GmailStatusResponse)
async def gmail_status(
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
    admin: SessionUser = Depends(require_super_admin),
):
    has_env_config = bool(
        config.GMAIL_CLIENT_ID and config.GMAIL_CLIENT_SECRET and config.GMAIL_REFRESH_TOKEN
    )
    result = await GmailStatusUseCase(uow, has_env_config).execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post(
    "/disconnect", status_code=status.HTTP_200_OK, response_model=GmailDisconnectResponse
)
async def disconnect_gmail(
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
    admin: SessionUser = Depends(require_super_admin),
):
    result = await DisconnectGmailUseCase(uow, email_sender).execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post("/test", status_code=status.HTTP_200_OK, response_model=SendTestEmailResponse)
async def send_test_email(
    request: SendTestEmailCommand,
    email_sender: EmailSender = Depends(get_email_sender),
    admin: SessionUser = Depends(require_super_admin),
):
    """
    Send a test message through the active Gmail credentials (SUPER_ADMIN)

    Raises:
        ClientError: 400 if no recipient is given
        ServerError: 500 if delivery fails
    """
    result = await SendTestEmailUseCase(email_sender).execute(request.email)

    if result.is_err():
        if result.error.code == "EMAIL_REQUIRED":
            raise ClientError(result.error)
        raise ServerError(result.error)

    return result.value
