from fastapi import APIRouter, Depends, status

from council_admin.api.error import ClientError, ServerError
from council_admin.app.services.bot_verifier import BotConfigurationStatus, BotVerifier
from council_admin.app.services.email_sender import EmailSender
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.app.use_cases.auth import SessionUser
from council_admin.app.use_cases.settings import (
    CheckRecaptchaUseCase,
    InvalidateCachesResponse,
    InvalidateCachesUseCase,
    RecaptchaSettingsResponse,
    UpdateRecaptchaSettingsCommand,
    UpdateRecaptchaSettingsUseCase,
)
from council_admin.depends import (
    get_bot_verifier,
    get_email_sender,
    get_unit_of_work,
    require_roles,
)
from council_admin.domain.entities import UserRole

router = APIRouter(prefix="/settings", tags=["Settings"])

require_admin = require_roles(UserRole.ADMIN, UserRole.SUPER_ADMIN)


@router.put("/recaptcha", status_code=status.HTTP_200_OK, response_model=RecaptchaSettingsResponse)
async def update_recaptcha_settings(
    request: UpdateRecaptchaSettingsCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
    bot_verifier: BotVerifier = Depends(get_bot_verifier),
    admin: SessionUser = Depends(require_admin),
):
    """Store reCAPTCHA configuration and drop the verifier's cached copy"""
    result = await UpdateRecaptchaSettingsUseCase(uow, bot_verifier).execute(request)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post(
    "/test-recaptcha", status_code=status.HTTP_200_OK, response_model=BotConfigurationStatus
)
async def check_recaptcha(
    bot_verifier: BotVerifier = Depends(get_bot_verifier),
    admin: SessionUser = Depends(require_admin),
):
    """
    Probe the active reCAPTCHA keys

    Raises:
        - 400 Bad Request: Keys missing or secret rejected by Google
        - 500 Internal Server Error: Google could not be reached
    """
    result = await CheckRecaptchaUseCase(bot_verifier).execute()

    if result.is_err():
        error = result.error
        if error.code in ("NOT_CONFIGURED", "INVALID_SECRET"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.post(
    "/invalidate-cache", status_code=status.HTTP_200_OK, response_model=InvalidateCachesResponse
)
async def invalidate_cache(
    bot_verifier: BotVerifier = Depends(get_bot_verifier),
    email_sender: EmailSender = Depends(get_email_sender),
    admin: SessionUser = Depends(require_admin),
):
    result = await InvalidateCachesUseCase(bot_verifier, email_sender).execute()
    return result.value
