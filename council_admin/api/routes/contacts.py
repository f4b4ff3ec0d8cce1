from fastapi import APIRouter, Depends, Request, status

from council_admin.api.error import ClientError, ServerError
from council_admin.api.utils.client_ip import get_client_ip
from council_admin.api.utils.rate_limit import LimiterClass
from council_admin.app.services.bot_verifier import BotVerifier
from council_admin.app.services.email_sender import EmailSender
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.app.use_cases.contacts import (
    SubmitContactCommand,
    SubmitContactResponse,
    SubmitContactUseCase,
)
from council_admin.depends import (
    get_bot_verifier,
    get_email_sender,
    get_unit_of_work,
    rate_limit,
)

router = APIRouter(prefix="/contacts", tags=["Contacts"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SubmitContactResponse,
    dependencies=[Depends(rate_limit(LimiterClass.CONTACT))],
)
async def submit_contact(
    payload: SubmitContactCommand,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    bot_verifier: BotVerifier = Depends(get_bot_verifier),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """
    Public contact form

    Raises:
        - 400 Bad Request: Validation or bot check failed
        - 429 Too Many Requests: Rate limit exceeded
    """
    use_case = SubmitContactUseCase(uow, bot_verifier, email_sender)
    result = await use_case.execute(
        payload,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("user-agent") or "unknown",
    )

    if result.is_err():
        error = result.error
        if error.code == "BOT_VERIFICATION_FAILED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
