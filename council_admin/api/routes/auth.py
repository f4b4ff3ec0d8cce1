from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, EmailStr, Field

from council_admin.api.error import ClientError, ServerError
from council_admin.api.utils.rate_limit import LimiterClass
from council_admin.api.utils.session import SessionManager
from council_admin.app.services.bot_verifier import BotVerifier
from council_admin.app.services.email_sender import EmailSender
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.app.use_cases.auth import (
    ConfirmPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    LoginResponse,
    LoginUseCase,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    ResendVerificationResponse,
    ResendVerificationUseCase,
    SessionUser,
    VerifyEmailResponse,
    VerifyEmailUseCase,
)
from council_admin.depends import (
    get_bot_verifier,
    get_current_user,
    get_email_sender,
    get_session_manager,
    get_unit_of_work,
    rate_limit,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterResponse,
    dependencies=[Depends(rate_limit(LimiterClass.API))],
)
async def register(
    request: RegisterCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
    bot_verifier: BotVerifier = Depends(get_bot_verifier),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """
    Self-service registration.

    The account starts unverified and unapproved; it can log in only after
    the email link is followed and an administrator approves it.

    Raises:
        - 400 Bad Request: Validation, bot check or duplicate email
        - 429 Too Many Requests: Rate limit exceeded
    """
    use_case = RegisterUseCase(uow, bot_verifier, email_sender)
    result = await use_case.execute(request)

    if result.is_err():
        error = result.error
        if error.code in ("BOT_VERIFICATION_FAILED", "REGISTRATION_FAILED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=LoginResponse,
    dependencies=[Depends(rate_limit(LimiterClass.LOGIN))],
)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    User Login

    Sets the `session` cookie on success.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Email not verified, pending approval or deactivated
        - 429 Too Many Requests: Rate limit exceeded
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ("EMAIL_NOT_VERIFIED", "PENDING_APPROVAL", "ACCOUNT_DEACTIVATED"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    user = result.value.user
    session_manager.issue(response, user.id, user.email, user.role)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(
    response: Response, session_manager: SessionManager = Depends(get_session_manager)
):
    session_manager.destroy(response)
    return {"success": True}


@router.get("/session", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def current_session(user: SessionUser = Depends(get_current_user)):
    """Raises 401 when there is no valid session"""
    return LoginResponse(user=user)


@router.get(
    "/verify-email",
    status_code=status.HTTP_200_OK,
    response_model=VerifyEmailResponse,
    dependencies=[Depends(rate_limit(LimiterClass.PUBLIC))],
)
async def verify_email(
    token: str = Query("", description="Email verification token"),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """
    Email Verification

    Redeeming an already redeemed token answers with already_verified.

    Raises:
        - 400 Bad Request: Invalid or expired token
    """
    use_case = VerifyEmailUseCase(uow, email_sender)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "TOKEN_EXPIRED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class EmailRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/resend-verification",
    status_code=status.HTTP_200_OK,
    response_model=ResendVerificationResponse,
    dependencies=[Depends(rate_limit(LimiterClass.API))],
)
async def resend_verification(
    request: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """
    Resend Verification Email

    Answers the same for unknown addresses.

    Raises:
        - 500 Internal Server Error: Email could not be sent
    """
    use_case = ResendVerificationUseCase(uow, email_sender)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post(
    "/request-password-reset",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
    dependencies=[Depends(rate_limit(LimiterClass.API))],
)
async def request_password_reset(
    request: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """Always answers the same so account existence is not revealed"""
    use_case = RequestPasswordResetUseCase(uow, email_sender)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ConfirmPasswordResetRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Password reset token from email")
    new_password: str = Field(..., description="New password")


@router.post(
    "/confirm-password-reset",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
    dependencies=[Depends(rate_limit(LimiterClass.API))],
)
async def confirm_password_reset(
    request: ConfirmPasswordResetRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Confirm Password Reset

    Raises:
        - 400 Bad Request: Weak password, invalid or expired token
        - 409 Conflict: Token already used
    """
    use_case = ConfirmPasswordResetUseCase(uow)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_PASSWORD", "INVALID_TOKEN", "TOKEN_EXPIRED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "TOKEN_ALREADY_USED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
