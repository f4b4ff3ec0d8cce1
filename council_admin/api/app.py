from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from council_admin.adapter.integrations.gmail import GmailEmailSender
from council_admin.adapter.integrations.google_oauth import GoogleOAuthClient
from council_admin.adapter.integrations.recaptcha import (
    RecaptchaConfigProvider,
    RecaptchaVerifier,
)
from council_admin.adapter.services.encryption import AesGcmEncryptor
from council_admin.adapter.services.settings_reader import SettingsReader
from council_admin.app.services.settings_cache import SettingsCache
from .error import ClientError, ServerError
from .middleware.route_guard import RouteGuardMiddleware
from .utils.rate_limit import RateLimiter
from .utils.session import SessionManager
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    if exc.details:
        error_dict["details"] = exc.details
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    error_dict = {
        "code": "VALIDATION_ERROR",
        "message": "Request validation failed",
        "details": details,
    }
    logger.warning(f"Validation error on {request.url.path}: {details}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": error_dict})


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
    )


def create_app(ApplicationConfig) -> FastAPI:
    # Fails at startup when JWT_SECRET is missing or short
    session_manager = SessionManager(
        ApplicationConfig.JWT_SECRET,
        secure=ApplicationConfig.ENVIRONMENT == "production",
    )
    encryptor = AesGcmEncryptor(ApplicationConfig.ENCRYPTION_KEY, ApplicationConfig.JWT_SECRET)
    http_client = httpx.AsyncClient(timeout=10.0)

    from council_admin.depends import AsyncSessionLocal, engine

    settings_reader = SettingsReader(AsyncSessionLocal)
    cache_ttl = ApplicationConfig.SETTINGS_CACHE_TTL_SECONDS
    oauth_client = GoogleOAuthClient(http_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        yield
        await http_client.aclose()

    app = FastAPI(title="Council Admin API", version="0.1.0", lifespan=lifespan)

    app.state.config = ApplicationConfig
    app.state.session_manager = session_manager
    app.state.rate_limiter = RateLimiter()
    app.state.http_client = http_client
    app.state.encryptor = encryptor
    app.state.oauth_client = oauth_client
    app.state.bot_verifier = RecaptchaVerifier(
        RecaptchaConfigProvider(
            ApplicationConfig, settings_reader.get_many, SettingsCache(cache_ttl)
        ),
        http_client,
        fail_open=ApplicationConfig.RECAPTCHA_FAIL_OPEN,
    )
    app.state.email_sender = GmailEmailSender(
        ApplicationConfig,
        http_client,
        oauth_client,
        settings_reader.get_many,
        encryptor,
        SettingsCache(cache_ttl),
    )

    app.add_middleware(RouteGuardMiddleware, session_manager=session_manager)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from council_admin.api.routes import auth, contacts, gmail, health_check, settings, users

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(users.router, prefix=prefix, tags=["User Approval"])
    app.include_router(gmail.router, prefix=prefix, tags=["Gmail"])
    app.include_router(settings.router, prefix=prefix, tags=["Settings"])
    app.include_router(contacts.router, prefix=prefix, tags=["Contacts"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
