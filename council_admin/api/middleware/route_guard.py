"""
Edge guard for the admin pages.

Raw ASGI middleware so the request stream is never wrapped. Decision order:
exempt pages pass, protected prefixes need a valid session, everything else
passes.
"""

import logging
from typing import Iterable, Optional, Tuple
from urllib.parse import quote

from starlette.requests import Request
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from council_admin.api.utils.session import SESSION_COOKIE, SessionManager, SessionStatus

logger = logging.getLogger(__name__)

SKIPPED_PREFIXES = ("/static", "/images", "/uploads", "/favicon.ico")
EXEMPT_PATHS = ("/login", "/register", "/verify-email", "/forgot-password", "/reset-password")
PROTECTED_PREFIXES = ("/admin",)
LOGIN_PATH = "/login"


def _matches(path: str, route: str) -> bool:
    return path == route or path.startswith(route + "/")


def login_redirect_url(path: str, expired: bool = False) -> str:
    url = f"{LOGIN_PATH}?redirect={quote(path, safe='')}"
    if expired:
        url += "&expired=true"
    return url


class RouteGuardMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        session_manager: SessionManager,
        protected_prefixes: Iterable[str] = PROTECTED_PREFIXES,
        exempt_paths: Iterable[str] = EXEMPT_PATHS,
        skipped_prefixes: Iterable[str] = SKIPPED_PREFIXES,
    ):
        self.app = app
        self.session_manager = session_manager
        self.protected_prefixes = tuple(protected_prefixes)
        self.exempt_paths = tuple(exempt_paths)
        self.skipped_prefixes = tuple(skipped_prefixes)

    def decide(self, path: str, token: Optional[str]) -> Tuple[Optional[str], bool]:
        """
        Returns (redirect_url, clear_cookie). A None redirect lets the
        request through.
        """
        if any(path.startswith(prefix) for prefix in self.skipped_prefixes):
            return None, False

        if any(_matches(path, route) for route in self.exempt_paths):
            return None, False

        if not any(path.startswith(prefix) for prefix in self.protected_prefixes):
            return None, False

        check = self.session_manager.inspect(token)
        if check.status == SessionStatus.VALID:
            return None, False
        if check.status == SessionStatus.MISSING:
            return login_redirect_url(path), False
        if check.status == SessionStatus.EXPIRED:
            return login_redirect_url(path, expired=True), True

        logger.warning(f"Invalid session token presented for {path}")
        return login_redirect_url(path), True

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        redirect_url, clear_cookie = self.decide(
            scope.get("path") or "", request.cookies.get(SESSION_COOKIE)
        )
        if redirect_url is None:
            await self.app(scope, receive, send)
            return

        response = RedirectResponse(redirect_url, status_code=307)
        if clear_cookie:
            self.session_manager.destroy(response)
        await response(scope, receive, send)
