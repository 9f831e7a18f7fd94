"""Application middleware enforcing a valid access token."""
from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from contribcalc.core.log import get_logger, log_context
from contribcalc.core.security import AuthenticationError, AuthenticatedUser, SecurityProvider

LOGGER = get_logger(__name__)

_DOC_PATHS = frozenset({"/openapi.json", "/docs", "/docs/oauth2-redirect", "/redoc", "/favicon.ico"})


class AuthMiddleware(BaseHTTPMiddleware):
    """Answer 401 for protected paths without a valid token."""

    def __init__(
        self,
        app,
        security_provider: SecurityProvider,
        *,
        exempt_paths: Iterable[str] | None = None,
        exempt_prefixes: Iterable[str] | None = None,
    ) -> None:
        super().__init__(app)
        self._security_provider = security_provider
        self._exempt_paths = set(exempt_paths or ()) | {"/health"}
        self._exempt_prefixes = tuple(exempt_prefixes or ("/auth/",))

    def _is_exempt(self, path: str) -> bool:
        """Return ``True`` when the request path should bypass authentication."""

        if path in self._exempt_paths or path in _DOC_PATHS:
            return True
        return any(path.startswith(prefix) for prefix in self._exempt_prefixes)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        user: AuthenticatedUser | None = None

        if not self._security_provider.is_enabled:
            user = self._security_provider.default_user()
        else:
            token = self._security_provider.token_from_request(request)
            if token:
                try:
                    user = self._security_provider.decode_token(token)
                except AuthenticationError as exc:
                    LOGGER.info("Rejected access token: %s", exc)

        request.state.user = user
        path = request.url.path

        if user is None and not self._is_exempt(path):
            return JSONResponse(
                {"error": "Unauthorized", "code": "unauthorized"},
                status_code=401,
                headers={"WWW-Authenticate": "Bearer"},
            )

        with log_context.scope(company=user.company_id if user else None):
            return await call_next(request)


__all__ = ["AuthMiddleware"]
