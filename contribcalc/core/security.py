"""JWT-backed authentication scoping every request to one company."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
import hmac

import jwt
from fastapi import HTTPException, Request, status
from jwt import ExpiredSignatureError, InvalidTokenError

from contribcalc.core.config import AuthSettings, get_settings


class AuthenticationError(Exception):
    """Raised when authentication or token validation fails."""


@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    """The authenticated principal and the tenant its data belongs to."""

    username: str
    company_id: str


class SecurityProvider:
    """Authenticate configured accounts and issue/verify JWT access tokens."""

    def __init__(self, settings: AuthSettings) -> None:
        self._settings = settings

    @property
    def cookie_name(self) -> str:
        return self._settings.cookie_name

    @property
    def token_ttl_seconds(self) -> int:
        return int(self._settings.access_token_expire_minutes * 60)

    @property
    def is_enabled(self) -> bool:
        return self._settings.enabled

    def default_user(self) -> AuthenticatedUser:
        """User every request acts as when authentication is disabled."""

        account = self._settings.accounts[0]
        return AuthenticatedUser(username=account.username, company_id=account.company_id)

    def authenticate(self, username: str, password: str) -> AuthenticatedUser | None:
        """Validate the supplied credentials and return an ``AuthenticatedUser``."""

        account = self._settings.account_for(username)
        if account is None:
            return None
        if not hmac.compare_digest(password.encode(), self._settings.tenant_password.encode()):
            return None
        return AuthenticatedUser(username=account.username, company_id=account.company_id)

    def create_access_token(self, user: AuthenticatedUser) -> str:
        now = datetime.now(tz=timezone.utc)
        expires = now + timedelta(minutes=self._settings.access_token_expire_minutes)
        payload: dict[str, object] = {
            "sub": user.username,
            "company_id": user.company_id,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
        }
        return jwt.encode(payload, self._settings.secret_key, algorithm=self._settings.algorithm)

    def decode_token(self, token: str) -> AuthenticatedUser:
        """Decode a JWT and return the corresponding ``AuthenticatedUser``."""

        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key,
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired") from exc
        except InvalidTokenError as exc:
            raise AuthenticationError("Invalid token") from exc

        username = payload.get("sub")
        company_id = payload.get("company_id")
        if not isinstance(username, str) or not isinstance(company_id, str) or not company_id:
            raise AuthenticationError("Token payload missing required claims")
        return AuthenticatedUser(username=username, company_id=company_id)

    def token_from_request(self, request: Request) -> str | None:
        """Return the bearer token from the header, falling back to the cookie."""

        header = request.headers.get("authorization", "")
        scheme, _, credentials = header.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
        return request.cookies.get(self.cookie_name)


@lru_cache(maxsize=1)
def get_security_provider() -> SecurityProvider:
    """Return a cached security provider instance."""

    return SecurityProvider(get_settings().auth)


def get_authenticated_user(request: Request) -> AuthenticatedUser:
    """Retrieve the authenticated user from the request context."""

    security = get_security_provider()
    if not security.is_enabled:
        return security.default_user()

    user = getattr(request.state, "user", None)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Login required")
    return user


__all__ = [
    "AuthenticatedUser",
    "AuthenticationError",
    "SecurityProvider",
    "get_authenticated_user",
    "get_security_provider",
]
