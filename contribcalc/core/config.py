"""Configuration system for the contribution calculator."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})
DEFAULT_ACCOUNTS = "demo:demo-company"


@dataclass(frozen=True, slots=True)
class DatabaseSettings:
    """Connection details for the transactional database."""

    driver: str
    host: str
    port: int
    user: str
    password: str
    name: str
    url: str | None = None

    @property
    def sqlalchemy_url(self) -> str:
        """Build a SQLAlchemy compatible URL."""

        if self.url:
            return self.url
        if self.password:
            credentials = f"{self.user}:{self.password}"
        else:
            credentials = self.user
        return f"{self.driver}://{credentials}@{self.host}:{self.port}/{self.name}"


@dataclass(frozen=True, slots=True)
class TenantAccount:
    """Configuration entry mapping a login name to the company it acts for."""

    username: str
    company_id: str


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """Authentication settings loaded from environment variables."""

    secret_key: str
    algorithm: str
    access_token_expire_minutes: int
    tenant_password: str
    accounts: tuple[TenantAccount, ...]
    cookie_name: str = "access_token"
    enabled: bool = True

    def account_for(self, username: str) -> TenantAccount | None:
        for account in self.accounts:
            if account.username == username:
                return account
        return None


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in _FALSE_VALUES


def parse_accounts(raw: str) -> tuple[TenantAccount, ...]:
    """Parse ``"alice:acme-co,bob:globex-co"`` into tenant accounts."""

    accounts = []
    for entry in filter(None, (part.strip() for part in raw.split(","))):
        username, sep, company_id = (piece.strip() for piece in entry.partition(":"))
        if not sep or not username or not company_id:
            raise ValueError(
                f"Invalid account definition {entry!r}; expected '<username>:<company_id>'"
            )
        accounts.append(TenantAccount(username=username, company_id=company_id))
    if not accounts:
        raise ValueError("At least one tenant account must be configured.")
    return tuple(accounts)


@dataclass(frozen=True, slots=True)
class Settings:
    """Top-level application configuration container."""

    database: DatabaseSettings
    auth: AuthSettings
    sqlalchemy_echo: bool = False
    log_level: str = "INFO"
    log_dir: str | None = "logs"
    create_schema: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Load configuration values from environment variables."""

        env = os.environ
        database = DatabaseSettings(
            driver=env.get("DB_DRIVER", "mysql+pymysql"),
            host=env.get("DB_HOST", "127.0.0.1"),
            port=int(env.get("DB_PORT", "3306")),
            user=env.get("DB_USER", "contrib"),
            password=env.get("DB_PASSWORD", "contrib"),
            name=env.get("DB_NAME", "contrib"),
            url=env.get("DATABASE_URL") or None,
        )
        auth = AuthSettings(
            secret_key=env.get("JWT_SECRET_KEY", "change-me"),
            algorithm=env.get("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=int(env.get("JWT_EXPIRE_MINUTES", "120")),
            tenant_password=env.get("TENANT_PASSWORD", "demo"),
            accounts=parse_accounts(env.get("TENANT_ACCOUNTS") or DEFAULT_ACCOUNTS),
            enabled=_flag("AUTH_ENABLED", True),
        )
        return cls(
            database=database,
            auth=auth,
            sqlalchemy_echo=_flag("SQLALCHEMY_ECHO", False),
            log_level=env.get("LOG_LEVEL", "INFO"),
            log_dir=env.get("LOG_DIR", "logs") or None,
            create_schema=_flag("DB_CREATE_SCHEMA", False),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    settings = Settings.from_env()

    # Import locally to avoid circular dependencies during module import time.
    from .log import get_logger

    get_logger(__name__).debug(
        "Settings loaded: database=%s accounts=%s auth=%s",
        settings.database.driver,
        ",".join(account.username for account in settings.auth.accounts),
        "on" if settings.auth.enabled else "off",
    )
    return settings
