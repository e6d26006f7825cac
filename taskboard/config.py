"""Settings loaded from environment variables (+ optional .env)."""

import os
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.split(",") if p.strip()]


@dataclass
class Settings:
    """Runtime configuration for the API.

    Attributes:
        database_url: Store connection string (``memory://`` for the in-memory store)
        auth_secret: Secret used to sign bearer tokens
        token_expire_minutes: Lifetime of issued tokens
        bcrypt_rounds: Work factor for password hashing
        require_auth: Reject task requests without a bearer token
        cors_origins: Allowed CORS origins
        log_level: Root log level
        host: Bind address for the server
        port: Bind port for the server
    """
    database_url: Optional[str] = None
    auth_secret: Optional[str] = None
    token_expire_minutes: int = 60
    bcrypt_rounds: int = 10
    require_auth: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(
            database_url=os.getenv("DATABASE_URL") or os.getenv("MONGODB_URI"),
            auth_secret=os.getenv("AUTH_SECRET"),
            token_expire_minutes=_env_int("TOKEN_EXPIRE_MINUTES", 60),
            bcrypt_rounds=_env_int("BCRYPT_ROUNDS", 10),
            require_auth=_env_bool("REQUIRE_AUTH", False),
            cors_origins=_env_list("CORS_ORIGINS", ["*"]),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_env_int("PORT", 8000),
        )

    def validate(self) -> None:
        """Raise ValueError when a required setting is missing."""
        if not self.database_url:
            raise ValueError("DATABASE_URL environment variable not set")
        if not self.auth_secret:
            raise ValueError("AUTH_SECRET environment variable not set")
