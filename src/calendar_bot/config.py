"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
Command-line flags override the environment (see `calendar_bot.cli`).

## Required Environment Variables

- GOOGLE_EMAIL: Email the bot answers invitations for

## Optional Environment Variables

- CHECK_INTERVAL: Seconds between calendar checks (default: 60)
- CALENDAR_ID: Calendar to watch (default: primary)
- CLIENT_SECRETS_FILE: OAuth client secrets (default: client_credentials.json)
- TOKEN_CACHE_FILE: Where the OAuth token is cached
- TOKEN_ENCRYPTION_KEY: Encrypt the token cache with this secret
- DEBUG: Verbose logging (default: false)

## Example .env file

```
GOOGLE_EMAIL=me@example.com
CHECK_INTERVAL=120
TOKEN_ENCRYPTION_KEY=your-secret-key-at-least-32-characters
```
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = False

    # Bot
    google_email: str = Field(
        ...,
        description="Email that bot will use to access Google Calendar",
    )
    check_interval: int = Field(
        default=60,
        ge=1,
        description="Interval of checks in seconds",
    )
    calendar_id: str = "primary"
    max_results: int = Field(default=100, ge=1, le=2500)

    # Google OAuth
    client_secrets_file: Path = Path("client_credentials.json")
    token_cache_file: Path = Field(
        default_factory=lambda: Path.home() / ".credentials" / "itomych-calendar-bot.json",
        description="Cached OAuth token",
    )
    google_calendar_scopes: list[str] = Field(
        default=["https://www.googleapis.com/auth/calendar"],
        description="Google Calendar API scopes",
    )

    # Token cache encryption
    token_encryption_key: str | None = Field(
        default=None,
        min_length=32,
        description="Secret for encrypting the token cache (min 32 chars)",
    )
    encryption_salt: str = Field(
        default="",
        validate_default=True,
        description="Salt for token encryption (derived from the key if not provided)",
    )

    @field_validator("google_email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Strip whitespace and require something that looks like an email."""
        v = v.strip()
        if "@" not in v:
            raise ValueError(f"Invalid email address: {v!r}")
        return v

    @field_validator("encryption_salt")
    @classmethod
    def derive_encryption_salt(cls, v: str, info) -> str:
        """Derive the salt from token_encryption_key if not provided."""
        if v:
            return v
        key = info.data.get("token_encryption_key")
        if key:
            return hashlib.sha256(f"{key}-salt".encode()).hexdigest()[:32]
        return ""

