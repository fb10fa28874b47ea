"""Authentication module.

Obtains Google OAuth credentials for the calendar client:
- Installed-app consent flow using the downloaded client secrets
- On-disk token cache, optionally Fernet-encrypted
- Automatic refresh of expired access tokens
"""

from calendar_bot.auth.google import CredentialsError, load_credentials, run_consent_flow
from calendar_bot.auth.token_store import TokenStore

__all__ = [
    "CredentialsError",
    "load_credentials",
    "run_consent_flow",
    "TokenStore",
]
