"""Google OAuth credentials for the bot.

Implements the installed-application OAuth 2.0 flow with a cached token.

## Required Setup

1. Create a project in Google Cloud Console
2. Enable Google Calendar API
3. Create OAuth 2.0 credentials (Desktop application)
4. Download the client secrets as client_credentials.json

## Credential Resolution

1. Load the cached token (see `TokenStore`)
2. Refresh it if it has expired and carries a refresh token
3. Otherwise run the browser consent flow and cache the new token

If you change the scopes, delete the cached token so consent is asked again.
"""

from __future__ import annotations

import logging
from pathlib import Path

from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from calendar_bot.auth.token_store import TokenStore
from calendar_bot.config import Settings

logger = logging.getLogger(__name__)

AUTHORIZATION_PROMPT = (
    "Go to the following link in your browser to authorize the bot:\n{url}\n"
)


class CredentialsError(Exception):
    """Raised when Google credentials cannot be obtained."""

    pass


def run_consent_flow(client_secrets_file: Path, scopes: list[str]) -> Credentials:
    """Ask the user for consent in the browser.

    Args:
        client_secrets_file: OAuth client secrets downloaded from Google
        scopes: Scopes to request

    Returns:
        Fresh credentials with a refresh token

    Raises:
        CredentialsError: If the secrets cannot be read or the flow fails
    """
    try:
        flow = InstalledAppFlow.from_client_secrets_file(str(client_secrets_file), scopes)
    except (OSError, ValueError) as e:
        raise CredentialsError(
            f"Unable to read client secret file {client_secrets_file}: {e}"
        ) from e

    try:
        return flow.run_local_server(
            port=0,
            open_browser=False,
            authorization_prompt_message=AUTHORIZATION_PROMPT,
            access_type="offline",
        )
    except Exception as e:
        raise CredentialsError(f"Unable to retrieve token from web: {e}") from e


def load_credentials(settings: Settings) -> Credentials:
    """Get valid credentials, refreshing or re-authorizing as needed.

    Args:
        settings: Application settings

    Returns:
        Valid Google credentials

    Raises:
        CredentialsError: If no valid credentials can be obtained
    """
    store = TokenStore(
        settings.token_cache_file,
        encryption_key=settings.token_encryption_key,
        salt=settings.encryption_salt,
    )
    scopes = settings.google_calendar_scopes

    credentials = store.load(scopes)
    if credentials is not None and credentials.valid:
        return credentials

    if credentials is not None and credentials.expired and credentials.refresh_token:
        try:
            credentials.refresh(Request())
        except RefreshError as e:
            logger.warning(f"Token refresh failed, asking for consent again: {e}")
        except TransportError as e:
            raise CredentialsError(f"Unable to refresh token: {e}") from e
        else:
            _cache(store, credentials)
            return credentials

    credentials = run_consent_flow(settings.client_secrets_file, scopes)
    _cache(store, credentials)
    return credentials


def _cache(store: TokenStore, credentials: Credentials) -> None:
    try:
        store.save(credentials)
    except OSError as e:
        raise CredentialsError(f"Unable to cache oauth token: {e}") from e
