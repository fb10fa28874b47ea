"""On-disk cache for the OAuth token.

The token is stored as authorized-user JSON. The cache directory is created
with mode 0700 and the file is written with mode 0600.

## Encryption

When the store is given an encryption key, the JSON is Fernet-encrypted so
the refresh token is never on disk in the clear. The Fernet key is derived
from the secret with PBKDF2-HMAC-SHA256 (480,000 iterations, 32 bytes) and
the deployment salt (`Settings.encryption_salt`).

```python
store = TokenStore(
    settings.token_cache_file,
    encryption_key=settings.token_encryption_key,
    salt=settings.encryption_salt,
)
```
"""

from __future__ import annotations

import base64
import json
import logging
import os
from pathlib import Path

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from google.oauth2.credentials import Credentials

logger = logging.getLogger(__name__)

KDF_ITERATIONS = 480_000


def derive_cipher(secret: str, salt: str) -> Fernet:
    """Build the Fernet cipher for a token encryption secret."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt.encode("utf-8"),
        iterations=KDF_ITERATIONS,
    )
    return Fernet(base64.urlsafe_b64encode(kdf.derive(secret.encode("utf-8"))))


class TokenStore:
    """Reads and writes cached Google credentials.

    Example:
        ```python
        store = TokenStore(Path("~/.credentials/bot.json").expanduser())
        credentials = store.load(scopes)
        if credentials is None:
            credentials = run_flow()
            store.save(credentials)
        ```
    """

    def __init__(self, path: Path, encryption_key: str | None = None, salt: str = ""):
        """Initialize the store.

        Args:
            path: Cache file location
            encryption_key: Secret to encrypt the cache with (plain JSON if None)
            salt: Key derivation salt
        """
        self.path = Path(path).expanduser()
        self._cipher = derive_cipher(encryption_key, salt) if encryption_key else None

    @property
    def encrypted(self) -> bool:
        return self._cipher is not None

    def load(self, scopes: list[str]) -> Credentials | None:
        """Load cached credentials.

        A cache that cannot be read, decrypted or parsed is ignored, so the
        caller falls back to asking for consent again.

        Args:
            scopes: Scopes the credentials are expected to carry

        Returns:
            Credentials, or None if there is no usable cache
        """
        if not self.path.exists():
            return None

        try:
            content = self.path.read_bytes()
            if self._cipher is not None:
                content = self._cipher.decrypt(content)
            info = json.loads(content)
            return Credentials.from_authorized_user_info(info, scopes)
        except InvalidToken:
            logger.warning(f"Ignoring token cache {self.path}: wrong key or not encrypted")
            return None
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable token cache {self.path}: {e}")
            return None

    def save(self, credentials: Credentials) -> None:
        """Write credentials to the cache.

        Args:
            credentials: Credentials to persist

        Raises:
            OSError: If the cache cannot be written
        """
        self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

        content = credentials.to_json().encode("utf-8")
        if self._cipher is not None:
            content = self._cipher.encrypt(content)

        logger.info(f"Saving credential file to: {self.path}")
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as f:
            f.write(content)
