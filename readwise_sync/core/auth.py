"""Token resolution for the Readwise API."""

import logging
import netrc
import os
import subprocess
from pathlib import Path
from typing import Callable, Protocol, Union

from dotenv import load_dotenv

from ..errors import AuthError
from ..models.config import AuthSettings

logger = logging.getLogger(__name__)

# A backend may hand back the token itself or a callable that produces it
SecretValue = Union[str, Callable[[], str]]


class SecretBackend(Protocol):
    """A store that can be searched for the secret belonging to a host."""

    def search(self, host: str) -> SecretValue | None:
        ...


class StandardBackend:
    """Generic secret-store search.

    Looks at the READWISE_TOKEN environment variable (a .env file is loaded
    first) and then at authinfo/netrc files for a ``machine <host>`` entry.
    """

    ENV_VAR = "READWISE_TOKEN"

    def __init__(self, authinfo_files: list[str] | None = None) -> None:
        self.authinfo_files = [
            Path(p).expanduser() for p in (authinfo_files or ["~/.authinfo", "~/.netrc"])
        ]

    def search(self, host: str) -> SecretValue | None:
        load_dotenv()
        token = os.getenv(self.ENV_VAR)
        if token:
            return token

        for path in self.authinfo_files:
            if not path.exists():
                continue
            try:
                entry = netrc.netrc(str(path)).authenticators(host)
            except netrc.NetrcParseError as e:
                logger.warning("Skipping unreadable authinfo file %s: %s", path, e)
                continue
            if entry and entry[2]:
                return entry[2]
        return None


class PasswordStoreBackend:
    """Search the ``pass`` password store.

    Decryption is deferred: ``search`` only checks that the entry exists and
    returns a callable that runs ``pass show`` when invoked.
    """

    def __init__(self, entry: str | None = None, store_dir: Path | None = None) -> None:
        self.entry = entry
        self.store_dir = store_dir or Path(
            os.getenv("PASSWORD_STORE_DIR", "~/.password-store")
        ).expanduser()

    def search(self, host: str) -> SecretValue | None:
        entry = self.entry or host
        if not (self.store_dir / f"{entry}.gpg").exists():
            return None
        return lambda: self._decrypt(entry)

    def _decrypt(self, entry: str) -> str:
        try:
            result = subprocess.run(
                ["pass", "show", entry],
                capture_output=True,
                text=True,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            raise AuthError(f"Could not decrypt password-store entry '{entry}': {e}") from e
        # pass convention: the secret is the first line
        lines = result.stdout.splitlines()
        return lines[0] if lines else ""


def create_backend(settings: AuthSettings) -> SecretBackend:
    """Build the backend selected by the auth settings."""
    if settings.backend == "password-store":
        return PasswordStoreBackend(entry=settings.pass_entry)
    return StandardBackend(authinfo_files=settings.authinfo_files)


class CredentialResolver:
    """Resolves the API token from the configured secret backend."""

    def __init__(
        self,
        settings: AuthSettings | None = None,
        backend: SecretBackend | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            settings: Auth settings (defaults: standard backend, readwise.io)
            backend: Explicit backend (built from settings if not provided)
        """
        self.settings = settings or AuthSettings()
        self.backend = backend or create_backend(self.settings)

    def get_token(self) -> str:
        """Return the API token.

        Raises:
            AuthError: If no secret matches the host
        """
        host = self.settings.host
        secret = self.backend.search(host)
        if secret is None:
            raise AuthError(
                f"No Readwise token found for host '{host}' "
                f"(auth backend: {self.settings.backend})"
            )

        if callable(secret):
            secret = secret()

        token = secret.strip()
        if not token:
            raise AuthError(f"Empty Readwise token for host '{host}'")
        return token
