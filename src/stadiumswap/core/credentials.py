"""Credential handling for the generation API.

The application needs to know one thing up front: whether a usable API key
has been selected. That knowledge lives in a :class:`SessionContext`, which
is created once per session and handed to the controller explicitly.

Credential Providers
--------------------
A provider answers two questions asynchronously:

- ``has_selected_key()``: is a key available right now?
- ``open_key_selection()``: run the key-selection interaction; may raise.

When no provider is configured the session is treated as always having a key
(the permissive fallback for environments without a key-selection flow).

:class:`EnvironmentCredentialProvider` is the provider used by the Gradio UI.
A key typed into the gate screen is submitted with ``submit_key()`` and
promoted on the next ``open_key_selection()``. Without a submitted key, the
current session key is assumed rejected, discarded, and the environment
variable is read again.
"""

import logging
import os
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .errors import CredentialMissingError

logger = logging.getLogger(__name__)


@runtime_checkable
class CredentialProvider(Protocol):
    """External collaborator that owns key selection."""

    async def has_selected_key(self) -> bool: ...

    async def open_key_selection(self) -> None: ...


class EnvironmentCredentialProvider:
    """Resolve the API key from a session-selected value or an environment variable.

    Args:
        env_var: Name of the environment variable holding the key
    """

    def __init__(self, env_var: str = "GEMINI_API_KEY") -> None:
        self.env_var = env_var
        self._selected_key: str | None = None
        self._pending_key: str | None = None

    def submit_key(self, key: str) -> None:
        """Stage a key entered by the user; it takes effect on open_key_selection()."""
        key = (key or "").strip()
        self._pending_key = key or None

    def current_key(self) -> str | None:
        """Return the key to use for the next API call.

        Read on every call so a freshly selected key needs no restart.
        """
        if self._selected_key:
            return self._selected_key
        return os.environ.get(self.env_var) or None

    async def has_selected_key(self) -> bool:
        return self.current_key() is not None

    async def open_key_selection(self) -> None:
        """Make a key available for the session.

        Raises:
            CredentialMissingError: If neither a submitted key nor the
                environment variable provides one
        """
        if self._pending_key:
            self._selected_key = self._pending_key
            self._pending_key = None
            logger.info("Using API key selected in the UI")
            return

        if self._selected_key:
            logger.info("Discarding session API key; falling back to environment")
            self._selected_key = None

        if self.current_key() is None:
            raise CredentialMissingError(
                f"No API key selected. Enter a key or set {self.env_var}."
            )
        logger.info(f"Using API key from ${self.env_var}")


@dataclass
class SessionContext:
    """Process-scoped credential state passed into the controller.

    Attributes:
        credential_provider: Key-selection collaborator, or None when the
            environment offers no such flow
        has_api_key: Whether a usable key is currently believed to exist
    """

    credential_provider: CredentialProvider | None = None
    has_api_key: bool = False

    async def initialize(self) -> bool:
        """Query the provider once at startup.

        Returns:
            The resulting has_api_key flag
        """
        if self.credential_provider is None:
            logger.info("No credential provider configured; assuming a key is available")
            self.has_api_key = True
        else:
            self.has_api_key = bool(await self.credential_provider.has_selected_key())
            logger.info(f"Credential check complete: has_api_key={self.has_api_key}")
        return self.has_api_key
