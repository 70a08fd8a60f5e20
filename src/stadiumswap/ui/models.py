"""Data models for Stadium Swap UI state."""

from dataclasses import dataclass
from typing import Any


@dataclass
class UIState:
    """Session state for the Gradio UI.

    Each browser session gets its own UIState (and therefore its own
    controller and credential provider) so sessions never see each other's
    images or keys.

    Attributes
    ----------
    controller : Any | None
        AppController instance driving this session
    credential_provider : Any | None
        EnvironmentCredentialProvider holding a key entered in the gate
    """

    controller: Any | None = None  # AppController instance
    credential_provider: Any | None = None  # EnvironmentCredentialProvider instance

    def is_initialized(self) -> bool:
        """Check if the session controller has been created.

        Returns:
            True if the controller exists
        """
        return self.controller is not None

    def __repr__(self) -> str:
        """String representation for debugging."""
        status = self.controller.snapshot.status.value if self.controller else None
        return f"UIState(initialized={self.is_initialized()}, status={status})"


# UI text
APP_TITLE = "Stadium Swap AI"
GENERATE_LABEL = "TRANSFORM TO FANS"
GENERATING_LABEL = "Processing..."
TEAM_COLORS_PLACEHOLDER = "e.g. Red and White, or 'Chicago Bulls'"
TEAM_COLORS_HINT = "* Please enter team colors to continue"
DOWNLOAD_LABEL = "Download Image"
DOWNLOAD_FILENAME = "stadium-swap-fan.png"
