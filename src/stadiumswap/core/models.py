"""Data models for the Stadium Swap core."""

import base64
import binascii
import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

# Catalogs offered by the UI
SPORTS = [
    "Soccer",
    "American Football",
    "Basketball",
    "Baseball",
    "Ice Hockey",
    "Tennis",
    "Cricket",
    "Rugby",
    "Esports Arena",
]

ATMOSPHERES = [
    "Sunny Day Game",
    "Electric Night Game",
    "Rainy Intense Match",
    "Championship Confetti",
    "Golden Hour",
]

INTENSITIES = ["Low", "Medium", "High"]

DEFAULT_SPORT = SPORTS[0]
DEFAULT_ATMOSPHERE = ATMOSPHERES[1]
DEFAULT_INTENSITY = "High"


class ProcessingStatus(str, Enum):
    """Lifecycle status of the application.

    UPLOADING is reserved; uploads complete fast enough that the controller
    never enters it.
    """

    IDLE = "IDLE"
    UPLOADING = "UPLOADING"
    GENERATING = "GENERATING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass(frozen=True)
class FanConfig:
    """User-chosen transformation settings.

    Instances are immutable; ConfigStore replaces the whole value on every
    edit so snapshots handed to subscribers never change under them.
    """

    sport: str = DEFAULT_SPORT
    team_colors: str = ""
    atmosphere: str = DEFAULT_ATMOSPHERE
    intensity: str = DEFAULT_INTENSITY

    def has_team_colors(self) -> bool:
        """Check if team colors are filled in.

        Returns:
            True if team_colors contains any non-whitespace text
        """
        return bool(self.team_colors and self.team_colors.strip())


@dataclass(frozen=True)
class ImagePayload:
    """A decoded upload ready for transport.

    Attributes:
        data: Base64-encoded image bytes (no ``data:`` prefix)
        mime_type: Mime type of the image, e.g. ``image/png``
    """

    data: str = field(repr=False)
    mime_type: str

    @property
    def data_url(self) -> str:
        """The payload rendered as a ``data:`` URL."""
        return f"data:{self.mime_type};base64,{self.data}"

    def raw_bytes(self) -> bytes:
        """Decode the base64 payload.

        Raises:
            ValueError: If the payload is not valid base64
        """
        try:
            return base64.b64decode(self.data, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 payload: {e}") from e

    def __repr__(self) -> str:
        return f"ImagePayload(mime_type={self.mime_type!r}, chars={len(self.data)})"


@dataclass(frozen=True)
class AppSnapshot:
    """Immutable view of the controller at one point in time.

    A new snapshot is published after every transition; it is the only thing
    the UI reads when deciding which affordances are enabled.
    """

    status: ProcessingStatus = ProcessingStatus.IDLE
    image: ImagePayload | None = None
    result_url: str | None = None
    error_message: str | None = None
    config: FanConfig = field(default_factory=FanConfig)
    has_api_key: bool = False

    @property
    def has_image(self) -> bool:
        return self.image is not None

    @property
    def is_generating(self) -> bool:
        return self.status is ProcessingStatus.GENERATING

    @property
    def can_generate(self) -> bool:
        """Generation is allowed with an image, team colors, and nothing in flight."""
        return self.has_image and self.config.has_team_colors() and not self.is_generating
