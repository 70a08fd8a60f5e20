"""Mutable holder for the user's FanConfig."""

import logging
from dataclasses import replace

from .models import INTENSITIES, FanConfig

logger = logging.getLogger(__name__)


class ConfigStore:
    """Holds the current FanConfig and exposes field-level setters.

    Each setter swaps in a new frozen FanConfig. Team colors are not checked
    here; the controller enforces them when generation is requested.
    """

    def __init__(self, initial: FanConfig | None = None) -> None:
        self._config = initial or FanConfig()

    @property
    def config(self) -> FanConfig:
        return self._config

    def set_sport(self, sport: str) -> FanConfig:
        self._config = replace(self._config, sport=sport)
        return self._config

    def set_team_colors(self, team_colors: str) -> FanConfig:
        self._config = replace(self._config, team_colors=team_colors)
        return self._config

    def set_atmosphere(self, atmosphere: str) -> FanConfig:
        self._config = replace(self._config, atmosphere=atmosphere)
        return self._config

    def set_intensity(self, intensity: str) -> FanConfig:
        """Set the intensity level.

        Raises:
            ValueError: If intensity is not one of Low, Medium, High
        """
        if intensity not in INTENSITIES:
            raise ValueError(f"Intensity must be one of {INTENSITIES}, got {intensity!r}")
        self._config = replace(self._config, intensity=intensity)
        return self._config

    def clear_team_colors(self) -> FanConfig:
        """Clear team colors and keep every other field."""
        logger.debug("Clearing team colors")
        return self.set_team_colors("")
