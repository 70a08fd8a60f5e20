"""Stadium Swap - Turn a photo into stadium fans with Gemini image generation."""

__version__ = "0.1.0"

from stadiumswap.core.config import StadiumSwapConfig, config
from stadiumswap.core.controller import AppController
from stadiumswap.core.models import FanConfig, ProcessingStatus

__all__ = [
    "AppController",
    "FanConfig",
    "ProcessingStatus",
    "StadiumSwapConfig",
    "config",
]
