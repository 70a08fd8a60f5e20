"""Shared pytest fixtures for Stadium Swap tests."""

import base64
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock, Mock

import pytest
from google.genai import types

from stadiumswap.core.config import StadiumSwapConfig
from stadiumswap.core.controller import AppController
from stadiumswap.core.credentials import SessionContext
from stadiumswap.core.models import FanConfig, ImagePayload
from stadiumswap.ui.models import UIState

# A 1x1 red pixel
_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8BQDwAEhQGAhKmMIQAAAABJRU5ErkJggg=="
)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config() -> StadiumSwapConfig:
    """Create a test configuration that ignores any local .env file.

    Returns:
        StadiumSwapConfig with no settle delay
    """
    return StadiumSwapConfig(
        _env_file=None,
        settle_delay_seconds=0.0,
        api_key_env_var="STADIUMSWAP_TEST_KEY",
    )


@pytest.fixture
def png_base64() -> str:
    """Base64 text of a valid 1x1 PNG."""
    return _PNG_BASE64


@pytest.fixture
def png_bytes(png_base64: str) -> bytes:
    """Raw bytes of a valid 1x1 PNG."""
    return base64.b64decode(png_base64)


@pytest.fixture
def png_file(temp_dir: Path, png_bytes: bytes) -> Path:
    """A small PNG file on disk.

    Returns:
        Path to test-fan.png
    """
    path = temp_dir / "test-fan.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def image_payload(png_base64: str) -> ImagePayload:
    """Payload of the 1x1 PNG."""
    return ImagePayload(data=png_base64, mime_type="image/png")


@pytest.fixture
def fan_config() -> FanConfig:
    """A complete configuration ready for generation."""
    return FanConfig(
        sport="Basketball",
        team_colors="Purple and Gold",
        atmosphere="Electric Night Game",
        intensity="High",
    )


@pytest.fixture
def make_response() -> Callable[..., types.GenerateContentResponse]:
    """Build Gemini responses from a list of parts.

    Returns:
        Function taking ``types.Part`` objects (``candidates=False`` builds
        a response with no candidates)
    """

    def _make(*parts: types.Part, candidates: bool = True) -> types.GenerateContentResponse:
        if not candidates:
            return types.GenerateContentResponse(candidates=[])
        return types.GenerateContentResponse(
            candidates=[
                types.Candidate(content=types.Content(role="model", parts=list(parts)))
            ]
        )

    return _make


@pytest.fixture
def fake_client() -> Mock:
    """Generation client whose generate() succeeds with a data URL."""
    client = Mock()
    client.generate = AsyncMock(return_value=f"data:image/png;base64,{_PNG_BASE64}")
    return client


@pytest.fixture
def session() -> SessionContext:
    """Session that already has a key."""
    return SessionContext(has_api_key=True)


@pytest.fixture
def controller(session: SessionContext, fake_client: Mock) -> AppController:
    """Controller with no settle delay and a fake client."""
    return AppController(session, fake_client, settle_delay=0)


@pytest.fixture
def ui_state() -> UIState:
    """Create empty UI state for testing.

    Returns:
        UIState instance
    """
    return UIState()
