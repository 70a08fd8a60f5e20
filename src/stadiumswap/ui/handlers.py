"""UI event handlers for Stadium Swap.

Every handler takes the session UIState as its last input and returns the
widget updates from :func:`render_view` followed by the (possibly new)
UIState. Expected failures are rendered as a Markdown notice in place of the
status line; unexpected ones are logged with a traceback and the session
stays interactive.
"""

import asyncio
import logging
from collections.abc import AsyncIterator

from stadiumswap.core.errors import StadiumSwapError, ValidationError
from stadiumswap.core.ingest import UploadedFile

from .components import render_view
from .models import UIState
from .state import initialize_ui_state

logger = logging.getLogger(__name__)


def _view(
    state: UIState,
    sync_config: bool = True,
    notice: str | None = None,
    sync_images: bool = True,
) -> tuple:
    snapshot = state.controller.snapshot
    updates = render_view(
        snapshot, sync_config=sync_config, notice=notice, sync_images=sync_images
    )
    return (*updates, state)


def _config_view(state: UIState, notice: str | None = None) -> tuple:
    # Config edits change neither image
    return _view(state, sync_config=False, notice=notice, sync_images=False)


def _unexpected(e: Exception) -> str:
    return (
        f"❌ **Error**\n\nAn unexpected error occurred. "
        f"Check logs for details.\n\n`{str(e)}`"
    )


async def check_api_key(state: UIState) -> tuple:
    """Run the startup credential check when the page loads.

    Args:
        state: UI state

    Returns:
        Tuple of (*view_updates, updated_state)
    """
    state = initialize_ui_state(state)
    await state.controller.initialize()
    return _view(state)


async def select_api_key(api_key: str, state: UIState) -> tuple:
    """Handle the "Select API Key" button on the gate screen.

    Args:
        api_key: Key typed into the gate (may be empty to use the environment)
        state: UI state

    Returns:
        Tuple of (*view_updates, updated_state)
    """
    state = initialize_ui_state(state)
    state.credential_provider.submit_key(api_key)

    try:
        await state.controller.select_key()
    except StadiumSwapError as e:
        logger.warning(f"Key selection failed: {e}")
        return _view(state, notice=f"❌ **API Key Error**\n\n{str(e)}")

    return _view(state)


async def upload_image(file_path: str | None, state: UIState) -> tuple:
    """Ingest an uploaded photo.

    Args:
        file_path: Temporary path of the uploaded file
        state: UI state

    Returns:
        Tuple of (*view_updates, updated_state)
    """
    state = initialize_ui_state(state)
    if not file_path:
        return _view(state)

    try:
        await state.controller.upload(UploadedFile.from_path(file_path))

    except ValidationError as e:
        # User-friendly validation error
        logger.warning(f"Validation error: {e}")
        return _view(state, notice=f"❌ **Validation Error**\n\n{str(e)}")

    except Exception as e:
        logger.error(f"Error ingesting upload: {e}", exc_info=True)
        return _view(state, notice=_unexpected(e))

    return _view(state)


def remove_image(state: UIState) -> tuple:
    """Drop the uploaded photo."""
    state = initialize_ui_state(state)
    state.controller.remove_image()
    return _view(state)


def update_sport(sport: str, state: UIState) -> tuple:
    state = initialize_ui_state(state)
    state.controller.set_sport(sport)
    return _config_view(state)


def update_team_colors(team_colors: str, state: UIState) -> tuple:
    state = initialize_ui_state(state)
    state.controller.set_team_colors(team_colors or "")
    return _config_view(state)


def update_atmosphere(atmosphere: str, state: UIState) -> tuple:
    state = initialize_ui_state(state)
    state.controller.set_atmosphere(atmosphere)
    return _config_view(state)


def update_intensity(intensity: str, state: UIState) -> tuple:
    state = initialize_ui_state(state)
    try:
        state.controller.set_intensity(intensity)
    except ValueError as e:
        logger.warning(f"Invalid intensity: {e}")
        return _config_view(state, notice=f"❌ **Validation Error**\n\n{str(e)}")
    return _config_view(state)


async def generate_fans(state: UIState) -> AsyncIterator[tuple]:
    """Run the transformation, rendering the loading state first.

    Yields the GENERATING view as soon as the controller enters it, then the
    final view once the request settles.

    Args:
        state: UI state

    Yields:
        Tuple of (*view_updates, updated_state)
    """
    state = initialize_ui_state(state)
    task = asyncio.create_task(state.controller.generate())

    # Let the controller run up to its settle delay
    await asyncio.sleep(0)
    yield _view(state, sync_config=False)

    try:
        await task
    except Exception as e:
        logger.error(f"Error generating image: {e}", exc_info=True)
        yield _view(state, sync_config=False, notice=_unexpected(e))
        return

    yield _view(state, sync_config=False)


def reset_session(state: UIState) -> tuple:
    """Start over: clear the photo, the result and the team colors."""
    state = initialize_ui_state(state)
    state.controller.reset()
    return _view(state)
