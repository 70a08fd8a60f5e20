"""State management utilities for the Stadium Swap UI.

This module handles the lazy creation of the per-session controller and its
collaborators (credential provider, generation client, ingestor).
"""

import logging

from stadiumswap.core.config import config
from stadiumswap.core.controller import AppController
from stadiumswap.core.credentials import EnvironmentCredentialProvider, SessionContext
from stadiumswap.core.generation_client import GenerationClient
from stadiumswap.core.ingest import ImageIngestor

from .models import UIState

logger = logging.getLogger(__name__)


def initialize_ui_state(state: UIState | None = None) -> UIState:
    """Initialize or ensure UI state is ready.

    If state is None or uninitialized, a credential provider, session
    context, generation client and controller are created for it.

    Args:
        state: Existing UIState or None

    Returns:
        Initialized UIState instance
    """
    if state is None:
        logger.info("Creating new UIState")
        state = UIState()

    if state.is_initialized():
        logger.debug("UIState already initialized")
        return state

    logger.info("Initializing UIState components...")

    provider = EnvironmentCredentialProvider(config.api_key_env_var)
    session = SessionContext(credential_provider=provider)
    client = GenerationClient(config, api_key_source=provider.current_key)

    state.credential_provider = provider
    state.controller = AppController(
        session,
        client,
        ingestor=ImageIngestor(max_bytes=config.max_upload_bytes),
        settle_delay=config.settle_delay_seconds,
    )

    logger.info(f"UIState initialization complete: {state}")
    return state
