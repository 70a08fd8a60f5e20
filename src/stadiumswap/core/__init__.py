"""Core functionality for Stadium Swap.

This module provides the UI-independent components:

- **ImageIngestor**: Validates uploads and decodes them into ImagePayloads
- **ConfigStore**: Holds the user's FanConfig
- **build_prompt**: Renders a FanConfig into the model instruction
- **GenerationClient**: Calls the Gemini image model and extracts the image
- **AppController**: State machine tying the pieces together
- **SessionContext**: Credential state passed into the controller
- **StadiumSwapConfig**: Configuration management using Pydantic Settings
- **config**: Global configuration instance (loads from environment variables)

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with STADIUMSWAP_ in .env files

2. **Data Layer** (models.py, config_store.py, errors.py):
   - Frozen dataclasses for FanConfig, ImagePayload and AppSnapshot
   - Typed exceptions for validation, credential and generation failures

3. **Generation Layer** (ingest.py, prompt_builder.py, generation_client.py):
   - Upload validation and base64 encoding
   - Prompt rendering and the single outbound Gemini request

4. **Orchestration Layer** (controller.py, credentials.py):
   - Explicit finite-state machine with snapshot subscriptions
   - API-key gating and recovery

Usage Example
-------------
    from stadiumswap.core import AppController, GenerationClient, SessionContext, config

    controller = AppController(SessionContext(), GenerationClient(config))
    await controller.initialize()
    await controller.upload(UploadedFile.from_path("friends.jpg"))
    controller.set_team_colors("Purple and Gold")
    snapshot = await controller.generate()
"""

from stadiumswap.core.config import StadiumSwapConfig, config
from stadiumswap.core.config_store import ConfigStore
from stadiumswap.core.controller import AppController
from stadiumswap.core.credentials import (
    CredentialProvider,
    EnvironmentCredentialProvider,
    SessionContext,
)
from stadiumswap.core.generation_client import GenerationClient
from stadiumswap.core.ingest import ImageIngestor, UploadedFile
from stadiumswap.core.models import (
    AppSnapshot,
    FanConfig,
    ImagePayload,
    ProcessingStatus,
)
from stadiumswap.core.prompt_builder import build_prompt

__all__ = [
    "AppController",
    "AppSnapshot",
    "ConfigStore",
    "CredentialProvider",
    "EnvironmentCredentialProvider",
    "FanConfig",
    "GenerationClient",
    "ImageIngestor",
    "ImagePayload",
    "ProcessingStatus",
    "SessionContext",
    "StadiumSwapConfig",
    "UploadedFile",
    "build_prompt",
    "config",
]
