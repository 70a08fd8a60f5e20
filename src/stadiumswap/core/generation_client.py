"""Outbound call to the Gemini image-generation API.

The client sends exactly one request per ``generate()`` call: a single user
turn holding the uploaded photo as an inline image part followed by the
rendered prompt as a text part, with a fixed image-output configuration
(aspect ratio and resolution tier from :class:`StadiumSwapConfig`).

Response Handling
-----------------
Only the first candidate is inspected. Its parts are scanned in order and the
first part carrying inline data wins; text parts and any later image parts
are ignored. The winning bytes are returned as a ``data:`` URL so the UI can
display or download them directly.

Failures
--------
- :class:`NoImageProducedError`: the call succeeded but no inline image came
  back (text-only answer, refusal, empty candidates).
- :class:`UpstreamError`: anything else, carrying the upstream message when
  one is available.

The client performs no retries; recovery is the controller's job.

Usage Example
-------------
    client = GenerationClient(config, api_key_source=provider.current_key)
    url = await client.generate(payload, fan_config)
"""

import base64
import logging
import os
from collections.abc import Callable
from typing import Any

from google import genai
from google.genai import types

from .config import StadiumSwapConfig
from .errors import NoImageProducedError, UpstreamError
from .models import FanConfig, ImagePayload
from .prompt_builder import build_prompt

logger = logging.getLogger(__name__)

DEFAULT_RESULT_MIME_TYPE = "image/png"


class GenerationClient:
    """Gemini client wrapper for the fan transformation.

    Attributes
    ----------
    config : StadiumSwapConfig
        Model id and image-output settings
    api_key_source : Callable[[], str | None]
        Called on every request to obtain the current API key
    client_factory : Callable[..., Any]
        Builds an SDK client from ``api_key=``; ``genai.Client`` by default
    """

    def __init__(
        self,
        config: StadiumSwapConfig,
        api_key_source: Callable[[], str | None] | None = None,
        client_factory: Callable[..., Any] = genai.Client,
    ) -> None:
        self.config = config
        self.api_key_source = api_key_source or (
            lambda: os.environ.get(config.api_key_env_var)
        )
        self.client_factory = client_factory

    def build_contents(self, payload: ImagePayload, fan_config: FanConfig) -> list[types.Content]:
        """Build the single user turn: one image part, then one text part.

        Raises:
            ValueError: If the payload is not valid base64
        """
        return [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_bytes(data=payload.raw_bytes(), mime_type=payload.mime_type),
                    types.Part.from_text(text=build_prompt(fan_config)),
                ],
            )
        ]

    def build_generation_config(self) -> types.GenerateContentConfig:
        """Fixed image-output parameters for every request."""
        return types.GenerateContentConfig(
            image_config=types.ImageConfig(
                aspect_ratio=self.config.aspect_ratio,
                image_size=self.config.image_size,
            ),
        )

    async def generate(self, payload: ImagePayload, fan_config: FanConfig) -> str:
        """Send the photo and prompt, returning the generated image as a data URL.

        Args:
            payload: Uploaded photo
            fan_config: Settings rendered into the prompt

        Returns:
            ``data:<mime>;base64,<data>`` URL of the first returned image

        Raises:
            NoImageProducedError: If the response carries no inline image
            UpstreamError: For any transport or API failure
        """
        try:
            # Fresh client per call picks up a newly selected key
            client = self.client_factory(api_key=self.api_key_source())
            logger.info(
                f"Requesting {self.config.model_id} ({self.config.aspect_ratio}, "
                f"{self.config.image_size}) for {fan_config.sport}"
            )
            response = await client.aio.models.generate_content(
                model=self.config.model_id,
                contents=self.build_contents(payload, fan_config),
                config=self.build_generation_config(),
            )
            return extract_image_url(response)

        except NoImageProducedError:
            logger.warning("Model returned no inline image")
            raise

        except Exception as e:
            logger.error(f"Gemini API error: {e}", exc_info=True)
            message = getattr(e, "message", None) or str(e)
            raise UpstreamError(message) from e


def extract_image_url(response: Any) -> str:
    """Find the first inline image in the first candidate.

    Args:
        response: A ``GenerateContentResponse`` (or anything shaped like one)

    Returns:
        Data URL of the first inline image part

    Raises:
        NoImageProducedError: If no candidate, content, parts or image part exists
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        raise NoImageProducedError()

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []

    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        data = getattr(inline_data, "data", None) if inline_data is not None else None
        if not data:
            continue

        mime_type = getattr(inline_data, "mime_type", None) or DEFAULT_RESULT_MIME_TYPE
        if isinstance(data, bytes):
            encoded = base64.b64encode(data).decode("ascii")
        else:
            # Already base64 text
            encoded = data
        return f"data:{mime_type};base64,{encoded}"

    raise NoImageProducedError()
