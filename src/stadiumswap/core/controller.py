"""Application controller: the upload → configure → generate state machine.

The controller owns the session's image, result, error and status, and is the
only place transitions happen. After every transition it publishes a new
immutable :class:`AppSnapshot` to its subscribers; the UI renders nothing but
snapshots.

State Machine
-------------
========================  ===============================  =====================
From                      Event                            To
========================  ===============================  =====================
any but GENERATING        upload succeeds                  IDLE (image loaded)
any but GENERATING        remove_image                     IDLE (no image)
IDLE/SUCCESS/ERROR        generate (image + team colors)   GENERATING
GENERATING                client succeeds                  SUCCESS
GENERATING                "Requested entity was not found" IDLE + key recovery
GENERATING                any other failure                ERROR
any                       reset                            IDLE (no image)
========================  ===============================  =====================

Concurrency
-----------
Everything runs on one event loop. At most one generation is in flight.
Requests cannot be cancelled; instead every generation carries a token, and
``upload``/``remove_image``/``reset`` bump the token so a response arriving
afterwards is dropped instead of overwriting the newer state.

Credential Recovery
-------------------
An upstream message containing ``Requested entity was not found`` means the
selected key is unusable. The controller clears ``has_api_key``, runs the
provider's key-selection flow best-effort (failures are logged, never shown),
sets ``has_api_key`` back to True if the flow completed, and returns to IDLE
without an error.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from .config_store import ConfigStore
from .credentials import SessionContext
from .errors import StadiumSwapError
from .ingest import ImageIngestor, UploadedFile
from .models import AppSnapshot, FanConfig, ImagePayload, ProcessingStatus

logger = logging.getLogger(__name__)

CREDENTIAL_INVALID_SIGNAL = "Requested entity was not found"
GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."

Subscriber = Callable[[AppSnapshot], None]


class ImageGenerator(Protocol):
    """What the controller needs from a generation client."""

    async def generate(self, payload: ImagePayload, fan_config: FanConfig) -> str: ...


class AppController:
    """Finite-state machine driving a single Stadium Swap session.

    Args:
        session: Credential state shared with the key gate
        client: Generation client used for the outbound call
        ingestor: Upload validator/decoder (default: 5 MiB limit)
        config_store: Holder of the FanConfig (default: catalog defaults)
        settle_delay: Seconds to wait after entering GENERATING before the call
        sleep: Awaitable sleep function, replaceable in tests
    """

    def __init__(
        self,
        session: SessionContext,
        client: ImageGenerator,
        ingestor: ImageIngestor | None = None,
        config_store: ConfigStore | None = None,
        settle_delay: float = 0.1,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.session = session
        self.client = client
        self.ingestor = ingestor or ImageIngestor()
        self.config_store = config_store or ConfigStore()
        self.settle_delay = settle_delay
        self._sleep = sleep

        self._status = ProcessingStatus.IDLE
        self._image: ImagePayload | None = None
        self._result_url: str | None = None
        self._error_message: str | None = None
        self._generation_token = 0
        self._subscribers: list[Subscriber] = []

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> AppSnapshot:
        """Current state as an immutable snapshot."""
        return AppSnapshot(
            status=self._status,
            image=self._image,
            result_url=self._result_url,
            error_message=self._error_message,
            config=self.config_store.config,
            has_api_key=self.session.has_api_key,
        )

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback invoked with every new snapshot.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self) -> AppSnapshot:
        snapshot = self.snapshot
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception as e:
                logger.error(f"Snapshot subscriber failed: {e}", exc_info=True)
        return snapshot

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    async def initialize(self) -> AppSnapshot:
        """Run the startup credential check."""
        await self.session.initialize()
        return self._publish()

    async def select_key(self) -> AppSnapshot:
        """Run the key-selection flow and optimistically assume it worked.

        Raises:
            StadiumSwapError: If the provider's selection flow fails; the
                key flag is left unchanged
        """
        provider = self.session.credential_provider
        if provider is not None:
            await provider.open_key_selection()
        self.session.has_api_key = True
        logger.info("API key selected")
        return self._publish()

    async def _recover_credentials(self) -> None:
        self.session.has_api_key = False
        self._publish()

        provider = self.session.credential_provider
        if provider is None:
            logger.warning("Credential rejected and no provider available to select a new key")
            return

        try:
            await provider.open_key_selection()
            self.session.has_api_key = True
            logger.info("Key selection completed after credential rejection")
        except Exception as e:
            logger.error(f"Error opening key selection: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Image lifecycle
    # ------------------------------------------------------------------

    async def upload(self, file: UploadedFile) -> AppSnapshot:
        """Ingest a file and make it the current image.

        Raises:
            ValidationError: If the file is rejected; nothing is stored
        """
        if self._status is ProcessingStatus.GENERATING:
            logger.warning("Upload ignored while a generation is in flight")
            return self.snapshot

        payload = await self.ingestor.ingest(file)
        return self.set_image(payload)

    def set_image(self, payload: ImagePayload) -> AppSnapshot:
        """Store an already-ingested payload, clearing any previous outcome."""
        self._generation_token += 1
        self._image = payload
        self._result_url = None
        self._error_message = None
        self._status = ProcessingStatus.IDLE
        logger.info(f"Image loaded: {payload!r}")
        return self._publish()

    def remove_image(self) -> AppSnapshot:
        """Drop the current image."""
        if self._status is ProcessingStatus.GENERATING:
            logger.warning("Remove ignored while a generation is in flight")
            return self.snapshot

        self._generation_token += 1
        self._image = None
        self._result_url = None
        self._error_message = None
        self._status = ProcessingStatus.IDLE
        return self._publish()

    def reset(self) -> AppSnapshot:
        """Start over: clear image, result, error and team colors.

        Safe to call repeatedly and while a request is in flight; a late
        response is ignored.
        """
        self._generation_token += 1
        self._image = None
        self._result_url = None
        self._error_message = None
        self._status = ProcessingStatus.IDLE
        self.config_store.clear_team_colors()
        logger.info("Session reset")
        return self._publish()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_sport(self, sport: str) -> AppSnapshot:
        self.config_store.set_sport(sport)
        return self._publish()

    def set_team_colors(self, team_colors: str) -> AppSnapshot:
        self.config_store.set_team_colors(team_colors)
        return self._publish()

    def set_atmosphere(self, atmosphere: str) -> AppSnapshot:
        self.config_store.set_atmosphere(atmosphere)
        return self._publish()

    def set_intensity(self, intensity: str) -> AppSnapshot:
        self.config_store.set_intensity(intensity)
        return self._publish()

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate(self) -> AppSnapshot:
        """Run one generation for the current image and configuration.

        The client is only invoked when an image is loaded, team colors are
        filled in and no other generation is running; otherwise the request
        is logged and the state is left untouched.

        Returns:
            Snapshot after the generation settles (or the unchanged snapshot)
        """
        snapshot = self.snapshot
        if not snapshot.can_generate:
            logger.warning(
                f"Generate refused: image={snapshot.has_image}, "
                f"team_colors={snapshot.config.has_team_colors()}, status={snapshot.status.value}"
            )
            return snapshot

        self._generation_token += 1
        token = self._generation_token
        payload = self._image
        fan_config = snapshot.config

        self._status = ProcessingStatus.GENERATING
        self._result_url = None
        self._error_message = None
        self._publish()
        logger.info(f"Generation {token} started: {fan_config}")

        await self._sleep(self.settle_delay)
        if token != self._generation_token:
            logger.info(f"Generation {token} superseded before the request was sent")
            return self.snapshot

        try:
            result_url = await self.client.generate(payload, fan_config)
        except Exception as e:
            if not self._is_current(token):
                logger.info(f"Ignoring failure of superseded generation {token}: {e}")
                return self.snapshot
            return await self._handle_failure(e)

        if not self._is_current(token):
            logger.info(f"Ignoring result of superseded generation {token}")
            return self.snapshot

        self._result_url = result_url
        self._status = ProcessingStatus.SUCCESS
        logger.info(f"Generation {token} succeeded")
        return self._publish()

    def _is_current(self, token: int) -> bool:
        return token == self._generation_token and self._status is ProcessingStatus.GENERATING

    async def _handle_failure(self, error: Exception) -> AppSnapshot:
        message = str(error)

        if CREDENTIAL_INVALID_SIGNAL in message:
            logger.warning("Generation rejected the API key; starting key selection")
            await self._recover_credentials()
            self._status = ProcessingStatus.IDLE
            return self._publish()

        if not isinstance(error, StadiumSwapError):
            logger.error(f"Unexpected generation failure: {error}", exc_info=True)

        self._error_message = message.strip() or GENERIC_ERROR_MESSAGE
        self._status = ProcessingStatus.ERROR
        logger.info(f"Generation failed: {self._error_message}")
        return self._publish()
