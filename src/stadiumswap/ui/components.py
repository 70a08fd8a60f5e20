"""Reusable UI components for the Stadium Swap Gradio interface."""

import base64
import binascii
import io
import logging
import tempfile
from pathlib import Path
from typing import Any

import gradio as gr
from PIL import Image

from stadiumswap.core.models import (
    ATMOSPHERES,
    INTENSITIES,
    SPORTS,
    AppSnapshot,
    FanConfig,
    ProcessingStatus,
)

from .models import (
    APP_TITLE,
    DOWNLOAD_FILENAME,
    DOWNLOAD_LABEL,
    GENERATE_LABEL,
    GENERATING_LABEL,
    TEAM_COLORS_HINT,
    TEAM_COLORS_PLACEHOLDER,
)

logger = logging.getLogger(__name__)


def data_url_to_image(data_url: str | None) -> Image.Image | None:
    """Decode a ``data:<mime>;base64,<data>`` URL into a PIL Image.

    Args:
        data_url: URL to decode, or None

    Returns:
        Loaded PIL Image, or None if the URL is empty or not a readable image
    """
    if not data_url:
        return None

    _, _, encoded = data_url.partition(";base64,")
    if not encoded:
        logger.warning("Data URL has no base64 payload")
        return None

    try:
        image = Image.open(io.BytesIO(base64.b64decode(encoded)))
        image.load()
        return image
    except (binascii.Error, OSError, ValueError) as e:
        logger.warning(f"Could not decode image from data URL: {e}")
        return None


def save_for_download(image: Image.Image, directory: str | Path | None = None) -> str:
    """Write a result image as ``stadium-swap-fan.png`` for the download button.

    Each call gets its own directory unless one is given, so concurrent
    sessions never overwrite each other's file.

    Args:
        image: Decoded result image
        directory: Target directory (default: a fresh temporary directory)

    Returns:
        Path of the written PNG
    """
    target_dir = Path(directory) if directory else Path(tempfile.mkdtemp(prefix="stadiumswap-"))
    path = target_dir / DOWNLOAD_FILENAME
    image.save(path, format="PNG")
    logger.debug(f"Saved result for download: {path}")
    return str(path)


def status_message(snapshot: AppSnapshot) -> str:
    """One-line description of where the session is."""
    if not snapshot.has_image:
        return "Upload a photo to start the magic"
    if snapshot.status is ProcessingStatus.GENERATING:
        return "⏳ Generating your stadium scene..."
    if snapshot.status is ProcessingStatus.SUCCESS:
        return "✅ Generated"
    if snapshot.status is ProcessingStatus.ERROR:
        return "❌ Generation failed"
    return "Image Uploaded - Ready to transform"


class StadiumSwapView:
    """All widgets of the app, created inside an open ``gr.Blocks`` context.

    The widget order returned by :meth:`get_output_components` matches the
    order of updates produced by :func:`render_view`; handlers append the
    session state after them.
    """

    def __init__(self, initial: FanConfig | None = None):
        """Create the gate and the main panel.

        Args:
            initial: FanConfig used for the initial widget values
        """
        initial = initial or FanConfig()

        # Key gate: shown until a usable API key exists
        with gr.Column(visible=False) as self.key_gate:
            gr.Markdown(
                f"""
                # 🏟️ {APP_TITLE}
                To use the high-quality Gemini image model for generating stadium fan
                images, you need to select a paid API key.
                See the [billing documentation](https://ai.google.dev/gemini-api/docs/billing)
                for details.
                """
            )
            self.api_key = gr.Textbox(
                label="Gemini API Key",
                type="password",
                placeholder="Paste a key, or leave empty to use the environment",
            )
            self.select_key_btn = gr.Button("Select API Key", variant="primary")
            self.key_notice = gr.Markdown(visible=False)

        with gr.Column(visible=False) as self.main_panel:
            gr.Markdown(
                f"""
                # 🏟️ {APP_TITLE}
                Upload a photo of yourself or friends, pick your team, and instantly
                transport to the electric atmosphere of a packed stadium.
                """
            )

            with gr.Row():
                with gr.Column(scale=4):
                    # 1. Upload
                    self.upload = gr.File(
                        label="Drop your photo here",
                        file_types=["image"],
                        type="filepath",
                    )
                    with gr.Group(visible=False) as self.preview_group:
                        self.preview = gr.Image(
                            label="Image Uploaded",
                            type="pil",
                            interactive=False,
                            height=160,
                        )
                        self.remove_btn = gr.Button("Remove", size="sm", variant="stop")

                    # 2. Configuration
                    self.sport = gr.Radio(
                        label="Select Sport",
                        choices=SPORTS,
                        value=initial.sport,
                        interactive=False,
                    )
                    self.team_colors = gr.Textbox(
                        label="Team Colors / Name",
                        placeholder=TEAM_COLORS_PLACEHOLDER,
                        value=initial.team_colors,
                        interactive=False,
                    )
                    self.atmosphere = gr.Radio(
                        label="Atmosphere",
                        choices=ATMOSPHERES,
                        value=initial.atmosphere,
                        interactive=False,
                    )
                    self.intensity = gr.Radio(
                        label="Intensity",
                        choices=INTENSITIES,
                        value=initial.intensity,
                        interactive=False,
                    )
                    self.generate_btn = gr.Button(
                        GENERATE_LABEL, variant="primary", interactive=False
                    )
                    self.colors_hint = gr.Markdown(TEAM_COLORS_HINT)
                    self.error_box = gr.Markdown(visible=False)

                with gr.Column(scale=8):
                    # 3. Result
                    self.status = gr.Markdown("Upload a photo to start the magic")
                    self.result = gr.Image(
                        label="Generated Fan Version",
                        type="pil",
                        interactive=False,
                        visible=False,
                    )
                    with gr.Row():
                        self.download_btn = gr.DownloadButton(
                            DOWNLOAD_LABEL, variant="primary", visible=False
                        )
                        self.start_over_btn = gr.Button("Start Over", visible=False)

    def get_config_components(self) -> list[Any]:
        """Widgets bound to FanConfig fields."""
        return [self.sport, self.team_colors, self.atmosphere, self.intensity]

    def get_output_components(self) -> list[Any]:
        """Widgets updated from a snapshot, in render_view order."""
        return [
            self.key_gate,
            self.main_panel,
            self.upload,
            self.preview_group,
            self.preview,
            self.remove_btn,
            self.sport,
            self.team_colors,
            self.atmosphere,
            self.intensity,
            self.generate_btn,
            self.colors_hint,
            self.error_box,
            self.status,
            self.result,
            self.start_over_btn,
            self.key_notice,
            self.download_btn,
        ]


def render_view(
    snapshot: AppSnapshot,
    sync_config: bool = True,
    notice: str | None = None,
    sync_images: bool = True,
) -> tuple:
    """Translate a snapshot into widget updates.

    Args:
        snapshot: Controller state to render
        sync_config: Also push FanConfig values into the config widgets.
            Disabled for updates triggered by those widgets themselves so
            typing is never overwritten mid-edit.
        notice: Markdown message for a rejected action; replaces the status
            line, or shows under the key gate while the gate is up
        sync_images: Decode and push the photo, the result and the download
            file. Disabled when neither image can have changed so edits do
            not re-send them.

    Returns:
        Tuple of updates ordered like StadiumSwapView.get_output_components()
    """
    is_generating = snapshot.is_generating
    is_success = snapshot.status is ProcessingStatus.SUCCESS
    config_enabled = snapshot.has_image and not is_generating
    config = snapshot.config

    def config_update(value: str) -> dict:
        if sync_config:
            return gr.update(value=value, interactive=config_enabled)
        return gr.update(interactive=config_enabled)

    if sync_images:
        preview = data_url_to_image(snapshot.image.data_url) if snapshot.image else None
        result = data_url_to_image(snapshot.result_url)
        download_path = save_for_download(result) if is_success and result else None
        preview_update = gr.update(value=preview)
        result_update = gr.update(visible=snapshot.has_image, value=result)
        download_update = gr.update(visible=download_path is not None, value=download_path)
    else:
        preview_update = gr.update()
        result_update = gr.update(visible=snapshot.has_image)
        download_update = gr.update(visible=is_success)

    show_error = snapshot.status is ProcessingStatus.ERROR and bool(snapshot.error_message)
    show_key_notice = bool(notice) and not snapshot.has_api_key

    return (
        gr.update(visible=not snapshot.has_api_key),
        gr.update(visible=snapshot.has_api_key),
        gr.update(visible=not snapshot.has_image, value=None),
        gr.update(visible=snapshot.has_image),
        preview_update,
        gr.update(interactive=not is_generating),
        config_update(config.sport),
        config_update(config.team_colors),
        config_update(config.atmosphere),
        config_update(config.intensity),
        gr.update(
            value=GENERATING_LABEL if is_generating else GENERATE_LABEL,
            interactive=snapshot.can_generate,
        ),
        gr.update(visible=not config.has_team_colors()),
        gr.update(
            visible=show_error,
            value=f"**Error:** {snapshot.error_message}" if show_error else "",
        ),
        gr.update(value=notice or status_message(snapshot)),
        result_update,
        gr.update(visible=is_success),
        gr.update(visible=show_key_notice, value=notice if show_key_notice else ""),
        download_update,
    )
