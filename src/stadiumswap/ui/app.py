"""Gradio UI for Stadium Swap."""

import logging

import gradio as gr

from stadiumswap.core.config import config

from .components import StadiumSwapView
from .handlers import (
    check_api_key,
    generate_fans,
    remove_image,
    reset_session,
    select_api_key,
    update_atmosphere,
    update_intensity,
    update_sport,
    update_team_colors,
    upload_image,
)
from .models import APP_TITLE, UIState

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> gr.Blocks:
    """Create the Gradio UI.

    Returns:
        Gradio Blocks app
    """
    app = gr.Blocks(title=APP_TITLE)

    with app:
        # Session state - one instance per user
        ui_state = gr.State(UIState())

        view = StadiumSwapView()
        outputs = [*view.get_output_components(), ui_state]

        # Startup credential check
        app.load(fn=check_api_key, inputs=[ui_state], outputs=outputs)

        # Key gate
        view.select_key_btn.click(
            fn=select_api_key,
            inputs=[view.api_key, ui_state],
            outputs=outputs,
        )

        # Upload and removal
        view.upload.upload(fn=upload_image, inputs=[view.upload, ui_state], outputs=outputs)
        view.remove_btn.click(fn=remove_image, inputs=[ui_state], outputs=outputs)

        # Configuration (user input only, so rendered values never loop back)
        view.sport.input(fn=update_sport, inputs=[view.sport, ui_state], outputs=outputs)
        view.team_colors.input(
            fn=update_team_colors, inputs=[view.team_colors, ui_state], outputs=outputs
        )
        view.atmosphere.input(
            fn=update_atmosphere, inputs=[view.atmosphere, ui_state], outputs=outputs
        )
        view.intensity.input(
            fn=update_intensity, inputs=[view.intensity, ui_state], outputs=outputs
        )

        # Generation and reset
        view.generate_btn.click(fn=generate_fans, inputs=[ui_state], outputs=outputs)
        view.start_over_btn.click(fn=reset_session, inputs=[ui_state], outputs=outputs)

    return app


def main():
    """Main entry point for the application."""
    logger.info("Starting Stadium Swap...")
    logger.info(f"Configuration: {config.model_dump()}")

    app = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.queue().launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
    )


if __name__ == "__main__":
    main()
