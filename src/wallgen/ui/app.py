"""Gradio UI for Wallgen."""

import logging
import sys

import gradio as gr

from wallgen.core.config import config

from .components import ImageViewerUI, create_reference_slots
from .handlers import (
    close_image_viewer,
    generate_wallpapers,
    remix_selected_image,
    select_generated_image,
    set_thinking_mode,
    show_next_image,
    show_previous_image,
    update_reference_image,
)
from .models import PROMPT_PLACEHOLDER, READY_MESSAGE, SessionState

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> tuple[gr.Blocks, str]:
    """Create the Gradio UI.

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string)
    """
    custom_css = """
    .viewer-panel {
        border: 1px solid #374151;
        border-radius: 6px;
        padding: 12px;
    }
    """

    # Gradio keeps its own copy of every served file; prune copies older than an hour
    app = gr.Blocks(title="AI Wallpaper Generator", delete_cache=(3600, 3600))

    with app:
        # Session state - one instance per user
        session_state = gr.State(SessionState())

        gr.Markdown(
            """
            # AI Wallpaper Generator
            ### Create unique wallpapers with Gemini. Describe your vision, add up to 3 reference images, and let AI bring it to life.
            """
        )

        create_generation_panel(session_state)

    return app, custom_css


def _slot_upload_handler(index: int):
    def handler(file_path, state):
        return update_reference_image(index, file_path, state)

    return handler


def _slot_clear_handler(index: int):
    def handler(state):
        return update_reference_image(index, None, state)

    return handler


def create_generation_panel(session_state: gr.State) -> None:
    """Create the control panel, gallery and viewer, and wire their events.

    Args:
        session_state: Session state component
    """
    # Control panel
    prompt_input = gr.Textbox(
        label="Prompt",
        placeholder=PROMPT_PLACEHOLDER,
        lines=3,
    )

    gr.Markdown("**Add up to 3 reference images (optional)**")
    reference_slots = create_reference_slots()

    generate_btn = gr.Button("Generate Wallpapers", variant="primary", size="lg")

    info_output = gr.Markdown(value=READY_MESSAGE)

    # Gallery
    gallery = gr.Gallery(
        label="Generated Wallpapers",
        columns=4,
        rows=1,
        height=400,
        object_fit="cover",
        allow_preview=False,
    )

    # Viewer
    viewer = ImageViewerUI()
    viewer_outputs = viewer.get_render_outputs()

    # Event handlers

    for slot in reference_slots:
        slot.image.upload(
            fn=_slot_upload_handler(slot.index),
            inputs=[slot.image, session_state],
            outputs=[slot.image, info_output, session_state],
        )
        slot.image.clear(
            fn=_slot_clear_handler(slot.index),
            inputs=[session_state],
            outputs=[slot.image, info_output, session_state],
        )

    generate_btn.click(
        fn=generate_wallpapers,
        inputs=[prompt_input, session_state],
        outputs=[gallery, info_output, viewer.container, session_state],
    )

    gallery.select(
        fn=select_generated_image,
        inputs=[session_state],
        outputs=viewer_outputs + [session_state],
    )

    viewer.next_btn.click(
        fn=show_next_image,
        inputs=[session_state],
        outputs=viewer_outputs + [session_state],
    )

    viewer.prev_btn.click(
        fn=show_previous_image,
        inputs=[session_state],
        outputs=viewer_outputs + [session_state],
    )

    viewer.close_btn.click(
        fn=close_image_viewer,
        inputs=[session_state],
        outputs=viewer_outputs + [session_state],
    )

    viewer.thinking_mode.change(
        fn=set_thinking_mode,
        inputs=[viewer.thinking_mode, session_state],
        outputs=[session_state],
    )

    remix_inputs = [viewer.remix_prompt, viewer.thinking_mode, session_state]
    remix_outputs = [gallery] + viewer_outputs + [info_output, session_state]

    viewer.remix_btn.click(
        fn=remix_selected_image,
        inputs=remix_inputs,
        outputs=remix_outputs,
    )
    viewer.remix_prompt.submit(
        fn=remix_selected_image,
        inputs=remix_inputs,
        outputs=remix_outputs,
    )


def main():
    """Main entry point for the application."""
    logger.info("Starting Wallgen...")
    logger.info(f"Configuration: {config.model_dump(exclude={'gemini_api_key'})}")

    if not config.has_api_key:
        logger.error(
            "Gemini API key is not set. Set GEMINI_API_KEY (or WALLGEN_GEMINI_API_KEY) "
            "in the environment or .env file."
        )
        sys.exit(1)

    app, custom_css = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        css=custom_css,
        allowed_paths=[str(config.downloads_dir.resolve())],
    )


if __name__ == "__main__":
    main()
