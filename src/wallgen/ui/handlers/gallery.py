"""Gallery and image viewer handlers."""

import logging

import gradio as gr
from PIL import Image

from wallgen.core.config import config

from ..adapters import download_path, release_download, viewer_image
from ..models import SessionState
from ..state import close_viewer, select_image, step_selection

logger = logging.getLogger(__name__)

ViewerOutputs = tuple[dict, Image.Image | None, str, str | None, str]


def render_viewer(state: SessionState) -> ViewerOutputs:
    """Build the viewer component values from the session state.

    Returns:
        Tuple of (viewer_visibility_update, image, position_markdown,
        download_path, remix_prompt)
    """
    if not state.is_viewer_open():
        release_download(state)
        return gr.update(visible=False), None, "", None, ""

    position = f"**Image {state.selected_index + 1} of {len(state.generated_images)}**"
    return (
        gr.update(visible=True),
        viewer_image(state),
        position,
        download_path(state, config.downloads_dir),
        state.remix_prompt,
    )


def select_generated_image(
    evt: gr.SelectData, state: SessionState
) -> tuple[dict, Image.Image | None, str, str | None, str, SessionState]:
    """Open the viewer on the clicked gallery image.

    Args:
        evt: Gradio SelectData event containing selected index
        state: Session state

    Returns:
        Tuple of (viewer outputs..., updated_state)
    """
    try:
        state = select_image(state, evt.index)
        logger.info(f"Opened viewer on image {evt.index + 1}")
        return (*render_viewer(state), state)

    except Exception as e:
        logger.error(f"Error selecting image: {e}", exc_info=True)
        state = close_viewer(state)
        return (*render_viewer(state), state)


def show_next_image(
    state: SessionState,
) -> tuple[dict, Image.Image | None, str, str | None, str, SessionState]:
    """Step the viewer forward, wrapping from the last image to the first."""
    state = step_selection(state, 1)
    return (*render_viewer(state), state)


def show_previous_image(
    state: SessionState,
) -> tuple[dict, Image.Image | None, str, str | None, str, SessionState]:
    """Step the viewer back, wrapping from the first image to the last."""
    state = step_selection(state, -1)
    return (*render_viewer(state), state)


def close_image_viewer(
    state: SessionState,
) -> tuple[dict, Image.Image | None, str, str | None, str, SessionState]:
    """Close the viewer and discard the unsent remix prompt."""
    state = close_viewer(state)
    return (*render_viewer(state), state)
