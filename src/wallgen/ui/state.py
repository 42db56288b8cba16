"""State management utilities for Wallgen UI.

This module handles initialization of the session state and every state
transition the handlers perform: reference slot updates, gallery resets,
viewer selection and circular navigation, and in-place remix replacement.
"""

import logging

from wallgen.core.config import config
from wallgen.core.image_service import create_image_service
from wallgen.core.images import ReferenceImage

from .models import MAX_REFERENCE_IMAGES, SessionState

logger = logging.getLogger(__name__)


def initialize_session_state(state: SessionState | None = None) -> SessionState:
    """Initialize or ensure session state is ready.

    Creates the state if needed and lazily attaches the image service.

    Args:
        state: Existing SessionState or None

    Returns:
        Initialized SessionState instance

    Raises:
        ServiceConfigurationError: If the image service cannot be created
    """
    if state is None:
        logger.info("Creating new SessionState")
        state = SessionState()

    if state.is_initialized():
        logger.debug("SessionState already initialized")
        return state

    logger.info("Initializing image service")
    state.image_service = create_image_service(config)
    logger.info(f"SessionState initialization complete: {state}")
    return state


def set_reference_image(
    state: SessionState, index: int, image: ReferenceImage | None
) -> SessionState:
    """Fill or clear a reference slot.

    Raises:
        IndexError: If ``index`` is not a valid slot
    """
    if not 0 <= index < MAX_REFERENCE_IMAGES:
        raise IndexError(f"Reference slot must be 0-{MAX_REFERENCE_IMAGES - 1}, got {index}")

    state.reference_images[index] = image
    if image is None:
        logger.info(f"Cleared reference slot {index + 1}")
    else:
        logger.info(f"Set reference slot {index + 1}: {image!r}")
    return state


def clear_gallery(state: SessionState) -> SessionState:
    """Drop all generated images and close the viewer."""
    state.generated_images = []
    state.selected_index = None
    state.remix_prompt = ""
    return state


def select_image(state: SessionState, index: int) -> SessionState:
    """Open the viewer on gallery image ``index``.

    Out-of-range indexes leave the selection unchanged.
    """
    if not 0 <= index < len(state.generated_images):
        logger.warning(f"Ignoring selection of index {index} ({len(state.generated_images)} images)")
        return state

    state.selected_index = index
    return state


def step_selection(state: SessionState, step: int) -> SessionState:
    """Move the viewer selection by ``step`` positions, wrapping around.

    Next is ``step=1`` and previous is ``step=-1``. Does nothing if the
    viewer is closed.
    """
    if not state.is_viewer_open():
        return state

    count = len(state.generated_images)
    state.selected_index = (state.selected_index + step + count) % count
    return state


def close_viewer(state: SessionState) -> SessionState:
    """Close the viewer, clearing the selection and remix prompt."""
    state.selected_index = None
    state.remix_prompt = ""
    return state


def replace_image(state: SessionState, index: int, image: str) -> SessionState:
    """Replace the gallery image at ``index``, leaving the others untouched.

    Raises:
        IndexError: If ``index`` is outside the gallery
    """
    if not 0 <= index < len(state.generated_images):
        raise IndexError(f"No gallery image at index {index}")

    images = list(state.generated_images)
    images[index] = image
    state.generated_images = images
    return state
