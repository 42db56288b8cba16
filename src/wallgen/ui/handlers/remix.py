"""Remix handlers for the image viewer."""

import logging

from PIL import Image

from wallgen.core.config import config
from wallgen.core.image_service import ImageServiceError
from wallgen.core.images import detect_mime_type

from ..adapters import gallery_items
from ..models import SessionState
from ..state import initialize_session_state, replace_image
from ..validation import ValidationError, validate_remix_request
from .gallery import render_viewer

logger = logging.getLogger(__name__)

GALLERY_CHANGED_MESSAGE = "The gallery changed while the remix was running. The result was discarded."


def _still_in_gallery(state: SessionState, index: int, source: str) -> bool:
    """Whether the remixed image is still at the position it was taken from."""
    return index < len(state.generated_images) and state.generated_images[index] == source


def set_thinking_mode(enabled: bool, state: SessionState) -> SessionState:
    """Store the thinking-mode toggle in the session."""
    state.use_thinking_mode = bool(enabled)
    logger.info(f"Thinking mode {'enabled' if state.use_thinking_mode else 'disabled'}")
    return state


async def remix_selected_image(
    remix_prompt: str, use_thinking_mode: bool, state: SessionState
) -> tuple:
    """Remix the image open in the viewer.

    With thinking mode on, the instruction is first expanded by the thinking
    model (falling back to the literal text if that fails). The result
    replaces the image at the index that was selected when the remix started;
    every other gallery entry is left as is. If that image is no longer in
    place when the edit returns, the result is discarded.

    Args:
        remix_prompt: Edit instruction typed by the user
        use_thinking_mode: Whether to expand the instruction first
        state: Session state

    Returns:
        Tuple of (gallery_images, viewer_visibility_update, viewer_image,
        position_markdown, download_path, remix_prompt, info_markdown, updated_state)
    """
    state.use_thinking_mode = bool(use_thinking_mode)

    try:
        validate_remix_request(remix_prompt, state)
    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
        if not state.is_remixing:
            state.remix_prompt = remix_prompt or ""
        state.error = str(e)
        return (
            gallery_items(state),
            *render_viewer(state),
            f"❌ **Validation Error**\n\n{e}",
            state,
        )

    index = state.selected_index
    state.remix_prompt = remix_prompt
    state.is_remixing = True
    state.error = None

    try:
        state = initialize_session_state(state)

        source = state.generated_images[index]
        mime_type = detect_mime_type(source, default=config.remix_mime_type)
        logger.info(
            f"Remixing image {index + 1} (thinking={state.use_thinking_mode}, mime={mime_type})"
        )

        remixed = await state.image_service.remix(
            source,
            remix_prompt,
            use_thinking_mode=state.use_thinking_mode,
            mime_type=mime_type,
        )

        if not _still_in_gallery(state, index, source):
            logger.warning(f"Gallery changed during remix of image {index + 1}, discarding result")
            state.error = GALLERY_CHANGED_MESSAGE
            return (
                gallery_items(state),
                *render_viewer(state),
                f"❌ **Remix Discarded**\n\n{GALLERY_CHANGED_MESSAGE}",
                state,
            )

        state = replace_image(state, index, remixed)
        state.remix_prompt = ""

        info = f"""
✅ **Remix Complete!**

**Instruction:** {remix_prompt}
**Thinking Mode:** {"On" if state.use_thinking_mode else "Off"}
**Image:** {index + 1} of {len(state.generated_images)}
        """
        return gallery_items(state), *render_viewer(state), info.strip(), state

    except ImageServiceError as e:
        logger.error(f"Remix failed: {e}", exc_info=True)
        state.error = str(e)
        return (
            gallery_items(state),
            *render_viewer(state),
            f"❌ **Remix Failed**\n\n{e}",
            state,
        )

    except Exception as e:
        logger.error(f"Error remixing image: {e}", exc_info=True)
        state.error = str(e)
        error_msg = (
            f"❌ **Error**\n\nAn unexpected error occurred during remix. "
            f"Check logs for details.\n\n`{str(e)}`"
        )
        return gallery_items(state), *render_viewer(state), error_msg, state

    finally:
        state.is_remixing = False
