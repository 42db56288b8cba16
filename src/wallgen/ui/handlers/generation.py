"""Wallpaper generation and reference image handlers."""

import logging

import gradio as gr
from PIL import Image

from wallgen.core.config import config
from wallgen.core.image_service import ImageServiceError

from ..adapters import gallery_items, upload_to_reference_image
from ..models import SessionState
from ..state import clear_gallery, initialize_session_state, set_reference_image
from ..validation import ValidationError, validate_generation_request

logger = logging.getLogger(__name__)


def update_reference_image(
    index: int, file_path: str | None, state: SessionState
) -> tuple[dict, str, SessionState]:
    """Fill or clear a reference slot from its image component.

    Args:
        index: Slot index (0-2)
        file_path: Uploaded file path, or None when the slot was cleared
        state: Session state

    Returns:
        Tuple of (image_component_update, status_markdown, updated_state)
    """
    try:
        image = upload_to_reference_image(file_path)
        state = set_reference_image(state, index, image)

        if image is None:
            return gr.update(), f"*Reference image {index + 1} removed*", state
        return gr.update(), f"*Reference image {index + 1}: {image.name}*", state

    except ValidationError as e:
        logger.warning(f"Rejected reference image for slot {index + 1}: {e}")
        state = set_reference_image(state, index, None)
        state.error = str(e)
        return gr.update(value=None), f"❌ **Validation Error**\n\n{e}", state


async def generate_wallpapers(
    prompt: str, state: SessionState
) -> tuple[list[Image.Image], str, dict, SessionState]:
    """Generate a batch of wallpapers from the prompt and reference images.

    The batch is all-or-nothing: if any request fails, the gallery stays
    empty and a single error message is shown.

    Args:
        prompt: Text prompt (may be empty if a reference image is set)
        state: Session state

    Returns:
        Tuple of (gallery_images, info_markdown, viewer_visibility_update, updated_state)
    """
    prompt = prompt or ""

    try:
        validate_generation_request(prompt, state)
    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
        state.error = str(e)
        return gallery_items(state), f"❌ **Validation Error**\n\n{e}", gr.update(), state

    try:
        state = initialize_session_state(state)
        state.prompt = prompt

        state = clear_gallery(state)
        state.is_loading = True
        state.error = None

        references = state.filled_reference_images()
        images = await state.image_service.generate_batch(
            prompt, references, count=config.images_per_batch
        )
        state.generated_images = images

        reference_info = (
            f"\n**Reference Images:** {', '.join(ref.name for ref in references)}"
            if references
            else ""
        )
        info = f"""
✅ **Generation Complete!**

**Prompt:** {prompt if prompt.strip() else "(none)"}{reference_info}
**Images:** {len(images)}

*Click an image to view, remix, or download it.*
        """
        return gallery_items(state), info.strip(), gr.update(visible=False), state

    except ImageServiceError as e:
        logger.error(f"Generation failed: {e}", exc_info=True)
        state = clear_gallery(state)
        state.error = str(e)
        return [], f"❌ **Generation Failed**\n\n{e}", gr.update(visible=False), state

    except Exception as e:
        logger.error(f"Error generating wallpapers: {e}", exc_info=True)
        state = clear_gallery(state)
        state.error = str(e)
        error_msg = (
            f"❌ **Error**\n\nAn unexpected error occurred. "
            f"Check logs for details.\n\n`{str(e)}`"
        )
        return [], error_msg, gr.update(visible=False), state

    finally:
        state.is_loading = False
