"""Adapter functions for converting between UI values and business objects."""

import logging
import uuid
from pathlib import Path

from PIL import Image

from wallgen.core.images import (
    ImageDecodeError,
    ReferenceImage,
    remove_download,
    save_for_download,
    to_pil_image,
)

from .models import SessionState
from .validation import ValidationError

logger = logging.getLogger(__name__)


def upload_to_reference_image(file_path: str | None) -> ReferenceImage | None:
    """Convert an uploaded file path from ``gr.Image(type="filepath")``.

    Args:
        file_path: Path of the uploaded file, or None when the slot was cleared

    Returns:
        ReferenceImage, or None for a cleared slot

    Raises:
        ValidationError: If the file cannot be read as an image
    """
    if not file_path:
        return None

    try:
        return ReferenceImage.from_file(file_path)
    except (ImageDecodeError, OSError) as e:
        raise ValidationError(f"Could not read reference image {Path(file_path).name}: {e}") from e


def gallery_items(state: SessionState) -> list[Image.Image]:
    """Decode the generated images for ``gr.Gallery``, in display order."""
    return [to_pil_image(image) for image in state.generated_images]


def viewer_image(state: SessionState) -> Image.Image | None:
    """Decode the image currently open in the viewer."""
    if state.selected_image is None:
        return None
    return to_pil_image(state.selected_image)


def download_path(state: SessionState, directory: Path) -> str | None:
    """Write the viewer's image for download and return its path.

    Each session keeps a single download file under ``directory/<session_id>``;
    the previous one is removed when the viewer moves to another image.
    """
    if state.selected_image is None:
        release_download(state)
        return None

    if state.session_id is None:
        state.session_id = uuid.uuid4().hex

    target = save_for_download(state.selected_image, directory / state.session_id)
    if state.download_file is not None and state.download_file != target:
        remove_download(state.download_file)
    state.download_file = target
    return str(target)


def release_download(state: SessionState) -> None:
    """Remove the session's download file, if any."""
    if state.download_file is None:
        return
    remove_download(state.download_file)
    state.download_file = None
