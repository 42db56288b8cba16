"""Data models for Wallgen UI state."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from wallgen.core.images import ReferenceImage

logger = logging.getLogger(__name__)

# UI Constants
MAX_REFERENCE_IMAGES = 3
MAX_PROMPT_LENGTH = 100_000

PROMPT_PLACEHOLDER = (
    "Describe your wallpaper... e.g., 'A tranquil forest scene with a flowing river at sunset'"
)
REMIX_PLACEHOLDER = "e.g., 'Add a shooting star in the sky'"

READY_MESSAGE = "*Describe your vision, add up to 3 reference images, and generate.*"


def _empty_reference_slots() -> list[ReferenceImage | None]:
    return [None] * MAX_REFERENCE_IMAGES


@dataclass
class SessionState:
    """Session state for the Gradio UI.

    Each browser session gets its own SessionState through ``gr.State``.
    Nothing here outlives the session.

    Attributes
    ----------
    prompt : str
        Last submitted generation prompt
    reference_images : list[ReferenceImage | None]
        Fixed-size list of reference slots; None marks an empty slot
    generated_images : list[str]
        Base64 images in display order
    is_loading : bool
        True while a generation batch is in flight
    error : str | None
        Last error shown in the status area, kept for logging and __repr__
    selected_index : int | None
        Index of the image open in the viewer, None when the viewer is closed
    remix_prompt : str
        Current remix instruction
    is_remixing : bool
        Busy flag: True while a remix is in flight
    use_thinking_mode : bool
        Whether remix instructions are expanded before the edit call
    session_id : str | None
        Random id naming this session's downloads folder, assigned on first download
    download_file : Path | None
        File currently offered by the Download button
    image_service : Any | None
        ImageServiceBase instance, created lazily
    """

    prompt: str = ""
    reference_images: list[ReferenceImage | None] = field(default_factory=_empty_reference_slots)
    generated_images: list[str] = field(default_factory=list)
    is_loading: bool = False
    error: str | None = None

    # Viewer state
    selected_index: int | None = None
    remix_prompt: str = ""
    is_remixing: bool = False
    use_thinking_mode: bool = False

    # Download state
    session_id: str | None = None
    download_file: Path | None = None

    image_service: Any | None = None  # ImageServiceBase instance

    def is_initialized(self) -> bool:
        """Check if the image service has been created."""
        return self.image_service is not None

    def filled_reference_images(self) -> list[ReferenceImage]:
        """Return the filled reference slots in slot order."""
        return [img for img in self.reference_images if img is not None]

    def has_reference_images(self) -> bool:
        return any(img is not None for img in self.reference_images)

    def is_viewer_open(self) -> bool:
        """The viewer is open when a valid gallery index is selected."""
        return self.selected_index is not None and 0 <= self.selected_index < len(
            self.generated_images
        )

    @property
    def selected_image(self) -> str | None:
        """Base64 image shown in the viewer, or None."""
        if not self.is_viewer_open():
            return None
        return self.generated_images[self.selected_index]

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"SessionState(initialized={self.is_initialized()}, "
            f"images={len(self.generated_images)}, "
            f"references={len(self.filled_reference_images())}, "
            f"selected={self.selected_index}, "
            f"thinking={self.use_thinking_mode}, "
            f"error={self.error!r})"
        )
