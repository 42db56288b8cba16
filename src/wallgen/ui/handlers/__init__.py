"""UI event handlers organized by feature area.

This package provides handlers for all Gradio UI events, organized into logical modules:
- generation: Reference image slots and batch wallpaper generation
- gallery: Image viewer selection, navigation and download
- remix: Remix of the viewer's image, with optional thinking mode
"""

from .gallery import (
    close_image_viewer,
    render_viewer,
    select_generated_image,
    show_next_image,
    show_previous_image,
)
from .generation import (
    generate_wallpapers,
    update_reference_image,
)
from .remix import (
    remix_selected_image,
    set_thinking_mode,
)

__all__ = [
    # Generation handlers
    "generate_wallpapers",
    "update_reference_image",
    # Gallery handlers
    "close_image_viewer",
    "render_viewer",
    "select_generated_image",
    "show_next_image",
    "show_previous_image",
    # Remix handlers
    "remix_selected_image",
    "set_thinking_mode",
]
