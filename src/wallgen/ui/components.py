"""Reusable UI components for the Wallgen Gradio interface."""

import gradio as gr

from .models import MAX_REFERENCE_IMAGES, REMIX_PLACEHOLDER


class ReferenceImageSlotUI:
    """UI component for one reference image slot.

    A slot is an upload-only image input. Clearing the image empties the slot.
    """

    def __init__(self, index: int):
        """Initialize a reference slot component.

        Args:
            index: Slot index (0-based)
        """
        self.index = index

        self.image = gr.Image(
            label=f"Reference {index + 1}",
            type="filepath",
            sources=["upload"],
            height=160,
        )

    def get_input_components(self) -> list[gr.components.Component]:
        return [self.image]


def create_reference_slots() -> list[ReferenceImageSlotUI]:
    """Create all reference image slots side by side."""
    with gr.Row():
        return [ReferenceImageSlotUI(i) for i in range(MAX_REFERENCE_IMAGES)]


class ImageViewerUI:
    """Viewer panel for a single generated image.

    Stands in for a modal dialog: the whole panel is hidden until an image is
    selected in the gallery. It offers previous/next navigation, the remix
    controls, and a download button.
    """

    def __init__(self):
        """Initialize the viewer components (hidden by default)."""
        with gr.Column(visible=False, elem_classes=["viewer-panel"]) as self.container:
            with gr.Row():
                self.position = gr.Markdown(value="")
                self.close_btn = gr.Button("✕ Close", size="sm", scale=0)

            self.image = gr.Image(
                label="Selected Wallpaper",
                type="pil",
                interactive=False,
                height=480,
            )

            with gr.Row():
                self.prev_btn = gr.Button("‹ Previous", size="sm")
                self.next_btn = gr.Button("Next ›", size="sm")

            gr.Markdown("### Remix Image\nDescribe the changes you'd like to make.")
            self.remix_prompt = gr.Textbox(
                label="Remix Instruction",
                placeholder=REMIX_PLACEHOLDER,
                lines=2,
            )
            self.thinking_mode = gr.Checkbox(
                label="Enable Thinking Mode (for complex edits)",
                value=False,
            )

            with gr.Row():
                self.remix_btn = gr.Button("Remix", variant="primary")
                self.download_btn = gr.DownloadButton("Download", value=None)

    def get_render_outputs(self) -> list[gr.components.Component]:
        """Return components updated by viewer handlers.

        Order matches ``render_viewer``: container, image, position,
        download button, remix prompt.
        """
        return [
            self.container,
            self.image,
            self.position,
            self.download_btn,
            self.remix_prompt,
        ]
