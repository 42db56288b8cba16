"""Prompt templates sent to the Gemini models."""

THINKING_PROMPT_TEMPLATE = (
    "You are an expert prompt engineer for an image generation AI. "
    'A user wants to edit an image. Their request is: "{instruction}". '
    "Expand this simple request into a rich, detailed, and descriptive prompt that will "
    "guide the image generation model to fulfill the user's intent with high artistic quality. "
    "Do not add any conversational text, just output the refined prompt."
)

EDIT_PROMPT_TEMPLATE = "Edit this image based on the following instruction: {instruction}"


def build_thinking_prompt(instruction: str) -> str:
    """Wrap a short remix instruction in the prompt-expansion request."""
    return THINKING_PROMPT_TEMPLATE.format(instruction=instruction)


def build_edit_prompt(instruction: str) -> str:
    """Wrap a (possibly expanded) remix instruction for the edit request."""
    return EDIT_PROMPT_TEMPLATE.format(instruction=instruction)
