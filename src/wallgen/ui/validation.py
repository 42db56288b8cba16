"""Validation utilities for Wallgen UI inputs."""

import logging

from .models import MAX_PROMPT_LENGTH, SessionState

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def validate_prompt_content(prompt: str, max_length: int = MAX_PROMPT_LENGTH) -> None:
    """Validate prompt text content.

    Args:
        prompt: Prompt text to validate
        max_length: Maximum allowed prompt length

    Raises:
        ValidationError: If prompt is too long
    """
    if len(prompt) > max_length:
        raise ValidationError(
            f"Prompt is too long ({len(prompt)} characters). Maximum is {max_length} characters."
        )


def validate_generation_request(prompt: str, state: SessionState) -> None:
    """Ensure nothing is running and there is something to generate from.

    Either a non-blank prompt or at least one reference image is required.

    Raises:
        ValidationError: If validation fails with user-friendly message
    """
    if state.is_loading:
        raise ValidationError("A generation is already in progress.")

    if state.is_remixing:
        raise ValidationError("Wait for the remix to finish before generating.")

    if (not prompt or not prompt.strip()) and not state.has_reference_images():
        raise ValidationError("Please provide a prompt or at least one reference image.")

    validate_prompt_content(prompt or "")


def validate_remix_request(remix_prompt: str, state: SessionState) -> None:
    """Check the preconditions of a remix.

    Raises:
        ValidationError: If another remix or a generation is still running,
            no image is selected, or the instruction is blank
    """
    if state.is_remixing:
        raise ValidationError("A remix is already in progress.")

    if state.is_loading:
        raise ValidationError("Wait for the generation to finish before remixing.")

    if not state.is_viewer_open():
        raise ValidationError("Select an image to remix first.")

    if not remix_prompt or not remix_prompt.strip():
        raise ValidationError("Remix prompt cannot be empty.")

    validate_prompt_content(remix_prompt)
