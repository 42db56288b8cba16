"""Image services: the remote models behind generation and remix.

This module defines the interface the UI talks to and its Gemini
implementation. The base class owns the orchestration that is independent of
any particular backend:

- **generate_batch**: fan out N identical generation requests concurrently and
  join them with all-or-nothing semantics.
- **remix**: optionally expand the user's instruction in "thinking mode", then
  send the selected image and the instruction to the edit endpoint.

Subclasses only implement the three primitive calls (``generate_image``,
``edit_image``, ``expand_prompt``).

Usage Example
-------------
    >>> from wallgen.core.config import config
    >>> from wallgen.core.image_service import create_image_service
    >>>
    >>> service = create_image_service(config)
    >>> images = await service.generate_batch("misty pine forest at dawn", [], count=4)
    >>> remixed = await service.remix(images[0], "add a shooting star", use_thinking_mode=True)

All images are base64 strings; see :mod:`wallgen.core.images`.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from google import genai
from google.genai import errors, types

from .config import WallgenConfig
from .images import ReferenceImage, decode_image_data, encode_image_bytes
from .prompts import build_edit_prompt, build_thinking_prompt

logger = logging.getLogger(__name__)


class ImageServiceError(Exception):
    """Base error for failed calls to the image service.

    The message is safe to show to the user.
    """

    pass


class ServiceConfigurationError(ImageServiceError):
    """Raised when the service cannot be created (e.g. missing API key)."""

    pass


class MissingImageDataError(ImageServiceError):
    """Raised when a model response contains no inline image data."""

    pass


class ImageServiceBase(ABC):
    """Abstract base class for image services.

    Attributes
    ----------
    name : str
        Human-readable name of the service
    description : str
        Brief description of the backing models
    """

    name: str = "Base Image Service"
    description: str = "Base class for image services"

    @abstractmethod
    async def generate_image(self, prompt: str, reference_images: Sequence[ReferenceImage]) -> str:
        """Generate one image from a prompt and optional reference images.

        Returns
        -------
        str
            Base64-encoded image

        Raises
        ------
        ImageServiceError
            If the call fails or returns no image
        """
        pass

    @abstractmethod
    async def edit_image(self, image: str, instruction: str, mime_type: str) -> str:
        """Edit an image according to an instruction.

        Args:
            image: Base64-encoded source image
            instruction: Edit instruction (already expanded if thinking mode was used)
            mime_type: MIME type of the source image

        Returns:
            Base64-encoded edited image
        """
        pass

    @abstractmethod
    async def expand_prompt(self, instruction: str) -> str:
        """Expand a short edit instruction into a detailed prompt."""
        pass

    async def generate_batch(
        self,
        prompt: str,
        reference_images: Sequence[ReferenceImage],
        count: int = 4,
    ) -> list[str]:
        """Issue ``count`` generation requests concurrently and await them all.

        The batch is all-or-nothing: the first failure cancels the requests
        still in flight and is re-raised.

        Args:
            prompt: Text prompt (may be empty if reference images are given)
            reference_images: Filled reference slots, in slot order
            count: Number of images to request

        Returns:
            Base64 images in request order
        """
        logger.info(
            f"Starting batch of {count} requests "
            f"(prompt={len(prompt)} chars, references={len(reference_images)})"
        )
        tasks = [
            asyncio.ensure_future(self.generate_image(prompt, reference_images))
            for _ in range(count)
        ]
        try:
            images = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Collect every outcome so later failures are not reported as unretrieved.
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        logger.info(f"Batch complete: {len(images)} images")
        return list(images)

    async def resolve_remix_instruction(self, instruction: str, use_thinking_mode: bool) -> str:
        """Return the instruction to send to the edit call.

        In thinking mode the instruction is expanded by a secondary model. Any
        failure there is logged and the literal instruction is used instead.
        """
        if not use_thinking_mode:
            return instruction

        try:
            expanded = await self.expand_prompt(instruction)
        except Exception as e:
            logger.error(f"Thinking mode failed, using the literal instruction: {e}", exc_info=True)
            return instruction

        expanded = (expanded or "").strip()
        if not expanded:
            logger.warning("Thinking mode returned an empty prompt, using the literal instruction")
            return instruction

        logger.info(f"Refined prompt with thinking mode: {expanded}")
        return expanded

    async def remix(
        self,
        image: str,
        instruction: str,
        use_thinking_mode: bool = False,
        mime_type: str = "image/png",
    ) -> str:
        """Remix an image: optional prompt expansion followed by an edit call.

        Returns:
            Base64-encoded remixed image
        """
        final_instruction = await self.resolve_remix_instruction(instruction, use_thinking_mode)
        return await self.edit_image(image, final_instruction, mime_type)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


def extract_image_data(response: Any, error_message: str = "Image data not found in response") -> str:
    """Pull the first inline image out of a generate_content response.

    Args:
        response: Response from ``client.aio.models.generate_content``
        error_message: Message for the error raised when no image is present

    Returns:
        Base64-encoded image bytes

    Raises:
        MissingImageDataError: If no candidate part carries inline data
    """
    candidates = getattr(response, "candidates", None) or []
    if candidates and candidates[0].content and candidates[0].content.parts:
        for part in candidates[0].content.parts:
            if part.inline_data and part.inline_data.data:
                data = part.inline_data.data
                if isinstance(data, str):
                    return data
                return encode_image_bytes(data)

    raise MissingImageDataError(error_message)


class GeminiImageService(ImageServiceBase):
    """Image service backed by the Google Gemini API.

    Generation and edits go to ``config.image_model`` with image-only
    responses; prompt expansion goes to ``config.thinking_model`` with a
    thinking budget. All calls use the SDK's async client so a batch can run
    concurrently on the event loop.
    """

    name = "Gemini"
    description = "Gemini image generation with thinking-mode prompt expansion"

    def __init__(self, config: WallgenConfig, client: genai.Client | None = None) -> None:
        """Initialize the service.

        Args:
            config: Configuration holding the API key and model names
            client: Pre-built Gemini client (created from config if omitted)

        Raises:
            ServiceConfigurationError: If no client is given and no API key is configured
        """
        self.config = config

        if client is None:
            if not config.has_api_key:
                raise ServiceConfigurationError(
                    "Gemini API key is not set. Set GEMINI_API_KEY (or WALLGEN_GEMINI_API_KEY) "
                    "in the environment or .env file."
                )
            client = genai.Client(
                api_key=config.gemini_api_key,
                http_options=types.HttpOptions(timeout=config.request_timeout_ms),
            )
        self.client = client

        logger.info(
            f"Initialized {self.name} image service "
            f"(image_model={config.image_model}, thinking_model={config.thinking_model})"
        )

    def _image_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(response_modalities=[types.Modality.IMAGE])

    async def _generate_content(
        self, model: str, contents: Any, config: types.GenerateContentConfig
    ) -> types.GenerateContentResponse:
        try:
            return await self.client.aio.models.generate_content(
                model=model, contents=contents, config=config
            )
        except errors.APIError as e:
            raise ImageServiceError(f"Gemini request to {model} failed: {e}") from e

    async def generate_image(self, prompt: str, reference_images: Sequence[ReferenceImage]) -> str:
        parts = []
        if prompt:
            parts.append(types.Part.from_text(text=prompt))
        for ref in reference_images:
            parts.append(
                types.Part.from_bytes(data=decode_image_data(ref.base64), mime_type=ref.mime_type)
            )

        response = await self._generate_content(
            self.config.image_model,
            types.Content(role="user", parts=parts),
            self._image_config(),
        )
        return extract_image_data(response)

    async def edit_image(self, image: str, instruction: str, mime_type: str) -> str:
        parts = [
            types.Part.from_bytes(data=decode_image_data(image), mime_type=mime_type),
            types.Part.from_text(text=build_edit_prompt(instruction)),
        ]

        response = await self._generate_content(
            self.config.image_model,
            types.Content(role="user", parts=parts),
            self._image_config(),
        )
        return extract_image_data(response, "Failed to remix image. No image data received.")

    async def expand_prompt(self, instruction: str) -> str:
        response = await self._generate_content(
            self.config.thinking_model,
            build_thinking_prompt(instruction),
            types.GenerateContentConfig(
                thinking_config=types.ThinkingConfig(thinking_budget=self.config.thinking_budget)
            ),
        )
        if not response.text:
            raise ImageServiceError("Thinking model returned no text")
        return response.text.strip()


def create_image_service(config: WallgenConfig) -> ImageServiceBase:
    """Create the image service described by the configuration."""
    return GeminiImageService(config)
