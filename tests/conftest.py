"""Shared pytest fixtures for Wallgen tests."""

import asyncio
import io
import shutil
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest
from PIL import Image

from wallgen.core.config import WallgenConfig
from wallgen.core.image_service import ImageServiceBase, ImageServiceError
from wallgen.core.images import ReferenceImage, encode_image_bytes
from wallgen.ui.models import SessionState


def make_image_b64(color: str = "red", size: tuple[int, int] = (8, 8), fmt: str = "PNG") -> str:
    """Render a solid-color image and return it base64-encoded."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return encode_image_bytes(buffer.getvalue())


class FakeImageService(ImageServiceBase):
    """In-memory image service that records every call.

    Generation returns ``images`` in order; edits return ``remix_result``.
    Set ``fail_on_call`` to make the n-th generation call raise, or
    ``expand_error`` / ``edit_error`` to make those calls fail. Set
    ``generate_gate`` / ``edit_gate`` to an ``asyncio.Event`` to hold calls in
    flight until the event is set.
    """

    name = "Fake"

    def __init__(self, images: list[str] | None = None):
        self.images = images or [make_image_b64(c) for c in ("red", "green", "blue", "yellow")]
        self.remix_result = make_image_b64("purple")
        self.expanded_prompt = "A richly detailed expanded instruction"
        self.fail_on_call: int | None = None
        self.expand_error: Exception | None = None
        self.edit_error: Exception | None = None
        self.generate_gate: asyncio.Event | None = None
        self.edit_gate: asyncio.Event | None = None

        self.generate_calls: list[tuple[str, list[ReferenceImage]]] = []
        self.edit_calls: list[tuple[str, str, str]] = []
        self.expand_calls: list[str] = []

    async def generate_image(self, prompt: str, reference_images: Sequence[ReferenceImage]) -> str:
        call_number = len(self.generate_calls)
        self.generate_calls.append((prompt, list(reference_images)))
        if self.generate_gate is not None:
            await self.generate_gate.wait()
        if self.fail_on_call is not None and call_number == self.fail_on_call:
            raise ImageServiceError("Image data not found in response")
        return self.images[call_number % len(self.images)]

    async def edit_image(self, image: str, instruction: str, mime_type: str) -> str:
        self.edit_calls.append((image, instruction, mime_type))
        if self.edit_gate is not None:
            await self.edit_gate.wait()
        if self.edit_error is not None:
            raise self.edit_error
        return self.remix_result

    async def expand_prompt(self, instruction: str) -> str:
        self.expand_calls.append(instruction)
        if self.expand_error is not None:
            raise self.expand_error
        return self.expanded_prompt


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> WallgenConfig:
    """Create a test configuration with a temporary downloads directory."""
    return WallgenConfig(
        _env_file=None,
        gemini_api_key="test-key",
        downloads_dir=temp_dir / "downloads",
    )


@pytest.fixture(autouse=True)
def isolated_downloads(test_config: WallgenConfig) -> Generator[WallgenConfig, None, None]:
    """Point download files written by viewer handlers at a temp directory."""
    with patch("wallgen.ui.handlers.gallery.config", test_config):
        yield test_config


@pytest.fixture
def sample_images() -> list[str]:
    """Four distinct base64 PNG images."""
    return [make_image_b64(c) for c in ("red", "green", "blue", "yellow")]


@pytest.fixture
def fake_service(sample_images: list[str]) -> FakeImageService:
    return FakeImageService(sample_images)


@pytest.fixture
def reference_image() -> ReferenceImage:
    """A JPEG reference image."""
    return ReferenceImage(
        base64=make_image_b64("orange", fmt="JPEG"),
        mime_type="image/jpeg",
        name="sunset.jpg",
    )


@pytest.fixture
def session_state(fake_service: FakeImageService) -> SessionState:
    """Session state wired to the fake image service."""
    return SessionState(image_service=fake_service)


@pytest.fixture
def populated_state(session_state: SessionState, sample_images: list[str]) -> SessionState:
    """Session state with a generated gallery of four images."""
    session_state.generated_images = list(sample_images)
    return session_state


@pytest.fixture
def reference_file(temp_dir: Path) -> Path:
    """A PNG file on disk, as produced by a Gradio upload."""
    path = temp_dir / "mountains.png"
    Image.new("RGB", (16, 16), "navy").save(path, format="PNG")
    return path


@pytest.fixture
def make_image():
    """Factory for base64 test images: ``make_image(color, size=(8, 8), fmt="PNG")``."""
    return make_image_b64
