"""Unit tests for gallery and image viewer handlers."""

import base64
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image

from wallgen.ui.handlers.gallery import (
    close_image_viewer,
    render_viewer,
    select_generated_image,
    show_next_image,
    show_previous_image,
)
from wallgen.ui.models import SessionState


def select_event(index: int) -> MagicMock:
    evt = MagicMock()
    evt.index = index
    return evt


# ============================================================================
# render_viewer Tests
# ============================================================================


class TestRenderViewer:
    """Tests for render_viewer."""

    def test_closed_viewer(self, populated_state):
        visibility, image, position, download, remix = render_viewer(populated_state)

        assert visibility["visible"] is False
        assert image is None
        assert position == ""
        assert download is None
        assert remix == ""

    def test_open_viewer(self, populated_state, sample_images, isolated_downloads):
        populated_state.selected_index = 1
        populated_state.remix_prompt = "add fog"

        visibility, image, position, download, remix = render_viewer(populated_state)

        assert visibility["visible"] is True
        assert isinstance(image, Image.Image)
        assert position == "**Image 2 of 4**"
        assert remix == "add fog"

        path = Path(download)
        assert path.name == "wallpaper.png"
        assert path.is_relative_to(isolated_downloads.downloads_dir)
        assert path.read_bytes() == base64.b64decode(sample_images[1])


# ============================================================================
# select_generated_image Tests
# ============================================================================


class TestSelectGeneratedImage:
    """Tests for select_generated_image handler."""

    def test_select_opens_viewer(self, populated_state):
        visibility, image, position, _, _, state = select_generated_image(
            select_event(2), populated_state
        )

        assert state.selected_index == 2
        assert visibility["visible"] is True
        assert image.convert("RGB").getpixel((0, 0)) == (0, 0, 255)
        assert position == "**Image 3 of 4**"

    def test_select_out_of_range_keeps_viewer_closed(self, populated_state):
        visibility, image, _, _, _, state = select_generated_image(
            select_event(9), populated_state
        )

        assert state.selected_index is None
        assert visibility["visible"] is False
        assert image is None

    def test_select_on_empty_gallery(self, session_state):
        visibility, _, _, _, _, state = select_generated_image(select_event(0), session_state)

        assert state.selected_index is None
        assert visibility["visible"] is False


# ============================================================================
# Navigation Tests
# ============================================================================


class TestNavigation:
    """Tests for next/previous/close handlers."""

    @pytest.mark.parametrize("start", [0, 1, 2, 3])
    def test_next_is_modular(self, populated_state, start):
        populated_state.selected_index = start

        *_, state = show_next_image(populated_state)

        assert state.selected_index == (start + 1) % 4

    @pytest.mark.parametrize("start", [0, 1, 2, 3])
    def test_previous_is_modular(self, populated_state, start):
        populated_state.selected_index = start

        *_, state = show_previous_image(populated_state)

        assert state.selected_index == (start - 1 + 4) % 4

    def test_next_updates_position(self, populated_state):
        populated_state.selected_index = 3

        _, _, position, _, _, _ = show_next_image(populated_state)

        assert position == "**Image 1 of 4**"

    def test_navigation_with_closed_viewer(self, populated_state):
        visibility, _, _, _, _, state = show_next_image(populated_state)

        assert state.selected_index is None
        assert visibility["visible"] is False

    def test_close_clears_selection_and_remix_prompt(self, populated_state):
        populated_state.selected_index = 1
        populated_state.remix_prompt = "add fog"

        visibility, image, _, download, remix, state = close_image_viewer(populated_state)

        assert state.selected_index is None
        assert state.remix_prompt == ""
        assert visibility["visible"] is False
        assert image is None
        assert download is None
        assert remix == ""

    def test_download_follows_navigation(self, populated_state):
        populated_state.selected_index = 0

        _, _, _, first, _, state = show_next_image(populated_state)
        _, _, _, second, _, _ = show_next_image(state)

        assert first != second
        assert not Path(first).exists()
        assert Path(second).exists()


# ============================================================================
# Download file lifecycle
# ============================================================================


class TestDownloadFiles:
    """Each session keeps at most one download file on disk."""

    def test_close_removes_download_file(self, populated_state):
        *_, state = select_generated_image(select_event(0), populated_state)
        path = state.download_file
        assert path.exists()

        close_image_viewer(state)

        assert not path.exists()
        assert state.download_file is None

    def test_one_file_per_session(self, populated_state, isolated_downloads):
        state = populated_state
        state.selected_index = 0
        for _ in range(6):
            *_, state = show_next_image(state)

        session_dir = isolated_downloads.downloads_dir / state.session_id
        assert [p.name for p in session_dir.rglob("*") if p.is_file()] == ["wallpaper.png"]

    def test_sessions_use_separate_folders(self, fake_service, sample_images):
        first = SessionState(image_service=fake_service, generated_images=list(sample_images))
        second = SessionState(image_service=fake_service, generated_images=list(sample_images))

        *_, first = select_generated_image(select_event(0), first)
        *_, second = select_generated_image(select_event(0), second)
        close_image_viewer(first)

        assert first.session_id != second.session_id
        assert second.download_file.exists()
