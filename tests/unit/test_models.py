"""Unit tests for UI data models."""

from wallgen.ui.models import MAX_REFERENCE_IMAGES, SessionState


class TestSessionState:
    """Tests for SessionState dataclass."""

    def test_defaults(self):
        state = SessionState()

        assert state.prompt == ""
        assert state.reference_images == [None, None, None]
        assert state.generated_images == []
        assert state.is_loading is False
        assert state.error is None
        assert state.selected_index is None
        assert state.remix_prompt == ""
        assert state.is_remixing is False
        assert state.use_thinking_mode is False
        assert state.session_id is None
        assert state.download_file is None
        assert state.image_service is None

    def test_reference_slot_count(self):
        assert len(SessionState().reference_images) == MAX_REFERENCE_IMAGES == 3

    def test_instances_do_not_share_lists(self):
        first = SessionState()
        second = SessionState()

        first.generated_images.append("abc")
        first.reference_images[0] = "x"

        assert second.generated_images == []
        assert second.reference_images == [None, None, None]

    def test_is_initialized(self, fake_service):
        assert SessionState().is_initialized() is False
        assert SessionState(image_service=fake_service).is_initialized() is True

    def test_filled_reference_images_keeps_slot_order(self, reference_image):
        state = SessionState()
        state.reference_images = [None, reference_image, None]

        assert state.filled_reference_images() == [reference_image]
        assert state.has_reference_images() is True

    def test_no_reference_images(self):
        state = SessionState()
        assert state.filled_reference_images() == []
        assert state.has_reference_images() is False


class TestViewerProperties:
    """Tests for viewer-related helpers."""

    def test_viewer_closed_without_selection(self, populated_state):
        assert populated_state.is_viewer_open() is False
        assert populated_state.selected_image is None

    def test_selected_image(self, populated_state, sample_images):
        populated_state.selected_index = 2

        assert populated_state.is_viewer_open() is True
        assert populated_state.selected_image == sample_images[2]

    def test_stale_index_is_not_open(self, populated_state):
        populated_state.selected_index = 7
        assert populated_state.is_viewer_open() is False

    def test_repr(self, populated_state):
        text = repr(populated_state)
        assert "images=4" in text
        assert "initialized=True" in text
        assert "error=None" in text
