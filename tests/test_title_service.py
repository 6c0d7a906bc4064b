"""
Unit tests for the TitleService.
"""

import pytest

from errors import NotFoundError, ValidationError
from schemas import ActionType


class TestUpdateTitle:
    """Tests for TitleService.update."""

    def test_update_records_previous_title(self, title_service, store):
        title_service.update("vid1", "Old")
        result = title_service.update("vid1", "New")

        assert result.current_title == "New"
        last = result.action_history[-1]
        assert last.type == ActionType.TITLE_CHANGE
        assert last.data == {"previousTitle": "Old", "newTitle": "New"}

        record = store.find("vid1")
        assert record.current_title == "New"

    def test_first_update_uses_fetched_title_as_previous(self, title_service):
        result = title_service.update("vid1", "Renamed")

        assert len(result.action_history) == 1
        assert result.action_history[0].data == {
            "previousTitle": "Mihir ki masti #play",
            "newTitle": "Renamed",
        }

    def test_original_title_is_never_changed(self, title_service, store):
        title_service.update("vid1", "One")
        title_service.update("vid1", "Two")

        record = store.find("vid1")
        assert record.original_title == "Mihir ki masti #play"
        assert record.current_title == "Two"
        assert len(record.action_history) == 2

    def test_lazy_create_fetches_once(self, title_service, metadata_provider):
        title_service.update("vid2", "One")
        title_service.update("vid2", "Two")
        assert metadata_provider.video_calls == ["vid2"]

    @pytest.mark.parametrize("new_title", [None, "", "  "])
    def test_missing_title_raises_validation_error(self, title_service, store, new_title):
        title_service.update("vid1", "Kept")

        with pytest.raises(ValidationError):
            title_service.update("vid1", new_title)

        record = store.find("vid1")
        assert record.current_title == "Kept"
        assert len(record.action_history) == 1

    def test_missing_video_id_raises_validation_error(self, title_service, metadata_provider):
        with pytest.raises(ValidationError):
            title_service.update("", "New")
        assert metadata_provider.video_calls == []

    def test_unknown_video_raises_not_found(self, title_service, store):
        with pytest.raises(NotFoundError):
            title_service.update("missing", "New")
        assert store.find("missing") is None

    def test_history_is_attributed_to_default_user(self, title_service):
        result = title_service.update("vid1", "New")
        assert result.action_history[0].user == "Anonymous"
