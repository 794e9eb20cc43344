"""
Unit Tests for the Preferences Repository.
"""

import pytest

from scribe.backend.core.exceptions import ValidationError
from scribe.editor.repositories import PreferencesRepository


class TestPreferencesRepository:
    """Tests for reading and updating preferences."""

    def test_update_emits_event(self, store, notifier, recorded_events):
        repo = PreferencesRepository(store, notifier)

        repo.update(dark_mode=True)

        assert recorded_events[-1] == (
            "preferences_changed",
            {"dark_mode": True, "sidebar_width": 288, "authenticated": False},
        )

    def test_out_of_range_width_rejected(self, store, notifier):
        repo = PreferencesRepository(store, notifier)

        with pytest.raises(ValidationError):
            repo.update(sidebar_width=50)

        assert repo.get().sidebar_width == 288

    def test_invalid_stored_value_uses_defaults(self, store, notifier):
        store.save("preferences", {"sidebar_width": "wide"})

        assert PreferencesRepository(store, notifier).get().sidebar_width == 288
