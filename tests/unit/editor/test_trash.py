"""
Unit Tests for the Trash Lifecycle Manager.

Tests soft delete, restore, permanent delete and retention purges.
"""

from datetime import date, timedelta

import pytest

from scribe.backend.core.exceptions import NotFoundError
from scribe.editor.schemas.article import Article


def _article(article_id: str, title: str = "Post") -> Article:
    return Article(id=article_id, title=title, date=date(2024, 3, 1), content="<p>body</p>")


class TestMoveToTrash:
    """Tests for moving articles into the trash."""

    def test_stamps_deletion_time(self, trash_manager, clock):
        item = trash_manager.move_to_trash(_article("a"))

        assert item.deleted_at == clock.now
        assert item.content == "<p>body</p>"

    def test_most_recent_first(self, trash_manager):
        trash_manager.move_to_trash(_article("a"))
        trash_manager.move_to_trash(_article("b"))

        assert [item.id for item in trash_manager.items()] == ["b", "a"]


class TestRestore:
    """Tests for restoring articles."""

    def test_restore_returns_plain_article(self, trash_manager):
        """The restored article should equal the original, without a deletion time."""
        original = _article("a", title="Keep me")
        trash_manager.move_to_trash(original)

        restored = trash_manager.restore("a")

        assert restored == original
        assert not hasattr(restored, "deleted_at")
        assert trash_manager.items() == []

    def test_restore_unknown_raises(self, trash_manager):
        with pytest.raises(NotFoundError):
            trash_manager.restore("missing")


class TestPermanentDelete:
    """Tests for permanent deletion."""

    def test_removes_item(self, trash_manager):
        trash_manager.move_to_trash(_article("a"))

        assert trash_manager.permanently_delete("a") is True
        assert trash_manager.items() == []

    def test_is_idempotent(self, trash_manager):
        """Deleting twice should not raise."""
        trash_manager.move_to_trash(_article("a"))
        trash_manager.permanently_delete("a")

        assert trash_manager.permanently_delete("a") is False


class TestPurgeExpired:
    """Tests for the retention purge."""

    def test_purges_items_past_retention(self, trash_manager, clock):
        """An item deleted 3 days and 1 second ago is purged; one from 2 days ago is kept."""
        now = clock.now
        trash_manager.move_to_trash(_article("old"), now=now - timedelta(days=3, seconds=1))
        trash_manager.move_to_trash(_article("recent"), now=now - timedelta(days=2))

        purged = trash_manager.purge_expired(now=now)

        assert [item.id for item in purged] == ["old"]
        assert [item.id for item in trash_manager.items()] == ["recent"]

    def test_keeps_item_exactly_at_boundary(self, trash_manager, clock):
        trash_manager.move_to_trash(_article("edge"), now=clock.now - timedelta(days=3))

        assert trash_manager.purge_expired(now=clock.now) == []

    def test_purge_is_idempotent(self, trash_manager, clock):
        """A second purge at the same time should remove nothing."""
        trash_manager.move_to_trash(_article("old"), now=clock.now - timedelta(days=4))
        trash_manager.move_to_trash(_article("new"), now=clock.now)

        trash_manager.purge_expired(now=clock.now)
        after_first = trash_manager.items()

        assert trash_manager.purge_expired(now=clock.now) == []
        assert trash_manager.items() == after_first

    def test_retention_invariant_holds(self, trash_manager, clock):
        """After a purge every remaining item is within the retention window."""
        for days in (0, 1, 2, 3, 4, 10):
            trash_manager.move_to_trash(_article(f"d{days}"), now=clock.now - timedelta(days=days))

        trash_manager.purge_expired(now=clock.now)

        assert all(
            clock.now - item.deleted_at <= trash_manager.retention
            for item in trash_manager.items()
        )

    def test_uses_clock_by_default(self, trash_manager, clock):
        trash_manager.move_to_trash(_article("a"))
        clock.advance(timedelta(days=3, seconds=1))

        assert [item.id for item in trash_manager.purge_expired()] == ["a"]


class TestDaysRemaining:
    """Tests for the days-left helper used by the trash view."""

    def test_partial_days_round_up(self, trash_manager, clock):
        item = trash_manager.move_to_trash(_article("a"))
        clock.advance(timedelta(hours=30))

        assert trash_manager.days_remaining(item) == 2

    def test_just_trashed_shows_full_window(self, trash_manager, clock):
        """An item trashed a minute ago still has three days left."""
        item = trash_manager.move_to_trash(_article("a"))
        clock.advance(timedelta(minutes=1))

        assert trash_manager.days_remaining(item) == 3

    def test_last_second_counts_as_a_day(self, trash_manager, clock):
        item = trash_manager.move_to_trash(_article("a"))
        clock.advance(timedelta(days=3) - timedelta(seconds=1))

        assert trash_manager.days_remaining(item) == 1

    def test_never_negative(self, trash_manager, clock):
        item = trash_manager.move_to_trash(_article("a"))
        clock.advance(timedelta(days=5))

        assert trash_manager.days_remaining(item) == 0
