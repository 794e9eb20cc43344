"""
Preferences Repository.

UI preferences stored under their own key, independent of article data.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from scribe.backend.core.exceptions import PersistenceUnavailable, ValidationError
from scribe.backend.core.logging import get_logger
from scribe.editor.events import ChangeNotifier
from scribe.editor.schemas.article import SIDEBAR_MAX_WIDTH, SIDEBAR_MIN_WIDTH, Preferences
from scribe.editor.store import PersistentStore

logger = get_logger(__name__)


class PreferencesRepository:
    key = "preferences"

    def __init__(self, store: PersistentStore, notifier: ChangeNotifier) -> None:
        self.store = store
        self.notifier = notifier
        self._preferences = self._load()

    def _load(self) -> Preferences:
        raw = self.store.load(self.key, Preferences().model_dump())
        try:
            return Preferences.model_validate(raw)
        except PydanticValidationError:
            logger.warning("Stored preferences are invalid, using defaults")
            return Preferences()

    def get(self) -> Preferences:
        return self._preferences.model_copy()

    def update(self, **changes: Any) -> Preferences:
        """
        Change one or more preferences.

        Raises:
            ValidationError: If a value is out of range or of the wrong type
        """
        try:
            updated = Preferences.model_validate({**self._preferences.model_dump(), **changes})
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid preference value",
                details={"errors": e.errors(include_url=False)},
            ) from e

        self._preferences = updated
        try:
            self.store.save(self.key, updated.model_dump())
        except PersistenceUnavailable as e:
            self.notifier.emit("persistence_warning", key=self.key, message=e.message)
        self.notifier.emit("preferences_changed", **updated.model_dump())
        return updated.model_copy()

    def toggle_dark_mode(self) -> Preferences:
        return self.update(dark_mode=not self._preferences.dark_mode)

    def set_sidebar_width(self, width: int) -> Preferences:
        """Set the sidebar width, clamped to the allowed range."""
        clamped = max(SIDEBAR_MIN_WIDTH, min(SIDEBAR_MAX_WIDTH, int(width)))
        return self.update(sidebar_width=clamped)
