"""Preferences Store — cosmetic display settings (theme, distance unit).

Independent of every other store; never requires a session.
"""

import logging
from dataclasses import replace

from worknearby.core.domain_types import DistanceUnit, Theme
from worknearby.core.errors import ValidationError
from worknearby.core.models import Preferences

logger = logging.getLogger(__name__)


class PreferencesStore:

    def __init__(self, initial: Preferences | None = None) -> None:
        self._prefs = initial or Preferences()

    def get(self) -> Preferences:
        return self._prefs

    def update(
        self,
        theme: str | Theme | None = None,
        distance_unit: str | DistanceUnit | None = None,
    ) -> Preferences:
        changes = {}
        if theme is not None:
            changes["theme"] = _parse(Theme, theme, "theme")
        if distance_unit is not None:
            changes["distance_unit"] = _parse(DistanceUnit, distance_unit, "distance_unit")
        self._prefs = replace(self._prefs, **changes)
        logger.debug(f"Preferences updated: {sorted(changes)}")
        return self._prefs

    def toggle_theme(self) -> Preferences:
        """Flip between light and dark; system resolves to dark."""
        target = Theme.LIGHT if self._prefs.theme == Theme.DARK else Theme.DARK
        return self.update(theme=target)


def _parse(enum_cls, value, field: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(
            f"Unknown {field} '{value}' (expected one of: {allowed})", field=field,
        ) from None
