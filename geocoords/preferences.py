"""
Host-side persistence of the user's preferred coordinate format.

The conversion core never reads or writes settings; it takes the format as an
argument. This adapter sits in the host application: it loads and stores the
preference through a caller-supplied settings store, notifies other UI
components through a caller-supplied publisher, and hands out immutable
FormatOptions values instead of holding a mutable "current format" that every
caller shares.
"""

import logging
from typing import Any, Optional, Protocol

from geocoords.config import CoordinateConfig, FormatOptions, parse_format_kind
from geocoords.models import FormatKind

logger = logging.getLogger(__name__)

SETTINGS_KEY = 'coordinateFormat'
FORMAT_CHANGED_EVENT = 'coords:formatChanged'


class SettingsStore(Protocol):
    """Key-value settings collaborator owned by the host."""

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class EventPublisher(Protocol):
    """Notification collaborator owned by the host."""

    def publish(self, event_name: str, payload: Any) -> None:
        ...


class FormatPreference:
    """
    Load, store and announce the preferred coordinate format.

    Usage:
        >>> preference = FormatPreference(settings, publisher)
        >>> options = preference.load()
        >>> formatter.format_with(point, options)
        >>> options = preference.change(FormatKind.MGRS)
    """

    def __init__(
        self,
        settings: SettingsStore,
        publisher: Optional[EventPublisher] = None,
        config: Optional[CoordinateConfig] = None,
    ):
        self.settings = settings
        self.publisher = publisher
        self.config = config or CoordinateConfig()

    def load(self) -> FormatOptions:
        """
        Read the saved format, falling back to the configured default.

        Unknown stored values and store failures keep the default; the
        preference is cosmetic and must not prevent start-up.
        """
        try:
            saved = self.settings.get(SETTINGS_KEY)
        except Exception as e:
            logger.warning("Could not load coordinate format preference: %s", e)
            return self.config.options()

        if saved is None:
            return self.config.options()

        try:
            kind = parse_format_kind(saved)
        except ValueError:
            logger.warning("Ignoring unknown stored coordinate format %r", saved)
            return self.config.options()

        logger.debug("Loaded coordinate format preference: %s", kind.value)
        return self.config.options(kind)

    def change(self, kind: FormatKind) -> FormatOptions:
        """
        Store a new preferred format and publish the change.

        Raises:
            ValueError: If kind is not a known format
        """
        kind = parse_format_kind(kind)
        self.settings.set(SETTINGS_KEY, kind.value)
        logger.debug("Coordinate format preference changed to %s", kind.value)
        if self.publisher is not None:
            self.publisher.publish(FORMAT_CHANGED_EVENT, {'format': kind.value})
        return self.config.options(kind)
