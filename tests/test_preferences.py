#!/usr/bin/env python3
"""
Tests for the format preference adapter.

Run with: python -m pytest tests/test_preferences.py -v
"""

import logging
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from geocoords.config import CoordinateConfig, FormatOptions
from geocoords.models import FormatKind
from geocoords.preferences import FORMAT_CHANGED_EVENT, SETTINGS_KEY, FormatPreference


class FakeSettings:
    """In-memory settings store."""

    def __init__(self, values=None):
        self.values = dict(values or {})

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value):
        self.values[key] = value


class BrokenSettings:
    """Settings store whose backing storage is unavailable."""

    def get(self, key):
        raise OSError("settings file locked")

    def set(self, key, value):
        raise OSError("settings file locked")


class RecordingPublisher:
    """Publisher that records every event."""

    def __init__(self):
        self.events = []

    def publish(self, event_name, payload):
        self.events.append((event_name, payload))


@pytest.fixture
def settings() -> FakeSettings:
    return FakeSettings()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


class TestLoad:
    """Tests for FormatPreference.load."""

    def test_nothing_saved_uses_default(self, settings: FakeSettings) -> None:
        assert FormatPreference(settings).load() == FormatOptions(kind=FormatKind.DD, precision=4)

    def test_nothing_saved_uses_configured_default(self, settings: FakeSettings) -> None:
        config = CoordinateConfig(default_format=FormatKind.UTM)
        assert FormatPreference(settings, config=config).load().kind is FormatKind.UTM

    def test_saved_value(self) -> None:
        settings = FakeSettings({SETTINGS_KEY: 'mgrs'})
        options = FormatPreference(settings).load()

        assert options.kind is FormatKind.MGRS
        assert options.precision == 5

    def test_saved_value_uses_configured_precision(self) -> None:
        settings = FakeSettings({SETTINGS_KEY: 'dd'})
        config = CoordinateConfig(compact=True, precision={FormatKind.DD: 6})

        assert FormatPreference(settings, config=config).load() == FormatOptions(
            kind=FormatKind.DD, compact=True, precision=6
        )

    def test_unknown_saved_value_falls_back(self, caplog) -> None:
        settings = FakeSettings({SETTINGS_KEY: 'geohash'})

        with caplog.at_level(logging.WARNING, logger="geocoords.preferences"):
            options = FormatPreference(settings).load()

        assert options.kind is FormatKind.DD
        assert "geohash" in caplog.text

    def test_store_failure_falls_back(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="geocoords.preferences"):
            options = FormatPreference(BrokenSettings()).load()

        assert options.kind is FormatKind.DD
        assert "settings file locked" in caplog.text


class TestChange:
    """Tests for FormatPreference.change."""

    def test_change_persists_and_publishes(
        self, settings: FakeSettings, publisher: RecordingPublisher
    ) -> None:
        preference = FormatPreference(settings, publisher)
        options = preference.change(FormatKind.DMS)

        assert settings.values[SETTINGS_KEY] == 'dms'
        assert publisher.events == [(FORMAT_CHANGED_EVENT, {'format': 'dms'})]
        assert options == FormatOptions(kind=FormatKind.DMS, precision=1)

    def test_event_name(self) -> None:
        assert FORMAT_CHANGED_EVENT == 'coords:formatChanged'
        assert SETTINGS_KEY == 'coordinateFormat'

    def test_change_accepts_string(self, settings: FakeSettings) -> None:
        FormatPreference(settings).change('UTM')
        assert settings.values[SETTINGS_KEY] == 'utm'

    def test_change_without_publisher(self, settings: FakeSettings) -> None:
        options = FormatPreference(settings).change(FormatKind.DDM)
        assert options.kind is FormatKind.DDM

    def test_change_then_load(self, settings: FakeSettings) -> None:
        FormatPreference(settings).change(FormatKind.MGRS)
        assert FormatPreference(settings).load().kind is FormatKind.MGRS

    def test_invalid_change_leaves_store_untouched(
        self, settings: FakeSettings, publisher: RecordingPublisher
    ) -> None:
        preference = FormatPreference(settings, publisher)

        with pytest.raises(ValueError):
            preference.change('geohash')

        assert SETTINGS_KEY not in settings.values
        assert publisher.events == []

    def test_store_failure_on_change_propagates(self, publisher: RecordingPublisher) -> None:
        preference = FormatPreference(BrokenSettings(), publisher)

        with pytest.raises(OSError):
            preference.change(FormatKind.DD)
        assert publisher.events == []
