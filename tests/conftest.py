"""Shared fixtures and fakes for tests."""

import pytest

from roilens.domain.common.result import Result
from roilens.domain.models.display_model import DisplayInfo, matching_display, nearest_display
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.services.i_key_value_storage import IKeyValueStorage
from roilens.domain.services.i_host_window import IHostWindow
from roilens.domain.services.i_display_service import IDisplayService


class RecordingLogger(ILoggerService):
    """Logger that keeps (level, message) pairs instead of printing."""

    def __init__(self):
        self.records = []

    def debug(self, message, **kwargs):
        self.records.append(("debug", message))

    def info(self, message, **kwargs):
        self.records.append(("info", message))

    def warning(self, message, **kwargs):
        self.records.append(("warning", message))

    def error(self, message, **kwargs):
        self.records.append(("error", message))

    def critical(self, message, **kwargs):
        self.records.append(("critical", message))

    def set_level(self, level):
        pass

    def messages(self, level):
        return [m for lvl, m in self.records if lvl == level]


class FakeStorage(IKeyValueStorage):
    """Dict-backed storage that counts calls and can be told to fail."""

    def __init__(self):
        self.items = {}
        self.get_calls = 0
        self.set_calls = 0
        self.fail_reads = False
        self.fail_writes = False
        self.fail_removes = False

    def get_item(self, key):
        self.get_calls += 1
        if self.fail_reads:
            raise RuntimeError("storage offline")
        return self.items.get(key)

    def set_item(self, key, value):
        self.set_calls += 1
        if self.fail_writes:
            raise RuntimeError("storage offline")
        self.items[key] = value
        return Result.ok(True)

    def remove_item(self, key):
        if self.fail_removes:
            raise RuntimeError("storage offline")
        self.items.pop(key, None)
        return Result.ok(True)


class FakeHostWindow(IHostWindow):
    def __init__(self, position=(0, 0)):
        self._position = position
        self.focus_calls = 0

    def position(self):
        return self._position

    def focus(self):
        self.focus_calls += 1


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def host_window():
    return FakeHostWindow()


@pytest.fixture
def primary_display():
    return DisplayInfo(id="D", x=0, y=0, width=1920, height=1080)


@pytest.fixture
def host_window_at():
    """Factory for host windows at a given position."""
    return lambda x, y: FakeHostWindow(position=(x, y))


class FakeDisplayService(IDisplayService):
    def __init__(self, displays):
        self.displays = displays

    def get_displays(self):
        return list(self.displays)

    def get_display_nearest_point(self, x, y):
        return nearest_display(self.displays, x, y)

    def get_display_matching(self, region):
        return matching_display(self.displays, region)


@pytest.fixture
def display_service_for():
    """Factory for display services over a fixed list of displays."""
    return FakeDisplayService
