"""
Shared fixtures for the page manager tests.
Path: tests/conftest.py
"""

import itertools

import pytest
import structlog

from page_manager.config import load_app_config
from page_manager.container import PageManager
from page_manager.plugins.conditions import ConditionPluginBase


class RecordingCondition(ConditionPluginBase):
    """Condition returning its configured result and recording each evaluation"""

    calls = []

    def evaluate(self) -> bool:
        RecordingCondition.calls.append(self.configuration.get("name"))
        return self.configuration.get("result", True)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()


@pytest.fixture
def recorded_calls():
    RecordingCondition.calls = []
    return RecordingCondition.calls


@pytest.fixture
def uuid_sequence():
    counter = itertools.count(1)
    return lambda: f"uuid-{next(counter)}"


@pytest.fixture
def manager(tmp_path, uuid_sequence):
    config = load_app_config()
    config["pages_directory"] = str(tmp_path / "pages")
    page_manager = PageManager(config, uuid_generator=uuid_sequence)
    page_manager.condition_registry.register("recording", RecordingCondition, "Recording")
    return page_manager


def recording(name, result=True, weight=0, **extra):
    """Configuration for a RecordingCondition"""
    return dict(id="recording", name=name, result=result, weight=weight, **extra)
