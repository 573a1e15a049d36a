"""
Pytest configuration and fixtures for cidlog tests
"""

import os

import pytest

from cidlog.core.config.settings import Settings
from cidlog.routing.controller import DestinationController, get_controller
from cidlog.sinks.builtin import BufferSink

TEST_PID = 1234


class CountingBufferSink(BufferSink):
    """BufferSink that records how many times it was released"""

    def __init__(self):
        super().__init__()
        self.release_count = 0

    def close(self):
        self.release_count += 1
        super().close()


class WriteOnlySink:
    """Sink without a release capability"""

    def __init__(self):
        self.chunks = []

    def write(self, data):
        self.chunks.append(data)

    def text(self):
        return b"".join(self.chunks).decode("utf-8")


@pytest.fixture
def pid(monkeypatch) -> int:
    """Pin os.getpid() so tags are predictable"""
    monkeypatch.setattr(os, "getpid", lambda: TEST_PID)
    return TEST_PID


@pytest.fixture
def test_settings() -> Settings:
    return Settings(COLOR=True, DEBUG=False, DIAGNOSTICS_LEVEL="WARNING")


@pytest.fixture
def controller(test_settings) -> DestinationController:
    """Fresh controller on the default console"""
    return DestinationController(config=test_settings)


@pytest.fixture
def buffer_sink() -> CountingBufferSink:
    return CountingBufferSink()


@pytest.fixture
def buffer_sink_factory():
    return lambda: CountingBufferSink()


@pytest.fixture
def write_only_sink() -> WriteOnlySink:
    return WriteOnlySink()


@pytest.fixture(autouse=True)
def reset_process_logger():
    """Put the process-wide controller back on its defaults after each test"""
    yield
    get_controller().close()
    get_controller().init()
