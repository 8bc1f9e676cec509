"""Shared fixtures: a controllable clock and a ready file system."""

from datetime import date, timedelta

import pytest

from memfs.api.filesystem import MemoryFileSystem
from memfs.config import FSConfig
from memfs.storage.memory import PathKeyedStore


class FakeClock:
    """Callable clock returning a fixed day until advanced."""

    def __init__(self, start: date = date(2024, 1, 15)):
        self.today = start

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int = 1) -> None:
        self.today += timedelta(days=days)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config(tmp_path) -> FSConfig:
    return FSConfig(
        batch_workers=4,
        lock_timeout=2.0,
        default_dump_file=str(tmp_path / "default.dump"),
    )


@pytest.fixture
def store(clock) -> PathKeyedStore:
    return PathKeyedStore(clock)


@pytest.fixture
def fs(config, clock):
    with MemoryFileSystem(config=config, today=clock) as filesystem:
        yield filesystem
