from __future__ import annotations

from typing import Iterable, List

import pytest

from betterwait.model import Artifact, JobRecord
from betterwait.ui.console import Console, set_console


class FakeClock:
    """Monotonic clock that only moves when the poller sleeps."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeProvider:
    """
    Serves one scripted snapshot per call. The last snapshot repeats once
    the script runs out. An Exception instance in the script is raised.
    """

    def __init__(self, jobs: Iterable = (), artifacts: Iterable = (), files: Iterable[str] = ()):
        self.job_snapshots = list(jobs)
        self.artifact_snapshots = list(artifacts)
        self.files = set(files)
        self.calls = 0

    @staticmethod
    def _next(snapshots: list, index: int):
        item = snapshots[min(index, len(snapshots) - 1)]
        if isinstance(item, Exception):
            raise item
        return item

    def file_exists(self, path: str) -> bool:
        self.calls += 1
        return path in self.files

    def list_artifacts(self) -> List[Artifact]:
        self.calls += 1
        return self._next(self.artifact_snapshots, self.calls - 1)

    def list_jobs(self) -> List[JobRecord]:
        self.calls += 1
        return self._next(self.job_snapshots, self.calls - 1)


def job(name: str, status: str = "completed", conclusion: str | None = "success") -> JobRecord:
    if status != "completed":
        conclusion = None
    return JobRecord(name=name, status=status, conclusion=conclusion)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def quiet_console():
    set_console(Console())
    yield
    set_console(Console())
