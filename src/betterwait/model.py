# model.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ConditionType(str, Enum):
    FILE = "file"
    ARTIFACT = "artifact"
    JOB = "job"


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass(frozen=True)
class ConditionConfig:
    """
    Everything one wait run needs to know.

    Only the field matching `condition_type` is required:
      file     -> file_path
      artifact -> artifact_name
      job      -> job_name (raw pattern, parsed on every tick)

    `repository` ("owner/repo") and `run_id` identify the workflow run
    for artifact/job conditions.
    """
    condition_type: str
    file_path: str = ""
    artifact_name: str = ""
    job_name: str = ""
    timeout_seconds: int = 300
    poll_interval_seconds: int = 10

    repository: str = ""
    run_id: str = ""


@dataclass(frozen=True)
class JobRecord:
    """One job of a workflow run, as seen on a single tick."""
    name: str
    status: str
    conclusion: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.status == "completed"

    @property
    def succeeded(self) -> bool:
        return self.conclusion == "success"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> JobRecord:
        """Create JobRecord from a GitHub API job object."""
        return cls(
            name=data["name"],
            status=data["status"],
            conclusion=data.get("conclusion"),
        )


@dataclass(frozen=True)
class Artifact:
    """An uploaded artifact of a workflow run."""
    name: str
    id: Optional[int] = None
    expired: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Artifact:
        """Create Artifact from a GitHub API artifact object."""
        return cls(
            name=data["name"],
            id=data.get("id"),
            expired=bool(data.get("expired", False)),
        )


@dataclass(frozen=True)
class CheckResult:
    """
    Result of evaluating a condition once.

    `met` says whether the wait is over. `all_succeeded` is only False when
    every awaited job finished but at least one did not conclude with
    success: the wait is satisfied, the awaited work is not.
    """
    met: bool
    message: str
    all_succeeded: bool = True


@dataclass(frozen=True)
class PollOutcome:
    """Terminal result of a whole wait run (exactly one per run)."""
    status: OutcomeStatus
    message: str
    jobs_failed: bool = False
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS and not self.jobs_failed

    @property
    def logical_failure(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS and self.jobs_failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.status.value,
            "message": self.message,
            "jobs_failed": self.jobs_failed,
            "attempts": self.attempts,
        }
