# conditions.py
from __future__ import annotations

import os
from typing import List, Protocol

from .aggregate import aggregate_jobs
from .errors import ConfigError
from .matcher import match_jobs
from .model import Artifact, CheckResult, ConditionConfig, ConditionType, JobRecord


class StateProvider(Protocol):
    """
    Source of fresh external state, queried once per tick.

    The run context (repository, run id, credentials) is bound when the
    provider is built; evaluators never construct clients themselves.
    """

    def file_exists(self, path: str) -> bool: ...

    def list_artifacts(self) -> List[Artifact]: ...

    def list_jobs(self) -> List[JobRecord]: ...


class LocalStateProvider:
    """Filesystem-only provider. Enough for `file` conditions."""

    def file_exists(self, path: str) -> bool:
        return os.path.exists(path)


# provider method each condition type reads on every tick
REQUIRED_CAPABILITY = {
    ConditionType.FILE.value: "file_exists",
    ConditionType.ARTIFACT.value: "list_artifacts",
    ConditionType.JOB.value: "list_jobs",
}


def check_provider(config: ConditionConfig, provider: object) -> None:
    """
    Raises:
        ConfigError: the provider cannot serve this condition type
    """
    capability = REQUIRED_CAPABILITY.get(config.condition_type)
    if capability is None:
        raise ConfigError(f"Unsupported condition type: {config.condition_type}")
    if not callable(getattr(provider, capability, None)):
        raise ConfigError(
            f"{type(provider).__name__} cannot check {config.condition_type} conditions "
            f"(no {capability}); use a workflow run provider"
        )


def _describe(exc: Exception) -> str:
    return str(exc) or "Unknown error"


def check_file(file_path: str, provider: StateProvider) -> CheckResult:
    """Met as soon as the path exists. Size and content are not inspected."""
    absolute_path = os.path.abspath(file_path)
    exists = provider.file_exists(absolute_path)
    return CheckResult(
        met=exists,
        message=f"File exists: {absolute_path}" if exists else f"File does not exist: {absolute_path}",
    )


def check_artifact(artifact_name: str, provider: StateProvider) -> CheckResult:
    """Met when an artifact with exactly this (case-sensitive) name exists."""
    try:
        artifacts = provider.list_artifacts()
        found = any(a.name == artifact_name for a in artifacts)
    except Exception as e:
        return CheckResult(met=False, message=f"Error checking artifact: {_describe(e)}")

    return CheckResult(
        met=found,
        message=f"Artifact found: {artifact_name}" if found else f"Artifact not found: {artifact_name}",
    )


def check_job(job_name: str, provider: StateProvider) -> CheckResult:
    """
    Fetch the run's jobs, match them against `job_name` and aggregate.

    Fetch errors and malformed regex patterns are reported as "not met"
    so they are retried until the timeout.
    """
    try:
        jobs = provider.list_jobs()
        matched = match_jobs(job_name, jobs)
        return aggregate_jobs(matched, job_name, [j.name for j in jobs])
    except Exception as e:
        return CheckResult(met=False, message=f"Error checking job: {_describe(e)}")


def check_condition(config: ConditionConfig, provider: StateProvider) -> CheckResult:
    """Evaluate the configured condition once."""
    condition_type = config.condition_type
    if condition_type == ConditionType.FILE.value:
        return check_file(config.file_path, provider)
    if condition_type == ConditionType.ARTIFACT.value:
        return check_artifact(config.artifact_name, provider)
    if condition_type == ConditionType.JOB.value:
        return check_job(config.job_name, provider)
    raise ConfigError(f"Unsupported condition type: {condition_type}")
