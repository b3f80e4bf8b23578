from .aggregate import aggregate_jobs
from .conditions import (
    LocalStateProvider,
    StateProvider,
    check_artifact,
    check_condition,
    check_file,
    check_job,
    check_provider,
)
from .errors import APIError, ConfigError
from .matcher import MatchPattern, compile_pattern, match_jobs, match_names
from .model import Artifact, CheckResult, ConditionConfig, ConditionType, JobRecord, OutcomeStatus, PollOutcome
from .poller import Poller, validate_config, wait_for_condition

__all__ = [
    "aggregate_jobs",
    "LocalStateProvider",
    "StateProvider",
    "check_artifact",
    "check_condition",
    "check_file",
    "check_job",
    "check_provider",
    "APIError",
    "ConfigError",
    "MatchPattern",
    "compile_pattern",
    "match_jobs",
    "match_names",
    "Artifact",
    "CheckResult",
    "ConditionConfig",
    "ConditionType",
    "JobRecord",
    "OutcomeStatus",
    "PollOutcome",
    "Poller",
    "validate_config",
    "wait_for_condition",
]
