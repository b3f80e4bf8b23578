# settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigError
from .model import ConditionConfig

GITHUB_API_URL = os.environ.get("GITHUB_API_URL", "https://api.github.com")

DEFAULT_TIMEOUT_SECONDS = 300
DEFAULT_POLL_INTERVAL_SECONDS = 10


def get_input(name: str, env: Optional[Mapping[str, str]] = None, required: bool = False) -> str:
    """
    Read an action input the way the Actions runner exposes it:
    INPUT_<NAME> with spaces turned into underscores and the name upper-cased
    (hyphens are kept).
    """
    env = os.environ if env is None else env
    value = env.get(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()
    if required and not value:
        raise ConfigError(f"Input required and not supplied: {name}")
    return value


def _int_input(name: str, default: int, env: Mapping[str, str]) -> int:
    raw = get_input(name, env)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got: {raw!r}")


@dataclass(frozen=True)
class ActionInputs:
    """Inputs of the GitHub Action, already defaulted."""
    config: ConditionConfig
    github_token: str
    api_url: str
    detached: bool


def load_action_inputs(env: Optional[Mapping[str, str]] = None) -> ActionInputs:
    env = os.environ if env is None else env

    config = ConditionConfig(
        condition_type=get_input("condition-type", env, required=True),
        file_path=get_input("file-path", env),
        artifact_name=get_input("artifact-name", env),
        job_name=get_input("job-name", env),
        timeout_seconds=_int_input("timeout-seconds", DEFAULT_TIMEOUT_SECONDS, env),
        poll_interval_seconds=_int_input("poll-interval-seconds", DEFAULT_POLL_INTERVAL_SECONDS, env),
        repository=get_input("repository", env) or env.get("GITHUB_REPOSITORY", ""),
        run_id=get_input("run-id", env) or env.get("GITHUB_RUN_ID", ""),
    )

    return ActionInputs(
        config=config,
        github_token=get_input("github-token", env) or env.get("GITHUB_TOKEN", ""),
        api_url=env.get("GITHUB_API_URL", GITHUB_API_URL),
        detached=get_input("detached", env).lower() == "true",
    )
