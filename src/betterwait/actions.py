# actions.py
# GitHub Actions host: inputs, outputs, saved state and the detached
# (main/post) two-phase lifecycle. The wait engine itself knows nothing
# about any of this; this module only decides *when* to run it.

from __future__ import annotations

import os
import uuid
from enum import Enum
from typing import Callable, Mapping, MutableMapping, Optional

from .conditions import LocalStateProvider, StateProvider
from .errors import ConfigError
from .github import GitHubClient, GitHubStateProvider
from .model import ConditionConfig, ConditionType, OutcomeStatus, PollOutcome
from .poller import validate_config, wait_for_condition
from .settings import ActionInputs, get_input, load_action_inputs
from .ui.console import escape_command_data, get_console

IS_POST_STATE = "IS_POST"


class Phase(str, Enum):
    RUN = "run"      # wait now
    DEFER = "defer"  # detached main phase: wait later, in post
    SKIP = "skip"    # post phase of a non-detached run: already waited


def decide_phase(is_post: bool, detached: bool) -> Phase:
    if not is_post:
        return Phase.DEFER if detached else Phase.RUN
    return Phase.RUN if detached else Phase.SKIP


# ----------------------------------------------------------------------
# Runner file protocol
# ----------------------------------------------------------------------

def _append_file_command(file_path: str, key: str, value: str) -> None:
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in key or delimiter in value:
        raise ValueError("Unexpected input: name or value contains the delimiter")
    with open(file_path, "a", encoding="utf-8") as f:
        f.write(f"{key}<<{delimiter}\n{value}\n{delimiter}\n")


def get_state(name: str, env: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if env is None else env
    return env.get(f"STATE_{name}", "")


def save_state(name: str, value: str, env: Optional[Mapping[str, str]] = None) -> None:
    env = os.environ if env is None else env
    state_file = env.get("GITHUB_STATE")
    if state_file:
        _append_file_command(state_file, name, value)
    else:
        print(f"::save-state name={name}::{escape_command_data(value)}")


def set_output(name: str, value: str, env: Optional[Mapping[str, str]] = None) -> None:
    env = os.environ if env is None else env
    output_file = env.get("GITHUB_OUTPUT")
    if output_file:
        _append_file_command(output_file, name, value)
    else:
        print(f"::set-output name={name}::{escape_command_data(value)}")


# ----------------------------------------------------------------------
# Entry point
# ----------------------------------------------------------------------

def build_provider(config: ConditionConfig, github_token: str, api_url: str) -> StateProvider:
    """
    Pick the state provider for a condition.

    Raises:
        ConfigError: artifact/job condition without a usable repository or run id
    """
    if config.condition_type == ConditionType.FILE.value:
        return LocalStateProvider()
    if not config.repository:
        raise ConfigError(f"repository is required when condition-type is {config.condition_type}")
    if not config.run_id:
        raise ConfigError(f"run-id is required when condition-type is {config.condition_type}")
    client = GitHubClient(token=github_token, api_url=api_url)
    return GitHubStateProvider(client, config.repository, config.run_id)


def _report(outcome: PollOutcome, env: Mapping[str, str]) -> int:
    set_output("result", outcome.status.value, env)
    set_output("message", outcome.message, env)

    console = get_console()
    console.print_outcome(outcome)
    if outcome.ok:
        return 0
    if outcome.logical_failure:
        console.print_error("Job(s) failed", outcome.message)
    return 1


def run_action(
    env: Optional[MutableMapping[str, str]] = None,
    provider_factory: Callable[[ActionInputs], StateProvider] | None = None,
    wait: Callable[..., PollOutcome] = wait_for_condition,
) -> int:
    """
    Run one phase of the action.

    Returns:
        Process exit code: 0 only when the condition was met and every
        awaited job succeeded (or the phase had nothing to do)
    """
    env = os.environ if env is None else env
    console = get_console()

    is_post = get_state(IS_POST_STATE, env) == "true"

    try:
        detached = get_input("detached", env).lower() == "true"
        phase = decide_phase(is_post, detached)

        if not is_post:
            save_state(IS_POST_STATE, "true", env)
        if phase == Phase.DEFER:
            console.print_info("Detached mode enabled - wait operation will run in post action phase")
            return 0
        if phase == Phase.SKIP:
            console.print_info("Post action phase - skipping (detached mode not enabled)")
            return 0

        inputs = load_action_inputs(env)
        validate_config(inputs.config)
        if provider_factory is None:
            provider = build_provider(inputs.config, inputs.github_token, inputs.api_url)
        else:
            provider = provider_factory(inputs)
    except Exception as e:
        outcome = PollOutcome(status=OutcomeStatus.ERROR, message=str(e) or "Unknown error occurred")
        return _report(outcome, env)

    console.print_wait_started(
        inputs.config,
        phase="post action phase" if is_post else "main action phase",
    )
    outcome = wait(
        inputs.config,
        provider,
        on_tick=lambda attempt, result: console.print_not_met(attempt, result.message),
    )
    return _report(outcome, env)
