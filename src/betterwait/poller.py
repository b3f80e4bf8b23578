# poller.py
from __future__ import annotations

import time
from typing import Callable, Optional

from .conditions import StateProvider, check_condition, check_provider
from .errors import ConfigError
from .model import CheckResult, ConditionConfig, ConditionType, OutcomeStatus, PollOutcome

REQUIRED_FIELDS = {
    ConditionType.FILE.value: ("file_path", "file-path"),
    ConditionType.ARTIFACT.value: ("artifact_name", "artifact-name"),
    ConditionType.JOB.value: ("job_name", "job-name"),
}


def validate_config(config: ConditionConfig) -> None:
    """
    Check a config before any polling happens.

    Raises:
        ConfigError: unknown condition type, missing type-specific field,
                     or non-positive timeout / poll interval
    """
    required = REQUIRED_FIELDS.get(config.condition_type)
    if required is None:
        valid = ", ".join(REQUIRED_FIELDS)
        raise ConfigError(f"Invalid condition-type: {config.condition_type}. Must be one of: {valid}")

    attr, input_name = required
    if not getattr(config, attr):
        raise ConfigError(f"{input_name} is required when condition-type is {config.condition_type}")

    if config.timeout_seconds <= 0:
        raise ConfigError(f"timeout-seconds must be a positive integer, got {config.timeout_seconds}")
    if config.poll_interval_seconds <= 0:
        raise ConfigError(
            f"poll-interval-seconds must be a positive integer, got {config.poll_interval_seconds}"
        )


class Poller:
    """
    Re-evaluates one condition until it is met or the deadline passes.

    Each instance owns its start time and nothing else; separate waits
    should use separate instances.
    """

    def __init__(
        self,
        config: ConditionConfig,
        provider: StateProvider,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        on_tick: Optional[Callable[[int, CheckResult], None]] = None,
    ):
        """
        Args:
            config: What to wait for and for how long
            provider: Supplies a fresh state snapshot on every tick
            clock: Monotonic seconds source
            sleep: Blocking delay between ticks
            on_tick: Called with (attempt, result) for every "not met" tick
        """
        self.config = config
        self.provider = provider
        self.clock = clock
        self.sleep = sleep
        self.on_tick = on_tick

    def poll(self) -> PollOutcome:
        """
        Run the loop. ConfigError (invalid config, or a provider that cannot
        serve the condition type) and unexpected exceptions propagate.

        Returns:
            PollOutcome with status success or timeout
        """
        validate_config(self.config)
        check_provider(self.config, self.provider)

        timeout = self.config.timeout_seconds
        start = self.clock()
        attempts = 0

        while self.clock() - start < timeout:
            attempts += 1
            result = check_condition(self.config, self.provider)

            if result.met:
                return PollOutcome(
                    status=OutcomeStatus.SUCCESS,
                    message=result.message,
                    jobs_failed=not result.all_succeeded,
                    attempts=attempts,
                )

            if self.on_tick is not None:
                self.on_tick(attempts, result)
            self.sleep(self.config.poll_interval_seconds)

        return PollOutcome(
            status=OutcomeStatus.TIMEOUT,
            message=f"Timeout reached after {timeout} seconds",
            attempts=attempts,
        )


def wait_for_condition(
    config: ConditionConfig,
    provider: StateProvider,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
    on_tick: Optional[Callable[[int, CheckResult], None]] = None,
) -> PollOutcome:
    """
    Run a full wait and always return exactly one outcome.

    Anything escaping the loop (invalid config, unexpected failures)
    becomes an `error` outcome carrying the exception text.
    """
    poller = Poller(config, provider, clock=clock, sleep=sleep, on_tick=on_tick)
    try:
        return poller.poll()
    except Exception as e:
        return PollOutcome(
            status=OutcomeStatus.ERROR,
            message=str(e) or "Unknown error occurred",
        )
