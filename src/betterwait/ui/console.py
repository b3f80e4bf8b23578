"""Console output formatting utilities for BetterWait."""

from __future__ import annotations

import sys
from typing import Optional

from betterwait.model import ConditionConfig, OutcomeStatus, PollOutcome


def escape_command_data(value: str) -> str:
    # workflow command payloads must not contain raw newlines
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, annotations: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
            annotations: If True, emit warnings/errors as GitHub workflow
                commands (::warning:: / ::error::) so they show up as annotations
        """
        self.debug = debug
        self.annotations = annotations

    def print_wait_started(self, config: ConditionConfig, phase: Optional[str] = None) -> None:
        """Print wait start information."""
        print("\nWAIT STARTED")
        print(f"Condition: {config.condition_type}")
        target = config.file_path or config.artifact_name or config.job_name
        if target:
            print(f"Target: {target}")
        if phase:
            print(f"Phase: {phase}")
        print(f"Timeout: {config.timeout_seconds}s")
        print(f"Polling every: {config.poll_interval_seconds}s")
        print()

    def print_not_met(self, attempt: int, message: str) -> None:
        """Print a per-tick progress line."""
        print(f"[{attempt}] Condition not met yet: {message}")

    def print_condition_met(self, message: str) -> None:
        """Print success message."""
        print(f"Condition met: {message}")

    def print_jobs_failed(self, message: str) -> None:
        """Print message for jobs that completed without success."""
        self.print_warning(f"Job(s) completed but failed: {message}")

    def print_timeout(self, message: str) -> None:
        """Print timeout message."""
        self.print_error("Timeout", message)

    def print_outcome(self, outcome: PollOutcome) -> None:
        """Print final outcome summary."""
        print("\n" + "=" * 40)
        print("RESULT")
        print("=" * 40)
        if outcome.status == OutcomeStatus.SUCCESS:
            if outcome.jobs_failed:
                self.print_jobs_failed(outcome.message)
            else:
                self.print_condition_met(outcome.message)
        elif outcome.status == OutcomeStatus.TIMEOUT:
            self.print_timeout(outcome.message)
        else:
            self.print_error("Wait failed", outcome.message)
        print(f"Result: {outcome.status.value}")
        print(f"Attempts: {outcome.attempts}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        if self.annotations:
            print(f"::warning::{escape_command_data(message)}")
        else:
            print(f"WARNING: {message}", file=sys.stderr)

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        if self.annotations:
            print(f"::error title={title}::{escape_command_data(message)}")
        else:
            print(f"\nERROR: {title}", file=sys.stderr)
            print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
