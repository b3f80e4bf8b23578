# aggregate.py
from __future__ import annotations

from typing import Sequence

from .model import CheckResult, JobRecord


def aggregate_jobs(
    matched: Sequence[JobRecord],
    pattern: str,
    all_job_names: Sequence[str],
) -> CheckResult:
    """
    Reduce the jobs matched by a pattern into one result.

    In order:
      1. nothing matched            -> not met, list every available job name
      2. some job not completed     -> not met, "k/n job(s) not completed: ..."
      3. all completed, some failed -> met, all_succeeded=False, "k/n job(s) failed: ..."
      4. all completed successfully -> met

    Waiting is for completion, not for success: a failed job still ends
    the wait (branch 3). Callers decide what a failure means to them.
    """
    if not matched:
        available = ", ".join(all_job_names)
        return CheckResult(
            met=False,
            message=f'No jobs found matching: "{pattern}". Available jobs: {available}',
        )

    total = len(matched)

    incomplete = [j for j in matched if not j.completed]
    if incomplete:
        running = ", ".join(f"{j.name} ({j.status})" for j in incomplete)
        return CheckResult(
            met=False,
            message=f"{len(incomplete)}/{total} job(s) not completed: {running}",
        )

    failed = [j for j in matched if not j.succeeded]
    if failed:
        details = ", ".join(f"{j.name} ({j.conclusion or 'null'})" for j in failed)
        return CheckResult(
            met=True,
            message=f"{len(failed)}/{total} job(s) failed: {details}",
            all_succeeded=False,
        )

    names = ", ".join(j.name for j in matched)
    return CheckResult(
        met=True,
        message=f"All {total} job(s) completed successfully: {names}",
    )
