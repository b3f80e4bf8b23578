# cli.py
from __future__ import annotations

import sys

import click

from betterwait import settings
from betterwait.actions import build_provider, run_action
from betterwait.model import ConditionConfig, OutcomeStatus
from betterwait.poller import validate_config, wait_for_condition
from betterwait.ui.console import Console, set_console, get_console


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """BetterWait: block a pipeline step until a file, artifact or job is ready."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.option(
    "--condition-type",
    required=True,
    type=click.Choice(["file", "artifact", "job"]),
    help="What to wait for",
)
@click.option("--file-path", default="", help="File to wait for (condition-type=file)")
@click.option("--artifact-name", default="", help="Exact artifact name (condition-type=artifact)")
@click.option(
    "--job-name",
    default="",
    help="Job name prefix, or /regex/ (condition-type=job)",
)
@click.option("--repository", envvar="GITHUB_REPOSITORY", default="", help="owner/repo of the workflow run")
@click.option("--run-id", envvar="GITHUB_RUN_ID", default="", help="Workflow run id")
@click.option("--github-token", envvar="GITHUB_TOKEN", default="", help="Token used for the GitHub API")
@click.option("--api-url", envvar="GITHUB_API_URL", default=settings.GITHUB_API_URL, show_default=True)
@click.option(
    "--timeout-seconds",
    default=settings.DEFAULT_TIMEOUT_SECONDS,
    type=int,
    show_default=True,
    help="Give up after this many seconds",
)
@click.option(
    "--poll-interval-seconds",
    default=settings.DEFAULT_POLL_INTERVAL_SECONDS,
    type=int,
    show_default=True,
    help="Seconds to sleep between checks",
)
@click.pass_context
def wait(
    ctx,
    condition_type,
    file_path,
    artifact_name,
    job_name,
    repository,
    run_id,
    github_token,
    api_url,
    timeout_seconds,
    poll_interval_seconds,
):
    """Wait for a condition and exit non-zero on timeout, error or failed jobs."""
    console = get_console()

    config = ConditionConfig(
        condition_type=condition_type,
        file_path=file_path,
        artifact_name=artifact_name,
        job_name=job_name,
        timeout_seconds=timeout_seconds,
        poll_interval_seconds=poll_interval_seconds,
        repository=repository,
        run_id=run_id,
    )

    try:
        validate_config(config)
        provider = build_provider(config, github_token, api_url)
    except Exception as e:
        console.print_error(
            "Invalid configuration",
            str(e),
            suggestion="See `betterwait wait --help` for the required options.",
        )
        sys.exit(1)

    console.print_wait_started(config)

    try:
        outcome = wait_for_condition(
            config,
            provider,
            on_tick=lambda attempt, result: console.print_not_met(attempt, result.message),
        )
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)

    console.print_outcome(outcome)
    console.print_debug(f"Outcome: {outcome.to_dict()}")

    if outcome.status == OutcomeStatus.SUCCESS and not outcome.jobs_failed:
        sys.exit(0)
    sys.exit(1)


@cli.command()
@click.pass_context
def action(ctx):
    """Run as a GitHub Action step (reads INPUT_* and STATE_* variables)."""
    set_console(Console(debug=ctx.obj.get("debug", False), annotations=True))
    console = get_console()

    try:
        code = run_action()
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    cli()
