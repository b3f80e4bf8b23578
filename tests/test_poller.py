import pytest

from betterwait.conditions import LocalStateProvider
from betterwait.errors import APIError, ConfigError
from betterwait.model import Artifact, CheckResult, ConditionConfig, OutcomeStatus
from betterwait.poller import Poller, validate_config, wait_for_condition

from conftest import FakeProvider, job


def _wait(config, provider, clock, ticks=None):
    def on_tick(attempt, result):
        if ticks is not None:
            ticks.append((attempt, result))

    return wait_for_condition(config, provider, clock=clock, sleep=clock.sleep, on_tick=on_tick)


# ----------------------------------------------------------------------
# validation
# ----------------------------------------------------------------------

@pytest.mark.parametrize(
    "config, message",
    [
        (ConditionConfig("file"), "file-path is required when condition-type is file"),
        (ConditionConfig("artifact"), "artifact-name is required when condition-type is artifact"),
        (ConditionConfig("job"), "job-name is required when condition-type is job"),
        (
            ConditionConfig("webhook", job_name="x"),
            "Invalid condition-type: webhook. Must be one of: file, artifact, job",
        ),
        (ConditionConfig("job", job_name="x", timeout_seconds=0), "timeout-seconds must be a positive integer, got 0"),
        (
            ConditionConfig("job", job_name="x", poll_interval_seconds=-1),
            "poll-interval-seconds must be a positive integer, got -1",
        ),
    ],
)
def test_validate_config_rejects(config, message):
    with pytest.raises(ConfigError) as exc:
        validate_config(config)
    assert str(exc.value) == message


def test_invalid_config_is_error_without_polling(clock):
    provider = FakeProvider()
    outcome = _wait(ConditionConfig("artifact"), provider, clock)
    assert outcome.status == OutcomeStatus.ERROR
    assert outcome.message == "artifact-name is required when condition-type is artifact"
    assert provider.calls == 0
    assert clock.sleeps == []


# ----------------------------------------------------------------------
# loop
# ----------------------------------------------------------------------

def test_stops_on_first_met_tick(clock):
    snapshots = [[], [], [Artifact("report")], [Artifact("report")]]
    provider = FakeProvider(artifacts=snapshots)
    ticks = []
    config = ConditionConfig("artifact", artifact_name="report", timeout_seconds=60, poll_interval_seconds=5)

    outcome = _wait(config, provider, clock, ticks)

    assert outcome.status == OutcomeStatus.SUCCESS
    assert outcome.message == "Artifact found: report"
    assert outcome.attempts == 3
    assert provider.calls == 3
    assert clock.sleeps == [5, 5]
    assert [t[1].message for t in ticks] == ["Artifact not found: report"] * 2


def test_never_met_times_out(clock):
    provider = FakeProvider(artifacts=[[Artifact("other")]])
    config = ConditionConfig("artifact", artifact_name="report", timeout_seconds=30, poll_interval_seconds=10)

    outcome = _wait(config, provider, clock)

    assert outcome.status == OutcomeStatus.TIMEOUT
    assert outcome.message == "Timeout reached after 30 seconds"
    assert outcome.attempts == 3
    assert clock.now - 1000.0 <= 30 + 10


def test_interval_longer_than_timeout_polls_once(clock):
    provider = FakeProvider(artifacts=[[]])
    config = ConditionConfig("artifact", artifact_name="x", timeout_seconds=5, poll_interval_seconds=60)
    outcome = _wait(config, provider, clock)
    assert outcome.status == OutcomeStatus.TIMEOUT
    assert provider.calls == 1


def test_missing_file_times_out_with_progress_messages(tmp_path, clock):
    config = ConditionConfig(
        "file",
        file_path=str(tmp_path / "never"),
        timeout_seconds=10,
        poll_interval_seconds=2,
    )
    ticks = []
    outcome = _wait(config, FakeProvider(), clock, ticks)
    assert outcome.status == OutcomeStatus.TIMEOUT
    assert len(ticks) == 5
    assert all(r.message.startswith("File does not exist: ") for _, r in ticks)


def test_fetch_errors_are_retried_until_success(clock):
    provider = FakeProvider(jobs=[APIError("Network error: boom"), [job("deploy")]])
    config = ConditionConfig("job", job_name="deploy", timeout_seconds=60, poll_interval_seconds=1)
    ticks = []
    outcome = _wait(config, provider, clock, ticks)
    assert outcome.status == OutcomeStatus.SUCCESS
    assert ticks[0][1].message == "Error checking job: Network error: boom"


def test_failed_jobs_are_met_but_flagged(clock):
    provider = FakeProvider(jobs=[[job("test (a)"), job("test (b)", conclusion="failure")]])
    config = ConditionConfig("job", job_name="test", timeout_seconds=60, poll_interval_seconds=1)

    outcome = _wait(config, provider, clock)

    assert outcome.status == OutcomeStatus.SUCCESS
    assert outcome.jobs_failed
    assert outcome.logical_failure
    assert not outcome.ok
    assert outcome.message == "1/2 job(s) failed: test (b) (failure)"


def test_matrix_jobs_succeed_after_running(clock):
    running = [job("test (node-16)", "in_progress"), job("test (node-18)", "queued"), job("build")]
    done = [job("test (node-16)"), job("test (node-18)"), job("build", "in_progress")]
    provider = FakeProvider(jobs=[running, done])
    config = ConditionConfig("job", job_name="test", timeout_seconds=60, poll_interval_seconds=10)

    outcome = _wait(config, provider, clock)

    assert outcome.ok
    assert outcome.attempts == 2
    assert outcome.message == "All 2 job(s) completed successfully: test (node-16), test (node-18)"


def test_unexpected_exception_becomes_error(clock):
    class Broken(FakeProvider):
        def file_exists(self, path):
            raise PermissionError("denied")

    config = ConditionConfig("file", file_path="x", timeout_seconds=60, poll_interval_seconds=1)
    outcome = _wait(config, Broken(), clock)
    assert outcome.status == OutcomeStatus.ERROR
    assert outcome.message == "denied"


def test_poll_propagates_config_error(clock):
    poller = Poller(ConditionConfig("job"), FakeProvider(), clock=clock, sleep=clock.sleep)
    with pytest.raises(ConfigError):
        poller.poll()


def test_independent_pollers_do_not_share_state(clock):
    config = ConditionConfig("artifact", artifact_name="a", timeout_seconds=60, poll_interval_seconds=1)
    first = Poller(config, FakeProvider(artifacts=[[Artifact("a")]]), clock=clock, sleep=clock.sleep)
    second = Poller(config, FakeProvider(artifacts=[[], [Artifact("a")]]), clock=clock, sleep=clock.sleep)
    assert first.poll().attempts == 1
    assert second.poll().attempts == 2
    assert first.poll().attempts == 1


def test_on_tick_receives_check_results(clock):
    seen = []
    provider = FakeProvider(artifacts=[[], [Artifact("a")]])
    config = ConditionConfig("artifact", artifact_name="a", timeout_seconds=60, poll_interval_seconds=1)
    _wait(config, provider, clock, seen)
    assert seen == [(1, CheckResult(met=False, message="Artifact not found: a"))]


def test_provider_without_run_access_fails_before_polling(clock):
    config = ConditionConfig("artifact", artifact_name="x", timeout_seconds=20, poll_interval_seconds=5)
    ticks = []

    outcome = _wait(config, LocalStateProvider(), clock, ticks)

    assert outcome.status == OutcomeStatus.ERROR
    assert "cannot check artifact conditions" in outcome.message
    assert outcome.attempts == 0
    assert ticks == []
    assert clock.sleeps == []
