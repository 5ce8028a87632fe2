"""Unit tests for the concurrent pipeline runner."""

from __future__ import annotations

import threading
from typing import Any

import pytest

from core.errors import (
    ChannelAbortedError,
    PipelineConfigError,
    PipelineRunError,
    SourceReadError,
)
from flow.channel import Channel
from flow.runner import PipelineRunner


class _Producer:
    def __init__(self, name: str, outbound: Channel[int], values: list[int]) -> None:
        self.name = name
        self._outbound = outbound
        self._values = values
        self.processed_count = 0

    def channels(self) -> tuple[Channel[Any], ...]:
        return (self._outbound,)

    def run(self) -> None:
        for value in self._values:
            self._outbound.send(value)
            self.processed_count += 1
        self._outbound.close()


class _Collector:
    def __init__(self, name: str, inbound: Channel[int]) -> None:
        self.name = name
        self._inbound = inbound
        self.values: list[int] = []

    @property
    def processed_count(self) -> int:
        return len(self.values)

    def channels(self) -> tuple[Channel[Any], ...]:
        return (self._inbound,)

    def run(self) -> None:
        self.values.extend(self._inbound)


class _FailingStage:
    def __init__(self, name: str, outbound: Channel[int]) -> None:
        self.name = name
        self._outbound = outbound
        self.processed_count = 0

    def channels(self) -> tuple[Channel[Any], ...]:
        return (self._outbound,)

    def run(self) -> None:
        raise SourceReadError("input vanished")


def test_runner_waits_for_all_stages(quiet_logger) -> None:
    """Runner should return after producer and consumer finished."""
    channel: Channel[int] = Channel("numbers", 1)
    collector = _Collector("collector", channel)
    runner = PipelineRunner(logger=quiet_logger)
    # Registered consumer-first: wiring, not registration, orders execution.
    runner.add_stage(collector)
    runner.add_stage(_Producer("producer", channel, list(range(20))))

    report = runner.run()

    assert collector.values == list(range(20)) and report.succeeded
    assert [outcome.stage_name for outcome in report.outcomes] == ["collector", "producer"]


def test_runner_with_no_stages_completes(quiet_logger) -> None:
    """An empty runner should finish immediately with an empty report."""
    report = PipelineRunner(logger=quiet_logger).run()

    assert report.outcomes == () and report.succeeded


def test_runner_aborts_blocked_stages_and_aggregates_failure(quiet_logger) -> None:
    """A failing stage should unblock the downstream consumer and raise once."""
    channel: Channel[int] = Channel("numbers", 1)
    runner = PipelineRunner(logger=quiet_logger)
    runner.add_stage(_FailingStage("source", channel))
    runner.add_stage(_Collector("collector", channel))

    with pytest.raises(PipelineRunError) as error_info:
        runner.run()

    report = error_info.value.report
    statuses = {outcome.stage_name: outcome.status for outcome in report.outcomes}
    assert statuses == {"source": "failed", "collector": "aborted"}
    assert isinstance(error_info.value.__cause__, SourceReadError)


def test_runner_rejects_duplicate_stage_names(quiet_logger) -> None:
    """Stage names identify outcomes, so they must be unique."""
    channel: Channel[int] = Channel("numbers", 1)
    runner = PipelineRunner(logger=quiet_logger)
    runner.add_stage(_Collector("stage", channel))

    with pytest.raises(PipelineConfigError):
        runner.add_stage(_Collector("stage", channel))


def test_runner_never_restarts_stages(quiet_logger) -> None:
    """A runner should refuse a second run and late registrations."""
    channel: Channel[int] = Channel("numbers", 1)
    runner = PipelineRunner(logger=quiet_logger)
    runner.add_stage(_Producer("producer", channel, [1]))
    runner.add_stage(_Collector("collector", channel))
    runner.run()

    with pytest.raises(PipelineConfigError):
        runner.run()
    with pytest.raises(PipelineConfigError):
        runner.add_stage(_Collector("late", Channel("other", 1)))


class _ExitingStage:
    def __init__(self, name: str, outbound: Channel[int]) -> None:
        self.name = name
        self._outbound = outbound
        self.processed_count = 0

    def channels(self) -> tuple[Channel[Any], ...]:
        return (self._outbound,)

    def run(self) -> None:
        raise SystemExit(3)


class _WatchingCollector(_Collector):
    def __init__(self, name: str, inbound: Channel[int]) -> None:
        super().__init__(name, inbound)
        self.aborted = threading.Event()

    def run(self) -> None:
        try:
            super().run()
        except ChannelAbortedError:
            self.aborted.set()
            raise


def test_runner_aborts_downstream_when_stage_raises_system_exit(quiet_logger) -> None:
    """A stage raising SystemExit should still fail the run instead of hanging it."""
    channel: Channel[int] = Channel("numbers", 1)
    runner = PipelineRunner(logger=quiet_logger)
    runner.add_stage(_ExitingStage("source", channel))
    runner.add_stage(_Collector("collector", channel))
    errors: list[PipelineRunError] = []

    def _run() -> None:
        try:
            runner.run()
        except PipelineRunError as error:
            errors.append(error)

    worker = threading.Thread(target=_run)
    worker.start()
    worker.join(timeout=5.0)

    assert not worker.is_alive() and len(errors) == 1
    report = errors[0].report
    statuses = {outcome.stage_name: outcome.status for outcome in report.outcomes}
    assert statuses == {"source": "failed", "collector": "aborted"}
    assert isinstance(errors[0].__cause__, SystemExit)


def test_runner_interrupt_aborts_stages_and_reraises(
    monkeypatch: pytest.MonkeyPatch,
    quiet_logger,
) -> None:
    """KeyboardInterrupt while waiting should wake blocked stages and propagate."""
    channel: Channel[int] = Channel("numbers", 1)
    collector = _WatchingCollector("collector", channel)
    runner = PipelineRunner(logger=quiet_logger)
    runner.add_stage(collector)
    original_join = threading.Thread.join
    interrupted: list[bool] = []

    def _join_once_interrupted(self: threading.Thread, timeout: float | None = None) -> None:
        if self.name.startswith("stage-") and not interrupted:
            interrupted.append(True)
            raise KeyboardInterrupt
        original_join(self, timeout)

    monkeypatch.setattr(threading.Thread, "join", _join_once_interrupted)

    with pytest.raises(KeyboardInterrupt):
        runner.run()

    stage_threads = [thread for thread in threading.enumerate() if thread.name == "stage-collector"]
    assert collector.aborted.is_set() and stage_threads == []
