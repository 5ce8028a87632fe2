"""Concurrent pipeline runner.

This module starts every registered stage in its own thread and waits
for all of them. A failing stage does not exit the process: the runner
aborts every channel so blocked stages unwind, then surfaces one
aggregated error carrying the per-stage outcomes.
"""

from __future__ import annotations

import threading
from typing import Any, Protocol

from core.errors import ChannelAbortedError, PipelineConfigError, PipelineRunError
from core.logging_config import get_logger
from core.types import PipelineReport, StageOutcome
from flow.channel import Channel


class Stage(Protocol):
    """Unit of work run by :class:`PipelineRunner`."""

    name: str

    @property
    def processed_count(self) -> int: ...

    def channels(self) -> tuple[Channel[Any], ...]: ...

    def run(self) -> None: ...


class PipelineRunner:
    """Own a set of stages, run them concurrently, and wait for completion."""

    def __init__(self, logger: Any | None = None) -> None:
        self._logger = logger if logger is not None else get_logger(__name__)
        self._stages: list[Stage] = []
        self._outcomes: dict[str, StageOutcome] = {}
        self._outcome_lock = threading.Lock()
        self._started = False

    @property
    def stages(self) -> tuple[Stage, ...]:
        return tuple(self._stages)

    def add_stage(self, stage: Stage) -> None:
        """Register a stage; order does not affect execution order.

        Raises:
            PipelineConfigError: If the runner already ran or the name is taken.
        """
        if self._started:
            raise PipelineConfigError(
                f"Cannot add stage '{stage.name}': the pipeline has already run."
            )
        if any(existing.name == stage.name for existing in self._stages):
            raise PipelineConfigError(
                f"Duplicate stage name '{stage.name}'. Give every stage a unique name."
            )
        self._stages.append(stage)

    def run(self) -> PipelineReport:
        """Run every stage concurrently and block until all have exited.

        Returns:
            Stage outcomes in registration order.

        Raises:
            PipelineConfigError: If the runner is reused.
            PipelineRunError: If any stage failed.
        """
        if self._started:
            raise PipelineConfigError("Pipeline runner already ran; stages are never restarted.")
        self._started = True
        threads = [
            threading.Thread(target=self._run_stage, args=(stage,), name=f"stage-{stage.name}")
            for stage in self._stages
        ]
        for thread in threads:
            thread.start()
        try:
            for thread in threads:
                thread.join()
        except KeyboardInterrupt:
            self._abort_channels()
            for thread in threads:
                thread.join()
            raise
        report = PipelineReport(
            outcomes=tuple(self._outcomes[stage.name] for stage in self._stages)
        )
        if report.failures:
            raise PipelineRunError(report) from report.failures[0].error
        self._logger.info(
            "pipeline_completed",
            stages=[stage.name for stage in self._stages],
        )
        return report

    def _run_stage(self, stage: Stage) -> None:
        try:
            stage.run()
        except ChannelAbortedError:
            self._record(StageOutcome(stage.name, "aborted", stage.processed_count))
        except BaseException as error:
            # SystemExit and friends still end in abort so nothing blocks forever.
            self._logger.error("stage_failed", stage=stage.name, error=repr(error))
            self._record(StageOutcome(stage.name, "failed", stage.processed_count, error))
            self._abort_channels()
        else:
            self._record(StageOutcome(stage.name, "succeeded", stage.processed_count))

    def _record(self, outcome: StageOutcome) -> None:
        with self._outcome_lock:
            self._outcomes[outcome.stage_name] = outcome

    def _abort_channels(self) -> None:
        for stage in self._stages:
            for channel in stage.channels():
                channel.abort()
