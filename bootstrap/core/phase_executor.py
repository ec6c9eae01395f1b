"""
Bootstrap Phase Executor - runs the bootstrap phases in order and stops at the first failure.

Every failure is reported as the failing step's ``BootstrapError`` subclass,
with the original exception chained, so callers learn which step failed and
against which resource.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bootstrap.bootstrap_context import BootstrapContext
from bootstrap.exceptions import BootstrapError
from bootstrap.phases.base_phase import BootstrapPhase
from bootstrap.steps import BootstrapStep

logger = logging.getLogger(__name__)


@dataclass
class PhaseExecutionResult:
    """Result of executing a bootstrap phase."""
    phase_name: str
    step: BootstrapStep
    success: bool
    duration_seconds: float
    message: str = ''
    error: Optional[BootstrapError] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PhaseExecutionSummary:
    """Summary of all phase executions."""
    total_phases: int
    results: List[PhaseExecutionResult] = field(default_factory=list)
    total_duration: float = 0.0

    @property
    def successful_phases(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed_result(self) -> Optional[PhaseExecutionResult]:
        return next((r for r in self.results if not r.success), None)

    @property
    def completed(self) -> bool:
        return self.successful_phases == self.total_phases

    @property
    def executed_steps(self) -> List[BootstrapStep]:
        return [r.step for r in self.results]


class BootstrapPhaseExecutor:
    """
    Executes bootstrap phases strictly in order.

    The first failing phase ends the run: later phases are never invoked and
    the failure is raised as the step's error.
    """

    def __init__(self, context: BootstrapContext):
        self.context = context
        self.current_step: Optional[BootstrapStep] = None
        self.summary: Optional[PhaseExecutionSummary] = None

    async def execute_phases(self, phases: List[BootstrapPhase]) -> PhaseExecutionSummary:
        logger.info(f'Executing {len(phases)} bootstrap phases')
        start_time = datetime.now(timezone.utc)
        self.summary = PhaseExecutionSummary(total_phases=len(phases))

        try:
            for i, phase in enumerate(phases, 1):
                logger.info(f'Phase {i}/{len(phases)}: {phase.phase_name}')
                result = await self._execute_single_phase(phase)
                self.summary.results.append(result)
                if not result.success:
                    logger.error(f'✗ Phase {phase.phase_name} failed after {result.duration_seconds:.2f}s')
                    raise result.error
                logger.info(f'✓ Phase {phase.phase_name} completed in {result.duration_seconds:.2f}s')
        finally:
            self.current_step = None
            self.summary.total_duration = (datetime.now(timezone.utc) - start_time).total_seconds()
            self._log_execution_summary(self.summary)

        return self.summary

    async def _execute_single_phase(self, phase: BootstrapPhase) -> PhaseExecutionResult:
        step = phase.step
        reporter = self.context.health_reporter
        self.current_step = step
        reporter.step_started(step)
        start_time = datetime.now(timezone.utc)

        error: Optional[BootstrapError] = None
        message = ''
        metadata: Dict[str, Any] = {}
        try:
            phase_result = await phase.execute_with_hooks(self.context)
            message = phase_result.message
            metadata = phase_result.metadata
            if not phase_result.success:
                error = step.wrap(phase_result.message, resource=self._resource_of(phase))
        except BootstrapError as e:
            if e.step is None:
                e.step = step
            if e.resource is None:
                e.resource = self._resource_of(phase)
            error = e
        except Exception as e:
            wrapped = step.wrap(e, resource=self._resource_of(phase))
            wrapped.__cause__ = e
            error = wrapped
            logger.debug(f'Phase {phase.phase_name} raised {type(e).__name__}', exc_info=True)

        duration = (datetime.now(timezone.utc) - start_time).total_seconds()
        if error is None:
            reporter.step_completed(step, message)
        else:
            message = error.message
            reporter.step_failed(step, str(error))

        return PhaseExecutionResult(
            phase_name=phase.phase_name,
            step=step,
            success=error is None,
            duration_seconds=duration,
            message=message,
            error=error,
            metadata=metadata,
        )

    def _resource_of(self, phase: BootstrapPhase) -> Optional[str]:
        try:
            return phase.resource(self.context)
        except Exception as e:
            logger.debug(f'Could not determine resource for {phase.phase_name}: {e}')
            return None

    def _log_execution_summary(self, summary: PhaseExecutionSummary) -> None:
        logger.info('=== Bootstrap Phase Execution Summary ===')
        logger.info(f'Total phases: {summary.total_phases}')
        logger.info(f'Successful: {summary.successful_phases}')
        logger.info(f'Total duration: {summary.total_duration:.2f}s')
        failed = summary.failed_result
        if failed is not None:
            logger.warning(f'Failed phase: {failed.phase_name} (step {failed.step.number}): {failed.error}')
        logger.info('=== End Bootstrap Phase Summary ===')


async def execute_bootstrap_phases(phases: List[BootstrapPhase], context: BootstrapContext) -> PhaseExecutionSummary:
    executor = BootstrapPhaseExecutor(context)
    return await executor.execute_phases(phases)
