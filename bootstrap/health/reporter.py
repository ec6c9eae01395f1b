from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from bootstrap.steps import BootstrapStep

logger = logging.getLogger(__name__)


class StepStatus(Enum):
    PENDING = 'PENDING'
    RUNNING = 'RUNNING'
    COMPLETED = 'COMPLETED'
    FAILED = 'FAILED'
    NOT_RUN = 'NOT_RUN'

    def is_error_status(self) -> bool:
        return self is StepStatus.FAILED

    def is_terminal(self) -> bool:
        return self in {StepStatus.COMPLETED, StepStatus.FAILED, StepStatus.NOT_RUN}


@dataclass
class StepHealthRecord:
    step: BootstrapStep
    status: StepStatus = StepStatus.PENDING
    message: str = ''
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    status_history: List[Dict[str, str]] = field(default_factory=list)

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.started_at is None or self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds()

    def update_status(self, new_status: StepStatus, message: str = '') -> None:
        now = datetime.now(timezone.utc)
        if new_status is StepStatus.RUNNING:
            self.started_at = now
        elif new_status.is_terminal():
            self.finished_at = now
        self.status = new_status
        self.message = message
        self.status_history.append({'status': new_status.value, 'message': message, 'timestamp': now.isoformat()})


class BootstrapHealthReporter:
    """Tracks the status of every bootstrap step of a run."""

    def __init__(self, run_id: str):
        self.run_id = run_id
        self.records: Dict[BootstrapStep, StepHealthRecord] = {
            step: StepHealthRecord(step) for step in BootstrapStep.ordered()
        }

    def step_started(self, step: BootstrapStep) -> None:
        self.records[step].update_status(StepStatus.RUNNING, f'Step {step.number} started')

    def step_completed(self, step: BootstrapStep, message: str = '') -> None:
        self.records[step].update_status(StepStatus.COMPLETED, message)

    def step_failed(self, step: BootstrapStep, error: str) -> None:
        self.records[step].update_status(StepStatus.FAILED, error)
        for later in BootstrapStep.ordered():
            if later.number > step.number and self.records[later].status is StepStatus.PENDING:
                self.records[later].update_status(StepStatus.NOT_RUN, f'Skipped after failure of step {step.number}')

    def status_of(self, step: BootstrapStep) -> StepStatus:
        return self.records[step].status

    def failed_step(self) -> Optional[BootstrapStep]:
        return next((s for s, r in self.records.items() if r.status.is_error_status()), None)

    def running_step(self) -> Optional[BootstrapStep]:
        return next((s for s, r in self.records.items() if r.status is StepStatus.RUNNING), None)

    def completed_steps(self) -> List[BootstrapStep]:
        return [s for s in BootstrapStep.ordered() if self.records[s].status is StepStatus.COMPLETED]

    def all_completed(self) -> bool:
        return len(self.completed_steps()) == len(self.records)

    def generate_summary(self) -> str:
        lines = [f'Bootstrap health report (run {self.run_id})']
        for step in BootstrapStep.ordered():
            record = self.records[step]
            duration = f' {record.duration_seconds:.2f}s' if record.duration_seconds is not None else ''
            detail = f' - {record.message}' if record.message and record.status is StepStatus.FAILED else ''
            lines.append(f'  {step.number:2d}. {step.label:<24} {record.status.value}{duration}{detail}')
        return '\n'.join(lines)
