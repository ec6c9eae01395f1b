from pathlib import Path
from unittest.mock import MagicMock

import pytest

from bootstrap.bootstrap_context import BootstrapContext
from bootstrap.core.phase_executor import BootstrapPhaseExecutor
from bootstrap.exceptions import (
    BootstrapError,
    ChannelCreationError,
    CryptoProviderError,
    EventHubNotFoundError,
    IdentityResolutionError,
)
from bootstrap.health.reporter import BootstrapHealthReporter, StepStatus
from bootstrap.phases.base_phase import BootstrapPhase, PhaseResult
from bootstrap.steps import BootstrapStep
from configs.config_loader import ConfigLoader


class RecordingPhase(BootstrapPhase):

    def __init__(self, step, log, outcome=None, resource=None):
        super().__init__()
        self.step = step
        self._log = log
        self._outcome = outcome
        self._resource = resource

    def resource(self, context):
        return self._resource

    async def execute(self, context):
        self._log.append(self.step)
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        if isinstance(self._outcome, PhaseResult):
            return self._outcome
        return PhaseResult.success_result(f'{self.step.label} done')


@pytest.fixture
def context():
    return BootstrapContext(
        run_id='test_run',
        config_path=Path('config.yaml'),
        sdk=MagicMock(),
        config_loader=ConfigLoader(environ={}),
        health_reporter=BootstrapHealthReporter('test_run'),
    )


@pytest.mark.asyncio
async def test_phases_run_in_given_order(context):
    log = []
    phases = [RecordingPhase(step, log) for step in BootstrapStep.ordered()[:3]]

    summary = await BootstrapPhaseExecutor(context).execute_phases(phases)

    assert log == BootstrapStep.ordered()[:3]
    assert summary.successful_phases == 3
    assert summary.completed
    assert summary.failed_result is None


@pytest.mark.asyncio
async def test_plain_exception_is_wrapped_with_step_prefix(context):
    log = []
    cause = ValueError('bad curve')
    phases = [
        RecordingPhase(BootstrapStep.LOAD_CONFIG, log),
        RecordingPhase(BootstrapStep.INIT_CRYPTO, log, outcome=cause),
        RecordingPhase(BootstrapStep.ENROLL_CLIENT, log),
    ]
    executor = BootstrapPhaseExecutor(context)

    with pytest.raises(CryptoProviderError) as exc_info:
        await executor.execute_phases(phases)

    err = exc_info.value
    assert err.message == 'Failed getting ephemeral software-based crypto provider: bad curve'
    assert err.step is BootstrapStep.INIT_CRYPTO
    assert err.__cause__ is cause
    assert log == [BootstrapStep.LOAD_CONFIG, BootstrapStep.INIT_CRYPTO]
    assert executor.current_step is None
    assert executor.summary.failed_result.step is BootstrapStep.INIT_CRYPTO
    assert context.health_reporter.status_of(BootstrapStep.ENROLL_CLIENT) is StepStatus.NOT_RUN


@pytest.mark.asyncio
async def test_failed_phase_result_becomes_step_error(context):
    phases = [RecordingPhase(BootstrapStep.CREATE_CHANNEL, [], outcome=PhaseResult.failure_result('no such channel'),
                             resource='mychannel')]

    with pytest.raises(ChannelCreationError) as exc_info:
        await BootstrapPhaseExecutor(context).execute_phases(phases)

    assert exc_info.value.message == 'Create channel (mychannel) failed: no such channel'
    assert exc_info.value.resource == 'mychannel'


@pytest.mark.asyncio
async def test_bootstrap_error_keeps_its_type_and_gains_step(context):
    raised = EventHubNotFoundError('No EventHub configuration found')
    phases = [RecordingPhase(BootstrapStep.CONNECT_EVENT_HUB, [], outcome=raised, resource='mychannel')]

    with pytest.raises(EventHubNotFoundError) as exc_info:
        await BootstrapPhaseExecutor(context).execute_phases(phases)

    assert exc_info.value is raised
    assert raised.step is BootstrapStep.CONNECT_EVENT_HUB
    assert raised.resource == 'mychannel'


@pytest.mark.asyncio
async def test_missing_prerequisite_fails_the_phase(context):
    class NeedsNetwork(RecordingPhase):
        requires = ('network_config',)

    log = []
    phases = [NeedsNetwork(BootstrapStep.RESOLVE_ORG_ADMIN, log)]

    with pytest.raises(IdentityResolutionError, match='missing required attribute: network_config'):
        await BootstrapPhaseExecutor(context).execute_phases(phases)
    assert log == []


def test_step_numbers_are_contiguous():
    steps = BootstrapStep.ordered()
    assert [s.number for s in steps] == list(range(1, 11))
    assert all(issubclass(s.error_class, BootstrapError) for s in steps)
    assert BootstrapStep.CREATE_CHANNEL.prefix_for('c1') == 'Create channel (c1) failed'
    assert BootstrapStep.LOAD_CONFIG.prefix_for('x') == 'Initialize the config failed'
