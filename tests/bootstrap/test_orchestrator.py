import asyncio

import pytest

from bootstrap import (
    BootstrapExecutionConfig,
    BootstrapOrchestrator,
    BootstrapStep,
    BootstrapTimeoutError,
    ChannelCreationError,
    ChannelJoinError,
    ConfigurationError,
    CryptoProviderError,
    EventHubConnectError,
    EventHubNotFoundError,
    IdentityResolutionError,
    ReadinessError,
    StepStatus,
    UserContextError,
    bootstrap_sync,
)
from bootstrap.phases import EventHubPhase, default_phases
from tests.fakes import FakeBehaviour, FakeFailure, FakeLedgerSDK

EXPECTED_CALLS = [
    'init_crypto_provider',
    'create_client',
    'new_channel',
    'get_pre_enrolled_user:ordererAdmin',
    'get_pre_enrolled_user:peerorg1Admin',
    'create_and_join_channel',
    'set_user_context',
    'new_event_hub',
    'get_peers_config',
    'event_hub.set_peer_addr',
    'event_hub.connect',
]


@pytest.mark.asyncio
async def test_bootstrap_runs_every_step_in_order(config_file, fake_sdk):
    orchestrator = BootstrapOrchestrator(fake_sdk, config_file)
    setup = await orchestrator.execute_bootstrap()

    assert fake_sdk.calls == EXPECTED_CALLS
    assert orchestrator.summary.executed_steps == BootstrapStep.ordered()
    assert orchestrator.summary.completed
    assert orchestrator.health_reporter.all_completed()

    assert setup.initialized
    assert setup.channel_id == 'mychannel'
    assert setup.channel.get_peers() == ['p0', 'p1', 'p2']
    assert setup.event_hub.is_connected
    assert setup.event_hub.peer_addr == 'h1:7053'
    assert setup.client.user_context.name == 'peerorg1Admin'


@pytest.mark.asyncio
async def test_admin_identities_are_passed_to_create_and_join(config_file):
    captured = {}

    class RecordingSDK(FakeLedgerSDK):
        async def create_client(self, config, credentials):
            client = await super().create_client(config, credentials)
            original = client.create_and_join_channel

            async def create_and_join(orderer_user, org_user, channel, path):
                captured.update(orderer=orderer_user, org=org_user, path=path)
                await original(orderer_user, org_user, channel, path)

            client.create_and_join_channel = create_and_join
            return client

    await BootstrapOrchestrator(RecordingSDK(), config_file).execute_bootstrap()

    assert captured['orderer'].name == 'ordererAdmin'
    assert captured['orderer'].msp_id == 'OrdererMSP'
    assert captured['org'].name == 'peerorg1Admin'
    assert captured['path'].endswith('mychannel.tx')


FAILURE_CASES = [
    (BootstrapStep.INIT_CRYPTO, FakeBehaviour(fail_on={'init_crypto_provider'}), CryptoProviderError),
    (BootstrapStep.ENROLL_CLIENT, FakeBehaviour(fail_on={'create_client'}), IdentityResolutionError),
    (BootstrapStep.CREATE_CHANNEL, FakeBehaviour(fail_on={'new_channel'}), ChannelCreationError),
    (BootstrapStep.RESOLVE_ORDERER_ADMIN, FakeBehaviour(fail_identities={'ordererAdmin'}), IdentityResolutionError),
    (BootstrapStep.RESOLVE_ORG_ADMIN, FakeBehaviour(fail_identities={'peerorg1Admin'}), IdentityResolutionError),
    (BootstrapStep.CREATE_AND_JOIN_CHANNEL, FakeBehaviour(fail_on={'create_and_join_channel'}), ChannelJoinError),
    (BootstrapStep.SWITCH_USER_CONTEXT, FakeBehaviour(fail_on={'set_user_context'}), UserContextError),
    (BootstrapStep.CONNECT_EVENT_HUB, FakeBehaviour(fail_on={'event_hub.connect'}), EventHubConnectError),
]


@pytest.mark.asyncio
@pytest.mark.parametrize('step, behaviour, error_class', FAILURE_CASES, ids=[c[0].label for c in FAILURE_CASES])
async def test_failure_stops_the_run_at_that_step(config_file, step, behaviour, error_class):
    sdk = FakeLedgerSDK(behaviour)
    orchestrator = BootstrapOrchestrator(sdk, config_file)

    with pytest.raises(error_class) as exc_info:
        await orchestrator.execute_bootstrap()

    err = exc_info.value
    assert err.step is step
    assert err.message.startswith(step.prefix_for(err.resource))
    assert isinstance(err.__cause__, FakeFailure)

    # Nothing after the failing step was attempted.
    failing_call_index = max(i for i, call in enumerate(EXPECTED_CALLS) if call in sdk.calls)
    assert sdk.calls == EXPECTED_CALLS[:failing_call_index + 1]
    assert orchestrator.summary.executed_steps[-1] is step

    reporter = orchestrator.health_reporter
    assert reporter.failed_step() is step
    for later in BootstrapStep.ordered()[step.number:]:
        assert reporter.status_of(later) is StepStatus.NOT_RUN

    setup = orchestrator.context.setup
    assert setup is not None
    assert not setup.initialized


@pytest.mark.asyncio
async def test_missing_config_file_fails_step_one(tmp_path, fake_sdk):
    orchestrator = BootstrapOrchestrator(fake_sdk, tmp_path / 'absent.yaml')

    with pytest.raises(ConfigurationError) as exc_info:
        await orchestrator.execute_bootstrap()

    assert exc_info.value.step is BootstrapStep.LOAD_CONFIG
    assert exc_info.value.message.startswith('Initialize the config failed: ')
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)
    assert fake_sdk.calls == []
    assert orchestrator.context.setup is None


@pytest.mark.asyncio
async def test_invalid_network_section_fails_step_one(write_config, network_document, fake_sdk):
    network_document['crypto']['security_level'] = 512
    orchestrator = BootstrapOrchestrator(fake_sdk, write_config(network_document))

    with pytest.raises(ConfigurationError):
        await orchestrator.execute_bootstrap()
    assert fake_sdk.calls == []


@pytest.mark.asyncio
async def test_channel_create_error_names_the_channel(config_file):
    sdk = FakeLedgerSDK(FakeBehaviour(fail_on={'new_channel'}))

    with pytest.raises(ChannelCreationError) as exc_info:
        await BootstrapOrchestrator(sdk, config_file).execute_bootstrap()

    assert exc_info.value.message == 'Create channel (mychannel) failed: new_channel failed'
    assert exc_info.value.resource == 'mychannel'
    assert 'step=4:CREATE_CHANNEL' in str(exc_info.value)


@pytest.mark.asyncio
async def test_missing_channel_artifact_fails_before_submission(write_config, network_document, tmp_path, fake_sdk):
    network_document['bootstrap']['channel_config'] = str(tmp_path / 'missing.tx')

    with pytest.raises(ChannelJoinError) as exc_info:
        await BootstrapOrchestrator(fake_sdk, write_config(network_document)).execute_bootstrap()

    assert isinstance(exc_info.value.__cause__, FileNotFoundError)
    assert 'create_and_join_channel' not in fake_sdk.calls


@pytest.mark.asyncio
async def test_no_event_peer_fails_step_nine(write_config, network_document, fake_sdk):
    for p in network_document['peers']:
        p['event_host'], p['event_port'] = '', 0

    orchestrator = BootstrapOrchestrator(fake_sdk, write_config(network_document))
    with pytest.raises(EventHubNotFoundError) as exc_info:
        await orchestrator.execute_bootstrap()

    assert exc_info.value.step is BootstrapStep.CONNECT_EVENT_HUB
    assert 'event_hub.connect' not in fake_sdk.calls
    assert orchestrator.context.setup.event_hub is None
    assert orchestrator.health_reporter.status_of(BootstrapStep.MARK_READY) is StepStatus.NOT_RUN


@pytest.mark.asyncio
async def test_readiness_refused_while_a_handle_is_missing(config_file, fake_sdk):
    phases = [p for p in default_phases() if not isinstance(p, EventHubPhase)]
    orchestrator = BootstrapOrchestrator(fake_sdk, config_file, phases=phases)

    with pytest.raises(ReadinessError) as exc_info:
        await orchestrator.execute_bootstrap()

    assert exc_info.value.step is BootstrapStep.MARK_READY
    assert 'event_hub' in exc_info.value.message
    assert not orchestrator.context.setup.initialized


@pytest.mark.asyncio
async def test_settings_overrides_take_precedence(config_file, fake_sdk):
    orchestrator = BootstrapOrchestrator(
        fake_sdk, config_file,
        settings_overrides={'channel_id': 'otherchannel', 'chaincode': {'version': 'v2.0.0'}},
    )
    setup = await orchestrator.execute_bootstrap()

    assert setup.channel_id == 'otherchannel'
    assert setup.channel.name == 'otherchannel'
    assert setup.chaincode_version == 'v2.0.0'
    assert setup.chaincode_id == 'heroes-service'


@pytest.mark.asyncio
async def test_deadline_reports_the_running_step(config_file):
    class SlowSDK(FakeLedgerSDK):
        async def create_client(self, config, credentials):
            await asyncio.sleep(5)
            return await super().create_client(config, credentials)

    orchestrator = BootstrapOrchestrator(
        SlowSDK(), config_file, execution_config=BootstrapExecutionConfig(timeout_seconds=0.05)
    )
    with pytest.raises(BootstrapTimeoutError) as exc_info:
        await orchestrator.execute_bootstrap()

    assert exc_info.value.step is BootstrapStep.ENROLL_CLIENT
    assert orchestrator.health_reporter.status_of(BootstrapStep.ENROLL_CLIENT) is StepStatus.FAILED
    assert orchestrator.health_reporter.status_of(BootstrapStep.CREATE_CHANNEL) is StepStatus.NOT_RUN


def test_bootstrap_sync_returns_ready_context(config_file, fake_sdk):
    setup = bootstrap_sync(fake_sdk, config_file)

    assert setup.initialized
    assert fake_sdk.calls == EXPECTED_CALLS


@pytest.mark.asyncio
async def test_health_summary_is_logged_after_failure(config_file, caplog):
    sdk = FakeLedgerSDK(FakeBehaviour(fail_on={'set_user_context'}))

    with caplog.at_level('INFO'):
        with pytest.raises(UserContextError):
            await BootstrapOrchestrator(sdk, config_file).execute_bootstrap()

    assert 'switch_user_context' in caplog.text
    assert 'NOT_RUN' in caplog.text
    assert '✗ Bootstrap failed' in caplog.text
