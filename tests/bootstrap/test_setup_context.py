import pytest

from bootstrap.exceptions import ReadinessError, SetupNotReadyError
from bootstrap.setup_context import SetupContext
from tests.fakes import FakeChannel, FakeEventHub


def _context(**handles) -> SetupContext:
    return SetupContext(channel_id='mychannel', channel_config='fixtures/channel/mychannel.tx', **handles)


def test_new_context_is_not_ready():
    setup = _context()
    assert not setup.initialized
    assert setup.missing_handles() == ['client', 'channel', 'event_hub']
    assert setup.chaincode_id == 'heroes-service'


@pytest.mark.parametrize('missing', ['client', 'channel', 'event_hub'])
def test_mark_ready_refuses_missing_handle(missing):
    handles = {'client': object(), 'channel': FakeChannel('mychannel'), 'event_hub': FakeEventHub([])}
    handles[missing] = None
    setup = _context(**handles)

    with pytest.raises(ReadinessError, match=missing):
        setup.mark_ready()
    assert not setup.initialized


def test_mark_ready_is_sticky():
    setup = _context(client=object(), channel=FakeChannel('mychannel'), event_hub=FakeEventHub([]))
    setup.mark_ready()
    setup.mark_ready()
    assert setup.initialized
    setup.require_ready('noop')


def test_require_ready_raises_on_fresh_context():
    with pytest.raises(SetupNotReadyError, match='Chaincode install'):
        _context().require_ready('Chaincode install')


@pytest.mark.asyncio
async def test_close_disconnects_event_hub_and_keeps_flag():
    calls = []
    hub = FakeEventHub(calls)
    await hub.connect()
    setup = _context(client=object(), channel=FakeChannel('mychannel'), event_hub=hub)
    setup.mark_ready()

    await setup.close()

    assert not hub.is_connected
    assert calls == ['event_hub.connect', 'event_hub.disconnect']
    assert setup.initialized


@pytest.mark.asyncio
async def test_close_without_connected_hub_is_a_noop():
    calls = []
    setup = _context(event_hub=FakeEventHub(calls))
    await setup.close()
    assert calls == []
