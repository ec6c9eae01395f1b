# application/services/event_hub_selector.py
"""
Selection of the peer whose event service feeds the event hub.

Peers are scanned in configuration order and the first one with both an
event host and a non-zero event port wins; later peers are never looked at.
"""
from __future__ import annotations
import logging
from typing import Optional

from bootstrap.exceptions import EventHubConnectError, EventHubNotFoundError
from domain.network import PeerDescriptor
from domain.ports.event_hub_port import EventHubPort
from domain.ports.ledger_sdk_port import LedgerClientPort

logger = logging.getLogger(__name__)

NO_EVENT_HUB_MESSAGE = 'No EventHub configuration found'


def find_event_peer(peers: list[PeerDescriptor]) -> Optional[PeerDescriptor]:
    for peer in peers:
        if peer.has_event_service:
            return peer
    return None


def select_event_hub(client: LedgerClientPort) -> EventHubPort:
    """Return an event hub bound to the first event-capable peer. The hub is not connected."""
    event_hub = client.new_event_hub()
    peers = client.get_peers_config()

    selected = find_event_peer(peers)
    if selected is None:
        logger.error(f'{NO_EVENT_HUB_MESSAGE} among {len(peers)} peer(s)')
        raise EventHubNotFoundError(NO_EVENT_HUB_MESSAGE)

    logger.info(f'EventHub connect to peer ({selected.event_host}:{selected.event_port})')
    event_hub.set_peer_addr(selected.event_address, selected.tls.certificate, selected.tls.server_host_override)
    return event_hub


async def connect_event_hub(client: LedgerClientPort) -> EventHubPort:
    event_hub = select_event_hub(client)
    try:
        await event_hub.connect()
    except Exception as e:
        raise EventHubConnectError(f'Failed eventHub.Connect() [{e}]', resource=event_hub.peer_addr) from e
    logger.info(f'✓ EventHub connected to {event_hub.peer_addr}')
    return event_hub
