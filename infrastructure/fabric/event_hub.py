# infrastructure/fabric/event_hub.py
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Optional

from hfc.fabric.peer import create_peer

if TYPE_CHECKING:
    from infrastructure.fabric.sdk_adapter import HfcLedgerClient

logger = logging.getLogger(__name__)


class HfcEventHub:
    """
    Event hub over the deliver service of one peer.

    The hub is created unbound; ``set_peer_addr`` picks the peer and
    ``connect`` opens the filtered block stream signed by the client's
    current user context.
    """

    def __init__(self, client: 'HfcLedgerClient'):
        self._client = client
        self._peer_addr = ''
        self._certificate = ''
        self._server_host_override = ''
        self._hub: Optional[Any] = None
        self._stream: Optional[Any] = None

    @property
    def peer_addr(self) -> str:
        return self._peer_addr

    @property
    def is_connected(self) -> bool:
        return self._stream is not None

    @property
    def stream(self) -> Optional[Any]:
        return self._stream

    def set_peer_addr(self, peer_addr: str, certificate: str, server_host_override: str) -> None:
        self._peer_addr = peer_addr
        self._certificate = certificate
        self._server_host_override = server_host_override

    async def connect(self) -> None:
        if not self._peer_addr:
            raise RuntimeError('event hub has no peer address')
        if self.is_connected:
            return

        opts = None
        if self._server_host_override:
            opts = (('grpc.ssl_target_name_override', self._server_host_override),)
        peer = create_peer(endpoint=self._peer_addr, tls_cacerts=self._certificate or None, opts=opts)

        channel = self._client.hfc_channel()
        self._hub = channel.newChannelEventHub(peer, self._client.user_context)
        self._stream = self._hub.connect(filtered=True)
        logger.debug(f'Event stream opened on {self._peer_addr} for channel {channel.name}')

    async def disconnect(self) -> None:
        if self._hub is not None:
            self._hub.disconnect()
        self._hub = None
        self._stream = None
