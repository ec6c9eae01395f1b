# bootstrap/setup_context.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Optional

from bootstrap.exceptions import ReadinessError, SetupNotReadyError
from domain.chaincode import ChaincodeDescriptor
from domain.ports.channel_port import ChannelPort
from domain.ports.event_hub_port import EventHubPort
from domain.ports.ledger_sdk_port import LedgerClientPort

logger = logging.getLogger(__name__)


@dataclass
class SetupContext:
    """
    Result of a bootstrap run: client, channel, event hub and chaincode descriptor.

    ``initialized`` is False until every bootstrap step succeeded. Once set it
    is never cleared, and all handles are guaranteed to be present. The
    context is built by a single caller and should be treated as read-only
    once ready.
    """
    channel_id: str
    channel_config: str
    chaincode: ChaincodeDescriptor = field(default_factory=ChaincodeDescriptor)
    client: Optional[LedgerClientPort] = None
    channel: Optional[ChannelPort] = None
    event_hub: Optional[EventHubPort] = None
    _initialized: bool = field(default=False, init=False, repr=False)

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def chaincode_id(self) -> str:
        return self.chaincode.id

    @property
    def chaincode_version(self) -> str:
        return self.chaincode.version

    @property
    def chaincode_path(self) -> str:
        return self.chaincode.path

    @property
    def chaincode_runtime_path(self) -> str:
        return self.chaincode.runtime_path

    def missing_handles(self) -> list[str]:
        return [name for name in ('client', 'channel', 'event_hub') if getattr(self, name) is None]

    def mark_ready(self) -> None:
        missing = self.missing_handles()
        if missing:
            raise ReadinessError(f'missing handles: {", ".join(missing)}', resource=self.channel_id)
        if not self._initialized:
            self._initialized = True
            logger.info(f'Setup context ready for channel {self.channel_id}')

    def require_ready(self, operation: str) -> None:
        if not self._initialized:
            raise SetupNotReadyError(f'{operation} requires a ready setup context', resource=self.channel_id)

    async def close(self) -> None:
        """Disconnect the event hub. The readiness flag reflects bootstrap completion and is left as is."""
        if self.event_hub is not None and self.event_hub.is_connected:
            await self.event_hub.disconnect()
            logger.info(f'Event hub {self.event_hub.peer_addr} disconnected')
