from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class EventHubPort(Protocol):
    """Subscription to the event stream of a single peer."""

    @property
    def peer_addr(self) -> str: ...

    @property
    def is_connected(self) -> bool: ...

    def set_peer_addr(self, peer_addr: str, certificate: str, server_host_override: str) -> None:
        """Bind the target ``host:port`` and its TLS material. Must precede ``connect``."""
        ...

    async def connect(self) -> None: ...

    async def disconnect(self) -> None: ...
