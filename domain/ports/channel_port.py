from __future__ import annotations
from typing import Any, List, Protocol, runtime_checkable


@runtime_checkable
class ChannelPort(Protocol):
    """In-memory handle on a ledger channel."""

    @property
    def name(self) -> str: ...

    def get_peers(self) -> List[Any]:
        """Peers joined to the channel; empty until the join succeeded."""
        ...
