# domain/ports/ledger_sdk_port.py
# process [bootstrap phases, chaincode_service]

from __future__ import annotations
from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from domain.chaincode import ChaincodeDescriptor, ProposalOutcome
from domain.identity import EnrollmentCredentials, IdentityMaterial
from domain.network import CryptoConfig, NetworkConfig, PeerDescriptor
from domain.ports.channel_port import ChannelPort
from domain.ports.event_hub_port import EventHubPort


@runtime_checkable
class LedgerClientPort(Protocol):
    """
    A client bound to the network configuration and to an enrolled principal.

    Identities returned by this port are opaque handles; the orchestrator only
    passes them back into the same client.
    """

    @property
    def config(self) -> NetworkConfig: ...

    @property
    def user_context(self) -> Any: ...

    def get_peers_config(self) -> List[PeerDescriptor]:
        """Peer descriptors in configuration order."""
        ...

    async def new_channel(self, channel_id: str) -> ChannelPort:
        """Create an empty channel handle, not yet joined by any peer."""
        ...

    async def get_pre_enrolled_user(self, material: IdentityMaterial) -> Any:
        """Load a signing identity from local keystore/signcerts material."""
        ...

    async def create_and_join_channel(self, orderer_user: Any, org_user: Any,
                                      channel: ChannelPort, channel_config_path: str) -> None:
        """
        Submit the channel creation transaction to the ordering service and
        join the configured peers. Joined peers become visible through
        ``channel.get_peers()``.
        """
        ...

    def set_user_context(self, user: Any) -> None:
        """Switch the identity that signs subsequent proposals."""
        ...

    def new_event_hub(self) -> EventHubPort:
        """Create an event hub bound to this client but not to any peer."""
        ...

    async def install_chaincode(self, channel: ChannelPort, chaincode: ChaincodeDescriptor,
                                peers: Sequence[Any]) -> List[ProposalOutcome]:
        """Package ``chaincode`` and send one install proposal to ``peers``."""
        ...

    async def instantiate_chaincode(self, channel: ChannelPort, chaincode: ChaincodeDescriptor,
                                    peers: Sequence[Any], args: Sequence[str],
                                    endorsement_policy: Optional[Dict[str, Any]] = None) -> List[ProposalOutcome]:
        ...


@runtime_checkable
class LedgerSDKPort(Protocol):
    """Entry point of the ledger client library: crypto provider and client factory."""

    async def init_crypto_provider(self, crypto: CryptoConfig) -> None: ...

    async def create_client(self, config: NetworkConfig, credentials: EnrollmentCredentials) -> LedgerClientPort:
        """Enroll (or load from the credential store) the primary principal and return a client for it."""
        ...
