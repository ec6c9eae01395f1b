# infrastructure/fabric/sdk_adapter.py
"""
Adapter from the ledger ports to fabric-sdk-py (``hfc``).

The hfc ``Client`` is created empty: peers and orderers come from our own
``NetworkConfig`` and are passed to hfc calls as ``Peer``/``Orderer``
instances rather than looked up from an hfc connection profile.
"""
from __future__ import annotations
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

from hfc.fabric import Client
from hfc.fabric.channel.channel import Channel
from hfc.fabric.orderer import Orderer
from hfc.fabric.peer import Peer
from hfc.fabric.user import User, create_user
from hfc.fabric_ca.caservice import ca_service
from hfc.util.crypto.crypto import CURVE_P_256_Size, CURVE_P_384_Size, SHA2, SHA3, ecies
from hfc.util.keyvaluestore import FileKeyValueStore

from domain.chaincode import SUCCESS_STATUS, ChaincodeDescriptor, ProposalOutcome
from domain.identity import EnrollmentCredentials, IdentityMaterial
from domain.network import CryptoConfig, NetworkConfig, OrdererDescriptor, PeerDescriptor
from infrastructure.fabric.event_hub import HfcEventHub

logger = logging.getLogger(__name__)

_CURVES = {256: CURVE_P_256_Size, 384: CURVE_P_384_Size}
_HASHES = {'SHA2': SHA2, 'SHA3': SHA3}


def _grpc_opts(server_host_override: str):
    if not server_host_override:
        return None
    return (('grpc.ssl_target_name_override', server_host_override),)


def build_peer(descriptor: PeerDescriptor) -> Peer:
    return Peer(
        name=descriptor.name,
        endpoint=descriptor.address,
        tls_ca_cert_file=descriptor.tls.certificate or None,
        opts=_grpc_opts(descriptor.tls.server_host_override),
    )


def build_orderer(descriptor: OrdererDescriptor) -> Orderer:
    return Orderer(
        name=descriptor.name,
        endpoint=descriptor.address,
        tls_ca_cert_file=descriptor.tls.certificate or None,
        opts=_grpc_opts(descriptor.tls.server_host_override),
    )


@contextmanager
def chaincode_runtime_path(runtime_path: str) -> Iterator[None]:
    """
    hfc packages Go chaincode relative to ``GOPATH``; expose the configured path for the call only.

    ``GOPATH`` is process-wide and stays set across the awaited install, which
    relies on the single sequential caller of a bootstrap run.
    """
    if not runtime_path:
        yield
        return
    previous = os.environ.get('GOPATH')
    os.environ['GOPATH'] = runtime_path
    try:
        yield
    finally:
        if previous is None:
            os.environ.pop('GOPATH', None)
        else:
            os.environ['GOPATH'] = previous


class HfcChannelHandle:
    """Channel handle; peers are added once they joined."""

    def __init__(self, channel: Channel):
        self.channel = channel

    @property
    def name(self) -> str:
        return self.channel.name

    def get_peers(self) -> List[Any]:
        return list(self.channel.peers.values())


class HfcLedgerClient:

    def __init__(self, client: Client, config: NetworkConfig, user: User, crypto_suite: Any,
                 state_store: FileKeyValueStore):
        self._client = client
        self._config = config
        self._user = user
        self._crypto_suite = crypto_suite
        self._state_store = state_store
        self._channel: Optional[HfcChannelHandle] = None

    @property
    def config(self) -> NetworkConfig:
        return self._config

    @property
    def user_context(self) -> User:
        return self._user

    @property
    def hfc_client(self) -> Client:
        return self._client

    def hfc_channel(self) -> Channel:
        if self._channel is None:
            raise RuntimeError('no channel has been created on this client')
        return self._channel.channel

    def get_peers_config(self) -> List[PeerDescriptor]:
        return self._config.get_peers_config()

    async def new_channel(self, channel_id: str) -> HfcChannelHandle:
        # Not registered on the hfc client: channel_create refuses names it already knows.
        self._channel = HfcChannelHandle(Channel(channel_id, self._client))
        return self._channel

    async def get_pre_enrolled_user(self, material: IdentityMaterial) -> User:
        msp_id = material.msp_id or self._config.client.msp_id
        return create_user(
            name=material.name,
            org=self._config.client.organization,
            state_store=self._state_store,
            msp_id=msp_id,
            key_path=str(material.private_key_file()),
            cert_path=str(material.certificate_file()),
            crypto_suite=self._crypto_suite,
        )

    async def create_and_join_channel(self, orderer_user: Any, org_user: Any,
                                      channel: HfcChannelHandle, channel_config_path: str) -> None:
        descriptor = self._config.primary_orderer()
        if descriptor is None:
            raise RuntimeError('no orderer configured')
        orderer = build_orderer(descriptor)

        created = await self._client.channel_create(
            orderer, channel.name, orderer_user, config_tx=str(Path(channel_config_path).resolve())
        )
        if not created:
            raise RuntimeError(f'channel {channel.name} was not created by {descriptor.name}')

        peers = [build_peer(p) for p in self._config.peers]
        responses = await self._client.channel_join(
            requestor=org_user, channel_name=channel.name, peers=peers, orderer=orderer
        )
        if responses is False or isinstance(responses, str):
            raise RuntimeError(f'peers failed to join {channel.name}: {responses}')

        channel.channel.add_orderer(orderer)
        for peer in peers:
            channel.channel.add_peer(peer)
        logger.info(f'{len(peers)} peer(s) joined channel {channel.name}')

    def set_user_context(self, user: Any) -> None:
        if user is None:
            raise ValueError('user context cannot be None')
        self._user = user

    def new_event_hub(self) -> HfcEventHub:
        return HfcEventHub(self)

    async def install_chaincode(self, channel: HfcChannelHandle, chaincode: ChaincodeDescriptor,
                                peers: Sequence[Any]) -> List[ProposalOutcome]:
        if chaincode.language != 'GOLANG':
            raise ValueError(f'{chaincode.language} chaincode cannot be packaged by this client, only GOLANG')
        with chaincode_runtime_path(chaincode.runtime_path):
            responses = await self._client.chaincode_install(
                requestor=self._user,
                peers=list(peers),
                cc_path=chaincode.path,
                cc_name=chaincode.id,
                cc_version=chaincode.version,
            )
        return self._outcomes(peers, responses)

    async def instantiate_chaincode(self, channel: HfcChannelHandle, chaincode: ChaincodeDescriptor,
                                    peers: Sequence[Any], args: Sequence[str],
                                    endorsement_policy: Optional[Dict[str, Any]] = None) -> List[ProposalOutcome]:
        await self._client.chaincode_instantiate(
            requestor=self._user,
            channel_name=channel.name,
            peers=list(peers),
            args=list(args),
            cc_name=chaincode.id,
            cc_version=chaincode.version,
            cc_endorsement_policy=endorsement_policy,
            wait_for_event=True,
        )
        # hfc raises on any rejected endorsement, so reaching here means every peer endorsed.
        return [ProposalOutcome(peer=getattr(p, 'name', str(p)), status=SUCCESS_STATUS) for p in peers]

    @staticmethod
    def _outcomes(peers: Sequence[Any], responses: Any) -> List[ProposalOutcome]:
        outcomes = []
        for peer, response in zip(peers, responses or []):
            status = getattr(getattr(response, 'response', None), 'status', 0)
            message = getattr(getattr(response, 'response', None), 'message', '')
            outcomes.append(ProposalOutcome(peer=getattr(peer, 'name', str(peer)), status=status, message=message))
        if len(outcomes) < len(peers):
            for peer in list(peers)[len(outcomes):]:
                outcomes.append(ProposalOutcome(peer=getattr(peer, 'name', str(peer)), status=0, message='no response'))
        return outcomes


class HfcLedgerSDK:
    """Crypto provider and client factory backed by fabric-sdk-py."""

    def __init__(self):
        self.crypto_suite: Optional[Any] = None

    async def init_crypto_provider(self, crypto: CryptoConfig) -> None:
        self.crypto_suite = ecies(_CURVES[crypto.security_level], _HASHES[crypto.hash_algorithm])
        logger.debug(f'ecies crypto suite created (P-{crypto.security_level}, {crypto.hash_algorithm})')

    async def create_client(self, config: NetworkConfig, credentials: EnrollmentCredentials) -> HfcLedgerClient:
        if self.crypto_suite is None:
            raise RuntimeError('crypto provider not initialized')

        state_store = FileKeyValueStore(credentials.store_path)
        user = User(credentials.name, config.client.organization, state_store)
        if user.enrollment is None:
            if not config.client.ca_url:
                raise RuntimeError(f"'{credentials.name}' is not in {credentials.store_path} and no CA url is configured")
            casvc = ca_service(
                target=config.client.ca_url,
                ca_certs_path=config.client.ca_tls_certificate or None,
                crypto=self.crypto_suite,
                ca_name=config.client.ca_name,
            )
            user.enrollment = casvc.enroll(credentials.name, credentials.secret)
            user.msp_id = config.client.msp_id
            user.cryptoSuite = self.crypto_suite
            logger.info(f"Enrolled '{credentials.name}' against {config.client.ca_url}")
        else:
            logger.info(f"Loaded '{credentials.name}' from {credentials.store_path}")

        return HfcLedgerClient(Client(), config, user, self.crypto_suite, state_store)
