# domain/network.py
from __future__ import annotations
from typing import List, Literal, Optional, Sequence
from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__: Sequence[str] = (
    'TLSOptions',
    'PeerDescriptor',
    'OrdererDescriptor',
    'CryptoConfig',
    'ClientConfig',
    'NetworkConfig',
)


class TLSOptions(BaseModel):
    model_config = ConfigDict(extra='forbid', frozen=True)

    certificate: str = Field(default='', description='Path to the PEM encoded TLS CA certificate of the node.')
    server_host_override: str = Field(default='', description='Hostname expected in the server certificate (SNI override).')


class PeerDescriptor(BaseModel):
    """Configuration record for one peer. Event host/port are empty when the peer has no event service."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    name: str = Field(..., min_length=1)
    host: str = Field(..., min_length=1)
    port: int = Field(..., ge=1, le=65535)
    event_host: str = Field(default='', description='Host of the event service, empty if none.')
    event_port: int = Field(default=0, ge=0, le=65535, description='Port of the event service, 0 if none.')
    tls: TLSOptions = Field(default_factory=TLSOptions)

    @property
    def address(self) -> str:
        return f'{self.host}:{self.port}'

    @property
    def has_event_service(self) -> bool:
        return bool(self.event_host) and self.event_port != 0

    @property
    def event_address(self) -> str:
        return f'{self.event_host}:{self.event_port}'


class OrdererDescriptor(BaseModel):
    model_config = ConfigDict(extra='forbid', frozen=True)

    name: str = Field(..., min_length=1)
    host: str = Field(..., min_length=1)
    port: int = Field(..., ge=1, le=65535)
    tls: TLSOptions = Field(default_factory=TLSOptions)

    @property
    def address(self) -> str:
        return f'{self.host}:{self.port}'


class CryptoConfig(BaseModel):
    """Options for the cryptographic service provider."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    provider: Literal['SW'] = Field(default='SW', description='Software based provider; hardware modules are not supported.')
    security_level: Literal[256, 384] = Field(default=256, description='Elliptic curve size in bits.')
    hash_algorithm: Literal['SHA2', 'SHA3'] = Field(default='SHA2')
    ephemeral: bool = Field(default=True, description='Keep generated keys in memory only.')


class ClientConfig(BaseModel):
    model_config = ConfigDict(extra='forbid', frozen=True)

    organization: str = Field(default='org1')
    msp_id: str = Field(default='Org1MSP')
    crypto_config_path: str = Field(default='fixtures/crypto-config', description='Root directory of the local MSP material.')
    ca_url: str = Field(default='', description='Fabric CA endpoint used for enrollment.')
    ca_tls_certificate: str = Field(default='')
    ca_name: str = Field(default='')


class NetworkConfig(BaseModel):
    """Validated view of the network configuration file. Peer and orderer order is the file order."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    client: ClientConfig = Field(default_factory=ClientConfig)
    crypto: CryptoConfig = Field(default_factory=CryptoConfig)
    peers: List[PeerDescriptor] = Field(default_factory=list)
    orderers: List[OrdererDescriptor] = Field(default_factory=list)

    @field_validator('peers', 'orderers')
    @classmethod
    def _unique_names(cls, v: list) -> list:
        names = [item.name for item in v]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f'duplicate node names: {duplicates}')
        return v

    def get_peers_config(self) -> List[PeerDescriptor]:
        return list(self.peers)

    def get_peer(self, name: str) -> Optional[PeerDescriptor]:
        return next((p for p in self.peers if p.name == name), None)

    def primary_orderer(self) -> Optional[OrdererDescriptor]:
        return self.orderers[0] if self.orderers else None
