from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from tests.fakes import FakeLedgerSDK


def peer(name: str, port: int, event_host: str = '', event_port: int = 0) -> Dict[str, Any]:
    return {
        'name': name,
        'host': 'localhost',
        'port': port,
        'event_host': event_host,
        'event_port': event_port,
        'tls': {'certificate': f'tls/{name}.pem', 'server_host_override': name},
    }


@pytest.fixture
def channel_tx(tmp_path: Path) -> Path:
    path = tmp_path / 'mychannel.tx'
    path.write_bytes(b'\n\x00channel-create')
    return path


@pytest.fixture
def network_document(tmp_path: Path, channel_tx: Path) -> Dict[str, Any]:
    return {
        'client': {
            'organization': 'org1',
            'msp_id': 'Org1MSP',
            'crypto_config_path': str(tmp_path / 'crypto-config'),
            'ca_url': 'https://localhost:7054',
        },
        'crypto': {'provider': 'SW', 'security_level': 256, 'hash_algorithm': 'SHA2'},
        'orderers': [{'name': 'orderer.example.com', 'host': 'localhost', 'port': 7050}],
        'peers': [
            peer('p0', 7051),
            peer('p1', 8051, 'h1', 7053),
            peer('p2', 9051, 'h2', 7053),
        ],
        'bootstrap': {
            'channel_id': 'mychannel',
            'channel_config': str(channel_tx),
            'chaincode': {'id': 'heroes-service', 'version': 'v1.0.0'},
        },
    }


@pytest.fixture
def write_config(tmp_path: Path):
    def _write(document: Dict[str, Any], name: str = 'config.yaml') -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(document, sort_keys=False), encoding='utf-8')
        return path
    return _write


@pytest.fixture
def config_file(write_config, network_document) -> Path:
    return write_config(network_document)


@pytest.fixture
def fake_sdk() -> FakeLedgerSDK:
    return FakeLedgerSDK()
