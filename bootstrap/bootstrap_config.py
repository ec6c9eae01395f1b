# bootstrap/bootstrap_config.py
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from domain.chaincode import ChaincodeDescriptor
from domain.identity import EnrollmentCredentials, IdentityMaterial

DEFAULT_CONFIG_PATH = 'config.yaml'
DEFAULT_CHANNEL_ID = 'mychannel'
DEFAULT_CHANNEL_CONFIG = 'fixtures/channel/mychannel.tx'


def _orderer_admin() -> IdentityMaterial:
    return IdentityMaterial(
        name='ordererAdmin',
        keystore='ordererOrganizations/example.com/users/Admin@example.com/keystore',
        signcerts='ordererOrganizations/example.com/users/Admin@example.com/signcerts',
        msp_id='OrdererMSP',
    )


def _org_admin() -> IdentityMaterial:
    return IdentityMaterial(
        name='peerorg1Admin',
        keystore='peerOrganizations/org1.example.com/users/Admin@org1.example.com/keystore',
        signcerts='peerOrganizations/org1.example.com/users/Admin@org1.example.com/signcerts',
        msp_id='Org1MSP',
    )


class BootstrapSettings(BaseModel):
    """Parameters of one bootstrap run: the ``bootstrap:`` section of the configuration file."""
    model_config = ConfigDict(extra='forbid', validate_assignment=True)

    channel_id: str = Field(default=DEFAULT_CHANNEL_ID, min_length=1)
    channel_config: str = Field(default=DEFAULT_CHANNEL_CONFIG, min_length=1, description='Channel creation transaction produced by configtxgen.')
    enrollment: EnrollmentCredentials = Field(default_factory=EnrollmentCredentials)
    orderer_admin: IdentityMaterial = Field(default_factory=_orderer_admin)
    org_admin: IdentityMaterial = Field(default_factory=_org_admin)
    chaincode: ChaincodeDescriptor = Field(default_factory=ChaincodeDescriptor)


class BootstrapExecutionConfig(BaseModel):
    model_config = ConfigDict(extra='forbid', validate_assignment=True)

    timeout_seconds: Optional[float] = Field(default=None, gt=0.0, le=3600.0, description='Overall deadline for the bootstrap run; None waits indefinitely.')
    log_summary: bool = Field(default=True, description='Log the per-step execution summary at the end of a run.')
