# bootstrap/steps.py
from __future__ import annotations
from enum import Enum
from typing import Type

from bootstrap import exceptions as exc


class BootstrapStep(Enum):
    """The ten steps of a bootstrap run, in execution order."""

    LOAD_CONFIG = (1, 'Initialize the config failed', exc.ConfigurationError)
    INIT_CRYPTO = (2, 'Failed getting ephemeral software-based crypto provider', exc.CryptoProviderError)
    ENROLL_CLIENT = (3, 'Create client failed', exc.IdentityResolutionError)
    CREATE_CHANNEL = (4, 'Create channel ({resource}) failed', exc.ChannelCreationError)
    RESOLVE_ORDERER_ADMIN = (5, 'Unable to get the orderer user', exc.IdentityResolutionError)
    RESOLVE_ORG_ADMIN = (6, 'Unable to get the organisation user', exc.IdentityResolutionError)
    CREATE_AND_JOIN_CHANNEL = (7, 'CreateAndJoinChannel returned error', exc.ChannelJoinError)
    SWITCH_USER_CONTEXT = (8, 'Failed to switch the client user context', exc.UserContextError)
    CONNECT_EVENT_HUB = (9, 'Failed eventHub.Connect()', exc.EventHubConnectError)
    MARK_READY = (10, 'Setup context could not be marked ready', exc.ReadinessError)

    def __init__(self, number: int, failure_prefix: str, error_class: Type[exc.BootstrapError]):
        self.number = number
        self.failure_prefix = failure_prefix
        self.error_class = error_class

    @property
    def label(self) -> str:
        return self.name.lower()

    def prefix_for(self, resource: str | None = None) -> str:
        return self.failure_prefix.format(resource=resource or '')

    def wrap(self, cause: object, resource: str | None = None) -> exc.BootstrapError:
        """Build this step's error for ``cause``; the caller chains it with ``raise ... from``."""
        return self.error_class(f'{self.prefix_for(resource)}: {cause}', step=self, resource=resource)

    @classmethod
    def ordered(cls) -> list['BootstrapStep']:
        return sorted(cls, key=lambda s: s.number)
