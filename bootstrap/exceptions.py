"""
Exception classes for the network bootstrap orchestrator.

Every failure of a bootstrap run is fatal and is reported as a subclass of
``BootstrapError`` carrying the step that produced it and, where known, the
resource (channel, peer, identity, chaincode) it was acting on.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from bootstrap.steps import BootstrapStep
    from domain.chaincode import ProposalOutcome


class BootstrapError(RuntimeError):
    """
    Base exception for all bootstrap-related errors.

    ``step`` identifies the failed step of the sequence; ``resource`` names the
    channel, peer, identity or chaincode involved.
    """

    def __init__(self, message: str, step: Optional['BootstrapStep'] = None, resource: Optional[str] = None):
        super().__init__(message)
        self.step = step
        self.resource = resource

    @property
    def message(self) -> str:
        return super().__str__()

    def __str__(self) -> str:
        base_msg = super().__str__()

        context_parts = []
        if self.step is not None:
            context_parts.append(f'step={self.step.number}:{self.step.name}')
        if self.resource:
            context_parts.append(f'resource={self.resource}')

        if context_parts:
            return f"{base_msg} ({', '.join(context_parts)})"
        return base_msg


class ConfigurationError(BootstrapError):
    """Raised when the configuration file cannot be read, parsed or validated."""


class CryptoProviderError(BootstrapError):
    """Raised when the cryptographic service provider cannot be initialized."""


class IdentityResolutionError(BootstrapError):
    """
    Raised when a signing identity cannot be obtained.

    Covers enrollment of the primary client against the CA as well as the
    lookup of pre-enrolled admin identities from local MSP material.
    """


class ChannelCreationError(BootstrapError):
    """Raised when the in-memory channel handle cannot be created."""


class ChannelJoinError(BootstrapError):
    """
    Raised when the channel creation transaction or the peer join fails.

    Identities resolved before the failure stay enrolled and a channel may be
    partially created; nothing is rolled back.
    """


class UserContextError(BootstrapError):
    """Raised when the client cannot switch to the organisation admin identity."""


class EventHubNotFoundError(BootstrapError):
    """Raised when no configured peer exposes an event service."""


class EventHubConnectError(BootstrapError):
    """Raised when the event hub of the selected peer cannot be connected."""


class ReadinessError(BootstrapError):
    """Raised when the setup context cannot be marked ready because a handle is missing."""


class BootstrapTimeoutError(BootstrapError):
    """Raised when a caller-imposed deadline expires while a step is running."""


class SetupNotReadyError(BootstrapError):
    """Raised when an operation needs a ready setup context and gets one that is not."""


class ChaincodeError(BootstrapError):
    """
    Base class for chaincode deployment failures.

    ``outcomes`` holds the per-peer responses when the SDK returned any.
    """

    def __init__(self, message: str, resource: Optional[str] = None,
                 outcomes: Optional[List['ProposalOutcome']] = None):
        super().__init__(message, resource=resource)
        self.outcomes = list(outcomes or [])

    @property
    def failed_peers(self) -> List[str]:
        return [o.peer for o in self.outcomes if not o.success]


class ChaincodeInstallError(ChaincodeError):
    """Raised when the install proposal fails for the peer set."""


class ChaincodeInstantiateError(ChaincodeError):
    """Raised when the instantiate proposal fails for the peer set."""


__all__ = [
    'BootstrapError',
    'ConfigurationError',
    'CryptoProviderError',
    'IdentityResolutionError',
    'ChannelCreationError',
    'ChannelJoinError',
    'UserContextError',
    'EventHubNotFoundError',
    'EventHubConnectError',
    'ReadinessError',
    'BootstrapTimeoutError',
    'SetupNotReadyError',
    'ChaincodeError',
    'ChaincodeInstallError',
    'ChaincodeInstantiateError',
]
