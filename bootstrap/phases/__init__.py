from typing import List

from .base_phase import BootstrapPhase, PhaseResult
from .channel_phase import ChannelHandlePhase, ChannelJoinPhase, UserContextPhase
from .configuration_phase import ConfigurationPhase, CryptoProviderPhase
from .event_hub_phase import EventHubPhase
from .identity_phase import ClientEnrollmentPhase, OrdererAdminPhase, OrgAdminPhase, PreEnrolledIdentityPhase
from .readiness_phase import ReadinessPhase


def default_phases() -> List[BootstrapPhase]:
    return [
        ConfigurationPhase(),
        CryptoProviderPhase(),
        ClientEnrollmentPhase(),
        ChannelHandlePhase(),
        OrdererAdminPhase(),
        OrgAdminPhase(),
        ChannelJoinPhase(),
        UserContextPhase(),
        EventHubPhase(),
        ReadinessPhase(),
    ]


__all__ = [
    'BootstrapPhase', 'PhaseResult', 'default_phases',
    'ConfigurationPhase', 'CryptoProviderPhase',
    'ClientEnrollmentPhase', 'PreEnrolledIdentityPhase', 'OrdererAdminPhase', 'OrgAdminPhase',
    'ChannelHandlePhase', 'ChannelJoinPhase', 'UserContextPhase',
    'EventHubPhase', 'ReadinessPhase',
]
