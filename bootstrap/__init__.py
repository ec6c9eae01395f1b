# bootstrap/__init__.py
from __future__ import annotations

from .exceptions import *
from .steps import BootstrapStep
from .setup_context import SetupContext
from .bootstrap_config import BootstrapExecutionConfig, BootstrapSettings, DEFAULT_CONFIG_PATH
from .bootstrap_context import BootstrapContext
from .health.reporter import BootstrapHealthReporter, StepStatus
from .core.orchestrator import BootstrapOrchestrator, bootstrap_network, bootstrap_sync
from .core.phase_executor import BootstrapPhaseExecutor, PhaseExecutionResult, PhaseExecutionSummary

__version__ = '0.3.0'
__description__ = 'Fabric network bootstrap - client, channel, event hub and chaincode setup'

__all__ = [
    'bootstrap_network', 'bootstrap_sync',
    'BootstrapOrchestrator', 'BootstrapPhaseExecutor', 'PhaseExecutionResult', 'PhaseExecutionSummary',
    'BootstrapContext', 'BootstrapSettings', 'BootstrapExecutionConfig', 'DEFAULT_CONFIG_PATH',
    'BootstrapStep', 'SetupContext', 'BootstrapHealthReporter', 'StepStatus',
    'BootstrapError', 'ConfigurationError', 'CryptoProviderError', 'IdentityResolutionError',
    'ChannelCreationError', 'ChannelJoinError', 'UserContextError', 'EventHubNotFoundError',
    'EventHubConnectError', 'ReadinessError', 'BootstrapTimeoutError', 'SetupNotReadyError',
    'ChaincodeError', 'ChaincodeInstallError', 'ChaincodeInstantiateError',
    '__version__', '__description__',
]
