from .orchestrator import BootstrapOrchestrator, bootstrap_network, bootstrap_sync
from .phase_executor import BootstrapPhaseExecutor, PhaseExecutionResult, PhaseExecutionSummary, execute_bootstrap_phases

__all__ = [
    'BootstrapOrchestrator', 'bootstrap_network', 'bootstrap_sync',
    'BootstrapPhaseExecutor', 'PhaseExecutionResult', 'PhaseExecutionSummary', 'execute_bootstrap_phases',
]
