# bootstrap/core/orchestrator.py
from __future__ import annotations
import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from bootstrap.bootstrap_config import DEFAULT_CONFIG_PATH, BootstrapExecutionConfig, BootstrapSettings
from bootstrap.bootstrap_context import BootstrapContext
from bootstrap.core.phase_executor import BootstrapPhaseExecutor, PhaseExecutionSummary
from bootstrap.exceptions import BootstrapError, BootstrapTimeoutError
from bootstrap.health.reporter import BootstrapHealthReporter
from bootstrap.phases import BootstrapPhase, default_phases
from bootstrap.setup_context import SetupContext
from configs.config_loader import ConfigLoader
from domain.ports.ledger_sdk_port import LedgerSDKPort

logger = logging.getLogger(__name__)


class BootstrapOrchestrator:
    """
    Turns a fresh SDK into a ready ``SetupContext``.

    ``execute_bootstrap`` either returns a ready context or raises the
    ``BootstrapError`` of the failed step. The health reporter and the phase
    summary of the last run stay available afterwards in both cases.
    """

    def __init__(self, sdk: LedgerSDKPort, config_path: Union[str, Path] = DEFAULT_CONFIG_PATH,
                 settings: Optional[BootstrapSettings] = None,
                 settings_overrides: Optional[Dict[str, Any]] = None,
                 config_loader: Optional[ConfigLoader] = None,
                 execution_config: Optional[BootstrapExecutionConfig] = None,
                 phases: Optional[List[BootstrapPhase]] = None):
        self.sdk = sdk
        self.config_path = Path(config_path)
        self.settings = settings
        self.settings_overrides = settings_overrides or {}
        self.config_loader = config_loader or ConfigLoader()
        self.execution_config = execution_config or BootstrapExecutionConfig()
        self._phases = phases
        self.run_id = f"bootstrap_run_{datetime.now(timezone.utc).strftime('%Y%m%d%H%M%S%f')}"
        self.health_reporter = BootstrapHealthReporter(self.run_id)
        self.context: Optional[BootstrapContext] = None
        self.summary: Optional[PhaseExecutionSummary] = None

    async def execute_bootstrap(self) -> SetupContext:
        logger.info('=== Fabric Network Bootstrap Starting ===')
        logger.info(f'Run ID: {self.run_id}')
        logger.info(f'Config Path: {self.config_path}')

        self.context = BootstrapContext(
            run_id=self.run_id,
            config_path=self.config_path,
            sdk=self.sdk,
            config_loader=self.config_loader,
            health_reporter=self.health_reporter,
            settings_overrides=dict(self.settings_overrides),
            settings=self.settings,
        )
        executor = BootstrapPhaseExecutor(self.context)
        phases = self._phases if self._phases is not None else default_phases()

        try:
            await self._run(executor, phases)
        except BootstrapError as e:
            logger.error(f'✗ Bootstrap failed: {e}')
            raise
        finally:
            self.summary = executor.summary
            if self.execution_config.log_summary:
                logger.info(self.health_reporter.generate_summary())

        setup = self.context.setup
        logger.info(f'✓ Bootstrap complete. Run ID: {self.run_id}. Channel: {setup.channel_id}')
        return setup

    async def _run(self, executor: BootstrapPhaseExecutor, phases: List[BootstrapPhase]) -> None:
        timeout = self.execution_config.timeout_seconds
        if timeout is None:
            await executor.execute_phases(phases)
            return

        try:
            await asyncio.wait_for(executor.execute_phases(phases), timeout=timeout)
        except asyncio.TimeoutError as e:
            step = self.health_reporter.running_step()
            error = BootstrapTimeoutError(f'Bootstrap timed out after {timeout}s', step=step)
            if step is not None:
                self.health_reporter.step_failed(step, str(error))
            raise error from e


async def bootstrap_network(sdk: LedgerSDKPort, config_path: Union[str, Path] = DEFAULT_CONFIG_PATH,
                            **kwargs: Any) -> SetupContext:
    """Run the full bootstrap sequence and return the ready setup context."""
    orchestrator = BootstrapOrchestrator(sdk, config_path, **kwargs)
    return await orchestrator.execute_bootstrap()


def bootstrap_sync(sdk: LedgerSDKPort, config_path: Union[str, Path] = DEFAULT_CONFIG_PATH,
                   **kwargs: Any) -> SetupContext:
    """Blocking variant of ``bootstrap_network`` for callers without an event loop."""
    return asyncio.run(bootstrap_network(sdk, config_path, **kwargs))
