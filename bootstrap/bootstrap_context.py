from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from bootstrap.bootstrap_config import BootstrapSettings
from bootstrap.health.reporter import BootstrapHealthReporter
from bootstrap.setup_context import SetupContext
from configs.config_loader import ConfigLoader
from domain.network import NetworkConfig
from domain.ports.ledger_sdk_port import LedgerClientPort, LedgerSDKPort


@dataclass
class BootstrapContext:
    """Shared state of one bootstrap run. Each phase reads what earlier phases produced."""
    run_id: str
    config_path: Path
    sdk: LedgerSDKPort
    config_loader: ConfigLoader
    health_reporter: BootstrapHealthReporter
    settings_overrides: Dict[str, Any] = field(default_factory=dict)
    settings: Optional[BootstrapSettings] = None
    network_config: Optional[NetworkConfig] = None
    orderer_admin: Any = None
    org_admin: Any = None
    setup: Optional[SetupContext] = None

    @property
    def client(self) -> Optional[LedgerClientPort]:
        return self.setup.client if self.setup is not None else None

    def require(self, attr: str) -> Any:
        value = getattr(self, attr)
        if value is None:
            raise RuntimeError(f"BootstrapContext missing required attribute: {attr}")
        return value

    def require_setup(self, attr: str) -> Any:
        setup = self.require('setup')
        value = getattr(setup, attr)
        if value is None:
            raise RuntimeError(f"SetupContext missing required attribute: {attr}")
        return value
