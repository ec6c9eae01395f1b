# configs/config_loader.py
from __future__ import annotations
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from configs.config_utils import ConfigMerger
from domain.network import NetworkConfig

logger = logging.getLogger(__name__)

_DEFAULT_VAR_PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*):-(.*?)\}')
BOOTSTRAP_SECTION = 'bootstrap'


class ConfigLoader:
    """
    Reads the network configuration file.

    The file is YAML. String values may reference environment variables as
    ``$VAR``, ``${VAR}`` or ``${VAR:-default}``; they are expanded before
    validation. Loading has no side effects, so the same file always yields
    an equal ``NetworkConfig``.
    """

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        self._environ = environ

    async def load_network_config(self, path: Union[str, Path]) -> NetworkConfig:
        document = self.read_document(path)
        return self.parse_network_config(document, source=str(path))

    def read_document(self, path: Union[str, Path]) -> Dict[str, Any]:
        config_path = Path(path).expanduser()
        if not config_path.is_file():
            raise FileNotFoundError(f'Configuration file not found: {config_path}')

        logger.info(f'Loading network configuration from {config_path}')
        with config_path.open('r', encoding='utf-8') as fh:
            try:
                raw = yaml.safe_load(fh)
            except yaml.YAMLError as e:
                raise ValueError(f'Invalid YAML in {config_path}: {e}') from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ValueError(f'Configuration root of {config_path} must be a mapping, got {type(raw).__name__}')

        expanded = self._expand_environment_variables(raw)
        logger.debug(f'Config keys: {list(expanded.keys())}')
        return expanded

    def parse_network_config(self, document: Dict[str, Any], source: str = '<memory>') -> NetworkConfig:
        network_section = {k: v for k, v in document.items() if k != BOOTSTRAP_SECTION}
        try:
            config = NetworkConfig.model_validate(network_section)
        except ValidationError as e:
            raise ValueError(f'Invalid network configuration in {source}: {e}') from e

        logger.info(f'✓ Network configuration loaded: {len(config.peers)} peer(s), {len(config.orderers)} orderer(s)')
        return config

    @staticmethod
    def bootstrap_section(document: Dict[str, Any], overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        section = document.get(BOOTSTRAP_SECTION) or {}
        if not isinstance(section, dict):
            raise ValueError(f"'{BOOTSTRAP_SECTION}' section must be a mapping, got {type(section).__name__}")
        if overrides:
            section = ConfigMerger.merge(section, overrides, 'bootstrap_overrides')
        return section

    def _expand_environment_variables(self, config: Any) -> Any:
        """Recursively expand environment variables in configuration"""
        if isinstance(config, dict):
            return {key: self._expand_environment_variables(value) for key, value in config.items()}
        elif isinstance(config, list):
            return [self._expand_environment_variables(item) for item in config]
        elif isinstance(config, str):
            return self._expand_env_var_string(config)
        return config

    def _expand_env_var_string(self, value_str: str) -> str:
        environ = self._environ if self._environ is not None else os.environ

        def repl_default(match: re.Match) -> str:
            env_val = environ.get(match.group(1))
            return env_val if env_val else match.group(2)

        expanded = _DEFAULT_VAR_PATTERN.sub(repl_default, value_str)
        expanded = re.sub(
            r'\$(?:\{([A-Za-z_][A-Za-z0-9_]*)\}|([A-Za-z_][A-Za-z0-9_]*))',
            lambda m: environ.get(m.group(1) or m.group(2), m.group(0)),
            expanded,
        )

        if expanded != value_str:
            logger.debug(f"Environment expansion: '{value_str}' -> '{expanded}'")
        elif '${' in value_str:
            logger.warning(f"Unresolved environment variable: '{value_str}'")
        return expanded
