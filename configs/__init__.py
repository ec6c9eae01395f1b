# configs/__init__.py
"""
Configuration loading for the bootstrap orchestrator.
"""

from configs.config_loader import ConfigLoader
from configs.config_utils import ConfigMerger

__all__ = ['ConfigLoader', 'ConfigMerger']
