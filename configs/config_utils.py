# configs/config_utils.py
import copy
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


class ConfigMerger:
    @staticmethod
    def merge(base: Dict[str, Any], override: Dict[str, Any], context_description: str = 'ConfigMerge') -> Dict[str, Any]:
        """
        Merge ``override`` into a copy of ``base``.

        - Dictionaries are merged recursively.
        - Any other override value replaces the base value, including lists.
        - ``None`` override values are ignored so unset CLI options keep the file value.
        """
        if not isinstance(base, dict):
            raise TypeError(f'[{context_description}] base must be a mapping, got {type(base).__name__}')
        if not isinstance(override, dict):
            raise TypeError(f'[{context_description}] override must be a mapping, got {type(override).__name__}')

        merged = copy.deepcopy(base)
        for key, override_value in override.items():
            if override_value is None:
                continue
            base_value = merged.get(key)
            if isinstance(base_value, dict) and isinstance(override_value, dict):
                merged[key] = ConfigMerger.merge(base_value, override_value, f'{context_description} -> {key}')
            else:
                if key in merged and base_value != override_value:
                    logger.debug(f"[{context_description}] Overriding '{key}': {str(base_value)[:80]} -> {str(override_value)[:80]}")
                merged[key] = copy.deepcopy(override_value)
        return merged
