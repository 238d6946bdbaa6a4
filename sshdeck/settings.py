"""
Settings Manager for sshdeck
Handles application preferences stored as JSON
"""

import copy
import json
import logging
import os
from typing import Any, Dict, Optional, Tuple

from .platform_utils import get_config_dir

logger = logging.getLogger(__name__)

# Increment this whenever the settings format changes
CONFIG_VERSION = 1


class Settings:
    """JSON-backed preferences for sshdeck"""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file or os.path.join(get_config_dir(), 'config.json')
        self.config_data = self.load_json_config()

    def load_json_config(self) -> Dict[str, Any]:
        """Load configuration from JSON file"""
        try:
            if os.path.exists(self.config_file):
                with open(self.config_file, 'r') as f:
                    config = json.load(f)

                stored_version = config.get('config_version', 0) if isinstance(config, dict) else 0
                try:
                    stored_version = int(stored_version)
                except (TypeError, ValueError):
                    stored_version = 0
                if stored_version < CONFIG_VERSION:
                    backup_file = f"{self.config_file}.bak"
                    try:
                        os.replace(self.config_file, backup_file)
                        logger.warning(
                            "Outdated settings version %s detected; backing up to %s and regenerating defaults",
                            stored_version,
                            backup_file,
                        )
                    except OSError:
                        os.remove(self.config_file)
                        logger.warning(
                            "Outdated settings version %s detected; old settings removed",
                            stored_version,
                        )
                    config = self.get_default_config()
                    self.save_json_config(config)
                else:
                    config, updated = self._ensure_config_defaults(config)
                    if updated:
                        self.save_json_config(config)
                return config

            default_config = self.get_default_config()
            self.save_json_config(default_config)
            return default_config
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load JSON settings: {e}")
            return self.get_default_config()

    def save_json_config(self, config_data: Dict[str, Any] = None):
        """Save configuration to JSON file"""
        if config_data is None:
            config_data = self.config_data
        try:
            os.makedirs(os.path.dirname(self.config_file), exist_ok=True)
            with open(self.config_file, 'w') as f:
                json.dump(config_data, f, indent=2)
            logger.debug("Settings saved to %s", self.config_file)
        except OSError as e:
            logger.error(f"Failed to save JSON settings: {e}")

    def get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values"""
        return {
            'config_version': CONFIG_VERSION,
            'ssh': {
                'config_path': None,  # None means ~/.ssh/config
                'tag_policy': 'pending',
            },
            'ui': {
                'sort': 'file',
                'show_tags': True,
            },
        }

    def _ensure_config_defaults(self, config: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
        """Ensure newly added keys exist in the provided config dict."""
        updated = False
        for section, values in self.get_default_config().items():
            if isinstance(values, dict):
                current = config.get(section)
                if not isinstance(current, dict):
                    config[section] = copy.deepcopy(values)
                    updated = True
                    continue
                for key, value in values.items():
                    if key not in current:
                        current[key] = value
                        updated = True
            elif section not in config:
                config[section] = values
                updated = True
        return config, updated

    def get_setting(self, key: str, default=None):
        """Get a setting value using a dotted key such as ``ui.sort``"""
        value = self.config_data
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set_setting(self, key: str, value: Any):
        """Set a setting value and persist it"""
        keys = key.split('.')
        target = self.config_data
        for k in keys[:-1]:
            if not isinstance(target.get(k), dict):
                target[k] = {}
            target = target[k]
        target[keys[-1]] = value
        self.save_json_config()

    def get_ssh_config_path(self) -> Optional[str]:
        path = self.get_setting('ssh.config_path')
        return os.path.expanduser(path) if path else None


__all__ = ["CONFIG_VERSION", "Settings"]
