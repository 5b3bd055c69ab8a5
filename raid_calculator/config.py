"""Configuration management for the RAID calculator"""

import os
import logging
from typing import Any, Dict, List, Optional
import yaml

from .exceptions import ConfigurationError
from .models import Preset, RaidConfiguration


DEFAULT_CONFIG_FILE = "~/.raid_calculator.conf"

DEFAULTS: Dict[str, Any] = {
    "raid_level": "5",
    "disk_count": 4,
    "disk_size": 4,
    "media_type": "HDD",
}


class ConfigManager:
    """Manages loading and accessing configuration from YAML file"""

    def __init__(self, config_file: str = DEFAULT_CONFIG_FILE, logger: Optional[logging.Logger] = None):
        """Initialize configuration manager

        Args:
            config_file: Path to configuration file
            logger: Logger instance
        """
        self.config_file = os.path.expanduser(config_file)
        self.logger = logger or logging.getLogger(__name__)

        self.defaults: Dict[str, Any] = dict(DEFAULTS)
        self.base_url: str = ""
        self.custom_random_read_iops: Optional[float] = None
        self.custom_sequential_read_mbps: Optional[float] = None
        self.presets: List[Preset] = []

        self.load()

    def load(self) -> None:
        """Load configuration from YAML file

        Configuration file structure:
        ```yaml
        defaults:
          raid_level: "6"         # Level used when nothing else is given
          disk_count: 6
          disk_size: 8            # TB
          media_type: HDD

        base_url: "https://example.com/raid"   # Prefix for share links

        performance:              # Replace the single-disk read baselines
          random_read_iops: 200
          sequential_read_mbps: 250

        presets:
          - id: "lab-raid6"       # Unique preset ID
            vendor: "Generic"
            name: "Lab array"
            raid_level: "6"
            disk_count: 6
            disk_size: 8
            media_type: HDD
        ```
        """
        if not os.path.exists(self.config_file):
            self.logger.debug(f"Configuration file {self.config_file} not found. Using default settings.")
            return

        try:
            self.logger.info(f"Loading user configuration from {self.config_file}")

            with open(self.config_file, 'r') as f:
                config = yaml.safe_load(f)

            if not config or not isinstance(config, dict):
                self.logger.warning(f"Configuration file {self.config_file} is empty or invalid")
                return

            if 'defaults' in config:
                self._load_defaults(config['defaults'])

            if config.get('base_url'):
                self.base_url = str(config['base_url']).rstrip('?')

            if 'performance' in config:
                self._load_performance(config['performance'])

            if 'presets' in config:
                self._load_presets(config['presets'])

        except yaml.YAMLError as e:
            self.logger.error(f"Error parsing YAML in configuration file: {e}")
        except IOError as e:
            self.logger.error(f"Error reading configuration file: {e}")
        except Exception as e:
            self.logger.error(f"Unexpected error loading configuration: {e}")

    def _load_defaults(self, defaults_data: Dict) -> None:
        """Load default calculator inputs

        Args:
            defaults_data: Mapping of raid_level, disk_count, disk_size, media_type
        """
        if not isinstance(defaults_data, dict):
            self.logger.warning("Ignoring 'defaults' section: expected a mapping")
            return

        candidate = dict(self.defaults)
        candidate.update({k: v for k, v in defaults_data.items() if k in DEFAULTS})
        try:
            RaidConfiguration.from_dict(candidate)
        except ConfigurationError as e:
            self.logger.warning(f"Ignoring invalid defaults: {e}")
            return

        self.defaults = candidate
        self.logger.debug(f"Loaded defaults: {self.defaults}")

    def _load_performance(self, performance_data: Dict) -> None:
        """Load custom read baselines

        Args:
            performance_data: Mapping with random_read_iops and/or sequential_read_mbps
        """
        if not isinstance(performance_data, dict):
            self.logger.warning("Ignoring 'performance' section: expected a mapping")
            return

        for key, attr in (("random_read_iops", "custom_random_read_iops"),
                          ("sequential_read_mbps", "custom_sequential_read_mbps")):
            value = performance_data.get(key)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                self.logger.warning(f"Ignoring invalid performance value {key}: {value!r}")
                continue
            setattr(self, attr, value)
            self.logger.debug(f"Loaded custom baseline {key}={value}")

    def _load_presets(self, presets_data: List[Dict]) -> None:
        """Load user presets from data

        Args:
            presets_data: List of preset dictionaries
        """
        if not isinstance(presets_data, list):
            self.logger.warning("Ignoring 'presets' section: expected a list")
            return

        self.logger.info(f"Found {len(presets_data)} user presets")

        for preset_data in presets_data:
            preset_id = preset_data.get('id') if isinstance(preset_data, dict) else None
            if not preset_id:
                self.logger.warning("Skipping preset without ID")
                continue

            try:
                preset = Preset.from_dict(preset_data)
                self.presets.append(preset)
                self.logger.debug(f"Loaded preset {preset_id}: {preset}")
            except Exception as e:
                self.logger.warning(f"Error loading preset {preset_id}: {e}")

    def default_configuration(self) -> RaidConfiguration:
        """Configuration used when no other input is given"""
        return RaidConfiguration.from_dict(self.defaults)

    def has_custom_performance(self) -> bool:
        """Check if any custom performance baselines are loaded"""
        return self.custom_random_read_iops is not None or self.custom_sequential_read_mbps is not None
