"""
Timeline Configuration Manager
Handles loading and saving layout and viewport preferences.
"""

import json
import logging
import os

from memory_timeline.rendering.timeline_scale import TimelineScale, ZoomLevel
from memory_timeline.utils.error_handler import ConfigError, ContractViolationError
from memory_timeline.utils.timestamp_parser import TimestampParser

# Configure logger
logger = logging.getLogger(__name__)


class TimelineConfig:
    """
    Manages timeline layout and viewport preferences.

    Preferences live in the "timeline" section of a JSON file; other sections
    of the same file are preserved on save.
    """

    SECTION = 'timeline'

    DEFAULT_CONFIG = {
        'track_height': 30.0,
        'event_height': 24.0,
        'overlap_buffer': 4.0,
        'viewport_height': 600,
        'viewport_buffer_days': 30,
        'default_zoom': 'Month',
        'min_date': None,
        'max_date': None
    }

    POSITIVE_NUMBERS = ('track_height', 'event_height', 'viewport_height')
    NON_NEGATIVE_NUMBERS = ('overlap_buffer', 'viewport_buffer_days')

    def __init__(self, config_file=None):
        """
        Initialize timeline configuration manager.

        Args:
            config_file: Path to configuration file (optional)
        """
        self.config_file = config_file
        self.config = dict(self.DEFAULT_CONFIG)

        if config_file and os.path.exists(config_file):
            self.load()

    def load(self):
        """Load timeline preferences from the configuration file."""
        if not self.config_file or not os.path.exists(self.config_file):
            return

        if os.path.getsize(self.config_file) == 0:
            return

        try:
            with open(self.config_file, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading timeline configuration from {self.config_file}: {e}")
            return

        section = data.get(self.SECTION) if isinstance(data, dict) else None
        if not isinstance(section, dict):
            return

        for key, value in section.items():
            if key not in self.DEFAULT_CONFIG:
                logger.warning(f"Ignoring unknown timeline setting '{key}'")
                continue
            try:
                self._validate(key, value)
            except ConfigError as e:
                logger.warning(f"Keeping default for '{key}': {e.message}")
                continue
            self.config[key] = value

        logger.debug(f"Loaded timeline configuration from {self.config_file}")

    def save(self):
        """Save timeline preferences, preserving other sections of the file."""
        if not self.config_file:
            return

        existing_data = {}
        if os.path.exists(self.config_file) and os.path.getsize(self.config_file) > 0:
            try:
                with open(self.config_file, 'r') as f:
                    existing_data = json.load(f)
            except json.JSONDecodeError:
                # File exists but is not valid JSON, start fresh
                existing_data = {}
            if not isinstance(existing_data, dict):
                existing_data = {}

        existing_data[self.SECTION] = self.config

        config_dir = os.path.dirname(self.config_file)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

        try:
            with open(self.config_file, 'w') as f:
                json.dump(existing_data, f, indent=2)
        except OSError as e:
            logger.error(f"Error saving timeline configuration to {self.config_file}: {e}")
            raise ConfigError(f"Could not save configuration: {e}") from e

    def _validate(self, key, value):
        """
        Check a setting value.

        Raises:
            ConfigError: If the value is not acceptable for the key
        """
        if key in self.POSITIVE_NUMBERS or key in self.NON_NEGATIVE_NUMBERS:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"'{key}' must be a number, got {value!r}", key)
            if key in self.POSITIVE_NUMBERS and value <= 0:
                raise ConfigError(f"'{key}' must be positive, got {value!r}", key)
            if value < 0:
                raise ConfigError(f"'{key}' must not be negative, got {value!r}", key)
        elif key == 'default_zoom':
            try:
                TimelineScale.parse_zoom_level(value)
            except ContractViolationError:
                raise ConfigError(f"Unknown zoom level {value!r}", key) from None
        elif key in ('min_date', 'max_date'):
            if value is not None and TimestampParser.parse_timestamp(value) is None:
                raise ConfigError(f"'{key}' is not a valid date: {value!r}", key)

    def get(self, key):
        """
        Get a raw setting value.

        Args:
            key: Setting name

        Returns:
            Setting value

        Raises:
            ConfigError: If the key is unknown
        """
        if key not in self.DEFAULT_CONFIG:
            raise ConfigError(f"Unknown timeline setting '{key}'", key)
        return self.config[key]

    def set(self, key, value, save=True):
        """
        Set a setting value.

        Args:
            key: Setting name
            value: New value (dates as datetime or ISO string)
            save: Write the file afterwards (default: True)

        Raises:
            ConfigError: If the key is unknown or the value invalid
        """
        if key not in self.DEFAULT_CONFIG:
            raise ConfigError(f"Unknown timeline setting '{key}'", key)
        if key in ('min_date', 'max_date') and hasattr(value, 'isoformat'):
            value = value.isoformat()
        if key == 'default_zoom' and isinstance(value, ZoomLevel):
            value = value.name.title()

        self._validate(key, value)
        self.config[key] = value

        if save:
            self.save()

    def get_track_height(self):
        return float(self.config['track_height'])

    def get_event_height(self):
        return float(self.config['event_height'])

    def get_overlap_buffer(self):
        return float(self.config['overlap_buffer'])

    def get_viewport_height(self):
        return float(self.config['viewport_height'])

    def get_viewport_buffer_days(self):
        return self.config['viewport_buffer_days']

    def get_default_zoom(self):
        """
        Get the zoom level new viewports start at.

        Returns:
            ZoomLevel: Default zoom level
        """
        return TimelineScale.parse_zoom_level(self.config['default_zoom'])

    def get_date_bounds(self):
        """
        Get the optional viewport date boundaries.

        Returns:
            tuple: (min_date, max_date), each a datetime or None
        """
        return (
            TimestampParser.parse_timestamp(self.config['min_date']),
            TimestampParser.parse_timestamp(self.config['max_date'])
        )

    def get_preferences(self):
        """Get a copy of all settings."""
        return dict(self.config)

    def reset_to_defaults(self):
        """Reset all settings to defaults and save."""
        self.config = dict(self.DEFAULT_CONFIG)
        self.save()
