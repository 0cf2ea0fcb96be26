"""Configuration management for live_tuner components."""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

from ..logging_config import get_logger
from ..note_utils import DEFAULT_REFERENCE_FREQUENCY

logger = get_logger(__name__)

MIN_REFERENCE_FREQUENCY = 420.0
MAX_REFERENCE_FREQUENCY = 460.0
DEFAULT_WINDOW_SIZE = 2048

DEFAULT_CONFIGS: Dict[str, Dict[str, Any]] = {
    "pitch_estimator": {
        "algorithm": "autocorrelation",
        "min_frequency": 50.0,
        "max_frequency": 1500.0,
        "silence_threshold": 0.001,
        "clarity_threshold": 0.2,
        "yin_threshold": 0.15,
        "octave_tolerance": 0.9,
    },
    "tuner": {
        "reference_frequency": DEFAULT_REFERENCE_FREQUENCY,
        "window_size": DEFAULT_WINDOW_SIZE,
        "hop_size": DEFAULT_WINDOW_SIZE,
    },
}


def validate_reference_frequency(value: float) -> float:
    """Check that a reference frequency is inside the supported tuning range.

    Raises:
        ValueError: If the value is outside MIN/MAX_REFERENCE_FREQUENCY
    """
    reference = float(value)
    if not MIN_REFERENCE_FREQUENCY <= reference <= MAX_REFERENCE_FREQUENCY:
        raise ValueError(
            f"Reference frequency must be between {MIN_REFERENCE_FREQUENCY} and "
            f"{MAX_REFERENCE_FREQUENCY} Hz, got {value}"
        )
    return reference


def _validate_section(name: str, config: Dict[str, Any]) -> None:
    if name == "tuner":
        validate_reference_frequency(config["reference_frequency"])
        for key in ("window_size", "hop_size"):
            if int(config[key]) <= 0:
                raise ValueError(f"{key} must be positive, got {config[key]}")
    elif name == "pitch_estimator":
        if float(config["min_frequency"]) <= 0:
            raise ValueError("min_frequency must be positive")
        if float(config["max_frequency"]) <= float(config["min_frequency"]):
            raise ValueError("max_frequency must be greater than min_frequency")
        if float(config["silence_threshold"]) < 0:
            raise ValueError("silence_threshold must not be negative")
        if not 0.0 <= float(config["clarity_threshold"]) <= 1.0:
            raise ValueError("clarity_threshold must be between 0.0 and 1.0")
        if not 0.0 < float(config["octave_tolerance"]) <= 1.0:
            raise ValueError("octave_tolerance must be in (0.0, 1.0]")
        if not 0.0 < float(config["yin_threshold"]) < 1.0:
            raise ValueError("yin_threshold must be between 0.0 and 1.0")


class ConfigManager:
    """Configuration manager for live_tuner components.

    Sections are read from ``<config_dir>/<name>.json`` when present; any key
    missing from a file falls back to its default and unknown keys are dropped. Nothing is written unless
    :meth:`save_config` (or an update/reset with ``save=True``) is called.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Directory holding configuration files, or None to use defaults only
        """
        self.config_dir = Path(config_dir) if config_dir is not None else None
        self.default_configs = copy.deepcopy(DEFAULT_CONFIGS)

        self.configs: Dict[str, Dict[str, Any]] = {}
        for config_name, default_config in self.default_configs.items():
            self.configs[config_name] = self.load_config(config_name, default_config)

    def load_config(self, name: str, default_config: Dict[str, Any]) -> Dict[str, Any]:
        """Load configuration from file, falling back to the defaults.

        Args:
            name: Configuration name
            default_config: Default configuration to use if the file is missing or unreadable

        Returns:
            Configuration dictionary
        """
        if self.config_dir is None:
            return default_config.copy()

        config_file = self.config_dir / f"{name}.json"
        if not config_file.exists():
            return default_config.copy()

        try:
            with open(config_file, "r") as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                raise ValueError("top-level JSON value must be an object")

            unknown = sorted(set(loaded) - set(default_config))
            if unknown:
                logger.warning(f"Ignoring unknown {name} settings in {config_file}: {unknown}")

            config = default_config.copy()
            config.update({k: v for k, v in loaded.items() if k in default_config})
            _validate_section(name, config)
            logger.info(f"Loaded configuration from {config_file}")
            return config
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error loading configuration from {config_file}: {e}")
            return default_config.copy()

    def save_config(self, name: str, config: Optional[Dict[str, Any]] = None) -> bool:
        """Save configuration to file.

        Args:
            name: Configuration name
            config: Configuration dictionary, or None to save the current one

        Returns:
            True if saved successfully, False otherwise
        """
        if self.config_dir is None:
            logger.error("No configuration directory set, cannot save")
            return False

        config = self.configs.get(name) if config is None else config
        config_file = self.config_dir / f"{name}.json"
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(config_file, "w") as f:
                json.dump(config, f, indent=2)
            logger.info(f"Saved configuration to {config_file}")
            return True
        except OSError as e:
            logger.error(f"Error saving configuration to {config_file}: {e}")
            return False

    def get_config(self, name: str) -> Dict[str, Any]:
        """Get a copy of a configuration section.

        Raises:
            ValueError: If the section is unknown
        """
        if name not in self.configs:
            raise ValueError(f"Unknown configuration: {name}")
        return self.configs[name].copy()

    def update_config(self, name: str, updates: Dict[str, Any], save: bool = False) -> bool:
        """Validate and apply updates to a configuration section.

        Args:
            name: Configuration name
            updates: Dictionary of updates to apply
            save: Also write the section to disk

        Returns:
            True if applied (and saved, when requested)

        Raises:
            ValueError: If the section or a key is unknown, or a value is invalid
        """
        if name not in self.configs:
            raise ValueError(f"Unknown configuration: {name}")

        unknown = set(updates) - set(self.default_configs[name])
        if unknown:
            raise ValueError(f"Unknown {name} settings: {', '.join(sorted(unknown))}")

        candidate = {**self.configs[name], **updates}
        _validate_section(name, candidate)
        self.configs[name] = candidate

        if save:
            return self.save_config(name)
        return True

    def reset_config(self, name: str, save: bool = False) -> bool:
        """Reset configuration to default.

        Raises:
            ValueError: If the section is unknown
        """
        if name not in self.default_configs:
            raise ValueError(f"Unknown configuration: {name}")

        self.configs[name] = self.default_configs[name].copy()
        if save:
            return self.save_config(name)
        return True
