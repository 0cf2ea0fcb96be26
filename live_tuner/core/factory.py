"""Factory for creating live_tuner components."""

from typing import Any, Dict, Optional, Type

from ..detection import ESTIMATORS, AutocorrelationEstimator, YinEstimator
from ..logging_config import get_logger
from ..session import TunerSession
from .config import ConfigManager
from .interfaces import IPitchEstimator

logger = get_logger(__name__)

# Settings shared by every estimator
_COMMON_SETTINGS = ("min_frequency", "max_frequency", "silence_threshold")


class ComponentFactory:
    """Factory for creating live_tuner components."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """Initialize the component factory.

        Args:
            config_manager: Configuration manager, or None to use defaults only
        """
        self.config_manager = config_manager or ConfigManager()

        self.pitch_estimator_classes: Dict[str, Type[IPitchEstimator]] = dict(ESTIMATORS)

    def _estimator_kwargs(self, implementation: str, config: Dict[str, Any]) -> Dict[str, Any]:
        kwargs = {key: config[key] for key in _COMMON_SETTINGS}
        if implementation == AutocorrelationEstimator.name:
            kwargs["clarity_threshold"] = config["clarity_threshold"]
            kwargs["octave_tolerance"] = config["octave_tolerance"]
        elif implementation == YinEstimator.name:
            kwargs["threshold"] = config["yin_threshold"]
        return kwargs

    def create_pitch_estimator(
        self, implementation: Optional[str] = None, **overrides
    ) -> IPitchEstimator:
        """Create a pitch estimator.

        Args:
            implementation: Name of the implementation, or None for the configured one
            **overrides: pitch_estimator settings that replace the configured values

        Returns:
            Pitch estimator instance

        Raises:
            ValueError: If the implementation is not registered or a setting is unknown
        """
        config = self.config_manager.get_config("pitch_estimator")

        unknown = set(overrides) - set(config)
        if unknown:
            raise ValueError(f"Unknown pitch_estimator settings: {', '.join(sorted(unknown))}")
        config.update(overrides)

        name = implementation or config["algorithm"]
        if name not in self.pitch_estimator_classes:
            raise ValueError(f"Unknown pitch estimator implementation: {name}")

        cls = self.pitch_estimator_classes[name]
        instance = cls(**self._estimator_kwargs(name, config))

        logger.info(f"Created pitch estimator: {instance!r}")
        return instance

    def create_session(
        self,
        implementation: Optional[str] = None,
        reference_frequency: Optional[float] = None,
    ) -> TunerSession:
        """Create a TunerSession using the configured estimator and reference.

        Args:
            implementation: Estimator name, or None for the configured one
            reference_frequency: A4 in Hz, or None for the configured one

        Returns:
            TunerSession instance
        """
        tuner_config = self.config_manager.get_config("tuner")
        if reference_frequency is None:
            reference_frequency = tuner_config["reference_frequency"]

        session = TunerSession(
            estimator=self.create_pitch_estimator(implementation),
            reference_frequency=reference_frequency,
        )
        logger.info(f"Created tuner session: A4={session.reference_frequency:.1f}Hz")
        return session
