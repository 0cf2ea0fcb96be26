"""Shared plumbing for the lag-domain pitch estimators."""

from __future__ import annotations
import math
from abc import ABC, abstractmethod
from typing import ClassVar, Optional, Tuple

import numpy as np

from ..core.interfaces import IPitchEstimator, SampleWindow
from ..logging_config import get_logger

logger = get_logger(__name__)


def parabolic_offset(values: np.ndarray, index: int) -> float:
    """Vertex offset of the parabola through values[index-1:index+2].

    Works for both peaks and dips. Returns 0.0 when the three points are
    collinear or index has no neighbour on either side.
    """
    if index <= 0 or index >= len(values) - 1:
        return 0.0

    left = float(values[index - 1])
    center = float(values[index])
    right = float(values[index + 1])
    denominator = left - 2.0 * center + right
    if denominator == 0.0:
        return 0.0
    return 0.5 * (left - right) / denominator


class PitchEstimatorBase(IPitchEstimator, ABC):
    """Validates the window, applies the energy gate and computes lag bounds.

    Subclasses implement :meth:`_estimate_period`, returning a (possibly
    fractional) period in samples or None.
    """

    DEFAULT_MIN_FREQUENCY: ClassVar[float] = 50.0  # Hz
    DEFAULT_MAX_FREQUENCY: ClassVar[float] = 1500.0  # Hz
    DEFAULT_SILENCE_THRESHOLD: ClassVar[float] = 0.001  # Mean-square energy

    def __init__(
        self,
        min_frequency: float = DEFAULT_MIN_FREQUENCY,
        max_frequency: float = DEFAULT_MAX_FREQUENCY,
        silence_threshold: float = DEFAULT_SILENCE_THRESHOLD,
    ) -> None:
        if min_frequency <= 0:
            raise ValueError("min_frequency must be positive")
        if max_frequency <= min_frequency:
            raise ValueError("max_frequency must be greater than min_frequency")
        if silence_threshold < 0:
            raise ValueError("silence_threshold must not be negative")

        self._min_frequency = float(min_frequency)
        self._max_frequency = float(max_frequency)
        self._silence_threshold = float(silence_threshold)

    @property
    def min_frequency(self) -> float:
        return self._min_frequency

    @property
    def max_frequency(self) -> float:
        return self._max_frequency

    @property
    def silence_threshold(self) -> float:
        return self._silence_threshold

    def lag_bounds(self, sample_rate: int) -> Tuple[int, int]:
        """Lag search range implied by the frequency bounds, before clipping."""
        min_lag = int(math.floor(sample_rate / self._max_frequency))
        max_lag = int(math.ceil(sample_rate / self._min_frequency))
        return max(min_lag, 1), max_lag

    def estimate(self, samples: SampleWindow, sample_rate: int) -> Optional[float]:
        """Estimate the fundamental frequency of a window of samples.

        Args:
            samples: 1-D window of samples, nominally in [-1, 1]; not modified
            sample_rate: Sample rate in Hz, must be positive

        Returns:
            Frequency in Hz, or None if no pitch was detected

        Raises:
            ValueError: If sample_rate is not positive or samples is not 1-D
        """
        if sample_rate is None or sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {sample_rate}")

        window = np.asarray(samples, dtype=np.float64)
        if window.ndim != 1:
            raise ValueError(f"Expected a 1-D sample window, got shape {window.shape}")
        if window.size == 0:
            logger.debug("Empty window")
            return None

        energy = float(np.mean(window**2))
        if energy < self._silence_threshold:
            logger.debug(
                f"Signal below silence threshold: {energy:.6f} < {self._silence_threshold}"
            )
            return None

        period = self._estimate_period(window, sample_rate)
        if period is None or period <= 0:
            return None

        frequency = sample_rate / period
        logger.debug(f"[{self.name}] period={period:.3f} samples -> {frequency:.2f}Hz")
        return float(frequency)

    @abstractmethod
    def _estimate_period(self, window: np.ndarray, sample_rate: int) -> Optional[float]:
        """Find the period of a gated, non-empty float64 window."""
        pass

    def __repr__(self):
        return (
            f"{type(self).__name__}(min_frequency={self._min_frequency}, "
            f"max_frequency={self._max_frequency}, "
            f"silence_threshold={self._silence_threshold})"
        )
