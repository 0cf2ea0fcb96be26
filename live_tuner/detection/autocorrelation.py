"""Autocorrelation pitch estimator."""

from __future__ import annotations
from typing import ClassVar, Optional

import numpy as np

from ..logging_config import get_logger
from .base import PitchEstimatorBase, parabolic_offset

logger = get_logger(__name__)


def unbiased_autocorrelation(window: np.ndarray) -> np.ndarray:
    """Autocorrelation for lags 0..N-1, each divided by its N - lag overlap."""
    n = len(window)
    raw = np.correlate(window, window, mode="full")[n - 1 :]
    return raw / (n - np.arange(n))


class AutocorrelationEstimator(PitchEstimatorBase):
    """Finds the period as the strongest autocorrelation peak in the lag range.

    Equal-height peaks appear at every multiple of the period, so after the
    clarity check the shortest lag that is a local maximum within
    ``octave_tolerance`` of the strongest peak is used. ``octave_tolerance=1.0``
    keeps the plain maximum.
    """

    name = "autocorrelation"

    DEFAULT_CLARITY_THRESHOLD: ClassVar[float] = 0.2
    DEFAULT_OCTAVE_TOLERANCE: ClassVar[float] = 0.9

    def __init__(
        self,
        min_frequency: float = PitchEstimatorBase.DEFAULT_MIN_FREQUENCY,
        max_frequency: float = PitchEstimatorBase.DEFAULT_MAX_FREQUENCY,
        silence_threshold: float = PitchEstimatorBase.DEFAULT_SILENCE_THRESHOLD,
        clarity_threshold: float = DEFAULT_CLARITY_THRESHOLD,
        octave_tolerance: float = DEFAULT_OCTAVE_TOLERANCE,
    ) -> None:
        super().__init__(min_frequency, max_frequency, silence_threshold)
        if not 0.0 <= clarity_threshold <= 1.0:
            raise ValueError("clarity_threshold must be between 0.0 and 1.0")
        if not 0.0 < octave_tolerance <= 1.0:
            raise ValueError("octave_tolerance must be in (0.0, 1.0]")
        self._clarity_threshold = float(clarity_threshold)
        self._octave_tolerance = float(octave_tolerance)

    @property
    def clarity_threshold(self) -> float:
        return self._clarity_threshold

    @property
    def octave_tolerance(self) -> float:
        return self._octave_tolerance

    def _estimate_period(self, window: np.ndarray, sample_rate: int) -> Optional[float]:
        correlations = unbiased_autocorrelation(window)

        min_lag, max_lag = self.lag_bounds(sample_rate)
        # Keep a neighbour on both sides of every candidate for interpolation
        max_lag = min(max_lag, len(correlations) - 2)
        if max_lag < min_lag:
            logger.debug(
                f"Window of {len(window)} samples too short for lag range starting at {min_lag}"
            )
            return None

        zero_lag = correlations[0]
        if zero_lag <= 0:
            logger.debug("Window has no energy")
            return None

        peak_lag = min_lag + int(np.argmax(correlations[min_lag : max_lag + 1]))
        peak = correlations[peak_lag]
        clarity = peak / zero_lag

        if clarity < self._clarity_threshold:
            logger.debug(f"Weak periodicity: clarity {clarity:.3f} < {self._clarity_threshold}")
            return None

        lag = self._first_strong_peak(correlations, min_lag, max_lag, peak, peak_lag)
        logger.debug(f"Peak lag {peak_lag} -> {lag} (clarity {clarity:.3f})")

        return lag + parabolic_offset(correlations, lag)

    def _first_strong_peak(
        self,
        correlations: np.ndarray,
        min_lag: int,
        max_lag: int,
        peak: float,
        peak_lag: int,
    ) -> int:
        lags = np.arange(min_lag, max_lag + 1)
        current = correlations[lags]
        strong = (
            (current > correlations[lags - 1])
            & (current >= correlations[lags + 1])
            & (current >= self._octave_tolerance * peak)
        )
        candidates = np.flatnonzero(strong)
        if candidates.size == 0:
            return peak_lag
        return int(lags[candidates[0]])
