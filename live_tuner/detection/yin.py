"""YIN pitch estimator (de Cheveigne & Kawahara, 2002), without the local search step."""

from __future__ import annotations
from typing import ClassVar, Optional

import numpy as np

from ..logging_config import get_logger
from .base import PitchEstimatorBase, parabolic_offset

logger = get_logger(__name__)


def difference_function(window: np.ndarray, integration_size: int) -> np.ndarray:
    """Squared difference between the first frame and each shifted frame."""
    frame = window[:integration_size]
    diff = np.empty(integration_size)
    for tau in range(integration_size):
        delta = frame - window[tau : tau + integration_size]
        diff[tau] = np.dot(delta, delta)
    return diff


def cumulative_mean_normalized_difference(diff: np.ndarray) -> np.ndarray:
    """Normalize each difference by the running mean of the ones before it."""
    cmnd = np.ones(len(diff))
    if len(diff) < 2:
        return cmnd

    taus = np.arange(1, len(diff))
    running_sum = np.cumsum(diff[1:])
    np.divide(diff[1:] * taus, running_sum, out=cmnd[1:], where=running_sum > 0)
    return cmnd


class YinEstimator(PitchEstimatorBase):
    """Picks the first dip of the normalized difference function below a threshold.

    The difference function integrates over half of the window, so the
    longest detectable period is a little under half the window length.
    """

    name = "yin"

    DEFAULT_THRESHOLD: ClassVar[float] = 0.15

    def __init__(
        self,
        min_frequency: float = PitchEstimatorBase.DEFAULT_MIN_FREQUENCY,
        max_frequency: float = PitchEstimatorBase.DEFAULT_MAX_FREQUENCY,
        silence_threshold: float = PitchEstimatorBase.DEFAULT_SILENCE_THRESHOLD,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        super().__init__(min_frequency, max_frequency, silence_threshold)
        if not 0.0 < threshold < 1.0:
            raise ValueError("threshold must be between 0.0 and 1.0")
        self._threshold = float(threshold)

    @property
    def threshold(self) -> float:
        return self._threshold

    def _estimate_period(self, window: np.ndarray, sample_rate: int) -> Optional[float]:
        integration_size = len(window) // 2

        min_lag, max_lag = self.lag_bounds(sample_rate)
        max_lag = min(max_lag, integration_size - 2)
        if max_lag < min_lag:
            logger.debug(
                f"Window of {len(window)} samples too short for lag range starting at {min_lag}"
            )
            return None

        cmnd = cumulative_mean_normalized_difference(
            difference_function(window, integration_size)
        )

        below = np.flatnonzero(cmnd[min_lag : max_lag + 1] < self._threshold)
        if below.size == 0:
            logger.debug(
                f"No dip below {self._threshold} "
                f"(minimum {float(np.min(cmnd[min_lag : max_lag + 1])):.3f})"
            )
            return None

        tau = min_lag + int(below[0])
        # Walk down to the bottom of the dip
        while tau + 1 < integration_size and cmnd[tau + 1] < cmnd[tau]:
            tau += 1

        logger.debug(f"Dip at tau {tau} (cmnd {cmnd[tau]:.3f})")
        return tau + parabolic_offset(cmnd, tau)
