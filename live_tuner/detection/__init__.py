"""Pitch estimation algorithms."""

from .autocorrelation import AutocorrelationEstimator
from .base import PitchEstimatorBase, parabolic_offset
from .yin import YinEstimator

ESTIMATORS = {
    AutocorrelationEstimator.name: AutocorrelationEstimator,
    YinEstimator.name: YinEstimator,
}

__all__ = [
    "AutocorrelationEstimator",
    "YinEstimator",
    "PitchEstimatorBase",
    "parabolic_offset",
    "ESTIMATORS",
]
