"""Core components for the live_tuner package."""

from .interfaces import IPitchEstimator, SampleWindow

__all__ = ["IPitchEstimator", "SampleWindow"]
