"""Defines the core interfaces for the live_tuner package."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union

import numpy as np

SampleWindow = Union[Sequence[float], np.ndarray]


class IPitchEstimator(ABC):
    """Interface for monophonic pitch estimation algorithms.

    Implementations are interchangeable: they take the same window and sample
    rate and answer with a frequency in Hz, or None when no pitch is present.
    """

    #: Short identifier used by the component factory and in readings
    name: str = ""

    @abstractmethod
    def estimate(self, samples: SampleWindow, sample_rate: int) -> Optional[float]:
        """Estimate the fundamental frequency of a window of samples."""
        pass
