"""Tuner session: the state a display loop keeps between windows."""

from __future__ import annotations
import time
from typing import Callable, Optional

from .core.config import validate_reference_frequency
from .core.events import EventEmitter, TunerEventType
from .core.interfaces import IPitchEstimator, SampleWindow
from .logging_config import get_logger
from .note_types import TunerReading
from .note_utils import (
    DEFAULT_REFERENCE_FREQUENCY,
    closest_note,
    meter_position,
    tuning_accuracy,
)

logger = get_logger(__name__)


class TunerSession:
    """Runs a pitch estimator over successive windows and keeps the latest reading.

    The estimator and the note mapping are stateless; everything that changes
    between windows (reference frequency, chosen estimator, last reading and
    listeners) lives here. A session is meant to be driven from one loop.
    """

    def __init__(
        self,
        estimator: IPitchEstimator,
        reference_frequency: float = DEFAULT_REFERENCE_FREQUENCY,
    ) -> None:
        self._estimator = estimator
        self._reference_frequency = validate_reference_frequency(reference_frequency)
        self._latest: Optional[TunerReading] = None
        self._events = EventEmitter()

    @property
    def estimator(self) -> IPitchEstimator:
        return self._estimator

    @estimator.setter
    def estimator(self, estimator: IPitchEstimator) -> None:
        logger.info(f"Switching estimator to {estimator.name or type(estimator).__name__}")
        self._estimator = estimator

    @property
    def reference_frequency(self) -> float:
        return self._reference_frequency

    @reference_frequency.setter
    def reference_frequency(self, value: float) -> None:
        self._reference_frequency = validate_reference_frequency(value)
        logger.info(f"Reference frequency set to A4={self._reference_frequency:.1f}Hz")

    @property
    def latest(self) -> Optional[TunerReading]:
        """Most recent reading; kept while subsequent windows have no pitch."""
        return self._latest

    def on_reading(self, callback: Callable[[TunerReading], None]) -> None:
        self._events.on(TunerEventType.READING, callback)

    def on_no_pitch(self, callback: Callable[[float], None]) -> None:
        """Register a callback invoked with the timestamp of windows without pitch."""
        self._events.on(TunerEventType.NO_PITCH, callback)

    def off_reading(self, callback: Callable[[TunerReading], None]) -> None:
        self._events.off(TunerEventType.READING, callback)

    def off_no_pitch(self, callback: Callable[[float], None]) -> None:
        self._events.off(TunerEventType.NO_PITCH, callback)

    def process_window(
        self,
        samples: SampleWindow,
        sample_rate: int,
        timestamp: Optional[float] = None,
    ) -> Optional[TunerReading]:
        """Estimate the pitch of one window and map it to the closest note.

        Args:
            samples: 1-D window of samples
            sample_rate: Sample rate in Hz
            timestamp: Time of the window, defaults to time.time()

        Returns:
            The new TunerReading, or None when no pitch was detected
        """
        if timestamp is None:
            timestamp = time.time()

        frequency = self._estimator.estimate(samples, sample_rate)
        note = closest_note(frequency, self._reference_frequency)
        if note is None:
            self._events.emit(TunerEventType.NO_PITCH, timestamp)
            return None

        reading = TunerReading(
            frequency=frequency,
            note=note,
            accuracy=tuning_accuracy(note.cents),
            meter_position=meter_position(note.cents),
            timestamp=timestamp,
            reference_frequency=self._reference_frequency,
            algorithm=self._estimator.name or None,
        )
        self._latest = reading
        logger.debug(
            f"[{timestamp:.2f}s] {note} {frequency:.2f}Hz "
            f"(target {note.frequency:.2f}Hz, {note.cents:+d} cents)"
        )
        self._events.emit(TunerEventType.READING, reading)
        return reading

    def reset(self) -> None:
        """Forget the latest reading."""
        self._latest = None
