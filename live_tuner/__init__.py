"""live_tuner: monophonic pitch detection and note mapping for instrument tuners."""

from .detection import AutocorrelationEstimator, YinEstimator
from .instruments import available_instruments, instrument_profile
from .note_types import (
    ClosestNote,
    InstrumentProfile,
    InstrumentString,
    NoteResult,
    TunerReading,
    TuningAccuracy,
)
from .note_utils import (
    DEFAULT_REFERENCE_FREQUENCY,
    NOTE_NAMES,
    InvalidNoteNameError,
    closest_note,
    frequency_to_note,
    note_to_frequency,
)
from .session import TunerSession

__version__ = "0.1.0"

__all__ = [
    "AutocorrelationEstimator",
    "YinEstimator",
    "available_instruments",
    "instrument_profile",
    "ClosestNote",
    "InstrumentProfile",
    "InstrumentString",
    "NoteResult",
    "TunerReading",
    "TuningAccuracy",
    "DEFAULT_REFERENCE_FREQUENCY",
    "NOTE_NAMES",
    "InvalidNoteNameError",
    "closest_note",
    "frequency_to_note",
    "note_to_frequency",
    "TunerSession",
]
