"""Type definitions for the live_tuner project."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class TuningAccuracy(Enum):
    """How close a reading is to its target note."""

    IN_TUNE = "in_tune"
    CLOSE = "close"
    OUT_OF_TUNE = "out_of_tune"


@dataclass(frozen=True)
class NoteResult:
    """Nearest equal-tempered note for a frequency."""

    note_name: str  # One of the 12 sharp chromatic names, e.g. 'C#'
    octave: int  # Scientific pitch octave, A4 is the reference anchor
    cents: int  # Deviation from the note, in [-50, 50]

    def __str__(self):
        return f"{self.note_name}{self.octave}"


@dataclass(frozen=True)
class ClosestNote:
    """A NoteResult together with the exact frequency it is measured against."""

    note_name: str
    octave: int
    frequency: float  # Exact frequency of note_name/octave for the reference used
    cents: int

    def __str__(self):
        return f"{self.note_name}{self.octave}"


@dataclass(frozen=True)
class InstrumentString:
    """One open string of an instrument."""

    note_name: str
    octave: int
    frequency: float

    @property
    def label(self) -> str:
        return f"{self.note_name}{self.octave}"


@dataclass(frozen=True)
class InstrumentProfile:
    """Open strings of an instrument, lowest string first as listed in the table."""

    name: str
    strings: Tuple[InstrumentString, ...] = field(default_factory=tuple)

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(s.label for s in self.strings)

    @property
    def frequencies(self) -> Tuple[float, ...]:
        return tuple(s.frequency for s in self.strings)

    def __len__(self):
        return len(self.strings)


@dataclass(frozen=True)
class TunerReading:
    """A single pitch reading produced by a TunerSession."""

    frequency: float  # Detected frequency in Hz
    note: ClosestNote  # Closest note and the target frequency
    accuracy: TuningAccuracy
    meter_position: float  # 0-100, 50 is perfectly in tune
    timestamp: float
    reference_frequency: float
    algorithm: Optional[str] = None  # Name of the estimator that produced it

    @property
    def cents(self) -> int:
        return self.note.cents
