"""Utility functions for working with musical notes and frequencies.

Notes are named in Scientific Pitch Notation with sharps, and the reference
frequency always anchors A4. Semitone offsets are rounded half away from
zero: a frequency exactly half way between two notes is reported as the
upper note at -50 cents when above the reference, and as the lower note at
+50 cents when below it.
"""

import math
from typing import Dict, List, Optional

import numpy as np

from .logging_config import get_logger
from .note_types import ClosestNote, NoteResult, TuningAccuracy

logger = get_logger(__name__)

DEFAULT_REFERENCE_FREQUENCY = 440.0

NOTE_NAMES: List[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]

# Mapping between sharp and flat note names
SHARP_TO_FLAT: Dict[str, str] = {
    "C#": "Db",
    "D#": "Eb",
    "F#": "Gb",
    "G#": "Ab",
    "A#": "Bb",
}

# Semitones from C0 to A4
REFERENCE_OFFSET = 57

IN_TUNE_CENTS = 5
CLOSE_CENTS = 15


class InvalidNoteNameError(ValueError):
    """Raised when a note name is not one of the 12 chromatic names."""

    def __init__(self, note_name):
        self.note_name = note_name
        super().__init__(
            f"Invalid note name: {note_name!r} (expected one of {', '.join(NOTE_NAMES)})"
        )


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, resolving .5 ties away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _check_reference(reference_frequency: float) -> float:
    reference = float(reference_frequency)
    if not math.isfinite(reference) or reference <= 0:
        raise ValueError(f"Reference frequency must be positive, got {reference_frequency}")
    return reference


def frequency_to_note(
    frequency: Optional[float],
    reference_frequency: float = DEFAULT_REFERENCE_FREQUENCY,
) -> Optional[NoteResult]:
    """Convert a frequency in Hz to the nearest note name, octave and cents.

    Args:
        frequency: The frequency in Hz, or None when no pitch was detected
        reference_frequency: Frequency of A4 in Hz

    Returns:
        NoteResult, or None if the frequency is missing or not positive

    Raises:
        ValueError: If the reference frequency is not a positive number
    """
    reference = _check_reference(reference_frequency)

    if frequency is None:
        return None

    freq = float(frequency)
    if not math.isfinite(freq):
        logger.warning(f"Invalid frequency value: {frequency}")
        return None
    if freq <= 0:
        logger.debug(f"Non-positive frequency: {frequency}")
        return None

    steps = 12 * float(np.log2(freq / reference))
    n = round_half_away_from_zero(steps)
    cents = round_half_away_from_zero((steps - n) * 100)

    note_num = n + REFERENCE_OFFSET
    return NoteResult(
        note_name=NOTE_NAMES[note_num % 12],
        octave=note_num // 12,
        cents=cents,
    )


def note_to_frequency(
    note_name: str,
    octave: int,
    reference_frequency: float = DEFAULT_REFERENCE_FREQUENCY,
) -> float:
    """Get the exact equal-tempered frequency of a note.

    Args:
        note_name: One of the 12 sharp chromatic names (e.g. 'A', 'C#')
        octave: Scientific pitch octave
        reference_frequency: Frequency of A4 in Hz

    Returns:
        Frequency in Hz

    Raises:
        InvalidNoteNameError: If note_name is not a recognized name
        ValueError: If the reference frequency is not a positive number or the
            octave is not a whole number
    """
    reference = _check_reference(reference_frequency)
    try:
        index = NOTE_NAMES.index(note_name)
    except ValueError:
        raise InvalidNoteNameError(note_name) from None

    octave_number = int(octave)
    if octave_number != octave:
        raise ValueError(f"octave must be a whole number, got {octave!r}")

    n = index + 12 * octave_number - REFERENCE_OFFSET
    return reference * 2.0 ** (n / 12.0)


def closest_note(
    frequency: Optional[float],
    reference_frequency: float = DEFAULT_REFERENCE_FREQUENCY,
) -> Optional[ClosestNote]:
    """Find the closest note and the exact frequency the cents are measured against."""
    result = frequency_to_note(frequency, reference_frequency)
    if result is None:
        return None

    return ClosestNote(
        note_name=result.note_name,
        octave=result.octave,
        frequency=note_to_frequency(result.note_name, result.octave, reference_frequency),
        cents=result.cents,
    )


def tuning_accuracy(cents: int) -> TuningAccuracy:
    """Classify a cents deviation into a display band."""
    deviation = abs(cents)
    if deviation < IN_TUNE_CENTS:
        return TuningAccuracy.IN_TUNE
    if deviation < CLOSE_CENTS:
        return TuningAccuracy.CLOSE
    return TuningAccuracy.OUT_OF_TUNE


def meter_position(cents: float) -> float:
    """Map a cents deviation to a 0-100 meter position, 50 being in tune."""
    # +-50 cents spans the whole meter
    return float(min(100.0, max(0.0, 50.0 + cents)))


def flat_name(note_name: str) -> str:
    """Return the flat spelling of a sharp note name (e.g. 'F#' -> 'Gb').

    Natural names are returned unchanged.
    """
    if note_name not in NOTE_NAMES:
        raise InvalidNoteNameError(note_name)
    return SHARP_TO_FLAT.get(note_name, note_name)
