"""Open-string reference tables for supported instruments."""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .note_types import InstrumentProfile, InstrumentString
from .note_utils import DEFAULT_REFERENCE_FREQUENCY, note_to_frequency

# Open strings as (note name, octave), in the order a tuner displays them
INSTRUMENT_STRINGS: Mapping[str, Tuple[Tuple[str, int], ...]] = MappingProxyType(
    {
        "guitar": (("E", 2), ("A", 2), ("D", 3), ("G", 3), ("B", 3), ("E", 4)),
        "bass": (("E", 1), ("A", 1), ("D", 2), ("G", 2)),
        "violin": (("G", 3), ("D", 4), ("A", 4), ("E", 5)),
        # Re-entrant tuning, the G string sits above C
        "ukulele": (("G", 4), ("C", 4), ("E", 4), ("A", 4)),
    }
)


def available_instruments() -> Tuple[str, ...]:
    return tuple(INSTRUMENT_STRINGS)


def instrument_profile(
    instrument_id: str,
    reference_frequency: float = DEFAULT_REFERENCE_FREQUENCY,
) -> Optional[InstrumentProfile]:
    """Look up the open strings of an instrument.

    Args:
        instrument_id: Instrument name such as 'guitar'; case-insensitive
        reference_frequency: Frequency of A4 used to derive string frequencies

    Returns:
        InstrumentProfile, or None for an unsupported instrument
    """
    if not isinstance(instrument_id, str):
        return None

    key = instrument_id.strip().lower()
    strings = INSTRUMENT_STRINGS.get(key)
    if strings is None:
        return None

    return InstrumentProfile(
        name=key,
        strings=tuple(
            InstrumentString(
                note_name=name,
                octave=octave,
                frequency=note_to_frequency(name, octave, reference_frequency),
            )
            for name, octave in strings
        ),
    )
