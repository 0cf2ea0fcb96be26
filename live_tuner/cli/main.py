"""Main entry point for the live_tuner CLI."""

import argparse
import sys
from typing import List, Optional

from ..audio.wav_source import WavFileSource
from ..core.config import ConfigManager, DEFAULT_WINDOW_SIZE
from ..core.factory import ComponentFactory
from ..detection import ESTIMATORS
from ..instruments import available_instruments, instrument_profile
from ..logging_config import get_logger, setup_logging
from ..note_types import ClosestNote, TunerReading
from ..note_utils import (
    DEFAULT_REFERENCE_FREQUENCY,
    InvalidNoteNameError,
    closest_note,
    flat_name,
    note_to_frequency,
    tuning_accuracy,
)

logger = get_logger(__name__)


def _format_note(note: ClosestNote, use_flats: bool = False) -> str:
    name = flat_name(note.note_name) if use_flats else note.note_name
    return f"{name}{note.octave}"


def _format_reading(reading: TunerReading, use_flats: bool = False) -> str:
    return (
        f"{reading.timestamp:8.3f}s  {_format_note(reading.note, use_flats):<4} "
        f"{reading.frequency:8.2f} Hz  target {reading.note.frequency:8.2f} Hz  "
        f"{reading.cents:+3d} cents  [{reading.accuracy.value}]"
    )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--reference",
        type=float,
        default=None,
        help=f"Reference frequency for A4 in Hz (default: {DEFAULT_REFERENCE_FREQUENCY})",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="live-tuner", description="live_tuner - pitch detection and note mapping"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    note_parser = subparsers.add_parser("note", help="Show the closest note for a frequency")
    note_parser.add_argument("frequency", type=float, help="Frequency in Hz")
    note_parser.add_argument(
        "--flats", action="store_true", help="Use flat notes instead of sharps"
    )
    _add_common_arguments(note_parser)

    freq_parser = subparsers.add_parser("freq", help="Show the frequency of a note")
    freq_parser.add_argument("note", help="Note name, e.g. A or C#")
    freq_parser.add_argument("octave", type=int, help="Octave number, e.g. 4")
    _add_common_arguments(freq_parser)

    strings_parser = subparsers.add_parser("strings", help="List an instrument's open strings")
    strings_parser.add_argument(
        "instrument", help=f"Instrument ({', '.join(available_instruments())})"
    )
    _add_common_arguments(strings_parser)

    analyze_parser = subparsers.add_parser("analyze", help="Detect pitch in an audio file")
    analyze_parser.add_argument("path", help="Path to a WAV (or other soundfile-readable) file")
    analyze_parser.add_argument(
        "--algorithm",
        choices=sorted(ESTIMATORS),
        default=None,
        help="Pitch estimator (default: from configuration)",
    )
    analyze_parser.add_argument(
        "--window",
        type=int,
        default=None,
        help=f"Analysis window size in samples (default: {DEFAULT_WINDOW_SIZE})",
    )
    analyze_parser.add_argument(
        "--hop", type=int, default=None, help="Hop size in samples (default: window size)"
    )
    analyze_parser.add_argument(
        "--config-dir", default=None, help="Directory containing JSON configuration files"
    )
    analyze_parser.add_argument(
        "--flats", action="store_true", help="Use flat notes instead of sharps"
    )
    _add_common_arguments(analyze_parser)

    return parser


def _reference(args) -> float:
    return args.reference if args.reference is not None else DEFAULT_REFERENCE_FREQUENCY


def cmd_note(args) -> int:
    note = closest_note(args.frequency, _reference(args))
    if note is None:
        print("--")
        return 0

    print(
        f"{_format_note(note, args.flats)}  target {note.frequency:.2f} Hz  "
        f"{note.cents:+d} cents  [{tuning_accuracy(note.cents).value}]"
    )
    return 0


def cmd_freq(args) -> int:
    try:
        frequency = note_to_frequency(args.note, args.octave, _reference(args))
    except InvalidNoteNameError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"{args.note}{args.octave}  {frequency:.2f} Hz")
    return 0


def cmd_strings(args) -> int:
    profile = instrument_profile(args.instrument, _reference(args))
    if profile is None:
        print(
            f"Unknown instrument: {args.instrument} "
            f"(available: {', '.join(available_instruments())})",
            file=sys.stderr,
        )
        return 1

    print(f"{profile.name} ({len(profile)} strings)")
    for string in profile.strings:
        print(f"  {string.label:<4} {string.frequency:8.2f} Hz")
    return 0


def cmd_analyze(args) -> int:
    factory = ComponentFactory(ConfigManager(args.config_dir))
    tuner_config = factory.config_manager.get_config("tuner")

    session = factory.create_session(args.algorithm, args.reference)
    window_size = args.window if args.window is not None else tuner_config["window_size"]
    hop_size = args.hop if args.hop is not None else tuner_config["hop_size"]
    source = WavFileSource(args.path, window_size=window_size, hop_size=hop_size)

    readings = 0
    for start_time, window in source.windows():
        reading = session.process_window(window, source.sample_rate, timestamp=start_time)
        if reading is not None:
            readings += 1
            print(_format_reading(reading, args.flats))

    if readings == 0:
        print("No pitch detected")
    return 0


COMMANDS = {
    "note": cmd_note,
    "freq": cmd_freq,
    "strings": cmd_strings,
    "analyze": cmd_analyze,
}


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command line arguments, or None to use sys.argv

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.command is None:
        parser.print_help()
        return 1

    if parsed_args.debug:
        setup_logging("DEBUG")

    try:
        return COMMANDS[parsed_args.command](parsed_args)
    except (OSError, RuntimeError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
