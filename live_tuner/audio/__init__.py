"""Audio file input for offline analysis."""

from .wav_source import WavFileSource, iter_windows

__all__ = ["WavFileSource", "iter_windows"]
