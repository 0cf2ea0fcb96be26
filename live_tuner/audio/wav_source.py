"""Fixed-size analysis windows read from an audio file."""

from typing import Iterator, Optional, Tuple

import numpy as np
import soundfile as sf

from ..core.config import DEFAULT_WINDOW_SIZE
from ..logging_config import get_logger

logger = get_logger(__name__)


class WavFileSource:
    """Reads an audio file as mono float windows, the way a capture layer would hand them over."""

    def __init__(
        self,
        file_path: str,
        window_size: int = DEFAULT_WINDOW_SIZE,
        hop_size: Optional[int] = None,
        gain: float = 1.0,
    ):
        if window_size <= 0:
            raise ValueError("window_size must be positive")
        if hop_size is not None and hop_size <= 0:
            raise ValueError("hop_size must be positive")

        self._file_path = str(file_path)
        self._window_size = int(window_size)
        self._hop_size = int(hop_size) if hop_size is not None else self._window_size
        self._gain = float(gain)

        with sf.SoundFile(self._file_path) as f:
            self._sample_rate = f.samplerate
            self._channels = f.channels
            self._frames = f.frames

        logger.info(
            f"Opened {self._file_path}: {self._frames} frames, "
            f"{self._sample_rate}Hz, {self._channels} channel(s)"
        )

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def channels(self) -> int:
        return self._channels

    @property
    def window_size(self) -> int:
        return self._window_size

    def windows(self) -> Iterator[Tuple[float, np.ndarray]]:
        """Yield (start time in seconds, window) for every full window in the file."""
        with sf.SoundFile(self._file_path) as f:
            start = 0
            while start + self._window_size <= self._frames:
                f.seek(start)
                block = f.read(self._window_size, dtype="float32", always_2d=True)
                if len(block) < self._window_size:
                    break

                # Mix down to mono
                window = block.mean(axis=1)
                if self._gain != 1.0:
                    window = window * self._gain

                yield start / self._sample_rate, window
                start += self._hop_size


def iter_windows(
    path: str,
    window_size: int = DEFAULT_WINDOW_SIZE,
    hop_size: Optional[int] = None,
    gain: float = 1.0,
) -> Iterator[Tuple[float, np.ndarray]]:
    """Convenience wrapper around WavFileSource.windows()."""
    return WavFileSource(path, window_size, hop_size, gain).windows()
