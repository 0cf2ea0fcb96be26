import unittest

import numpy as np
import pytest

from live_tuner.core.interfaces import IPitchEstimator
from live_tuner.detection import (
    AutocorrelationEstimator,
    YinEstimator,
    parabolic_offset,
)
from live_tuner.detection.autocorrelation import unbiased_autocorrelation
from live_tuner.detection.yin import cumulative_mean_normalized_difference
from live_tuner.note_utils import frequency_to_note

from .signals import SAMPLE_RATE, harmonic_tone, sine

ESTIMATOR_CLASSES = [AutocorrelationEstimator, YinEstimator]


@pytest.fixture(params=ESTIMATOR_CLASSES, ids=lambda cls: cls.name)
def estimator(request):
    return request.param()


def test_implements_interface(estimator):
    assert isinstance(estimator, IPitchEstimator)
    assert estimator.name in ("autocorrelation", "yin")


def test_a440_sine(estimator):
    frequency = estimator.estimate(sine(440.0), SAMPLE_RATE)

    assert frequency is not None
    assert abs(frequency - 440.0) < 1.0

    note = frequency_to_note(frequency, 440.0)
    assert (note.note_name, note.octave) == ("A", 4)
    assert abs(note.cents) <= 5


@pytest.mark.parametrize(
    "frequency, expected",
    [
        (82.41, "E2"),
        (110.0, "A2"),
        (146.83, "D3"),
        (196.0, "G3"),
        (246.94, "B3"),
        (329.63, "E4"),
        (659.26, "E5"),
        (1000.0, "B5"),
    ],
)
def test_sine_maps_to_note(estimator, frequency, expected):
    detected = estimator.estimate(sine(frequency), SAMPLE_RATE)

    assert detected is not None
    note = frequency_to_note(detected, 440.0)
    assert str(note) == expected
    assert abs(1200 * np.log2(detected / frequency)) < 10


def test_harmonic_tone_reports_fundamental(estimator):
    tone = harmonic_tone(110.0, [1.0, 0.6, 0.3])
    tone = tone / np.max(np.abs(tone))

    detected = estimator.estimate(tone, SAMPLE_RATE)

    assert detected is not None
    assert str(frequency_to_note(detected)) == "A2"


def test_other_sample_rate(estimator):
    detected = estimator.estimate(sine(440.0, sample_rate=48000), 48000)
    assert abs(detected - 440.0) < 1.0


def test_silence(estimator):
    assert estimator.estimate(np.zeros(2048), SAMPLE_RATE) is None


@pytest.mark.parametrize("cls", ESTIMATOR_CLASSES, ids=lambda cls: cls.name)
def test_silence_without_energy_gate(cls):
    estimator = cls(silence_threshold=0.0)

    assert estimator.estimate(np.zeros(2048), SAMPLE_RATE) is None


def test_empty_window(estimator):
    assert estimator.estimate(np.array([]), SAMPLE_RATE) is None
    assert estimator.estimate([], SAMPLE_RATE) is None


def test_low_level_noise(estimator):
    rng = np.random.default_rng(1)
    noise = rng.uniform(-0.01, 0.01, 2048)
    assert estimator.estimate(noise, SAMPLE_RATE) is None


def test_quiet_tone_below_gate(estimator):
    # Mean square of a 0.04 amplitude sine is 0.0008
    assert estimator.estimate(sine(440.0, amplitude=0.04), SAMPLE_RATE) is None


def test_loud_white_noise(estimator):
    rng = np.random.default_rng(0)
    noise = rng.uniform(-0.5, 0.5, 2048)
    assert estimator.estimate(noise, SAMPLE_RATE) is None


def test_window_too_short(estimator):
    assert estimator.estimate(sine(440.0, n=16), SAMPLE_RATE) is None


def test_accepts_plain_lists(estimator):
    detected = estimator.estimate(sine(440.0).tolist(), SAMPLE_RATE)
    assert abs(detected - 440.0) < 1.0


def test_does_not_modify_input(estimator):
    window = sine(440.0).astype(np.float32)
    original = window.copy()
    estimator.estimate(window, SAMPLE_RATE)
    np.testing.assert_array_equal(window, original)


@pytest.mark.parametrize("sample_rate", [0, -44100])
def test_invalid_sample_rate(estimator, sample_rate):
    with pytest.raises(ValueError):
        estimator.estimate(sine(440.0), sample_rate)


def test_rejects_multichannel(estimator):
    with pytest.raises(ValueError):
        estimator.estimate(np.zeros((1024, 2)), SAMPLE_RATE)


def test_lag_bounds(estimator):
    assert estimator.lag_bounds(44100) == (29, 882)
    assert estimator.lag_bounds(48000) == (32, 960)


def test_repeatable(estimator):
    window = sine(196.0)
    assert estimator.estimate(window, SAMPLE_RATE) == estimator.estimate(window, SAMPLE_RATE)


class TestParabolicOffset(unittest.TestCase):
    def test_vertex(self):
        self.assertAlmostEqual(parabolic_offset(np.array([1.0, 3.0, 2.0]), 1), 1 / 6)
        self.assertAlmostEqual(parabolic_offset(np.array([2.0, 3.0, 1.0]), 1), -1 / 6)

    def test_symmetric_peak(self):
        self.assertEqual(parabolic_offset(np.array([1.0, 2.0, 1.0]), 1), 0.0)

    def test_flat_falls_back_to_integer_lag(self):
        self.assertEqual(parabolic_offset(np.array([0.5, 0.5, 0.5]), 1), 0.0)

    def test_edges(self):
        values = np.array([3.0, 2.0, 1.0])
        self.assertEqual(parabolic_offset(values, 0), 0.0)
        self.assertEqual(parabolic_offset(values, 2), 0.0)


class TestAutocorrelation(unittest.TestCase):
    def test_unbiased_normalization(self):
        window = np.array([1.0, 2.0, 3.0])
        # lag 0: (1+4+9)/3, lag 1: (2+6)/2, lag 2: 3/1
        np.testing.assert_allclose(unbiased_autocorrelation(window), [14 / 3, 4.0, 3.0])

    def test_clarity_threshold(self):
        strict = AutocorrelationEstimator(clarity_threshold=1.0)
        rng = np.random.default_rng(3)
        noisy = sine(440.0) + rng.normal(0, 0.5, 2048)
        self.assertIsNone(strict.estimate(noisy, SAMPLE_RATE))
        self.assertIsNotNone(AutocorrelationEstimator().estimate(noisy, SAMPLE_RATE))

    def test_invalid_settings(self):
        with self.assertRaises(ValueError):
            AutocorrelationEstimator(clarity_threshold=1.5)
        with self.assertRaises(ValueError):
            AutocorrelationEstimator(octave_tolerance=0.0)
        with self.assertRaises(ValueError):
            AutocorrelationEstimator(min_frequency=500.0, max_frequency=100.0)
        with self.assertRaises(ValueError):
            AutocorrelationEstimator(min_frequency=0.0)


class TestYin(unittest.TestCase):
    def test_cmnd_starts_at_one(self):
        cmnd = cumulative_mean_normalized_difference(np.array([0.0, 2.0, 4.0, 0.5]))
        # tau=1: 2*1/2, tau=2: 4*2/6, tau=3: 0.5*3/6.5
        np.testing.assert_allclose(cmnd, [1.0, 1.0, 4 / 3, 1.5 / 6.5])

    def test_cmnd_zero_difference(self):
        cmnd = cumulative_mean_normalized_difference(np.zeros(4))
        np.testing.assert_array_equal(cmnd, np.ones(4))

    def test_threshold(self):
        self.assertEqual(YinEstimator().threshold, 0.15)
        with self.assertRaises(ValueError):
            YinEstimator(threshold=0.0)

    def test_longest_period_limited_by_half_window(self):
        # 60 Hz needs a 735 sample lag; a 1024 sample window only reaches 510
        self.assertIsNone(YinEstimator().estimate(sine(60.0, n=1024), SAMPLE_RATE))
        self.assertIsNotNone(YinEstimator().estimate(sine(60.0, n=2048), SAMPLE_RATE))


if __name__ == "__main__":
    unittest.main()
