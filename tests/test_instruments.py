import unittest

from live_tuner.instruments import available_instruments, instrument_profile
from live_tuner.note_types import InstrumentProfile
from live_tuner.note_utils import note_to_frequency


class TestInstrumentProfile(unittest.TestCase):
    def test_guitar_strings(self):
        profile = instrument_profile("guitar")
        self.assertIsInstance(profile, InstrumentProfile)
        self.assertEqual(profile.labels, ("E2", "A2", "D3", "G3", "B3", "E4"))
        self.assertEqual(len(profile), 6)
        self.assertAlmostEqual(profile.frequencies[0], 82.41, places=2)
        self.assertAlmostEqual(profile.frequencies[-1], 329.63, places=2)

    def test_other_instruments(self):
        self.assertEqual(instrument_profile("bass").labels, ("E1", "A1", "D2", "G2"))
        self.assertEqual(instrument_profile("violin").labels, ("G3", "D4", "A4", "E5"))
        self.assertEqual(instrument_profile("ukulele").labels, ("G4", "C4", "E4", "A4"))

    def test_unknown_instrument(self):
        self.assertIsNone(instrument_profile("unknown"))
        self.assertIsNone(instrument_profile(""))
        self.assertIsNone(instrument_profile(None))

    def test_lookup_is_case_insensitive(self):
        self.assertEqual(instrument_profile(" Guitar ").name, "guitar")

    def test_frequencies_follow_reference(self):
        profile = instrument_profile("violin", reference_frequency=442.0)
        self.assertEqual(profile.frequencies[2], 442.0)
        self.assertAlmostEqual(profile.frequencies[0], note_to_frequency("G", 3, 442.0))

    def test_profiles_are_immutable(self):
        profile = instrument_profile("guitar")
        with self.assertRaises(AttributeError):
            profile.name = "banjo"
        with self.assertRaises(TypeError):
            profile.strings[0] = None

    def test_available_instruments(self):
        self.assertEqual(
            set(available_instruments()), {"guitar", "bass", "violin", "ukulele"}
        )


if __name__ == "__main__":
    unittest.main()
