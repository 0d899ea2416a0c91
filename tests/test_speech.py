"""
Test cases for the speech helpers (needs the speech extra installed).
"""
import importlib.util
import unittest
import wave
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

HAS_SPEECH_DEPS = all(
    importlib.util.find_spec(name) is not None for name in ("pyaudio", "torch", "elevenlabs")
)


@unittest.skipUnless(HAS_SPEECH_DEPS, "speech extra not installed")
class TestSpeechHelpers(unittest.TestCase):

    def setUp(self):
        from hearme import speech
        self.speech = speech

    def test_frames_to_wav(self):
        samples = [0, 1, -1, 32767, -32768] * 100
        buffer = self.speech.frames_to_wav(samples)

        with wave.open(buffer, "rb") as wf:
            self.assertEqual(wf.getnchannels(), 1)
            self.assertEqual(wf.getsampwidth(), 2)
            self.assertEqual(wf.getframerate(), 16000)
            self.assertEqual(wf.getnframes(), len(samples))
            self.assertEqual(len(wf.readframes(wf.getnframes())), len(samples) * 2)

    def test_frames_to_wav_custom_rate(self):
        buffer = self.speech.frames_to_wav([0] * 10, rate=8000)
        with wave.open(buffer, "rb") as wf:
            self.assertEqual(wf.getframerate(), 8000)

    def test_is_quit_command(self):
        self.assertTrue(self.speech.is_quit_command("Please QUIT now"))
        self.assertTrue(self.speech.is_quit_command("quit"))
        self.assertFalse(self.speech.is_quit_command("keep going"))
        self.assertFalse(self.speech.is_quit_command(""))
        self.assertFalse(self.speech.is_quit_command(None))


if __name__ == '__main__':
    unittest.main()
