#!/usr/bin/env python3
"""
HearMe - Speech Transcription with VAD

Records the microphone, uses Silero VAD to find speech start/end, transcribes
each utterance with the Eleven Labs Speech-to-Text API and stores it as a
"speech" log in the backend.
"""

import asyncio
import io
import logging
import os
import time
import wave
from typing import Iterator, List, Optional

import numpy as np
import pyaudio
import torch
from dotenv import load_dotenv
from elevenlabs.client import ElevenLabs

from .client import BackendClient
from .config import load_config

logger = logging.getLogger(__name__)

# Audio configuration
CHUNK = 1024
FORMAT = pyaudio.paInt16
CHANNELS = 1
RATE = 16000  # 16kHz for Silero VAD
VAD_WINDOW_SIZE = 512  # Silero VAD needs exactly 512 samples at 16kHz
ACCUMULATE_CHUNKS = 2

# VAD configuration
SPEECH_THRESHOLD = 0.5
SILENCE_DURATION_THRESHOLD = 1.0  # seconds of silence that end an utterance
MIN_SPEECH_DURATION = 0.5


def frames_to_wav(frames: List[int], sample_width: int = 2, rate: int = RATE) -> io.BytesIO:
    """Pack int16 samples into an in-memory mono WAV file."""
    wav_buffer = io.BytesIO()
    with wave.open(wav_buffer, 'wb') as wf:
        wf.setnchannels(CHANNELS)
        wf.setsampwidth(sample_width)
        wf.setframerate(rate)
        wf.writeframes(np.array(frames, dtype=np.int16).tobytes())
    wav_buffer.seek(0)
    return wav_buffer


def is_quit_command(text: Optional[str]) -> bool:
    return bool(text) and "quit" in text.lower()


class SpeechTranscriber:
    def __init__(self, client: BackendClient):
        self.api_key = os.getenv("ELEVEN_LABS_API_KEY")
        if not self.api_key:
            raise ValueError("ELEVEN_LABS_API_KEY not found in environment variables")

        self.client = client
        self.stt = ElevenLabs(api_key=self.api_key)
        self.transcriptions: List[str] = []
        self.is_running = True
        self.audio = pyaudio.PyAudio()

        logger.info("🔧 Loading Silero VAD model...")
        self.vad_model, _ = torch.hub.load(
            repo_or_dir='snakers4/silero-vad',
            model='silero_vad',
            force_reload=False,
            onnx=False
        )
        logger.info("✅ Silero VAD model loaded")

        self.vad_accumulator: List[int] = []
        self.speech_frames: List[int] = []
        self.is_speech_active = False
        self.silence_start_time: Optional[float] = None

    def detect_speech_in_frame(self, audio_frame: np.ndarray) -> bool:
        """Use Silero VAD to detect speech in one 512-sample window"""
        if len(audio_frame) < VAD_WINDOW_SIZE:
            padded = np.zeros(VAD_WINDOW_SIZE, dtype=np.int16)
            padded[:len(audio_frame)] = audio_frame
            audio_frame = padded
        else:
            audio_frame = audio_frame[:VAD_WINDOW_SIZE]

        audio_tensor = torch.from_numpy(audio_frame).float()
        if audio_tensor.abs().max() > 0:
            audio_tensor = audio_tensor / audio_tensor.abs().max()

        try:
            confidence = self.vad_model(audio_tensor, RATE).item()
        except RuntimeError as e:
            logger.warning(f"⚠️  VAD detection error: {e}")
            return False
        return confidence > SPEECH_THRESHOLD

    def record_with_vad(self) -> Iterator[io.BytesIO]:
        """Yield one WAV buffer per detected utterance"""
        stream = self.audio.open(
            format=FORMAT,
            channels=CHANNELS,
            rate=RATE,
            input=True,
            frames_per_buffer=CHUNK
        )
        print("🎤 Listening... (pauses are detected automatically)")

        try:
            while self.is_running:
                data = stream.read(CHUNK, exception_on_overflow=False)
                audio_chunk = np.frombuffer(data, dtype=np.int16)
                self.vad_accumulator.extend(audio_chunk)

                if len(self.vad_accumulator) < VAD_WINDOW_SIZE * ACCUMULATE_CHUNKS:
                    continue

                vad_frame = np.array(self.vad_accumulator[-VAD_WINDOW_SIZE:], dtype=np.int16)
                is_speech = self.detect_speech_in_frame(vad_frame)
                current_time = time.time()

                if is_speech:
                    if not self.is_speech_active:
                        print("🗣️  Speech detected - recording...")
                        self.is_speech_active = True
                        self.speech_frames = []
                    self.speech_frames.extend(self.vad_accumulator)
                    self.silence_start_time = None
                elif self.is_speech_active:
                    if self.silence_start_time is None:
                        self.silence_start_time = current_time
                    self.speech_frames.extend(self.vad_accumulator)

                    if current_time - self.silence_start_time >= SILENCE_DURATION_THRESHOLD:
                        speech_duration = len(self.speech_frames) / RATE
                        if speech_duration >= MIN_SPEECH_DURATION:
                            yield frames_to_wav(self.speech_frames, self.audio.get_sample_size(FORMAT))
                        else:
                            print(f"⏭️  Speech too short ({speech_duration:.1f}s) - skipping")
                        self.is_speech_active = False
                        self.speech_frames = []
                        self.silence_start_time = None

                self.vad_accumulator = []
        finally:
            stream.stop_stream()
            stream.close()

    def transcribe_audio(self, audio_data: io.BytesIO) -> Optional[str]:
        """Transcribe audio using Eleven Labs API"""
        try:
            transcription = self.stt.speech_to_text.convert(
                file=audio_data,
                model_id="scribe_v1",
                tag_audio_events=False,
                language_code="eng",
                diarize=False
            )
        except Exception as e:
            logger.error(f"❌ Error transcribing audio: {e}")
            return None
        text = (transcription.text or "").strip()
        return text or None

    async def save_transcription(self, text: str) -> None:
        try:
            await self.client.submit_log("speech", {"text": text})
            print("✅ Speech saved")
        except Exception as e:
            logger.error(f"❌ Failed to save speech log: {e}")

    async def run(self):
        """Record, transcribe and store utterances until 'quit' is heard"""
        print("🎯 HearMe - Speech to text")
        print("🔊 Say 'quit' to stop")
        print("=" * 70)

        try:
            for audio_data in self.record_with_vad():
                text = self.transcribe_audio(audio_data)
                if not text:
                    print("🔇 No speech detected or transcription failed")
                    continue

                print(f"📝 Transcribed: {text}")
                self.transcriptions.append(text)

                if is_quit_command(text):
                    print("🛑 'Quit' detected. Stopping transcription...")
                    self.is_running = False
                    break

                await self.save_transcription(text)
        except KeyboardInterrupt:
            print("\n🛑 Interrupted by user")
            self.is_running = False
        finally:
            await self.client.close()
            self.audio.terminate()


def main():
    """Main function"""
    load_dotenv()
    logging.basicConfig(level=logging.INFO)
    cfg = load_config()

    try:
        transcriber = SpeechTranscriber(BackendClient.from_config(cfg.backend))
        asyncio.run(transcriber.run())
        print(f"Total transcriptions: {len(transcriber.transcriptions)}")
    except ValueError as e:
        print(f"❌ Configuration Error: {e}")
        print("Please make sure ELEVEN_LABS_API_KEY is set in your .env file")


if __name__ == "__main__":
    main()
