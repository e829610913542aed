"""
Audio decoding and speech synthesis tests
"""

import base64
import io
import wave

import numpy as np
import pytest

from doc_assist_ai.audio import SpeechSynthesizer, decode_audio_data, decode_base64, encode_wav
from doc_assist_ai.errors import SpeechSynthesisError

from conftest import FakeProvider, pcm_base64


class TestDecodeAudioData:
    """PCM16 to float conversion"""

    def test_known_values(self):
        audio = decode_audio_data(pcm_base64([0, 16384, -16384, 32767]))

        assert audio.frame_count == 4
        assert audio.sample_rate == 24000
        assert audio.channels == 1
        assert audio.samples.dtype == np.float32
        np.testing.assert_allclose(audio.samples, [0.0, 0.5, -0.5, 32767 / 32768], rtol=0, atol=1e-7)

    def test_no_clamping(self):
        audio = decode_audio_data(pcm_base64([-32768, 32767]))

        assert audio.samples[0] == -1.0
        assert audio.samples[1] < 1.0

    def test_custom_sample_rate(self):
        audio = decode_audio_data(pcm_base64([1] * 48000), sample_rate=48000)

        assert audio.frame_count == 48000
        assert audio.duration == pytest.approx(1.0)

    def test_odd_length_truncates_trailing_byte(self):
        raw = base64.b64decode(pcm_base64([16384, -16384])) + b"\x7f"

        audio = decode_audio_data(base64.b64encode(raw).decode("ascii"))

        assert audio.frame_count == 2
        np.testing.assert_allclose(audio.samples, [0.5, -0.5])

    def test_empty_payload(self):
        audio = decode_audio_data("")

        assert audio.frame_count == 0
        assert audio.duration == 0.0

    def test_decode_base64(self):
        assert decode_base64("AAEC") == b"\x00\x01\x02"


def test_encode_wav_roundtrips_pcm():
    values = [0, 16384, -16384, 32767, -32768]
    audio = decode_audio_data(pcm_base64(values))

    with wave.open(io.BytesIO(encode_wav(audio)), "rb") as wav:
        assert wav.getnchannels() == 1
        assert wav.getsampwidth() == 2
        assert wav.getframerate() == 24000
        frames = wav.readframes(wav.getnframes())

    assert np.frombuffer(frames, dtype="<i2").tolist() == values


class TestSpeechSynthesizer:
    """Hard failures for speech"""

    async def test_generate_speech(self, provider):
        data = await SpeechSynthesizer(provider).generate_speech("नमस्ते")

        assert data == provider.audio
        assert provider.spoken == ["नमस्ते"]

    async def test_missing_audio(self):
        with pytest.raises(SpeechSynthesisError) as exc_info:
            await SpeechSynthesizer(FakeProvider(audio=None)).generate_speech("hello")

        assert str(exc_info.value) == "Failed to generate speech."

    async def test_remote_failure(self, provider):
        provider.speech_error = RuntimeError("quota exceeded")

        with pytest.raises(SpeechSynthesisError) as exc_info:
            await SpeechSynthesizer(provider).generate_speech("hello")

        assert exc_info.value.__cause__ is provider.speech_error
