"""
Decoding of synthesized speech payloads.

The speech service returns base64-encoded raw PCM: signed 16-bit
little-endian, mono. Samples are scaled by 1/32768, so the largest positive
value is 32767/32768 rather than 1.0.
"""

from __future__ import annotations

import base64
import io
import logging
import wave

import numpy as np

from doc_assist_ai.models import DEFAULT_SAMPLE_RATE, AudioSamples

logger = logging.getLogger(__name__)

PCM_SCALE = 32768.0
NUM_CHANNELS = 1
SAMPLE_WIDTH = 2


def decode_base64(data: str) -> bytes:
    """Decode a base64 string to raw bytes."""
    return base64.b64decode(data)


def decode_audio_data(
    base64_data: str,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
) -> AudioSamples:
    """
    Decode base64 16-bit PCM into normalized float samples.

    A trailing odd byte cannot form a sample and is dropped.

    Args:
        base64_data: Base64-encoded little-endian int16 PCM.
        sample_rate: Sample rate of the stream in Hz.

    Returns:
        AudioSamples with float32 values in [-1, 1).
    """
    raw = decode_base64(base64_data)
    if len(raw) % SAMPLE_WIDTH:
        logger.debug("Dropping trailing byte from odd-length PCM buffer (%d bytes)", len(raw))
        raw = raw[: len(raw) - 1]

    pcm = np.frombuffer(raw, dtype="<i2")
    samples = pcm.astype(np.float32) / np.float32(PCM_SCALE)

    return AudioSamples(samples=samples, sample_rate=sample_rate, channels=NUM_CHANNELS)


def encode_wav(audio: AudioSamples) -> bytes:
    """Re-encode samples as a 16-bit mono WAV file."""
    pcm = np.clip(np.round(audio.samples * PCM_SCALE), -32768, 32767).astype("<i2")

    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(audio.channels)
        wav.setsampwidth(SAMPLE_WIDTH)
        wav.setframerate(audio.sample_rate)
        wav.writeframes(pcm.tobytes())
    return buffer.getvalue()
