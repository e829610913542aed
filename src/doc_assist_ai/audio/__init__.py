"""Speech synthesis and PCM decoding."""

from doc_assist_ai.audio.decoder import decode_audio_data, decode_base64, encode_wav
from doc_assist_ai.audio.speech import SpeechSynthesizer

__all__ = [
    "SpeechSynthesizer",
    "decode_audio_data",
    "decode_base64",
    "encode_wav",
]
