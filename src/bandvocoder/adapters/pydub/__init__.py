"""Pydub adapter for audio I/O operations.

Decoding, media normalization and WAV encoding using soundfile for native
formats and pydub/ffmpeg for everything else.
"""

from bandvocoder.adapters.pydub.audio import (
    decode_audio,
    encode_wav,
    normalize_media,
)

__all__ = [
    "decode_audio",
    "normalize_media",
    "encode_wav",
]
