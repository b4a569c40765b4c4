"""
Global Constants and Configurations
===================================

This module defines global constants used throughout the bandvocoder package:
supported input formats and the fixed "house sound" parameters of the engine.
The tunable ones are mirrored as defaults in bandvocoder.core.config.

Usage:
    from bandvocoder.core.globals import WORK_RATE, BAND_COUNT
"""

from typing import List

# Supported input file extensions
SUPPORTED_AUDIO_EXTENSIONS: List[str] = [
    ".wav",
    ".mp3",
    ".flac",
    ".ogg",
    ".m4a",
]

# Video containers are accepted through ffmpeg audio extraction
SUPPORTED_VIDEO_EXTENSIONS: List[str] = [
    ".mp4",
    ".mov",
    ".mkv",
    ".avi",
    ".webm",
]

# Formats libsndfile decodes natively
NATIVE_AUDIO_EXTENSIONS: List[str] = [".wav", ".flac", ".ogg"]

# Processing context
WORK_RATE: int = 48000
OUTPUT_SUBTYPE: str = "PCM_16"

# Band layout
BAND_COUNT: int = 16
MIN_BAND_HZ: float = 80.0
MAX_BAND_HZ: float = 7000.0

# Width -> Q mapping (width 0 = narrow/robotic, 100 = wide/breathy)
MIN_Q: float = 0.5
MAX_Q: float = 15.0
DEFAULT_WIDTH: float = 50.0

# Envelope follower
ENVELOPE_CUTOFF_HZ: float = 40.0
ENVELOPE_Q_DB: float = 1.0

# Shaping tables
CURVE_SIZE: int = 65536

# Post-processing chain
SUMMING_GAIN: float = 1.0
COMPRESSOR_THRESHOLD_DB: float = -24.0
COMPRESSOR_KNEE_DB: float = 10.0
COMPRESSOR_RATIO: float = 12.0
COMPRESSOR_ATTACK: float = 0.003
COMPRESSOR_RELEASE: float = 0.25
MAKEUP_GAIN: float = 4.0

# Frames rendered per block
DEFAULT_BLOCK_SIZE: int = 16384

__all__ = [
    "SUPPORTED_AUDIO_EXTENSIONS",
    "SUPPORTED_VIDEO_EXTENSIONS",
    "NATIVE_AUDIO_EXTENSIONS",
    "WORK_RATE",
    "OUTPUT_SUBTYPE",
    "BAND_COUNT",
    "MIN_BAND_HZ",
    "MAX_BAND_HZ",
    "MIN_Q",
    "MAX_Q",
    "DEFAULT_WIDTH",
    "ENVELOPE_CUTOFF_HZ",
    "ENVELOPE_Q_DB",
    "CURVE_SIZE",
    "SUMMING_GAIN",
    "COMPRESSOR_THRESHOLD_DB",
    "COMPRESSOR_KNEE_DB",
    "COMPRESSOR_RATIO",
    "COMPRESSOR_ATTACK",
    "COMPRESSOR_RELEASE",
    "MAKEUP_GAIN",
    "DEFAULT_BLOCK_SIZE",
]
