"""
bandvocoder - Channel Vocoder Engine
====================================

Version: 0.1.0
"""

__version__ = "0.1.0"

# Re-export commonly used constants for convenience
from bandvocoder.core.globals import (
    BAND_COUNT,
    DEFAULT_WIDTH,
    SUPPORTED_AUDIO_EXTENSIONS,
    SUPPORTED_VIDEO_EXTENSIONS,
    WORK_RATE,
)

__all__ = [
    "__version__",
    "BAND_COUNT",
    "DEFAULT_WIDTH",
    "SUPPORTED_AUDIO_EXTENSIONS",
    "SUPPORTED_VIDEO_EXTENSIONS",
    "WORK_RATE",
]
