# services/__init__.py
"""
Services Package
================

Application services that sit between views (CLI) and the vocoder engine.

Services provide:
- A clean interface for views to invoke operations
- Input validation and error handling
- Progress reporting and logging
- File I/O

Architecture:
    View (CLI)
        ↓ (paths, width)
    VocoderService / JobQueue
        ↓ (delegates to)
    VocoderEngine (core)

Usage:
    from bandvocoder.services import VocoderService

    result = VocoderService().vocode_file("speech.wav", "synth.wav", width=50)
"""

from .base import BaseService, JobProgress, ProgressCallback, ServiceResult
from .config import ConfigService
from .queue import JobQueue
from .vocoder import VocoderService

__all__ = [
    "BaseService",
    "JobProgress",
    "ProgressCallback",
    "ServiceResult",
    "ConfigService",
    "JobQueue",
    "VocoderService",
]
