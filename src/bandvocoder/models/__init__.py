"""Data models for bandvocoder."""

# Audio models
from bandvocoder.models.audio import ChannelPolicy, DecodedAudio, RenderResult

# Base
from bandvocoder.models.base import ToDictMixin

# Config models
from bandvocoder.models.config import CompressorSettings, EngineSettings

# Job models
from bandvocoder.models.job import JobState, RenderSummary, VocodeJob

__all__ = [
    "ToDictMixin",
    "ChannelPolicy",
    "DecodedAudio",
    "RenderResult",
    "CompressorSettings",
    "EngineSettings",
    "JobState",
    "RenderSummary",
    "VocodeJob",
]
