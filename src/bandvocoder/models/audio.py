"""Audio buffer and render result models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import numpy as np

from bandvocoder.core.exceptions import ValidationError
from bandvocoder.models.base import ToDictMixin


class ChannelPolicy(str, Enum):
    """How multi-channel input is reduced to the mono signal the engine processes.

    MIX averages every channel (the default). FIRST keeps channel 0 and
    ignores the rest.
    """

    MIX = "mix"
    FIRST = "first"

    @classmethod
    def parse(cls, value: "str | ChannelPolicy") -> "ChannelPolicy":
        """Accept an enum member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValidationError(
                f"Unknown channel policy '{value}' (expected one of: {choices})",
                field="channel_policy",
            ) from None


@dataclass(frozen=True)
class DecodedAudio(ToDictMixin):
    """Immutable decoded PCM buffer.

    This is the handoff object between the decode collaborator and the
    engine. Channel data is float32, shaped (channels, frames), nominally in
    [-1.0, 1.0], and stored read-only.
    """

    channel_data: np.ndarray
    sample_rate: int
    source: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.sample_rate, bool) or not isinstance(self.sample_rate, (int, np.integer)):
            raise ValidationError(
                f"Sample rate must be an integer, got {self.sample_rate!r}", field="sample_rate"
            )
        if self.sample_rate <= 0:
            raise ValidationError(
                f"Sample rate must be positive, got {self.sample_rate}", field="sample_rate"
            )

        data = np.asarray(self.channel_data)
        if data.ndim != 2 or data.shape[0] < 1:
            raise ValidationError(
                f"Channel data must be shaped (channels, frames), got {data.shape}",
                field="channel_data",
            )
        if not np.issubdtype(data.dtype, np.number):
            raise ValidationError(
                f"Channel data must be numeric, got {data.dtype}", field="channel_data"
            )
        data = np.array(data, dtype=np.float32, copy=True)
        if not np.all(np.isfinite(data)):
            raise ValidationError("Channel data contains NaN or infinite samples", field="channel_data")
        data.setflags(write=False)

        object.__setattr__(self, "channel_data", data)
        object.__setattr__(self, "sample_rate", int(self.sample_rate))

    @classmethod
    def from_frames(
        cls, frames: np.ndarray, sample_rate: int, source: Optional[str] = None
    ) -> "DecodedAudio":
        """Build from a soundfile-style array: 1-D mono or (frames, channels)."""
        frames = np.asarray(frames)
        if frames.ndim == 1:
            data = frames[np.newaxis, :]
        elif frames.ndim == 2:
            data = frames.T
        else:
            raise ValidationError(
                f"Expected 1-D or 2-D sample array, got {frames.ndim}-D", field="channel_data"
            )
        return cls(channel_data=data, sample_rate=sample_rate, source=source)

    @property
    def number_of_channels(self) -> int:
        return int(self.channel_data.shape[0])

    @property
    def length(self) -> int:
        """Number of sample frames."""
        return int(self.channel_data.shape[1])

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.length / self.sample_rate

    def get_channel_data(self, channel: int) -> np.ndarray:
        """Return one channel as a read-only 1-D array."""
        if not 0 <= channel < self.number_of_channels:
            raise IndexError(
                f"Channel {channel} out of range for {self.number_of_channels}-channel audio"
            )
        return self.channel_data[channel]

    def to_mono(self, policy: "str | ChannelPolicy" = ChannelPolicy.MIX) -> np.ndarray:
        """Reduce to a single float32 channel according to the channel policy."""
        policy = ChannelPolicy.parse(policy)
        if self.number_of_channels == 1 or policy is ChannelPolicy.FIRST:
            return np.array(self.channel_data[0], dtype=np.float32)
        return self.channel_data.mean(axis=0, dtype=np.float64).astype(np.float32)

    def _to_dict_extra(self) -> Optional[Dict[str, Any]]:
        return {
            "number_of_channels": self.number_of_channels,
            "length": self.length,
            "duration": self.duration,
        }


@dataclass
class RenderResult(ToDictMixin):
    """Rendered mono output of one vocoder job, before encoding."""

    samples: np.ndarray
    sample_rate: int
    width: float
    q_factor: float
    frequencies: List[float] = field(default_factory=list)
    channel_policy: ChannelPolicy = ChannelPolicy.MIX
    modulator_duration: float = 0.0
    carrier_duration: float = 0.0

    @property
    def length(self) -> int:
        return len(self.samples)

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.length / self.sample_rate

    @property
    def peak(self) -> float:
        """Peak absolute sample value."""
        if self.length == 0:
            return 0.0
        return float(np.max(np.abs(self.samples)))

    def _to_dict_extra(self) -> Optional[Dict[str, Any]]:
        return {"length": self.length, "duration": self.duration, "peak": self.peak}
