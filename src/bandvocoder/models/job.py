"""Job queue and file-level result models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from bandvocoder.models.base import ToDictMixin


class JobState(str, Enum):
    """Lifecycle of a queued vocoder job."""

    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class VocodeJob(ToDictMixin):
    """A vocoder request waiting in, or processed by, the job queue."""

    modulator: bytes = field(repr=False)
    carrier: bytes = field(repr=False)
    width: float
    id: UUID = field(default_factory=uuid4)
    submitted_at: datetime = field(default_factory=datetime.now)
    state: JobState = JobState.PENDING
    error: Optional[str] = None

    def _serialize_value(self, value):
        if isinstance(value, bytes):
            return len(value)
        if isinstance(value, datetime):
            return value.isoformat()
        return super()._serialize_value(value)


@dataclass
class RenderSummary(ToDictMixin):
    """Result of vocoding two files into an output WAV."""

    modulator_path: str
    carrier_path: str
    output_path: str
    width: float
    q_factor: float
    sample_rate: int
    num_samples: int
    duration_seconds: float
    peak: float
