"""
Mixing & Post-Processing Chain
==============================

Summing gain -> compressor -> makeup gain -> soft-clip limiter, applied to
the summed band bus.
"""

import numpy as np

from bandvocoder.core.compressor import DynamicsCompressor
from bandvocoder.core.shaping import soft_clip_curve
from bandvocoder.models.config import EngineSettings


class PostChain:
    """Output stage for one rendering session."""

    def __init__(self, settings: EngineSettings, sample_rate: int) -> None:
        self.summing_gain = settings.summing_gain
        self.makeup_gain = settings.makeup_gain
        self.compressor = DynamicsCompressor(settings.compressor, sample_rate)
        self.limiter = soft_clip_curve()

    def process(self, bus: np.ndarray) -> np.ndarray:
        """Shape one block of the summed bus into output samples."""
        x = self.compressor.process(bus * self.summing_gain)
        return self.limiter(x * self.makeup_gain)
