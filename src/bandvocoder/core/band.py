"""
Per-Band Analysis-Synthesis Unit
================================

One vocoder channel: the modulator is band-filtered, rectified and smoothed
into an envelope; the carrier is band-filtered with the same center and Q and
amplitude-modulated by that envelope, sample by sample.
"""

from dataclasses import dataclass, field

import numpy as np

from bandvocoder.core.shaping import ShapingCurve, abs_curve
from bandvocoder.core.signal import BiquadFilter, bandpass, lowpass


@dataclass
class BandUnit:
    """Filter state for one frequency band."""

    frequency: float
    q: float
    mod_filter: BiquadFilter
    envelope_filter: BiquadFilter
    car_filter: BiquadFilter
    rectifier: ShapingCurve = field(default_factory=abs_curve, repr=False)

    @classmethod
    def create(
        cls,
        frequency: float,
        q: float,
        sample_rate: int,
        envelope_cutoff_hz: float,
        envelope_q_db: float,
    ) -> "BandUnit":
        """Build a band with fresh filter state."""
        return cls(
            frequency=frequency,
            q=q,
            mod_filter=bandpass(frequency, q, sample_rate),
            envelope_filter=lowpass(envelope_cutoff_hz, envelope_q_db, sample_rate),
            car_filter=bandpass(frequency, q, sample_rate),
        )

    def envelope(self, modulator: np.ndarray) -> np.ndarray:
        """Band-limited loudness estimate of the modulator block."""
        band = self.mod_filter.process(modulator)
        return self.envelope_filter.process(self.rectifier(band))

    def process(self, modulator: np.ndarray, carrier: np.ndarray) -> np.ndarray:
        """Return this band's contribution for one block."""
        env = self.envelope(modulator)
        return self.car_filter.process(carrier) * env
