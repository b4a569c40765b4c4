"""
Dynamics Compressor
===================

Feed-forward peak compressor modelled on the Web Audio DynamicsCompressorNode:

- static curve: identity below the threshold, a quadratic soft knee over
  [threshold, threshold + knee], slope 1/ratio above the knee
- gain smoothing: one-pole attack/release in the dB domain
- automatic makeup gain: (1 / curve gain at 0 dBFS) ** 0.6

The per-sample loop is compiled with numba. The smoothed gain is carried
between calls so a signal may be processed in blocks.
"""

import math

import numba
import numpy as np

from bandvocoder.core.exceptions import ValidationError
from bandvocoder.models.config import CompressorSettings

# Level assigned to digital silence
SILENCE_DB = -200.0


@numba.njit
def _curve_db(level_db, threshold, knee, ratio):
    """Output level in dB for an input level in dB."""
    if level_db <= threshold:
        return level_db
    slope = 1.0 / ratio
    if knee > 0.0 and level_db < threshold + knee:
        over = level_db - threshold
        return level_db + (slope - 1.0) * over * over / (2.0 * knee)
    return threshold + 0.5 * knee * (1.0 + slope) + (level_db - threshold - knee) * slope


@numba.njit
def _compress_kernel(samples, threshold, knee, ratio, attack_coeff, release_coeff, gain_db):
    """Apply smoothed gain reduction. Returns (output, final gain in dB)."""
    n = len(samples)
    out = np.empty(n, dtype=np.float64)
    g = gain_db
    for i in range(n):
        x = samples[i]
        level = abs(x)
        if level > 1e-10:
            level_db = 20.0 * math.log10(level)
        else:
            level_db = SILENCE_DB
        target = _curve_db(level_db, threshold, knee, ratio) - level_db
        if target < g:
            g = attack_coeff * g + (1.0 - attack_coeff) * target
        else:
            g = release_coeff * g + (1.0 - release_coeff) * target
        out[i] = x * 10.0 ** (g / 20.0)
    return out, g


def time_to_coeff(seconds: float, sample_rate: int) -> float:
    """Convert a time constant in seconds to a one-pole smoothing coefficient."""
    if seconds <= 0:
        return 0.0
    return math.exp(-1.0 / (seconds * sample_rate))


class DynamicsCompressor:
    """
    Stateful compressor for one rendering session.

    Args:
        settings: Threshold, knee, ratio, attack and release
        sample_rate: Processing sample rate in Hz
    """

    def __init__(self, settings: CompressorSettings, sample_rate: int) -> None:
        _validate(settings)
        self.settings = settings
        self.sample_rate = sample_rate
        self.attack_coeff = time_to_coeff(settings.attack, sample_rate)
        self.release_coeff = time_to_coeff(settings.release, sample_rate)
        self.makeup = makeup_gain(settings)
        self._gain_db = 0.0

    @property
    def reduction_db(self) -> float:
        """Current gain reduction in dB (<= 0)."""
        return self._gain_db

    def process(self, block: np.ndarray) -> np.ndarray:
        """Compress one block of samples."""
        s = self.settings
        out, self._gain_db = _compress_kernel(
            np.ascontiguousarray(block, dtype=np.float64),
            s.threshold_db,
            s.knee_db,
            s.ratio,
            self.attack_coeff,
            self.release_coeff,
            self._gain_db,
        )
        return out * self.makeup


def static_gain_db(level_db: float, settings: CompressorSettings) -> float:
    """Steady-state gain change in dB for a constant input level."""
    return _curve_db(level_db, settings.threshold_db, settings.knee_db, settings.ratio) - level_db


def makeup_gain(settings: CompressorSettings) -> float:
    """Linear makeup gain: 0.6 power of the inverse curve gain at 0 dBFS."""
    full_range_db = static_gain_db(0.0, settings)
    return 10.0 ** (-0.6 * full_range_db / 20.0)


def _validate(settings: CompressorSettings) -> None:
    if settings.ratio < 1.0:
        raise ValidationError(f"Compressor ratio must be >= 1, got {settings.ratio}", field="ratio")
    if settings.knee_db < 0.0:
        raise ValidationError(f"Compressor knee must be >= 0 dB, got {settings.knee_db}", field="knee_db")
    if settings.threshold_db > 0.0:
        raise ValidationError(
            f"Compressor threshold must be <= 0 dB, got {settings.threshold_db}", field="threshold_db"
        )
    if settings.attack < 0.0 or settings.release < 0.0:
        raise ValidationError("Compressor attack and release must be >= 0 seconds")
