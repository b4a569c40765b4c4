"""
Signal Processing Primitives
============================

RBJ "Audio EQ Cookbook" biquad filters with explicit, carried state.

Each BiquadFilter owns its normalised coefficients and its Direct Form II
transposed delay line, so a buffer can be filtered in one call or block by
block with identical results.

Supported filter types:
- bandpass: constant 0 dB peak gain, linear Q
- lowpass: Q given in dB (the Web Audio convention)
"""

import math
from dataclasses import dataclass, field
from typing import Tuple

import numpy as np
from scipy import signal as scipy_signal

FILTER_TYPES = ("bandpass", "lowpass")


def biquad_coefficients(
    filter_type: str,
    frequency: float,
    sample_rate: int,
    q: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute normalised biquad coefficients.

    Args:
        filter_type: "bandpass" or "lowpass"
        frequency: Center (bandpass) or cutoff frequency in Hz
        sample_rate: Sample rate in Hz
        q: Linear Q for bandpass, Q in dB for lowpass

    Returns:
        Tuple of (b, a) arrays of length 3 with a[0] == 1

    Raises:
        ValueError: If the filter type or parameters are invalid
    """
    if filter_type not in FILTER_TYPES:
        raise ValueError(f"Unknown filter type: {filter_type}")
    if sample_rate <= 0:
        raise ValueError(f"Sample rate must be positive, got {sample_rate}")

    nyquist = sample_rate / 2.0
    if not 0.0 < frequency < nyquist:
        raise ValueError(
            f"Frequency ({frequency} Hz) must be between 0 and Nyquist ({nyquist} Hz)"
        )

    w0 = 2.0 * math.pi * frequency / sample_rate
    cos_w0 = math.cos(w0)
    sin_w0 = math.sin(w0)

    if filter_type == "bandpass":
        if q <= 0:
            raise ValueError(f"Bandpass Q must be positive, got {q}")
        alpha = sin_w0 / (2.0 * q)
        b = (alpha, 0.0, -alpha)
    else:
        alpha = sin_w0 / (2.0 * 10.0 ** (q / 20.0))
        b = ((1.0 - cos_w0) / 2.0, 1.0 - cos_w0, (1.0 - cos_w0) / 2.0)

    a0 = 1.0 + alpha
    a = (a0, -2.0 * cos_w0, 1.0 - alpha)

    return np.array(b) / a0, np.array(a) / a0


@dataclass
class BiquadFilter:
    """A second-order IIR section with its own delay line."""

    filter_type: str
    frequency: float
    q: float
    sample_rate: int
    b: np.ndarray = field(init=False, repr=False)
    a: np.ndarray = field(init=False, repr=False)
    zi: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.b, self.a = biquad_coefficients(
            self.filter_type, self.frequency, self.sample_rate, self.q
        )
        self.zi = np.zeros(2, dtype=np.float64)

    def process(self, block: np.ndarray) -> np.ndarray:
        """Filter one block, carrying state into the next call."""
        out, self.zi = scipy_signal.lfilter(self.b, self.a, block, zi=self.zi)
        return out

    def reset(self) -> None:
        """Clear the delay line."""
        self.zi = np.zeros(2, dtype=np.float64)


def bandpass(frequency: float, q: float, sample_rate: int) -> BiquadFilter:
    """Constant-skirt bandpass centred on frequency."""
    return BiquadFilter("bandpass", frequency, q, sample_rate)


def lowpass(frequency: float, q_db: float, sample_rate: int) -> BiquadFilter:
    """Resonant lowpass with Q in dB."""
    return BiquadFilter("lowpass", frequency, q_db, sample_rate)


def resample(audio: np.ndarray, orig_sr: int, target_sr: int) -> np.ndarray:
    """
    Resample audio to a different sample rate.

    Args:
        audio: Mono audio as numpy array
        orig_sr: Original sample rate in Hz
        target_sr: Target sample rate in Hz

    Returns:
        Resampled float32 audio
    """
    if orig_sr == target_sr:
        return np.asarray(audio, dtype=np.float32)

    import librosa

    resampled = librosa.resample(
        np.asarray(audio, dtype=np.float32), orig_sr=orig_sr, target_sr=target_sr
    )
    return resampled.astype(np.float32)


def fit_length(audio: np.ndarray, length: int) -> np.ndarray:
    """Truncate, or zero-pad at the end, to exactly length samples."""
    if len(audio) >= length:
        return audio[:length]
    return np.pad(audio, (0, length - len(audio)))
