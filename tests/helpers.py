# tests/helpers.py
"""
Test signal generators shared across test modules.
"""

import io

import numpy as np
import soundfile as sf

SR = 48000


def make_tone_burst(duration: float = 1.0, sr: int = SR, freq: float = 220.0) -> np.ndarray:
    """Sine tone gated on and off every 100 ms, a stand-in for speech."""
    t = np.arange(int(sr * duration)) / sr
    gate = (np.floor(t / 0.1) % 2 == 0).astype(np.float64)
    return (0.6 * np.sin(2 * np.pi * freq * t) * gate).astype(np.float32)


def make_noise(duration: float = 1.0, sr: int = SR, seed: int = 0) -> np.ndarray:
    """Seeded white noise carrier."""
    rng = np.random.default_rng(seed)
    return (0.3 * rng.standard_normal(int(sr * duration))).astype(np.float32)


def to_wav_bytes(samples: np.ndarray, sr: int = SR, format: str = "WAV") -> bytes:
    """Encode samples (1-D or (frames, channels)) into an in-memory file."""
    buffer = io.BytesIO()
    sf.write(buffer, samples, sr, format=format)
    return buffer.getvalue()
