# tests/conftest.py
"""
Global pytest fixtures for bandvocoder tests.
"""

import numpy as np
import pytest
import soundfile as sf

from bandvocoder.core.logger import get_logger
from helpers import SR, make_noise, make_tone_burst, to_wav_bytes

# Bind the package log handler before CliRunner swaps the standard streams
get_logger(__name__)


@pytest.fixture
def tone_burst() -> np.ndarray:
    """One second of gated 220 Hz tone at 48 kHz."""
    return make_tone_burst()


@pytest.fixture
def noise() -> np.ndarray:
    """One second of seeded white noise at 48 kHz."""
    return make_noise()


@pytest.fixture
def modulator_bytes(tone_burst) -> bytes:
    return to_wav_bytes(tone_burst)


@pytest.fixture
def carrier_bytes(noise) -> bytes:
    return to_wav_bytes(noise)


@pytest.fixture
def modulator_file(tmp_path, tone_burst) -> str:
    """Temporary WAV file holding the tone burst."""
    path = tmp_path / "speech.wav"
    sf.write(str(path), tone_burst, SR)
    return str(path)


@pytest.fixture
def carrier_file(tmp_path, noise) -> str:
    """Temporary FLAC file holding the noise carrier."""
    path = tmp_path / "synth.flac"
    sf.write(str(path), noise, SR)
    return str(path)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with no config files on the search path and a clean global config."""
    from bandvocoder.core import config as config_module

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "CONFIG_LOCATIONS", [])
    config_module.reset_config()
    yield tmp_path
    config_module.reset_config()
