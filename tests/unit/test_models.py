"""
Unit tests for bandvocoder.models package.
"""

from uuid import UUID

import numpy as np
import pytest

from bandvocoder.core.exceptions import ValidationError
from bandvocoder.models import (
    ChannelPolicy,
    DecodedAudio,
    EngineSettings,
    JobState,
    RenderResult,
    RenderSummary,
    VocodeJob,
)


class TestDecodedAudio:
    """Tests for the decoded buffer."""

    def test_properties(self):
        audio = DecodedAudio(np.zeros((2, 24000)), 48000)

        assert audio.number_of_channels == 2
        assert audio.length == 24000
        assert audio.duration == pytest.approx(0.5)
        assert audio.channel_data.dtype == np.float32

    def test_read_only_copy(self):
        source = np.zeros((1, 10), dtype=np.float32)
        audio = DecodedAudio(source, 8000)

        source[0, 0] = 1.0

        assert audio.channel_data[0, 0] == 0.0
        with pytest.raises(ValueError):
            audio.channel_data[0, 0] = 1.0

    def test_from_frames_layouts(self):
        assert DecodedAudio.from_frames(np.zeros(5), 8000).channel_data.shape == (1, 5)
        assert DecodedAudio.from_frames(np.zeros((5, 2)), 8000).channel_data.shape == (2, 5)

    @pytest.mark.parametrize(
        "data,sr",
        [
            (np.zeros((1, 10)), 0),
            (np.zeros((1, 10)), -44100),
            (np.zeros((1, 10)), 44100.0),
            (np.zeros(10), 44100),
            (np.zeros((0, 10)), 44100),
            (np.array([[0.0, np.nan]]), 44100),
            (np.array([[0.0, np.inf]]), 44100),
            (np.array([["a", "b"]]), 44100),
        ],
    )
    def test_invalid_buffers(self, data, sr):
        with pytest.raises(ValidationError):
            DecodedAudio(data, sr)

    def test_to_mono_mix(self):
        audio = DecodedAudio(np.array([[1.0, 0.0], [0.0, 1.0]]), 8000)
        np.testing.assert_allclose(audio.to_mono(), [0.5, 0.5])

    def test_to_mono_first(self):
        audio = DecodedAudio(np.array([[1.0, 0.0], [0.0, 1.0]]), 8000)
        np.testing.assert_allclose(audio.to_mono("first"), [1.0, 0.0])

    def test_get_channel_out_of_range(self):
        with pytest.raises(IndexError):
            DecodedAudio(np.zeros((1, 4)), 8000).get_channel_data(1)

    def test_to_dict_summarises_samples(self):
        data = DecodedAudio(np.zeros((2, 8)), 8000, source="x.wav").to_dict()

        assert data["channel_data"] == {"shape": [2, 8], "dtype": "float32"}
        assert data["number_of_channels"] == 2
        assert data["source"] == "x.wav"


class TestChannelPolicy:
    """Tests for channel policy parsing."""

    def test_parse(self):
        assert ChannelPolicy.parse("MIX") is ChannelPolicy.MIX
        assert ChannelPolicy.parse(ChannelPolicy.FIRST) is ChannelPolicy.FIRST

    def test_parse_unknown(self):
        with pytest.raises(ValidationError):
            ChannelPolicy.parse("left")


class TestRenderModels:
    """Tests for render result and summary models."""

    def test_render_result(self):
        result = RenderResult(
            samples=np.array([0.0, -0.25, 0.5], dtype=np.float32),
            sample_rate=48000,
            width=50.0,
            q_factor=7.75,
        )

        assert result.length == 3
        assert result.peak == pytest.approx(0.5)
        data = result.to_dict()
        assert data["channel_policy"] == "mix"
        assert data["peak"] == pytest.approx(0.5)

    def test_empty_render_peak(self):
        result = RenderResult(samples=np.zeros(0), sample_rate=48000, width=0.0, q_factor=15.0)
        assert result.peak == 0.0

    def test_render_summary_to_dict(self):
        summary = RenderSummary("a.wav", "b.wav", "out.wav", 50.0, 7.75, 48000, 96000, 2.0, 0.7)
        assert summary.to_dict()["num_samples"] == 96000


class TestVocodeJob:
    """Tests for queued jobs."""

    def test_defaults(self):
        job = VocodeJob(modulator=b"abc", carrier=b"de", width=50.0)

        assert isinstance(job.id, UUID)
        assert job.state is JobState.PENDING
        assert job.error is None

    def test_to_dict(self):
        data = VocodeJob(modulator=b"abc", carrier=b"de", width=50.0).to_dict()

        assert data["modulator"] == 3
        assert data["carrier"] == 2
        assert data["state"] == "pending"
        assert isinstance(data["id"], str)
        assert isinstance(data["submitted_at"], str)


class TestEngineSettings:
    """Tests for engine settings."""

    def test_fixed_values(self):
        settings = EngineSettings()
        assert settings.work_rate == 48000
        assert settings.band_count == 16

    def test_to_dict_nests_compressor(self):
        data = EngineSettings().to_dict()
        assert data["compressor"]["ratio"] == 12.0
        assert data["channel_policy"] == "mix"
