"""Tests for VocoderService."""

import io
from pathlib import Path

import numpy as np
import soundfile as sf

from bandvocoder.models.job import RenderSummary
from bandvocoder.services.base import ServiceResult
from bandvocoder.services.vocoder import VocoderService, completion_message, default_output_name


class TestVocodeBytes:
    """Tests for in-memory vocoding."""

    def test_success(self, modulator_bytes, carrier_bytes):
        result = VocoderService().vocode_bytes(modulator_bytes, carrier_bytes, width=50)

        assert result.success, result.error
        assert result.message == "Vocoding complete! Width: 50%"
        assert result.metadata["q_factor"] == 7.75

        samples, sr = sf.read(io.BytesIO(result.data))
        assert sr == 48000
        assert samples.ndim == 1
        assert np.max(np.abs(samples)) <= 1.0

    def test_invalid_width(self, modulator_bytes, carrier_bytes):
        result = VocoderService().vocode_bytes(modulator_bytes, carrier_bytes, width=-5)

        assert not result.success
        assert result.metadata["error_type"] == "ValidationError"

    def test_undecodable_input(self, mocker, carrier_bytes):
        mocker.patch(
            "bandvocoder.adapters.pydub.audio._load_segment",
            side_effect=RuntimeError("not media"),
        )

        result = VocoderService().vocode_bytes(b"plain text", carrier_bytes)

        assert not result.success
        assert result.metadata["error_type"] == "DecodeError"
        assert "modulator" in result.error

    def test_progress_stages(self, modulator_bytes, carrier_bytes):
        service = VocoderService()
        stages = []
        service.set_progress_callback(lambda p: stages.append((p.stage, p.percent)))

        service.vocode_bytes(modulator_bytes, carrier_bytes)

        assert [s for s, _ in stages] == ["decoding", "rendering", "encoding", "done"]
        assert stages[-1][1] == 100


class TestVocodeFile:
    """Tests for file-based vocoding."""

    def test_success(self, tmp_path, modulator_file, carrier_file):
        output = tmp_path / "nested" / "out.wav"

        result = VocoderService().vocode_file(modulator_file, carrier_file, str(output), width=25)

        assert result.success, result.error
        assert isinstance(result.data, RenderSummary)
        assert result.data.output_path == str(output)
        assert result.data.num_samples == 48000
        assert result.data.sample_rate == 48000
        assert result.message == completion_message(25)
        assert output.exists()

    def test_default_output_name(self, tmp_path, monkeypatch, modulator_file, carrier_file):
        monkeypatch.chdir(tmp_path)

        result = VocoderService().vocode_file(modulator_file, carrier_file)

        assert result.success, result.error
        name = Path(result.data.output_path).name
        assert name.startswith("vocoded_") and name.endswith(".wav")
        assert (tmp_path / name).exists()

    def test_missing_input(self, tmp_path, carrier_file):
        result = VocoderService().vocode_file(str(tmp_path / "missing.wav"), carrier_file)

        assert not result.success
        assert "does not exist" in result.error

    def test_unsupported_extension(self, tmp_path, carrier_file):
        doc = tmp_path / "notes.pdf"
        doc.write_bytes(b"%PDF-1.4")

        result = VocoderService().vocode_file(str(doc), carrier_file)

        assert not result.success
        assert "Unsupported file type" in result.error
        assert result.metadata["error_type"] == "ValidationError"

    def test_nothing_written_on_failure(self, tmp_path, modulator_file, carrier_file):
        output = tmp_path / "never.wav"

        result = VocoderService().vocode_file(modulator_file, carrier_file, str(output), width=300)

        assert not result.success
        assert not output.exists()

    def test_video_input_is_normalized(self, mocker, tmp_path, modulator_file, carrier_file):
        clip = tmp_path / "clip.mp4"
        clip.write_bytes(b"fake mp4")
        wav = Path(modulator_file).read_bytes()
        normalize = mocker.patch(
            "bandvocoder.adapters.pydub.audio.normalize_media", return_value=wav
        )

        result = VocoderService().vocode_file(str(clip), carrier_file, str(tmp_path / "v.wav"))

        assert result.success, result.error
        normalize.assert_called_once_with(b"fake mp4")

    def test_unreadable_output_location(self, tmp_path, modulator_file, carrier_file):
        blocker = tmp_path / "file"
        blocker.write_text("x")

        result = VocoderService().vocode_file(
            modulator_file, carrier_file, str(blocker / "out.wav")
        )

        assert not result.success

    def test_failed_write_leaves_no_partial_file(self, mocker, tmp_path, modulator_file, carrier_file):
        out_dir = tmp_path / "out"
        output = out_dir / "out.wav"
        write_bytes = Path.write_bytes

        def disk_full(path, data):
            write_bytes(path, data[:100])
            raise OSError(28, "No space left on device")

        mocker.patch.object(Path, "write_bytes", disk_full)

        result = VocoderService().vocode_file(modulator_file, carrier_file, str(output))

        assert not result.success
        assert result.metadata["error_type"] == "OSError"
        assert not output.exists()
        assert list(out_dir.iterdir()) == []

    def test_existing_output_replaced_whole(self, tmp_path, modulator_file, carrier_file):
        output = tmp_path / "out.wav"
        output.write_bytes(b"old contents")

        result = VocoderService().vocode_file(modulator_file, carrier_file, str(output))

        assert result.success, result.error
        assert sf.info(str(output)).channels == 1
        assert [p.name for p in tmp_path.iterdir() if p.name.endswith(".part")] == []


class TestHelpers:
    """Tests for module helpers and ServiceResult."""

    def test_completion_message_formats_width(self):
        assert completion_message(50.0) == "Vocoding complete! Width: 50%"
        assert completion_message(12.5) == "Vocoding complete! Width: 12.5%"

    def test_default_output_names_are_unique(self):
        assert default_output_name() != default_output_name()

    def test_service_result_to_dict_with_bytes(self):
        data = ServiceResult.ok(data=b"1234", message="ok").to_dict()
        assert data["data"] == {"num_bytes": 4}
        assert data["success"] is True
