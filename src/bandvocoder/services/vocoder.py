# services/vocoder.py
"""
Vocoder Service
===============

Service layer for vocoder jobs on byte buffers and on files.

Engine errors never escape this layer: every expected failure becomes a
ServiceResult.fail() carrying the error class name in its metadata.

Usage:
    from bandvocoder.services.vocoder import VocoderService

    service = VocoderService()
    result = service.vocode_file("speech.wav", "synth.wav", width=50)
    if result.success:
        print(result.message, result.data.output_path)
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

from bandvocoder.core import globals as G
from bandvocoder.core.bands import validate_width
from bandvocoder.core.engine import VocoderEngine
from bandvocoder.core.exceptions import VocoderError
from bandvocoder.models.audio import DecodedAudio
from bandvocoder.models.config import EngineSettings
from bandvocoder.models.job import RenderSummary

from .base import BaseService, JobProgress, ServiceResult

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = G.SUPPORTED_AUDIO_EXTENSIONS + G.SUPPORTED_VIDEO_EXTENSIONS

STAGES = ("decoding", "rendering", "encoding", "done")


def completion_message(width: float) -> str:
    """User-facing message for a finished job."""
    return f"Vocoding complete! Width: {width:g}%"


def default_output_name() -> str:
    """Unique output file name for a vocoded file."""
    return f"vocoded_{uuid.uuid4()}.wav"


class VocoderService(BaseService):
    """
    Service for running vocoder jobs.

    Args:
        engine: Engine to render with (built from settings if omitted)
        settings: Engine settings used when no engine is given
    """

    def __init__(
        self,
        engine: Optional[VocoderEngine] = None,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        super().__init__()
        self.engine = engine or VocoderEngine(settings)

    def _stage(self, stage: str, current_file: Optional[str] = None) -> None:
        self._report_progress(
            JobProgress(
                stage=stage,
                completed=STAGES.index(stage),
                total=len(STAGES) - 1,
                current_file=current_file,
            )
        )

    def _decode_file(self, path: Path) -> DecodedAudio:
        """Read one input file, converting non-native media through ffmpeg first."""
        from bandvocoder.adapters.pydub.audio import normalize_media

        raw = path.read_bytes()
        if path.suffix.lower() not in G.NATIVE_AUDIO_EXTENSIONS:
            logger.debug(f"Normalizing {path.name} through ffmpeg")
            raw = normalize_media(raw)
        return self.engine.decode(raw, source=str(path))

    def vocode_bytes(
        self,
        modulator: bytes,
        carrier: bytes,
        width: float = G.DEFAULT_WIDTH,
    ) -> ServiceResult[bytes]:
        """
        Vocode two in-memory encoded files.

        Args:
            modulator: Encoded modulator audio (speech)
            carrier: Encoded carrier audio (synth, noise)
            width: Band width percentage in [0, 100]

        Returns:
            Result containing mono 48 kHz WAV bytes
        """
        try:
            width = validate_width(width)

            self._stage("decoding")
            mod = self.engine.decode(modulator, source="modulator")
            car = self.engine.decode(carrier, source="carrier")

            self._stage("rendering")
            rendered = self.engine.render(mod, car, width)

            self._stage("encoding")
            data = self.engine.encode(rendered)
        except VocoderError as e:
            logger.debug(f"Vocoder job failed: {e}")
            return ServiceResult.fail(e.message, error_type=type(e).__name__)

        self._stage("done")
        logger.info(
            f"Vocoded {rendered.duration:.2f}s at width {width:g}% (q={rendered.q_factor:.2f})"
        )
        return ServiceResult.ok(
            data=data,
            message=completion_message(width),
            width=width,
            q_factor=rendered.q_factor,
            duration_seconds=rendered.duration,
        )

    def vocode_file(
        self,
        modulator_path: str,
        carrier_path: str,
        output_path: Optional[str] = None,
        width: float = G.DEFAULT_WIDTH,
    ) -> ServiceResult[RenderSummary]:
        """
        Vocode two audio or video files into a WAV file.

        The output is only written after a successful render.

        Args:
            modulator_path: Path to the modulator file (speech)
            carrier_path: Path to the carrier file (synth, noise)
            output_path: Output WAV path (default: vocoded_<uuid>.wav)
            width: Band width percentage in [0, 100]

        Returns:
            Result containing a RenderSummary
        """
        try:
            width = validate_width(width)
        except VocoderError as e:
            return ServiceResult.fail(e.message, error_type=type(e).__name__)

        for path in (modulator_path, carrier_path):
            error = self._validate_input_path(path, extensions=SUPPORTED_EXTENSIONS)
            if error:
                return ServiceResult.fail(error, error_type="ValidationError")

        output = Path(output_path) if output_path else Path(default_output_name())

        try:
            self._stage("decoding", modulator_path)
            mod = self._decode_file(Path(modulator_path))
            self._stage("decoding", carrier_path)
            car = self._decode_file(Path(carrier_path))

            self._stage("rendering")
            rendered = self.engine.render(mod, car, width)

            self._stage("encoding")
            data = self.engine.encode(rendered)
        except VocoderError as e:
            logger.debug(f"Vocoder job failed: {e}")
            return ServiceResult.fail(e.message, error_type=type(e).__name__)
        except OSError as e:
            return ServiceResult.fail(f"Failed to read input: {e}", error_type=type(e).__name__)

        try:
            error = self._validate_output_path(str(output))
        except OSError as e:
            return ServiceResult.fail(f"Failed to write output: {e}", error_type=type(e).__name__)
        if error:
            return ServiceResult.fail(error, error_type="ValidationError")

        # Staged beside the target; only a complete file is renamed into place
        partial = output.with_name(f".{output.name}.part")
        try:
            partial.write_bytes(data)
            partial.replace(output)
        except OSError as e:
            partial.unlink(missing_ok=True)
            return ServiceResult.fail(f"Failed to write output: {e}", error_type=type(e).__name__)

        self._stage("done", str(output))
        logger.info(f"Vocoded {modulator_path} x {carrier_path} -> {output} (width {width:g}%)")

        summary = RenderSummary(
            modulator_path=str(modulator_path),
            carrier_path=str(carrier_path),
            output_path=str(output),
            width=width,
            q_factor=rendered.q_factor,
            sample_rate=rendered.sample_rate,
            num_samples=rendered.length,
            duration_seconds=rendered.duration,
            peak=rendered.peak,
        )
        return ServiceResult.ok(data=summary, message=completion_message(width))
