"""
Vocoder Engine
==============

Orchestrates one vocoder job end to end:

    validate width -> decode inputs -> build processing context
    -> render bands block by block -> post chain -> encode WAV

The engine holds no per-job state. Every call builds a fresh
ProcessingContext (band units, filter state, compressor state) and discards
it afterwards, so one engine instance may serve several worker threads.

Example:
    >>> engine = VocoderEngine()
    >>> wav_bytes = engine.process(modulator_bytes, carrier_bytes, width=50)
"""

from typing import Callable, List, Optional, Union

import numpy as np

from bandvocoder.core import globals as G
from bandvocoder.core.band import BandUnit
from bandvocoder.core.bands import log_frequencies, validate_width, width_to_q
from bandvocoder.core.chain import PostChain
from bandvocoder.core.exceptions import EngineError, ValidationError, VocoderError
from bandvocoder.core.logger import get_logger
from bandvocoder.core.signal import fit_length, resample
from bandvocoder.models.audio import DecodedAudio, RenderResult
from bandvocoder.models.config import EngineSettings

logger = get_logger(__name__)

AudioInput = Union[bytes, bytearray, memoryview, DecodedAudio]
Decoder = Callable[..., DecodedAudio]
Encoder = Callable[..., bytes]


def output_length(modulator: DecodedAudio, carrier: DecodedAudio, work_rate: int = G.WORK_RATE) -> int:
    """
    Number of output samples: floor(min(durations) * work_rate).

    Computed in integer arithmetic so exact durations never lose a sample
    to rounding.
    """
    return min(
        (audio.length * work_rate) // audio.sample_rate for audio in (modulator, carrier)
    )


class ProcessingContext:
    """
    One offline rendering session.

    Prepares both inputs (channel reduction, resampling to the work rate,
    truncation to the output length) and owns the band units and the post
    chain. A context renders once; build a new one for the next job.

    Args:
        modulator: Decoded modulator audio
        carrier: Decoded carrier audio
        q: Filter Q shared by every band
        settings: Engine settings

    Raises:
        ValidationError: If the shorter input yields no output samples
    """

    def __init__(
        self,
        modulator: DecodedAudio,
        carrier: DecodedAudio,
        q: float,
        settings: EngineSettings,
    ) -> None:
        self.settings = settings
        self.sample_rate = settings.work_rate
        self.q = q
        self.length = output_length(modulator, carrier, self.sample_rate)
        if self.length <= 0:
            raise ValidationError(
                "Input audio is too short to render (zero-length output)", field="length"
            )

        self.modulator = self._prepare(modulator, "modulator")
        self.carrier = self._prepare(carrier, "carrier")

        self.frequencies = log_frequencies(settings.min_hz, settings.max_hz, settings.band_count)
        self.bands: List[BandUnit] = [
            BandUnit.create(
                frequency=f,
                q=q,
                sample_rate=self.sample_rate,
                envelope_cutoff_hz=settings.envelope_cutoff_hz,
                envelope_q_db=settings.envelope_q_db,
            )
            for f in self.frequencies
        ]
        self.chain = PostChain(settings, self.sample_rate)
        self._rendered = False

        logger.debug(
            f"Built context: {len(self.bands)} bands, q={q:.3f}, "
            f"{self.length} samples at {self.sample_rate}Hz"
        )

    def _prepare(self, audio: DecodedAudio, name: str) -> np.ndarray:
        mono = audio.to_mono(self.settings.channel_policy)
        if audio.sample_rate != self.sample_rate:
            logger.debug(f"Resampling {name} from {audio.sample_rate}Hz to {self.sample_rate}Hz")
            mono = resample(mono, audio.sample_rate, self.sample_rate)
        return fit_length(np.asarray(mono, dtype=np.float64), self.length)

    def render(self) -> np.ndarray:
        """Run every band and the post chain over the whole buffer."""
        if self._rendered:
            raise EngineError("Processing context has already been rendered", operation="render")
        self._rendered = True

        out = np.empty(self.length, dtype=np.float32)
        block = max(1, int(self.settings.block_size))
        for start in range(0, self.length, block):
            end = min(start + block, self.length)
            mod = self.modulator[start:end]
            car = self.carrier[start:end]
            bus = np.zeros(end - start, dtype=np.float64)
            for band in self.bands:
                bus += band.process(mod, car)
            out[start:end] = self.chain.process(bus)
        return out


class VocoderEngine:
    """
    Channel vocoder: imposes the modulator's spectral envelope on the carrier.

    Args:
        settings: Engine settings (house sound by default)
        decoder: Callable turning raw bytes into DecodedAudio
        encoder: Callable turning float samples into WAV bytes
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        decoder: Optional[Decoder] = None,
        encoder: Optional[Encoder] = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self._decoder = decoder
        self._encoder = encoder

    @property
    def decoder(self) -> Decoder:
        if self._decoder is None:
            from bandvocoder.adapters.pydub.audio import decode_audio

            self._decoder = decode_audio
        return self._decoder

    @property
    def encoder(self) -> Encoder:
        if self._encoder is None:
            from bandvocoder.adapters.pydub.audio import encode_wav

            self._encoder = encode_wav
        return self._encoder

    def q_for_width(self, width: float) -> float:
        """Q factor used for a width percentage."""
        return width_to_q(width, self.settings.min_q, self.settings.max_q)

    def decode(self, data: AudioInput, source: str) -> DecodedAudio:
        """Decode one input, passing DecodedAudio through unchanged."""
        if isinstance(data, DecodedAudio):
            return data
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise ValidationError(
                f"{source} must be bytes or DecodedAudio, got {type(data).__name__}", field=source
            )
        if len(data) == 0:
            raise ValidationError(f"{source} input is empty", field=source)
        decoded = self.decoder(bytes(data), source=source)
        logger.debug(
            f"Decoded {source}: {decoded.number_of_channels}ch, "
            f"{decoded.sample_rate}Hz, {decoded.duration:.3f}s"
        )
        return decoded

    def create_context(
        self, modulator: DecodedAudio, carrier: DecodedAudio, q: float
    ) -> ProcessingContext:
        """Build a fresh processing context, wrapping unexpected failures."""
        try:
            return ProcessingContext(modulator, carrier, q, self.settings)
        except VocoderError:
            raise
        except Exception as e:
            raise EngineError(f"Failed to build processing graph: {e}", operation="build") from e

    def render(
        self,
        modulator: AudioInput,
        carrier: AudioInput,
        width: float = G.DEFAULT_WIDTH,
    ) -> RenderResult:
        """
        Render the vocoded signal without encoding it.

        Args:
            modulator: Raw encoded bytes or DecodedAudio (typically speech)
            carrier: Raw encoded bytes or DecodedAudio (typically a synth or noise)
            width: Band width percentage in [0, 100]

        Returns:
            RenderResult with mono float32 samples at the work rate

        Raises:
            ValidationError: Invalid width, empty input or zero-length output
            DecodeError: An input could not be decoded
            EngineError: Internal graph or rendering failure
        """
        # Width is checked before any decoding work
        width = validate_width(width)
        q = self.q_for_width(width)

        mod = self.decode(modulator, "modulator")
        car = self.decode(carrier, "carrier")

        context = self.create_context(mod, car, q)
        try:
            samples = context.render()
        except VocoderError:
            raise
        except Exception as e:
            raise EngineError(f"Rendering failed: {e}", operation="render") from e
        logger.debug(f"Rendered {len(samples)} samples")

        return RenderResult(
            samples=samples,
            sample_rate=context.sample_rate,
            width=width,
            q_factor=q,
            frequencies=list(context.frequencies),
            channel_policy=self.settings.channel_policy,
            modulator_duration=mod.duration,
            carrier_duration=car.duration,
        )

    def encode(self, result: RenderResult) -> bytes:
        """Encode a render result as a mono WAV byte stream."""
        try:
            data = self.encoder(result.samples, result.sample_rate, subtype=self.settings.subtype)
        except VocoderError:
            raise
        except Exception as e:
            raise EngineError(f"Failed to encode output: {e}", operation="encode") from e
        logger.debug(f"Encoded {len(data)} bytes of WAV")
        return data

    def process(
        self,
        modulator: AudioInput,
        carrier: AudioInput,
        width: float = G.DEFAULT_WIDTH,
    ) -> bytes:
        """
        Vocode two inputs and return a mono 48 kHz WAV byte stream.

        Raises:
            ValidationError: Invalid width, empty input or zero-length output
            DecodeError: An input could not be decoded
            EngineError: Internal graph, rendering or encoding failure
        """
        result = self.render(modulator, carrier, width)
        data = self.encode(result)
        logger.info(
            f"Vocoded {result.duration:.2f}s at width {result.width:g}% "
            f"(q={result.q_factor:.2f}, peak={result.peak:.3f})"
        )
        return data
