"""Audio decode, media normalization and WAV encoding.

Design notes:
- Decoding returns DecodedAudio with every channel kept; channel reduction
  is the engine's job (see ChannelPolicy)
- Uses soundfile for WAV/FLAC/OGG (fast native C) with pydub fallback for
  MP3, M4A and anything else ffmpeg can read
- Everything works on in-memory byte buffers; nothing touches the disk
  except pydub's own ffmpeg temp files
- Encoding always outputs mono WAV, 16-bit PCM unless told otherwise
"""

import io
import logging
from typing import Optional, Tuple

import numpy as np
import soundfile as sf
from pydub import AudioSegment

from bandvocoder.core import globals as G
from bandvocoder.core.exceptions import DecodeError, EngineError
from bandvocoder.models.audio import DecodedAudio

logger = logging.getLogger(__name__)


def _audiosegment_to_numpy(segment: AudioSegment) -> Tuple[np.ndarray, int]:
    """Convert pydub AudioSegment to a float32 (channels, frames) array.

    Args:
        segment: AudioSegment to convert.

    Returns:
        Tuple of (channel_data, sample_rate) with samples in [-1.0, 1.0].

    Raises:
        ValueError: If sample width is not 1, 2, 3, or 4 bytes.
    """
    array = np.array(segment.get_array_of_samples())
    sample_width = segment.sample_width

    if sample_width == 1:
        # 8-bit unsigned, range [0, 255], center at 128
        audio = (array.astype(np.uint8).astype(np.float32) - 128.0) / 128.0
    elif sample_width == 2:
        audio = array.astype(np.int16).astype(np.float32) / 32768.0
    elif sample_width == 3:
        audio = array.astype(np.int32).astype(np.float32) / 8388608.0
    elif sample_width == 4:
        audio = array.astype(np.int32).astype(np.float32) / 2147483648.0
    else:
        raise ValueError(
            f"Unsupported sample width: {sample_width} bytes. "
            f"Expected 1 (8-bit), 2 (16-bit), 3 (24-bit), or 4 (32-bit)."
        )

    # Interleaved samples -> (channels, frames)
    channels = max(1, segment.channels)
    audio = audio.reshape((-1, channels)).T

    logger.debug(
        f"Converted {channels}-channel segment ({sample_width * 8}-bit, {segment.frame_rate}Hz)"
    )
    return audio, segment.frame_rate


def _load_segment(raw_bytes: bytes, format: Optional[str] = None) -> AudioSegment:
    """Decode any ffmpeg-readable media into an AudioSegment."""
    return AudioSegment.from_file(io.BytesIO(raw_bytes), format=format)


def decode_audio(raw_bytes: bytes, source: Optional[str] = None) -> DecodedAudio:
    """Decode an encoded audio byte stream.

    Routes to the fastest available backend:
    - soundfile (native C via libsndfile) for WAV/FLAC/OGG
    - pydub (ffmpeg subprocess) for MP3/M4A or if soundfile fails

    Args:
        raw_bytes: Complete encoded file contents.
        source: Label used in error messages ("modulator", a path, ...).

    Returns:
        DecodedAudio with all channels at the file's own sample rate.

    Raises:
        DecodeError: If neither backend can decode the bytes.
        ValidationError: If the decoded samples are malformed.
    """
    if not raw_bytes:
        raise DecodeError("Input is empty.", source=source)

    frames = None
    sample_rate = 0
    try:
        frames, sample_rate = sf.read(io.BytesIO(raw_bytes), dtype="float32", always_2d=True)
    except Exception as e:
        # libsndfile rejects containers it does not know; ffmpeg gets a try
        logger.debug(f"soundfile failed for {source or 'input'}, using pydub fallback: {e}")

    if frames is not None:
        logger.debug(
            f"Decoded {source or 'input'} via soundfile (fast): "
            f"{sample_rate}Hz, {frames.shape[0]} frames, {frames.shape[1]}ch"
        )
        return DecodedAudio.from_frames(frames, sample_rate, source=source)

    logger.debug(f"Decoding {source or 'input'} via pydub (slow)")
    try:
        segment = _load_segment(raw_bytes)
        channel_data, sample_rate = _audiosegment_to_numpy(segment)
    except Exception as e:
        raise DecodeError(f"Audio could not be decoded: {e}", source=source) from e

    return DecodedAudio(channel_data=channel_data, sample_rate=sample_rate, source=source)


def normalize_media(raw_bytes: bytes, format: Optional[str] = None) -> bytes:
    """Convert any ffmpeg-readable media to a WAV byte stream at the work rate.

    Handles compressed audio and the audio track of video containers
    (MP4, MOV, MKV, AVI, WEBM). Channels are preserved.

    Args:
        raw_bytes: Complete media file contents.
        format: ffmpeg input format hint (auto-detected if None).

    Returns:
        WAV bytes at 48 kHz.

    Raises:
        DecodeError: If ffmpeg cannot read the media.
    """
    if not raw_bytes:
        raise DecodeError("Media input is empty.")

    try:
        segment = _load_segment(raw_bytes, format=format)
        segment = segment.set_frame_rate(G.WORK_RATE)
        buffer = io.BytesIO()
        segment.export(buffer, format="wav")
    except Exception as e:
        raise DecodeError(f"Media could not be converted to audio: {e}", source=format) from e

    logger.debug(
        f"Normalized media to WAV ({segment.channels}ch, {G.WORK_RATE}Hz, {len(segment)}ms)"
    )
    return buffer.getvalue()


def encode_wav(
    samples: np.ndarray,
    sample_rate: int = G.WORK_RATE,
    subtype: str = G.OUTPUT_SUBTYPE,
) -> bytes:
    """Encode mono float samples as a WAV byte stream.

    Args:
        samples: 1-D float array, nominally in [-1.0, 1.0].
        sample_rate: Sample rate in Hz.
        subtype: soundfile subtype (default 16-bit PCM).

    Returns:
        Complete WAV file contents.

    Raises:
        EngineError: If the samples are not mono or soundfile rejects them.
    """
    samples = np.asarray(samples, dtype=np.float32)
    if samples.ndim != 1:
        raise EngineError(
            f"Expected mono samples, got array of shape {samples.shape}", operation="encode"
        )

    buffer = io.BytesIO()
    try:
        sf.write(buffer, samples, sample_rate, format="WAV", subtype=subtype)
    except Exception as e:
        raise EngineError(f"Failed to write WAV: {e}", operation="encode") from e
    return buffer.getvalue()
