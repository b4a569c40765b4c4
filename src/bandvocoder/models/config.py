# models/config.py
"""
Data models for engine and configuration settings.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bandvocoder.core import globals as G
from bandvocoder.models.audio import ChannelPolicy

from .base import ToDictMixin

if TYPE_CHECKING:
    from bandvocoder.core.config import Config


@dataclass(frozen=True)
class CompressorSettings(ToDictMixin):
    """Dynamics compressor parameters (times in seconds, levels in dB)."""

    threshold_db: float = G.COMPRESSOR_THRESHOLD_DB
    knee_db: float = G.COMPRESSOR_KNEE_DB
    ratio: float = G.COMPRESSOR_RATIO
    attack: float = G.COMPRESSOR_ATTACK
    release: float = G.COMPRESSOR_RELEASE


@dataclass(frozen=True)
class EngineSettings(ToDictMixin):
    """Everything the engine needs besides the two inputs and the width.

    Defaults are the house sound; work rate and band count are fixed.
    """

    min_hz: float = G.MIN_BAND_HZ
    max_hz: float = G.MAX_BAND_HZ
    envelope_cutoff_hz: float = G.ENVELOPE_CUTOFF_HZ
    envelope_q_db: float = G.ENVELOPE_Q_DB
    min_q: float = G.MIN_Q
    max_q: float = G.MAX_Q
    summing_gain: float = G.SUMMING_GAIN
    makeup_gain: float = G.MAKEUP_GAIN
    channel_policy: ChannelPolicy = ChannelPolicy.MIX
    block_size: int = G.DEFAULT_BLOCK_SIZE
    subtype: str = G.OUTPUT_SUBTYPE
    compressor: CompressorSettings = field(default_factory=CompressorSettings)

    @property
    def work_rate(self) -> int:
        return G.WORK_RATE

    @property
    def band_count(self) -> int:
        return G.BAND_COUNT

    @classmethod
    def from_config(cls, config: "Config") -> "EngineSettings":
        """Build settings from the [engine], [compressor] and [output] sections."""
        engine = config.engine
        comp = config.compressor
        output = config.output
        return cls(
            min_hz=float(engine.get("min_hz", G.MIN_BAND_HZ)),
            max_hz=float(engine.get("max_hz", G.MAX_BAND_HZ)),
            envelope_cutoff_hz=float(engine.get("envelope_cutoff_hz", G.ENVELOPE_CUTOFF_HZ)),
            envelope_q_db=float(engine.get("envelope_q_db", G.ENVELOPE_Q_DB)),
            min_q=float(engine.get("min_q", G.MIN_Q)),
            max_q=float(engine.get("max_q", G.MAX_Q)),
            summing_gain=float(output.get("summing_gain", G.SUMMING_GAIN)),
            makeup_gain=float(output.get("makeup_gain", G.MAKEUP_GAIN)),
            channel_policy=ChannelPolicy.parse(engine.get("channel_policy", "mix")),
            block_size=int(engine.get("block_size", G.DEFAULT_BLOCK_SIZE)),
            subtype=str(output.get("subtype", G.OUTPUT_SUBTYPE)),
            compressor=CompressorSettings(
                threshold_db=float(comp.get("threshold_db", G.COMPRESSOR_THRESHOLD_DB)),
                knee_db=float(comp.get("knee_db", G.COMPRESSOR_KNEE_DB)),
                ratio=float(comp.get("ratio", G.COMPRESSOR_RATIO)),
                attack=float(comp.get("attack", G.COMPRESSOR_ATTACK)),
                release=float(comp.get("release", G.COMPRESSOR_RELEASE)),
            ),
        )

