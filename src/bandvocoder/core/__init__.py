"""Core Module

This package contains the vocoder signal-processing engine.

Submodules:
    - bands: band center placement and the width -> Q mapping
    - shaping: rectifier and soft-clip lookup tables
    - signal: biquad filters, resampling helpers
    - compressor: dynamics compressor (numba kernel)
    - band: per-band analysis-synthesis unit
    - chain: summing, compression, makeup and soft clipping
    - engine: job orchestration
    - config: TOML configuration
    - exceptions: error hierarchy
    - globals: global constants
    - logger: logging configuration

Note: Heavy dependencies (numba, librosa) are imported lazily or only by the
submodules that need them. Import from specific submodules as needed:
    from bandvocoder.core.engine import VocoderEngine
    from bandvocoder.core.bands import width_to_q
"""
