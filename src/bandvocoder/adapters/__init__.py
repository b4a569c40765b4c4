"""Adapters for external library integrations.

This package wraps soundfile and pydub/ffmpeg behind bandvocoder-compatible
interfaces. The engine reaches them only through its decoder/encoder hooks.
"""
