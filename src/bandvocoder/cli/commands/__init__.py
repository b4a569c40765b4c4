"""CLI command modules for bandvocoder."""

from .config import config
from .vocode import vocode

__all__ = [
    "config",
    "vocode",
]
