"""
CLI Service Helpers
===================

CLI-specific utilities for building services and handling their results.

This module provides convenience functions for CLI commands to:
1. Load the configuration cascade once per invocation
2. Build services from that configuration
3. Handle service result errors consistently

LAZY IMPORTS: services (and with them numba, scipy, librosa) are not
imported until a command actually needs one, so `--help` stays fast.

Usage:
    from bandvocoder.cli.service_helpers import handle_result, load_cli_config, vocoder_service

    config = load_cli_config(config_path)
    summary = handle_result(vocoder_service(config).vocode_file(mod, car))
"""

from typing import TYPE_CHECKING, Optional, TypeVar

import click

if TYPE_CHECKING:
    from bandvocoder.core.config import Config
    from bandvocoder.services.base import ServiceResult
    from bandvocoder.services.config import ConfigService
    from bandvocoder.services.vocoder import VocoderService

# Type variable for generic result handling
T = TypeVar("T")


# ============================================================================
# Service Construction
# ============================================================================


def load_cli_config(config_path: Optional[str] = None) -> "Config":
    """
    Load the configuration cascade, exiting with an error if it is invalid.

    A fresh Config is returned on every call so commands may override
    values without touching the process-wide instance.
    """
    from bandvocoder.core.config import load_config_cascade
    from bandvocoder.core.exceptions import VocoderError

    try:
        return load_config_cascade(config_path)
    except VocoderError as e:
        exit_with_error(f"Invalid configuration: {e.message}")


def vocoder_service(config: "Config") -> "VocoderService":
    """Build a VocoderService whose engine uses the given configuration."""
    from bandvocoder.core.exceptions import VocoderError
    from bandvocoder.models.config import EngineSettings
    from bandvocoder.services.vocoder import VocoderService

    try:
        settings = EngineSettings.from_config(config)
    except VocoderError as e:
        exit_with_error(f"Invalid configuration: {e.message}")
    return VocoderService(settings=settings)


def config_service() -> "ConfigService":
    """Build a ConfigService."""
    from bandvocoder.services.config import ConfigService

    return ConfigService()


# ============================================================================
# Result Handling Utilities
# ============================================================================


def handle_result(result: "ServiceResult[T]") -> T:
    """
    Handle a service result, exiting with error if failed.

    Args:
        result: Service result to handle

    Returns:
        The result data if successful

    Raises:
        SystemExit: If result indicates failure (exits with code 1)
    """
    if not result.success:
        exit_with_error(result.error or "Unknown error")
    return result.data


def exit_with_error(message: str, code: int = 1) -> None:
    """
    Print error message and exit.

    Args:
        message: Error message to display
        code: Exit code (default: 1)

    Raises:
        SystemExit: Always exits with specified code
    """
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(code)


__all__ = [
    "load_cli_config",
    "vocoder_service",
    "config_service",
    "handle_result",
    "exit_with_error",
]
