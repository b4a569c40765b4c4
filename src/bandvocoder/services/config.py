# services/config.py
"""
Service for configuration management operations.
"""

from pathlib import Path
from typing import List, Optional

from bandvocoder.core.config import Config
from bandvocoder.core.exceptions import VocoderError

from .base import BaseService, ServiceResult


class ConfigService(BaseService):
    """
    Service for configuration management operations.

    Provides ServiceResult-wrapped methods for configuration access
    and management.
    """

    def get_config(self, config_path: Optional[str] = None) -> ServiceResult[Config]:
        """
        Get the active configuration.

        Args:
            config_path: Explicit config file, merged on top of the cascade

        Returns:
            ServiceResult containing the Config object on success
        """
        from bandvocoder.core.config import get_config, load_config_cascade

        try:
            config = load_config_cascade(config_path) if config_path else get_config()
        except VocoderError as e:
            return ServiceResult.fail(f"Invalid configuration: {e.message}", error_type=type(e).__name__)

        return ServiceResult.ok(
            data=config,
            message=f"Loaded config from {config._source or 'defaults'}",
            source=config._source,
        )

    def find_config_file(self, config_path: Optional[str] = None) -> ServiceResult[Optional[str]]:
        """
        Find the configuration file to use.

        Args:
            config_path: Explicit path to check first

        Returns:
            ServiceResult containing the config file path or None
        """
        from bandvocoder.core.config import find_config_file

        result = find_config_file(config_path)
        if result:
            return ServiceResult.ok(data=str(result), message=f"Found config file: {result}")
        return ServiceResult.ok(data=None, message="No config file found")

    def get_config_locations(self) -> ServiceResult[List[str]]:
        """
        Get configuration file search locations in priority order.

        Returns:
            ServiceResult containing list of path strings
        """
        from bandvocoder.core.config import get_config_locations

        paths = [str(loc) for loc in get_config_locations()]
        return ServiceResult.ok(data=paths, message=f"Found {len(paths)} config locations")

    def create_default_config(
        self,
        filepath: Optional[str] = None,
        force: bool = False,
    ) -> ServiceResult[str]:
        """
        Create a default configuration file.

        Args:
            filepath: Path to create the file (default: ./bandvocoder.toml)
            force: Overwrite if file exists

        Returns:
            ServiceResult containing the created file path on success
        """
        from bandvocoder.core.config import create_default_config_file

        path = Path(filepath) if filepath else Path("bandvocoder.toml")

        if path.exists() and not force:
            return ServiceResult.fail(f"File already exists: {path}")

        try:
            result_path = create_default_config_file(str(path))
        except OSError as e:
            return ServiceResult.fail(f"Failed to create config file: {e}")

        return ServiceResult.ok(data=result_path, message=f"Created config file: {result_path}")
