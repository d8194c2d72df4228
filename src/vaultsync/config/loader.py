"""Configuration loader for JSON/YAML client config files."""

import json
from pathlib import Path
from typing import Any, Dict, Union

import structlog
import yaml
from pydantic import ValidationError

from .settings import AppSettings


class ConfigurationError(Exception):
    """Raised when configuration loading fails."""
    pass


class ConfigLoader:
    """Loads and validates client configuration files."""

    def __init__(self):
        self.logger = structlog.get_logger(self.__class__.__name__)

    def load_from_file(self, file_path: Union[str, Path]) -> AppSettings:
        """Load settings from a JSON or YAML file.

        Values in the file override defaults; environment variables still
        apply to anything the file leaves unset.

        Raises:
            ConfigurationError: If file cannot be loaded or validated
        """
        file_path = Path(file_path).expanduser()

        if not file_path.exists():
            raise ConfigurationError(f"Configuration file not found: {file_path}")

        self.logger.info("Loading configuration from file", file_path=str(file_path))

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                if file_path.suffix.lower() in ['.yaml', '.yml']:
                    data = yaml.safe_load(f)
                elif file_path.suffix.lower() == '.json':
                    data = json.load(f)
                else:
                    raise ConfigurationError(f"Unsupported file format: {file_path.suffix}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML format: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON format: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration: {e}") from e

        return self.load_from_dict(data or {})

    def load_from_dict(self, data: Dict[str, Any]) -> AppSettings:
        """Load settings from a dictionary."""
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration root must be a mapping")

        try:
            settings = AppSettings(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        self.logger.info(
            "Configuration loaded successfully",
            data_dir=str(settings.storage.data_dir),
            base_url=settings.remote.base_url,
            environment=settings.environment
        )

        return settings
