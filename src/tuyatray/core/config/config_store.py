"""Config store - reads and writes the credential JSON file"""

import json
from pathlib import Path
from typing import Optional, Union

from ...utils import ConfigurationError, LogCategory, app_logger, get_config_path
from ..interfaces.config import IConfigStore
from .configuration import Configuration


class ConfigStore(IConfigStore):
    """JSON file backed configuration store

    The whole object is overwritten on every save: no merging,
    no atomic rename, no backups.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Args:
            config_path: Explicit file path, None for the per-user default
        """
        self._config_path = Path(config_path) if config_path else get_config_path()

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load(self) -> Configuration:
        """Load configuration from file

        Returns:
            The stored configuration, or the all-empty default if the
            file does not exist

        Raises:
            ConfigurationError: If the file exists but is not valid JSON
        """
        if not self._config_path.exists():
            app_logger.info(
                "Using default configuration",
                LogCategory.CONFIG,
                {"config_path": str(self._config_path)},
                "config_store",
            )
            return Configuration.default()

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Configuration file is not valid JSON: {self._config_path}",
                context={"config_path": str(self._config_path), "line": e.lineno},
                original_exception=e,
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration file must contain a JSON object",
                context={
                    "config_path": str(self._config_path),
                    "found_type": type(data).__name__,
                },
            )

        config = Configuration.from_dict(data)
        app_logger.info(
            "Configuration loaded",
            LogCategory.CONFIG,
            {"config_path": str(self._config_path), "complete": config.is_complete()},
            "config_store",
        )
        return config

    def save(self, config: Configuration) -> None:
        """Overwrite the configuration file

        Raises:
            ConfigurationError: If the file cannot be written
        """
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_path, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            app_logger.log_error(e, "config_store_save")
            raise ConfigurationError(
                f"Failed to save configuration: {e}",
                context={"config_path": str(self._config_path)},
                original_exception=e,
            ) from e

        app_logger.info(
            "Configuration saved",
            LogCategory.CONFIG,
            {"config_path": str(self._config_path), "complete": config.is_complete()},
            "config_store",
        )
