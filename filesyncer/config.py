"""Configuration management for FileSyncer."""

import logging
import os
from pathlib import Path
from typing import Optional

from .exceptions import ConfigError
from .utils import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_WORKERS

logger = logging.getLogger(__name__)

ENV_PREFIX = "FILESYNCER_"


class Config:
    """Configuration manager for FileSyncer.

    Values come from ``~/.config/filesyncer/config`` (``KEY=VALUE`` lines)
    and from ``FILESYNCER_*`` environment variables, the environment taking
    precedence. Command-line flags override both.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_dir: Directory holding the config file (defaults to
                ``$FILESYNCER_CONFIG_DIR`` or ``~/.config/filesyncer``)
        """
        if config_dir is None:
            env_dir = os.environ.get(f"{ENV_PREFIX}CONFIG_DIR")
            config_dir = (
                Path(env_dir) if env_dir else Path.home() / ".config" / "filesyncer"
            )
        self.config_dir = config_dir
        self.config_file = self.config_dir / "config"
        self._values: dict[str, str] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from the config file if it exists."""
        if not self.config_file.exists():
            return

        for line_number, raw in enumerate(
            self.config_file.read_text(encoding="utf-8").splitlines(), start=1
        ):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                logger.warning(
                    "Ignoring malformed line %d in %s", line_number, self.config_file
                )
                continue
            key, value = line.split("=", 1)
            self._values[key.strip().upper()] = value.strip().strip('"').strip("'")

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Look up ``FILESYNCER_<KEY>`` in the environment, then the config file."""
        name = f"{ENV_PREFIX}{key.upper()}"
        value = os.environ.get(name)
        if value is None:
            value = self._values.get(name)
        return value if value not in (None, "") else default

    def _get_int(self, key: str, default: int) -> int:
        value = self.get(key)
        if value is None:
            return default
        try:
            parsed = int(value)
        except ValueError as e:
            raise ConfigError(
                f"{ENV_PREFIX}{key.upper()} must be an integer, got {value!r}"
            ) from e
        if parsed < 1:
            raise ConfigError(f"{ENV_PREFIX}{key.upper()} must be positive")
        return parsed

    @property
    def log_file(self) -> Optional[str]:
        return self.get("log_file")

    @property
    def include(self) -> Optional[str]:
        return self.get("include")

    @property
    def ignore(self) -> Optional[str]:
        return self.get("ignore")

    @property
    def chunk_size(self) -> int:
        """Copy buffer size in bytes (configured in KiB)."""
        return self._get_int("chunk_size", DEFAULT_CHUNK_SIZE // 1024) * 1024

    @property
    def workers(self) -> int:
        return self._get_int("workers", DEFAULT_MAX_WORKERS)

    def get_config_path(self) -> Path:
        return self.config_file


# Global config instance
config = Config()
