"""Configuration management for the RedCloud reader."""

import json
import os
import shutil
from pathlib import Path

from common.constants import (
    BLOCK_READ_TIMEOUT_SECONDS,
    DEFAULT_METADATA_HOST,
    DEFAULT_METADATA_PORT,
    LISTING_PAGE_SIZE,
    METADATA_TIMEOUT_SECONDS,
    READ_CHUNK_SIZE_BYTES,
)
from common.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / '.redcloud' / 'reader.json'


class Config:
    """Manages reader configuration stored in a JSON file."""

    DEFAULT_CONFIG = {
        "metadata_host": os.environ.get("DFS_METADATA_HOST", DEFAULT_METADATA_HOST),
        "metadata_port": int(os.environ.get("DFS_METADATA_PORT", str(DEFAULT_METADATA_PORT))),
        "timeout": METADATA_TIMEOUT_SECONDS,
        "block_read_timeout": BLOCK_READ_TIMEOUT_SECONDS,
        "listing_page_size": LISTING_PAGE_SIZE,
        "read_chunk_size": READ_CHUNK_SIZE_BYTES,
    }

    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.redcloud/reader.json)
        """
        self.config_path = Path(config_path)
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            import tempfile
            self.config_path = Path(tempfile.gettempdir()) / '.redcloud' / 'reader.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                config = self.DEFAULT_CONFIG.copy()
                config.update(data)
                return config
            except (json.JSONDecodeError, IOError) as e:
                logger.warning(f"Unreadable config {self.config_path}, using defaults: {e}")
                backup_path = self.config_path.with_suffix('.json.bak')
                try:
                    shutil.copy(self.config_path, backup_path)
                except OSError:
                    pass
                return self.DEFAULT_CONFIG.copy()

        config = self.DEFAULT_CONFIG.copy()
        try:
            with open(self.config_path, 'w') as f:
                json.dump(config, f, indent=2)
        except IOError:
            logger.debug(f"Could not write default config to {self.config_path}")
        return config

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
        except IOError as e:
            logger.warning(f"Failed to save config to {self.config_path}: {e}")

    def get_base_url(self) -> str:
        """
        Get metadata service base URL.

        Returns:
            Base URL string (e.g., "http://namenode:8020")
        """
        host = self.data.get('metadata_host', DEFAULT_METADATA_HOST)
        port = self.data.get('metadata_port', DEFAULT_METADATA_PORT)
        return f"http://{host}:{port}"

    def get_timeout(self) -> int:
        return self.data.get('timeout', METADATA_TIMEOUT_SECONDS)

    def get_block_read_timeout(self) -> int:
        return self.data.get('block_read_timeout', BLOCK_READ_TIMEOUT_SECONDS)

    def get_listing_page_size(self) -> int:
        """
        Get the number of entries requested per metadata listing call.

        Returns:
            Page size, at least 1
        """
        return max(1, int(self.data.get('listing_page_size', LISTING_PAGE_SIZE)))

    def get_read_chunk_size(self) -> int:
        return max(1, int(self.data.get('read_chunk_size', READ_CHUNK_SIZE_BYTES)))
