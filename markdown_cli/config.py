"""Configuration management for markdown-cli."""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional

from markdown_common.constants import (
    DEFAULT_BOOTSTRAP_PEERS,
    DEFAULT_SERVER_URL,
    HTTP_TIMEOUT_SECONDS,
    RPC_TIMEOUT_SECONDS,
)
from markdown_common.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_PATH_ENV = 'MARKDOWN_CLI_CONFIG'
SERVER_ENV = 'MARKDOWN_SERVER'


def default_config_path() -> Path:
    """
    Resolve the config file location.

    Returns:
        $MARKDOWN_CLI_CONFIG if set, else ~/.markdown-cli/config.json
    """
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override)
    return Path.home() / '.markdown-cli' / 'config.json'


class Config:
    """Manages CLI configuration stored in JSON file."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (default: see default_config_path)
        """
        self.config_path = config_path or default_config_path()
        self.data = self._load()

    @staticmethod
    def defaults() -> dict:
        """Default values written to a new config file (no server entry)."""
        return {
            "http_timeout": HTTP_TIMEOUT_SECONDS,
            "rpc_timeout": RPC_TIMEOUT_SECONDS,
            "bootstrap_peers": list(DEFAULT_BOOTSTRAP_PEERS),
        }

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            self.config_path = Path(tempfile.gettempdir()) / '.markdown-cli' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        config = self.defaults()

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("config root must be a JSON object")
                config.update(data)
                return config
            except (json.JSONDecodeError, ValueError, OSError) as e:
                backup_path = self.config_path.with_suffix('.json.bak')
                logger.warning(f"Ignoring unreadable config {self.config_path}: {e} (backup: {backup_path})")
                try:
                    shutil.copy(self.config_path, backup_path)
                except OSError as copy_error:
                    logger.warning(f"Could not back up config: {copy_error}")
                return config

        try:
            with open(self.config_path, 'w') as f:
                json.dump(config, f, indent=2)
        except OSError as e:
            logger.debug(f"Could not write default config to {self.config_path}: {e}")
        return config

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not save config to {self.config_path}: {e}")

    def get_server_url(self) -> str:
        """
        Get default server URL.

        Returns:
            The file's "server", else $MARKDOWN_SERVER, else "url://markdown/"
        """
        return self.data.get('server') or os.environ.get(SERVER_ENV) or DEFAULT_SERVER_URL

    def get_http_timeout(self) -> float:
        """
        Get HTTP connect/read timeout in seconds.
        """
        return float(self.data.get('http_timeout', HTTP_TIMEOUT_SECONDS))

    def get_rpc_timeout(self) -> float:
        """
        Get per-call URL protocol RPC deadline in seconds.
        """
        return float(self.data.get('rpc_timeout', RPC_TIMEOUT_SECONDS))

    def get_bootstrap_peers(self) -> List[str]:
        """
        Get URL protocol bootstrap peers.

        Returns:
            List of "host:port" strings
        """
        peers = self.data.get('bootstrap_peers') or DEFAULT_BOOTSTRAP_PEERS
        return [str(peer) for peer in peers]
