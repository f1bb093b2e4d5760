"""Configuration management with YAML + environment variable support."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_PORT = 4028
DEFAULT_TIMEOUT = 5.0


@dataclass
class ClientSettings:
    """Connection parameters for one cgminer daemon."""
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    timeout: Optional[float] = DEFAULT_TIMEOUT

    def validate(self):
        """Validate settings and raise if invalid."""
        if not self.host:
            raise ValueError("Daemon host is required")
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 1-65535")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")


def load_settings(config_path: Optional[str] = None) -> ClientSettings:
    """
    Load settings from YAML file and environment variables.
    Environment variables override YAML values.

    Priority order:
    1. cgminer.local.yaml (if exists) - machine-specific overrides
    2. cgminer.yaml (fallback)
    """
    settings = ClientSettings()

    if config_path is None:
        if Path("cgminer.local.yaml").exists():
            config_path = "cgminer.local.yaml"
        else:
            config_path = "cgminer.yaml"

    config_file = Path(config_path)
    if config_file.exists():
        logger.debug("[Config] Loading from %s", config_file)
        with open(config_file, 'r') as f:
            data = yaml.safe_load(f) or {}

        if 'cgminer' in data:
            c = data['cgminer'] or {}
            settings = ClientSettings(
                host=c.get('host', settings.host),
                port=int(c.get('port', settings.port)),
                timeout=c.get('timeout', settings.timeout),
            )

    if os.getenv('CGMINER_HOST'):
        settings.host = os.getenv('CGMINER_HOST')
    if os.getenv('CGMINER_PORT'):
        settings.port = int(os.getenv('CGMINER_PORT'))
    if os.getenv('CGMINER_TIMEOUT'):
        settings.timeout = float(os.getenv('CGMINER_TIMEOUT'))

    settings.validate()

    return settings
