"""Configuration management for the fss3 CLI."""

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from fileservice import config as service_config

logger = logging.getLogger(__name__)


class CliSettings(BaseModel):
    """Validated CLI settings."""
    s3_endpoint_url: Optional[str] = service_config.S3_ENDPOINT_URL
    s3_region: Optional[str] = service_config.S3_REGION
    s3_profile: Optional[str] = service_config.S3_PROFILE
    concurrency: int = Field(default=service_config.CONCURRENCY, ge=1)
    list_page_size: int = Field(default=service_config.LIST_PAGE_SIZE, ge=1, le=1000)
    link_expiry_seconds: int = Field(default=service_config.LINK_EXPIRY_SECONDS, ge=1)
    poll_interval_seconds: float = Field(default=service_config.POLL_INTERVAL_SECONDS, gt=0)


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = CliSettings().model_dump()

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.fss3/config.json)
        """
        self.config_path = config_path
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
            self.config_path = Path(tempfile.gettempdir()) / '.fss3' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.config_path.exists():
            config = self.DEFAULT_CONFIG.copy()
            try:
                with open(self.config_path, 'w') as f:
                    json.dump(config, f, indent=2)
            except OSError as e:
                logger.warning(f"Could not write default config to {self.config_path}: {e}")
            return config

        try:
            with open(self.config_path, 'r') as f:
                data = json.load(f)
            config = self.DEFAULT_CONFIG.copy()
            config.update(data)
            return CliSettings(**config).model_dump()
        except (json.JSONDecodeError, OSError, ValidationError, TypeError) as e:
            logger.warning(f"Invalid config file {self.config_path}, using defaults: {e}")
            backup_path = self.config_path.with_suffix('.json.bak')
            try:
                shutil.copy(self.config_path, backup_path)
            except OSError:
                logger.warning(f"Could not back up invalid config to {backup_path}")
            return self.DEFAULT_CONFIG.copy()

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not save config to {self.config_path}: {e}")

    def get_settings(self) -> CliSettings:
        """
        Get validated settings.

        Returns:
            CliSettings built from the loaded data
        """
        return CliSettings(**self.data)

    def set(self, key: str, value) -> None:
        """
        Set a setting and save to file.

        Raises:
            ValidationError: If the new value is invalid
        """
        updated = dict(self.data)
        updated[key] = value
        self.data = CliSettings(**updated).model_dump()
        self.save()


def default_config_path() -> Path:
    """Config path from FSS3_CONFIG or ~/.fss3/config.json."""
    override = os.environ.get("FSS3_CONFIG")
    if override:
        return Path(override)
    return Path.home() / '.fss3' / 'config.json'
