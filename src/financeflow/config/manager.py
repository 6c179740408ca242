"""User configuration manager."""
import json
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from financeflow.utils.logger import get_data_dir
from financeflow.utils.exceptions import ConfigError


@dataclass
class Config:
    """User configuration."""
    gemini_api_key: str
    model_name: str = "gemini-2.5-flash-lite"
    log_level: str = "INFO"
    data_dir: Optional[str] = None


class ConfigManager:
    """Manages user configuration stored as JSON in the data directory."""

    def __init__(self, config_file_name: str = "config.json"):
        self.config_dir = get_data_dir()
        self.config_file = self.config_dir / config_file_name
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def load_config(self) -> Optional[Config]:
        """Load configuration from file, applying the GEMINI_API_KEY override."""
        env_key = os.getenv("GEMINI_API_KEY")

        if not self.config_file.exists():
            if env_key:
                return Config(gemini_api_key=env_key)
            return None

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                config_dict = json.load(f)
            config = Config(**config_dict)
        except (OSError, ValueError, TypeError) as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        if env_key:
            config.gemini_api_key = env_key
        return config

    def save_config(self, config: Config) -> None:
        """Save configuration."""
        try:
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(asdict(config), f, indent=2)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration: {e}") from e

    def validate_config(self, config: Config) -> tuple[bool, str]:
        """Validate configuration values."""
        if not config.gemini_api_key:
            return False, "Gemini API key is required"

        if not config.model_name:
            return False, "Model name is required"

        if config.data_dir and not Path(config.data_dir).expanduser().is_dir():
            return False, f"Data directory does not exist: {config.data_dir}"

        return True, "Configuration is valid"

    def resolve_data_dir(self, config: Optional[Config]) -> Path:
        """Directory holding the local store for this configuration."""
        if config and config.data_dir:
            return Path(config.data_dir).expanduser()
        return self.config_dir
