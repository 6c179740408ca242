"""Application settings loader from YAML configuration."""
import os
import yaml
from pathlib import Path
from dataclasses import dataclass

DEFAULT_SETTINGS_PATH = Path(__file__).parent.parent / "resources" / "config.yaml"


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_max_file_size_mb: int
    log_backup_count: int

    # LLM
    llm_model_name: str
    llm_temperature: float

    # Reports
    currency_symbol: str
    fuzzy_match_threshold: int

    # Paths (relative to the data directory)
    config_file: str

    @classmethod
    def load(cls, config_path: Path = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            config_path = Path(os.getenv("FINANCEFLOW_SETTINGS", DEFAULT_SETTINGS_PATH))

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        return cls(
            app_name=config["app"]["name"],
            app_version=config["app"]["version"],
            log_level=config["logging"]["level"],
            log_max_file_size_mb=config["logging"]["max_file_size_mb"],
            log_backup_count=config["logging"]["backup_count"],
            llm_model_name=config["llm"]["model_name"],
            llm_temperature=config["llm"]["temperature"],
            currency_symbol=config["reports"]["currency_symbol"],
            fuzzy_match_threshold=config["reports"]["fuzzy_match_threshold"],
            config_file=config["paths"]["config_file"]
        )


# Global settings instance
_settings: AppSettings = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings
