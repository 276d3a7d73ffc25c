"""Configuration management for pagewrap."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import toml

ALLOWED_THEMES = [
    "textual-dark",
    "textual-light",
    "nord",
    "gruvbox",
    "dracula",
    "tokyo-night",
    "monokai",
    "solarized-light",
]
ALLOWED_SOURCES = ["demo", "s3"]
CONFIG_FILE_PATH = Path.home() / ".pagewrap.config"


@dataclass
class PagewrapConfig:
    """Paginated list settings."""

    theme: str = "textual-dark"
    source: str = "demo"
    page_size: int = 10
    s3_uri: Optional[str] = None
    latency: float = 0.5
    error_rate: float = 0.0
    profile_name: Optional[str] = None
    endpoint_url: Optional[str] = None
    region_name: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """Validate configuration settings."""
        if self.theme not in ALLOWED_THEMES:
            raise ValueError(f"Invalid theme '{self.theme}'. Allowed themes: {', '.join(ALLOWED_THEMES)}")

        if self.source not in ALLOWED_SOURCES:
            raise ValueError(f"Invalid source '{self.source}'. Allowed sources: {', '.join(ALLOWED_SOURCES)}")

        if self.page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {self.page_size}")

        if self.latency < 0:
            raise ValueError(f"latency must not be negative, got {self.latency}")

        if not 0 <= self.error_rate <= 1:
            raise ValueError(f"error_rate must be between 0 and 1, got {self.error_rate}")

        if self.source == "s3":
            if not self.s3_uri:
                raise ValueError("s3_uri is required when source is 's3'")
            if not self.s3_uri.startswith("s3://"):
                raise ValueError(f"s3_uri must start with 's3://', got '{self.s3_uri}'")

        # Custom endpoints need an explicit region
        if self.endpoint_url and not self.region_name:
            raise ValueError("region_name is required when endpoint_url is set")


def load_config(config_file_path: Optional[str] = None) -> PagewrapConfig:
    """Load configuration from file."""
    if config_file_path:
        config_path = Path(config_file_path)
    else:
        config_path = CONFIG_FILE_PATH

    if not config_path.exists():
        return PagewrapConfig()

    try:
        with open(config_path, "r") as f:
            config_data = toml.load(f)

        # Extract only the fields that belong to PagewrapConfig
        valid_fields = {field.name for field in PagewrapConfig.__dataclass_fields__.values()}

        filtered_config = {key: value for key, value in config_data.items() if key in valid_fields}

        return PagewrapConfig(**filtered_config)

    except Exception as e:
        raise ValueError(f"Error loading config file {config_path}: {e}")


def merge_config_with_cli_args(config: PagewrapConfig, **cli_args) -> PagewrapConfig:
    """Merge configuration with CLI arguments, giving priority to CLI args."""
    merged_config = {}

    for field_name in PagewrapConfig.__dataclass_fields__:
        merged_config[field_name] = getattr(config, field_name)

    # Override with CLI args where provided (not None)
    for key, value in cli_args.items():
        if value is not None:
            merged_config[key] = value

    return PagewrapConfig(**merged_config)


def save_config(config: dict, config_file_path: Optional[str] = None) -> Path:
    """Write a configuration dictionary to the TOML config file."""
    config_path = Path(config_file_path) if config_file_path else CONFIG_FILE_PATH
    with open(config_path, "w") as f:
        toml.dump(config, f)
    return config_path
