"""Configuration management for the font registration system."""

import logging
from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    EmptyConfigFileError,
    InvalidFontDisplayError,
    InvalidYamlError,
)

FONT_DISPLAY_VALUES = ("auto", "block", "swap", "fallback", "optional")

DEFAULT_FONTS_DIR = Path(__file__).resolve().parent.parent / "fonts" / "bundled_fonts"

DEFAULT_CATEGORY_DIRS = {
    "chinese": "chineseFint",
    "english": "englishFonts",
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Setup logging configuration."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)
    logging.getLogger().setLevel(getattr(logging, level.upper()))


class FontfaceConfig(BaseSettings):
    """Font registry and CSS emission configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FONTFACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    fonts_dir: Path = Field(DEFAULT_FONTS_DIR, description="Root directory for scanned fonts")
    category_dirs: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_DIRS),
        description="Category name -> subdirectory of fonts_dir",
    )
    scan_extensions: list[str] = Field(
        default_factory=lambda: [".otf", ".ttf"],
        description="File extensions picked up by the directory scan",
    )
    default_weight: str = Field("normal", description="Default font-weight")
    default_style: str = Field("normal", description="Default font-style")
    default_display: str = Field("swap", description="Default font-display")
    allow_cjk: bool = Field(False, description="Keep CJK ideographs in font-family names")
    log_level: str = Field("INFO", description="Application log level")

    @field_validator("default_display")
    @classmethod
    def validate_default_display(cls, v):
        if v not in FONT_DISPLAY_VALUES:
            raise InvalidFontDisplayError(v)
        return v

    @field_validator("scan_extensions")
    @classmethod
    def normalize_scan_extensions(cls, v):
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]

    @classmethod
    def load_from_env(cls, env_file: str | Path | None = ".env") -> "FontfaceConfig":
        """Load configuration from environment variables and .env file."""
        if env_file:
            env_file = Path(env_file)
            if env_file.exists():
                return cls(_env_file=env_file)
        return cls(_env_file=None)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "FontfaceConfig":
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with config_path.open(encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e

    if config_data is None:
        raise EmptyConfigFileError(str(config_path))

    # YAML values win; the .env file is not consulted for file-based configs
    return config_class(_env_file=None, **config_data)
