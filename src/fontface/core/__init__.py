"""Core components for font registration."""

from .config import FontfaceConfig, setup_logging
from .exceptions import (
    ConfigurationError,
    DocumentEnvironmentError,
    FileWriteError,
    FontfaceError,
    FontNotFoundError,
    InvalidDescriptorError,
    StorageError,
    ValidationError,
)

__all__ = [
    "ConfigurationError",
    "DocumentEnvironmentError",
    "FileWriteError",
    "FontNotFoundError",
    "FontfaceConfig",
    "FontfaceError",
    "InvalidDescriptorError",
    "StorageError",
    "ValidationError",
    "setup_logging",
]
