"""Custom exceptions for the font registration and CSS generation system."""

from typing import Any


class FontfaceError(Exception):
    """Base exception for all fontface errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class ValidationError(FontfaceError):
    """Exception raised for input validation errors."""


class StorageError(FontfaceError):
    """Exception raised for storage operation errors."""


class ConfigurationError(FontfaceError):
    """Exception raised for configuration errors."""


class InvalidDescriptorError(ValidationError):
    """Exception raised when a font descriptor cannot be registered."""

    def __init__(self, font_name: str, reason: str):
        super().__init__(f"Invalid descriptor for font '{font_name}': {reason}")
        self.font_name = font_name
        self.reason = reason


class MissingFontSourceError(InvalidDescriptorError):
    """Exception raised when a descriptor has no source path or URL."""

    def __init__(self, font_name: str):
        super().__init__(font_name, "a non-empty source path or URL is required")


class MissingFontNameError(InvalidDescriptorError):
    """Exception raised when a descriptor list entry has no name."""

    def __init__(self, index: int):
        super().__init__(f"<entry {index}>", "a non-empty font name is required")


class FontNotFoundError(FontfaceError):
    """Exception raised when a font name is not registered."""

    def __init__(self, font_name: str):
        super().__init__(f"Font not found: {font_name}")
        self.font_name = font_name


class DocumentEnvironmentError(FontfaceError):
    """Exception raised when a document operation runs without a document."""

    def __init__(self, operation: str):
        super().__init__(f"{operation} requires a document environment")
        self.operation = operation


class FileReadError(StorageError):
    """Exception raised when a file cannot be read."""

    def __init__(self, file_path: str, error: str):
        super().__init__(f"Failed to read file {file_path}: {error}")


class FileWriteError(StorageError):
    """Exception raised when a file cannot be written."""

    def __init__(self, file_path: str, error: str):
        super().__init__(f"Failed to write file {file_path}: {error}")


class ResourceFetchError(StorageError):
    """Exception raised when a font resource cannot be fetched."""

    def __init__(self, location: str, error: str):
        super().__init__(f"Failed to fetch {location}: {error}")


class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised for invalid YAML content."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ManifestFormatError(ConfigurationError):
    """Exception raised when a font manifest has an unexpected shape."""

    def __init__(self, manifest_path: str, error: str):
        super().__init__(f"Invalid font manifest {manifest_path}: {error}")


class InvalidFontDisplayError(ValueError):
    """Exception raised for unsupported font-display values."""

    def __init__(self, value: str):
        super().__init__(
            f"font-display must be one of auto, block, swap, fallback, optional (got {value!r})"
        )
