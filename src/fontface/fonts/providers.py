"""Descriptor Providers
===================

Sources of font descriptors consumed when a registry is built. The directory
provider scans category folders for font files; the static and manifest
providers feed caller-supplied descriptor lists (typically URLs).
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..core.config import DEFAULT_CATEGORY_DIRS, DEFAULT_FONTS_DIR
from ..core.exceptions import (
    ConfigFileNotFoundError,
    InvalidDescriptorError,
    InvalidYamlError,
    ManifestFormatError,
    MissingFontNameError,
)
from .models import FontSpec

logger = logging.getLogger(__name__)


class DescriptorProvider(ABC):
    """Produces ``(name, FontSpec)`` pairs for registry construction."""

    @abstractmethod
    def load(self) -> Iterator[tuple[str, FontSpec]]:
        """Yield every font this provider knows about."""


class DirectoryFontProvider(DescriptorProvider):
    """
    Provider for font files stored in per-category directories.

    Each ``category -> subdirectory`` pair is scanned (non-recursively) for
    files with a supported extension; the file name without its extension
    becomes the registry key.
    """

    def __init__(
        self,
        fonts_dir: Path | str | None = None,
        category_dirs: Mapping[str, str] | None = None,
        extensions: Iterable[str] = (".otf", ".ttf"),
    ):
        """
        Initialize directory font provider.

        Args:
            fonts_dir: Root directory holding the category subdirectories
            category_dirs: Category name -> subdirectory name
            extensions: File extensions to register (case-insensitive)
        """
        self.fonts_dir = Path(fonts_dir) if fonts_dir else DEFAULT_FONTS_DIR
        self.category_dirs = dict(category_dirs or DEFAULT_CATEGORY_DIRS)
        self.extensions = {ext.lower() for ext in extensions}

        logger.debug(f"DirectoryFontProvider initialized for {self.fonts_dir}")

    def load(self) -> Iterator[tuple[str, FontSpec]]:
        for category, subdir in self.category_dirs.items():
            yield from self._scan_font_directory(self.fonts_dir / subdir, category)

    def _scan_font_directory(
        self, font_dir: Path, category: str
    ) -> Iterator[tuple[str, FontSpec]]:
        """Scan a font directory for font files."""
        if not font_dir.is_dir():
            logger.debug(f"Skipping missing font directory {font_dir}")
            return

        for font_file in sorted(font_dir.iterdir()):
            if not font_file.is_file() or font_file.suffix.lower() not in self.extensions:
                continue

            yield font_file.stem, FontSpec(
                source=str(font_file),
                category=category,
                file_name=font_file.name,
            )


class StaticFontProvider(DescriptorProvider):
    """Provider for an explicit list of descriptor objects or mappings."""

    def __init__(self, fonts: Iterable[FontSpec | Mapping[str, Any]]):
        self.fonts = list(fonts)

    def load(self) -> Iterator[tuple[str, FontSpec]]:
        for index, entry in enumerate(self.fonts):
            spec = _coerce_spec(entry, index)
            yield spec.name, spec


class ManifestFontProvider(DescriptorProvider):
    """
    Provider for descriptor lists stored in a JSON or YAML manifest.

    The manifest is either a list of descriptor objects or a mapping with a
    ``fonts`` key holding that list (the shape written by
    ``FontRegistry.export_font_list``).
    """

    def __init__(self, manifest_path: Path | str):
        self.manifest_path = Path(manifest_path)

    def load(self) -> Iterator[tuple[str, FontSpec]]:
        entries = self._read_manifest()
        logger.debug(f"Loaded {len(entries)} font entries from {self.manifest_path}")
        yield from StaticFontProvider(entries).load()

    def _read_manifest(self) -> list[Any]:
        if not self.manifest_path.exists():
            raise ConfigFileNotFoundError(str(self.manifest_path))

        text = self.manifest_path.read_text(encoding="utf-8")
        if self.manifest_path.suffix.lower() in {".yaml", ".yml"}:
            try:
                data = yaml.safe_load(text)
            except yaml.YAMLError as e:
                raise InvalidYamlError(str(self.manifest_path), str(e)) from e
        else:
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise ManifestFormatError(str(self.manifest_path), str(e)) from e

        if isinstance(data, Mapping):
            data = data.get("fonts")
        if not isinstance(data, list):
            raise ManifestFormatError(str(self.manifest_path), "expected a list of fonts")
        return data


def _coerce_spec(entry: FontSpec | Mapping[str, Any], index: int) -> FontSpec:
    """Normalize one descriptor list entry into a named FontSpec."""
    if isinstance(entry, FontSpec):
        spec = entry
    else:
        try:
            spec = FontSpec.model_validate(entry)
        except PydanticValidationError as e:
            name = entry.get("name") if isinstance(entry, Mapping) else None
            raise InvalidDescriptorError(str(name or f"<entry {index}>"), str(e)) from e

    if not spec.name:
        raise MissingFontNameError(index)
    return spec
