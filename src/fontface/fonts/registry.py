"""
Font Registry
=============

Maps font names to their descriptors. A registry is populated once from its
providers and afterwards changes only through explicit registration calls.
"""

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import FileWriteError, InvalidDescriptorError, MissingFontSourceError
from .models import FontDescriptor, FontSpec
from .providers import DescriptorProvider
from .utils import detect_format

logger = logging.getLogger(__name__)


class FontRegistry:
    """
    Registry of font names and their descriptors.

    Lookups are exact, case-sensitive matches on the registered name. There
    is no fuzzy matching and no aliasing.
    """

    def __init__(
        self,
        providers: DescriptorProvider | Iterable[DescriptorProvider] | None = None,
        default_weight: str = "normal",
        default_style: str = "normal",
        default_display: str = "swap",
    ):
        """
        Initialize the registry and consume every provider.

        Args:
            providers: One provider or a sequence of providers, applied in order
            default_weight: font-weight used when a descriptor has none
            default_style: font-style used when a descriptor has none
            default_display: font-display used when a descriptor has none

        Raises:
            InvalidDescriptorError: If any provided descriptor is invalid; no
                registry is created in that case
        """
        self.default_weight = default_weight
        self.default_style = default_style
        self.default_display = default_display
        self._fonts: dict[str, FontDescriptor] = {}

        if isinstance(providers, DescriptorProvider):
            providers = [providers]

        loaded: dict[str, FontDescriptor] = {}
        for provider in providers or []:
            for name, spec in provider.load():
                loaded[name] = self._build_descriptor(name, spec)
                logger.debug(f"Loaded font {name} from {type(provider).__name__}")
        self._fonts = loaded

        logger.info(f"FontRegistry initialized with {len(self._fonts)} fonts")

    def _build_descriptor(self, name: str, spec: FontSpec) -> FontDescriptor:
        source = (spec.source or "").strip()
        if not source:
            raise MissingFontSourceError(name)

        return FontDescriptor(
            source=source,
            format=spec.format or detect_format(source, spec.file_name),
            category=spec.category or "unknown",
            weight=spec.weight or self.default_weight,
            style=spec.style or self.default_style,
            display=spec.display or self.default_display,
            file_name=spec.file_name,
        )

    def register_font(
        self,
        name: str,
        descriptor: FontSpec | FontDescriptor | Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> FontDescriptor:
        """
        Register or replace a font.

        Args:
            name: Registry key
            descriptor: Descriptor input (``source``/``url``, ``format``,
                ``category``/``type``, ``weight``, ``style``, ``display``)
            **fields: Descriptor fields given as keywords; these win over
                ``descriptor``

        Returns:
            The stored descriptor

        Raises:
            InvalidDescriptorError: If the source is missing or a field is invalid
        """
        if isinstance(descriptor, FontDescriptor):
            data = descriptor.to_dict()
        elif isinstance(descriptor, FontSpec):
            data = descriptor.model_dump(exclude_none=True)
        else:
            data = dict(descriptor or {})
        data.update(fields)

        try:
            spec = FontSpec.model_validate(data)
        except PydanticValidationError as e:
            raise InvalidDescriptorError(name, str(e)) from e

        font = self._build_descriptor(name, spec)
        if name in self._fonts:
            logger.debug(f"Replacing registered font {name}")
        self._fonts[name] = font
        logger.debug(f"Registered font {name}: {font}")
        return font

    def unregister_font(self, name: str) -> bool:
        """Remove a font; returns whether anything was removed."""
        if self._fonts.pop(name, None) is None:
            return False
        logger.debug(f"Unregistered font {name}")
        return True

    def get_available_fonts(self) -> list[str]:
        """List all registered font names."""
        return list(self._fonts)

    def get_font_info(self, name: str) -> FontDescriptor | None:
        """Get the descriptor for a font, or None if it is not registered."""
        return self._fonts.get(name)

    def get_fonts_by_type(self, category: str) -> list[str]:
        """List the names of fonts in a category."""
        return [name for name, font in self._fonts.items() if font.category == category]

    def export_font_list(self, output_path: str | Path) -> Path:
        """
        Export the registry as a JSON manifest.

        The file can be loaded back with ``ManifestFontProvider``.

        Args:
            output_path: Output file path

        Returns:
            The written path
        """
        output_path = Path(output_path)
        font_data = [{"name": name, **font.to_dict()} for name, font in self._fonts.items()]

        try:
            output_path.write_text(
                json.dumps({"fonts": font_data}, indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except OSError as e:
            raise FileWriteError(str(output_path), str(e)) from e

        logger.info(f"Exported font list to {output_path}")
        return output_path

    def __contains__(self, name: object) -> bool:
        return name in self._fonts

    def __len__(self) -> int:
        return len(self._fonts)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._fonts))
