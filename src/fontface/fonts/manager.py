"""
Font Management System
======================

Facade over a font registry, the CSS emitter and an optional document
environment. Hosts that want a process-wide default build one with
``create_font_manager`` and keep it themselves.
"""

import asyncio
import itertools
import logging
import time
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from ..core.config import FontfaceConfig, setup_logging
from ..core.exceptions import DocumentEnvironmentError, FontNotFoundError
from . import css
from .document import DocumentEnvironment
from .models import FontDescriptor, FontSpec, PreloadResult
from .providers import (
    DescriptorProvider,
    DirectoryFontProvider,
    ManifestFontProvider,
    StaticFontProvider,
)
from .registry import FontRegistry
from .utils import font_covers_text, font_mime_type

logger = logging.getLogger(__name__)

MANAGER_MARKER_ATTRIBUTE = "data-font-manager"
DEFAULT_TEST_TEXT = "BESbswy"


class FontManager:
    """
    Central font management system.

    Wraps a ``FontRegistry`` with CSS generation and, when a document
    environment is attached, style injection, preloading and load checks.
    """

    def __init__(
        self,
        registry: FontRegistry | None = None,
        document: DocumentEnvironment | None = None,
        allow_cjk: bool = False,
    ):
        """
        Initialize font manager.

        Args:
            registry: Font registry; an empty one is created when omitted
            document: Document environment for the document operations
            allow_cjk: Keep CJK ideographs in emitted family names
        """
        self.registry = registry if registry is not None else FontRegistry()
        self.document = document
        self.allow_cjk = allow_cjk
        self._style_ids = itertools.count(1)

        logger.info(f"FontManager initialized with {len(self.registry)} fonts")

    # Registry

    def register_font(
        self,
        name: str,
        descriptor: FontSpec | FontDescriptor | Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> FontDescriptor:
        return self.registry.register_font(name, descriptor, **fields)

    def unregister_font(self, name: str) -> bool:
        return self.registry.unregister_font(name)

    def get_available_fonts(self) -> list[str]:
        return self.registry.get_available_fonts()

    def get_font_info(self, name: str) -> FontDescriptor | None:
        return self.registry.get_font_info(name)

    def get_fonts_by_type(self, category: str) -> list[str]:
        return self.registry.get_fonts_by_type(category)

    # CSS

    def generate_font_css(self, font_name: str, overrides: css.Overrides = None) -> str:
        return css.generate_font_css(self.registry, font_name, overrides, self.allow_cjk)

    def generate_css_file(
        self, font_names: str | Sequence[str], overrides: css.Overrides = None
    ) -> str:
        return css.generate_css_file(self.registry, font_names, overrides, self.allow_cjk)

    def write_css_file(
        self,
        font_names: str | Sequence[str],
        output_path: str | Path,
        overrides: css.Overrides = None,
    ) -> Path:
        return css.write_css_file(
            self.registry, font_names, output_path, overrides, self.allow_cjk
        )

    # Document

    def _require_document(self, operation: str) -> DocumentEnvironment:
        if self.document is None:
            raise DocumentEnvironmentError(operation)
        return self.document

    def inject_css(
        self,
        font_names: str | Sequence[str],
        style_id: str | None = None,
        overrides: css.Overrides = None,
    ) -> Any:
        """
        Add a ``<style>`` element with the generated CSS to the document head.

        Args:
            font_names: One font name or several
            style_id: Element id; derived from the current time when omitted
            overrides: Optional weight/style/display values

        Returns:
            The created element

        Raises:
            DocumentEnvironmentError: If no document environment is attached
        """
        document = self._require_document("inject_css")
        style_id = style_id or (
            f"font-manager-{time.time_ns() // 1_000_000}-{next(self._style_ids)}"
        )

        element = document.append_to_head(
            "style",
            {MANAGER_MARKER_ATTRIBUTE: "true", "id": style_id},
            self.generate_css_file(font_names, overrides),
        )
        logger.debug(f"Injected font CSS as #{style_id}")
        return element

    def remove_injected_css(self, style_id: str) -> bool:
        """Remove an injected style element; elements not owned by the manager are left alone."""
        if self.document is None:
            return False

        element = self.document.find_element_by_id(style_id)
        if element is None or not self.document.has_attribute(element, MANAGER_MARKER_ATTRIBUTE):
            return False

        self.document.remove_element(element)
        return True

    def clear_all_injected_css(self) -> int:
        """Remove every style element injected by a manager and return how many went."""
        if self.document is None:
            return 0

        elements = self.document.find_elements("style", MANAGER_MARKER_ATTRIBUTE)
        for element in elements:
            self.document.remove_element(element)

        logger.debug(f"Removed {len(elements)} injected style elements")
        return len(elements)

    async def _preload_font(self, font_name: str) -> PreloadResult:
        document = self._require_document("preload_fonts")
        font = self.registry.get_font_info(font_name)
        if font is None:
            raise FontNotFoundError(font_name)

        document.append_to_head(
            "link",
            {
                "rel": "preload",
                "href": font.source,
                "as": "font",
                "type": font_mime_type(font.format),
                "crossorigin": "anonymous",
            },
        )
        await document.fetch(font.source)
        return PreloadResult(name=font_name, href=font.source)

    async def preload_fonts(self, font_names: str | Iterable[str]) -> list[PreloadResult]:
        """
        Preload fonts through the document, settling every font independently.

        A failure for one font (unregistered name, fetch error) is reported in
        that font's result and never cancels the others.

        Returns:
            One PreloadResult per requested name, in request order
        """
        if isinstance(font_names, str):
            font_names = [font_names]
        font_names = list(font_names)

        results = await asyncio.gather(
            *(self._preload_font(name) for name in font_names), return_exceptions=True
        )

        settled = []
        for name, result in zip(font_names, results):
            if isinstance(result, Exception):
                logger.warning(f"Failed to preload font {name}: {result}")
                settled.append(PreloadResult(name=name, error=result))
            else:
                settled.append(result)
        return settled

    async def is_font_loaded(self, font_name: str, test_text: str = DEFAULT_TEST_TEXT) -> bool:
        """
        Check whether a font can be loaded and renders ``test_text``.

        Never raises: a missing document, an unknown font and a failed load
        all report False.
        """
        if self.document is None:
            return False

        font = self.registry.get_font_info(font_name)
        if font is None:
            return False

        try:
            font_data = await self.document.fetch(font.source)
            return font_covers_text(font_data, test_text)
        except Exception as e:
            logger.debug(f"Font load check failed for {font_name}: {e}")
            return False


def create_font_manager(
    config: FontfaceConfig | None = None,
    fonts: Iterable[FontSpec | Mapping[str, Any]] | None = None,
    manifest_path: str | Path | None = None,
    document: DocumentEnvironment | None = None,
    scan: bool = True,
    configure_logging: bool = False,
) -> FontManager:
    """
    Build a manager from configuration.

    Descriptor lists (``fonts`` or ``manifest_path``) keep CJK ideographs in
    family names, as URL-hosted CJK fonts are commonly registered under
    their native names.

    Args:
        config: Configuration; loaded from the environment when omitted
        fonts: Explicit descriptor list, registered after the scan
        manifest_path: JSON/YAML manifest, registered after the scan
        document: Optional document environment
        scan: Whether to scan the configured font directories
        configure_logging: Apply ``config.log_level`` through ``setup_logging``

    Returns:
        A ready FontManager
    """
    config = config or FontfaceConfig.load_from_env()
    if configure_logging:
        setup_logging(config.log_level)

    providers: list[DescriptorProvider] = []
    if scan:
        providers.append(
            DirectoryFontProvider(config.fonts_dir, config.category_dirs, config.scan_extensions)
        )
    if manifest_path is not None:
        providers.append(ManifestFontProvider(manifest_path))
    if fonts is not None:
        providers.append(StaticFontProvider(fonts))

    registry = FontRegistry(
        providers,
        default_weight=config.default_weight,
        default_style=config.default_style,
        default_display=config.default_display,
    )
    allow_cjk = config.allow_cjk or fonts is not None or manifest_path is not None
    return FontManager(registry, document=document, allow_cjk=allow_cjk)
