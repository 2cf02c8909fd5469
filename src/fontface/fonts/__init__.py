"""Font Management Module
======================

This module provides font registration, ``@font-face`` CSS generation and
document helpers for serving registered fonts.
"""

from .css import generate_css_file, generate_font_css, sanitize_family_name, write_css_file
from .document import DocumentEnvironment, HTMLDocument
from .manager import FontManager, create_font_manager
from .models import FontDescriptor, FontFaceOverrides, FontFormat, FontSpec, PreloadResult
from .providers import (
    DescriptorProvider,
    DirectoryFontProvider,
    ManifestFontProvider,
    StaticFontProvider,
)
from .registry import FontRegistry
from .utils import detect_format, font_covers_text

__all__ = [
    "DescriptorProvider",
    "DirectoryFontProvider",
    "DocumentEnvironment",
    "FontDescriptor",
    "FontFaceOverrides",
    "FontFormat",
    "FontManager",
    "FontRegistry",
    "FontSpec",
    "HTMLDocument",
    "ManifestFontProvider",
    "PreloadResult",
    "StaticFontProvider",
    "create_font_manager",
    "detect_format",
    "font_covers_text",
    "generate_css_file",
    "generate_font_css",
    "sanitize_family_name",
    "write_css_file",
]
