"""
Font Utilities
==============

Utility functions for format detection and font file inspection.
"""

import io
import logging
from pathlib import PurePosixPath
from urllib.parse import urlsplit

from .models import FontFormat

logger = logging.getLogger(__name__)

EXTENSION_FORMATS: dict[str, FontFormat] = {
    ".woff2": FontFormat.WOFF2,
    ".woff": FontFormat.WOFF,
    ".ttf": FontFormat.TRUETYPE,
    ".otf": FontFormat.OPENTYPE,
    ".eot": FontFormat.EMBEDDED_OPENTYPE,
    ".svg": FontFormat.SVG,
}

FORMAT_MIME_TYPES: dict[FontFormat, str] = {
    FontFormat.WOFF2: "font/woff2",
    FontFormat.WOFF: "font/woff",
    FontFormat.TRUETYPE: "font/ttf",
    FontFormat.OPENTYPE: "font/otf",
    FontFormat.EMBEDDED_OPENTYPE: "application/vnd.ms-fontobject",
    FontFormat.SVG: "image/svg+xml",
}


def source_extension(source: str) -> str:
    """Lower-cased extension of a path or URL, ignoring query and fragment."""
    path = urlsplit(source).path if "://" in source else source
    return PurePosixPath(path.replace("\\", "/")).suffix.lower()


def detect_format(source: str, file_name: str | None = None) -> FontFormat:
    """
    Derive the CSS format hint from a font's file extension.

    Args:
        source: Font path or URL
        file_name: Original file name, preferred over the source when given

    Returns:
        The matching FontFormat, ``truetype`` for unknown extensions
    """
    extension = source_extension(file_name or source)
    font_format = EXTENSION_FORMATS.get(extension)
    if font_format is None:
        logger.debug(f"Unrecognized font extension {extension!r} for {source}, using truetype")
        return FontFormat.TRUETYPE
    return font_format


def font_mime_type(font_format: FontFormat) -> str:
    """MIME type advertised on preload links."""
    return FORMAT_MIME_TYPES[font_format]


def font_covers_text(font_data: bytes, text: str) -> bool:
    """
    Check that every visible character of ``text`` has a glyph in the font.

    Args:
        font_data: Raw font file contents (TTF, OTF, WOFF, WOFF2)
        text: Characters to check

    Returns:
        True if the font's cmap maps every non-whitespace character
    """
    from fontTools.ttLib import TTFont

    with TTFont(io.BytesIO(font_data), lazy=True) as font:
        cmap = font.getBestCmap() or {}

    missing = [ch for ch in text if not ch.isspace() and ord(ch) not in cmap]
    if missing:
        logger.debug(f"Font is missing glyphs for {''.join(missing)!r}")
        return False
    return True
