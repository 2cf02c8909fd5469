"""
CSS Emission
============

Builds ``@font-face`` declarations from registry entries. Everything here is
a pure function of the registry contents and the call arguments, except for
``write_css_file`` which persists the result.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import (
    FileWriteError,
    FontNotFoundError,
    InvalidDescriptorError,
    ValidationError,
)
from .models import FontFaceOverrides
from .registry import FontRegistry

logger = logging.getLogger(__name__)

_DISALLOWED_FAMILY_CHARS = re.compile(r"[^a-zA-Z0-9\-_]")
_DISALLOWED_FAMILY_CHARS_CJK = re.compile(r"[^a-zA-Z0-9\-_\u4e00-\u9fff]")

FONT_FACE_TEMPLATE = (
    "@font-face {{\n"
    "  font-family: '{family}';\n"
    "  src: url('{source}') format('{format}');\n"
    "  font-weight: {weight};\n"
    "  font-style: {style};\n"
    "  font-display: {display};\n"
    "}}"
)

Overrides = FontFaceOverrides | Mapping[str, Any] | None


def sanitize_family_name(name: str, allow_cjk: bool = False) -> str:
    """
    Strip characters that are unsafe in a quoted CSS family name.

    Args:
        name: Registry key
        allow_cjk: Keep CJK Unified Ideographs (U+4E00..U+9FFF)

    Returns:
        The name reduced to ASCII letters, digits, ``-`` and ``_``
    """
    pattern = _DISALLOWED_FAMILY_CHARS_CJK if allow_cjk else _DISALLOWED_FAMILY_CHARS
    return pattern.sub("", name)


def _coerce_overrides(overrides: Overrides) -> FontFaceOverrides:
    if overrides is None:
        return FontFaceOverrides()
    if isinstance(overrides, FontFaceOverrides):
        return overrides
    try:
        return FontFaceOverrides.model_validate(dict(overrides))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid font-face overrides: {e}", details=e.errors()) from e


def generate_font_css(
    registry: FontRegistry,
    font_name: str,
    overrides: Overrides = None,
    allow_cjk: bool = False,
) -> str:
    """
    Generate a single ``@font-face`` block.

    Args:
        registry: Registry to look the font up in
        font_name: Exact registry key
        overrides: Optional weight/style/display values for this call
        allow_cjk: Keep CJK ideographs in the emitted family name

    Returns:
        The CSS block, without trailing newline

    Raises:
        FontNotFoundError: If the font is not registered
        InvalidDescriptorError: If nothing of the name survives sanitization
        ValidationError: If the overrides are malformed
    """
    font = registry.get_font_info(font_name)
    if font is None:
        raise FontNotFoundError(font_name)

    family = sanitize_family_name(font_name, allow_cjk)
    if not family:
        raise InvalidDescriptorError(font_name, "font-family name is empty after sanitization")

    options = _coerce_overrides(overrides)
    return FONT_FACE_TEMPLATE.format(
        family=family,
        source=font.source,
        format=font.format.value,
        weight=options.weight or font.weight,
        style=options.style or font.style,
        display=options.display or font.display,
    )


def generate_css_file(
    registry: FontRegistry,
    font_names: str | Sequence[str],
    overrides: Overrides = None,
    allow_cjk: bool = False,
) -> str:
    """
    Generate CSS for several fonts, skipping the ones that are not registered
    or whose family name sanitizes to nothing.

    Blocks are separated by one blank line and the result carries no
    leading or trailing whitespace.
    """
    if isinstance(font_names, str):
        font_names = [font_names]

    options = _coerce_overrides(overrides)
    blocks = []
    for font_name in font_names:
        try:
            blocks.append(generate_font_css(registry, font_name, options, allow_cjk))
        except (FontNotFoundError, InvalidDescriptorError) as e:
            logger.warning(f"Skipping font: {e}")

    return "\n\n".join(blocks).strip()


def write_css_file(
    registry: FontRegistry,
    font_names: str | Sequence[str],
    output_path: str | Path,
    overrides: Overrides = None,
    allow_cjk: bool = False,
) -> Path:
    """
    Generate CSS and write it to ``output_path`` as UTF-8, replacing any
    existing file.

    Raises:
        FileWriteError: If the file cannot be written
    """
    output_path = Path(output_path)
    css = generate_css_file(registry, font_names, overrides, allow_cjk)

    try:
        output_path.write_text(css, encoding="utf-8")
    except OSError as e:
        raise FileWriteError(str(output_path), str(e)) from e

    logger.info(f"CSS file generated: {output_path}")
    return output_path
