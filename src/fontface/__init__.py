"""Fontface
========

Registers font assets (local files or URLs) by name and emits
``@font-face`` CSS for them, optionally writing the CSS to disk or
injecting it into an HTML document.
"""

__version__ = "0.1.0"
__author__ = "Fontface Team"

from .core import (
    DocumentEnvironmentError,
    FontfaceConfig,
    FontfaceError,
    FontNotFoundError,
    InvalidDescriptorError,
    setup_logging,
)
from .fonts import (
    FontDescriptor,
    FontFormat,
    FontManager,
    FontRegistry,
    HTMLDocument,
    create_font_manager,
)

__all__ = [
    "DocumentEnvironmentError",
    "FontDescriptor",
    "FontFormat",
    "FontManager",
    "FontNotFoundError",
    "FontRegistry",
    "FontfaceConfig",
    "FontfaceError",
    "HTMLDocument",
    "InvalidDescriptorError",
    "__version__",
    "create_font_manager",
    "setup_logging",
]
