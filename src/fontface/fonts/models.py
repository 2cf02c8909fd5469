"""
Font data models and types.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Any
from urllib.parse import urlsplit

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class FontFormat(str, Enum):
    """CSS ``format()`` hints for ``@font-face`` sources."""

    WOFF2 = "woff2"
    WOFF = "woff"
    TRUETYPE = "truetype"
    OPENTYPE = "opentype"
    EMBEDDED_OPENTYPE = "embedded-opentype"
    SVG = "svg"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FontDescriptor:
    """Metadata registered for a single font name."""

    source: str
    format: FontFormat
    category: str = "unknown"
    weight: str = "normal"
    style: str = "normal"
    display: str = "swap"
    file_name: str | None = None

    @property
    def is_url(self) -> bool:
        """Whether the source is a URL rather than a filesystem path."""
        return urlsplit(self.source).scheme in {"http", "https", "data"}

    @property
    def extension(self) -> str:
        """Get the source file extension."""
        return PurePosixPath(urlsplit(self.source).path).suffix.lower()

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["format"] = self.format.value
        return data

    def __str__(self) -> str:
        return f"{self.source} ({self.format.value}, {self.category})"


def _coerce_css_value(v):
    # font-weight is commonly given as a number (400, 700)
    if isinstance(v, int | float) and not isinstance(v, bool):
        return str(v)
    return v


class FontSpec(BaseModel):
    """Descriptor input as supplied by callers, manifests and providers."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = None
    source: str | None = Field(
        None, validation_alias=AliasChoices("source", "url", "path"), description="Path or URL"
    )
    format: FontFormat | None = None
    category: str | None = Field(None, validation_alias=AliasChoices("category", "type"))
    weight: str | None = None
    style: str | None = None
    display: str | None = None
    file_name: str | None = Field(None, validation_alias=AliasChoices("file_name", "fileName"))

    @field_validator("weight", "style", "display", mode="before")
    @classmethod
    def coerce_css_value(cls, v):
        return _coerce_css_value(v)


class FontFaceOverrides(BaseModel):
    """Per-call overrides for the CSS-facing descriptor fields."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    weight: str | None = Field(
        None, validation_alias=AliasChoices("weight", "fontWeight", "font_weight")
    )
    style: str | None = Field(
        None, validation_alias=AliasChoices("style", "fontStyle", "font_style")
    )
    display: str | None = Field(
        None, validation_alias=AliasChoices("display", "fontDisplay", "font_display")
    )

    @field_validator("weight", "style", "display", mode="before")
    @classmethod
    def coerce_css_value(cls, v):
        return _coerce_css_value(v)


@dataclass
class PreloadResult:
    """Settled outcome of preloading one font."""

    name: str
    href: str | None = None
    error: Exception | None = None

    @property
    def status(self) -> str:
        return "rejected" if self.error is not None else "fulfilled"

    @property
    def ok(self) -> bool:
        return self.error is None
