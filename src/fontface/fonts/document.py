"""
Document Environments
=====================

Capability interface for the document-facing conveniences (style injection,
preload links and font load checks). Code that only generates CSS never
touches a document; a manager without a document environment simply refuses
the document operations.
"""

import asyncio
import base64
import binascii
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import unquote, unquote_to_bytes, urlsplit

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag

from ..core.exceptions import FileReadError, FileWriteError, ResourceFetchError

logger = logging.getLogger(__name__)


class DocumentEnvironment(ABC):
    """Operations a live document must offer to the font manager."""

    @abstractmethod
    def append_to_head(
        self, tag_name: str, attrs: Mapping[str, str], text: str | None = None
    ) -> Any:
        """Create an element, append it to the document head and return it."""

    @abstractmethod
    def find_element_by_id(self, element_id: str) -> Any | None:
        """Return the element with the given id anywhere in the document."""

    @abstractmethod
    def find_elements(self, tag_name: str, attribute: str) -> list[Any]:
        """Return every ``tag_name`` element carrying ``attribute``."""

    @abstractmethod
    def has_attribute(self, element: Any, attribute: str) -> bool:
        """Whether ``element`` carries ``attribute``."""

    @abstractmethod
    def remove_element(self, element: Any) -> None:
        """Detach ``element`` from the document."""

    @abstractmethod
    async def fetch(self, location: str) -> bytes:
        """Load the resource at ``location`` the way the document would."""


class HTMLDocument(DocumentEnvironment):
    """
    Document environment backed by a BeautifulSoup tree.

    Relative resource locations are resolved against ``base_path``; remote
    resources are fetched over HTTP with ``requests`` in a worker thread.
    """

    def __init__(
        self,
        markup: str = "",
        *,
        base_path: Path | str | None = None,
        parser: str = "html.parser",
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ):
        self.soup = BeautifulSoup(markup, parser)
        self.base_path = Path(base_path) if base_path else Path.cwd()
        self._session = session or requests.Session()
        self._timeout = timeout

    @classmethod
    def from_file(cls, path: Path | str, **kwargs) -> "HTMLDocument":
        """Parse an HTML file; resources resolve relative to its directory."""
        path = Path(path)
        try:
            markup = path.read_text(encoding="utf-8")
        except OSError as e:
            raise FileReadError(str(path), str(e)) from e
        kwargs.setdefault("base_path", path.parent)
        return cls(markup, **kwargs)

    @property
    def head(self) -> Tag:
        head = self.soup.head
        if head is None:
            head = self.soup.new_tag("head")
            html = self.soup.find("html")
            parent = html if html is not None else self.soup
            parent.insert(0, head)
        return head

    def append_to_head(
        self, tag_name: str, attrs: Mapping[str, str], text: str | None = None
    ) -> Tag:
        element = self.soup.new_tag(tag_name, attrs=dict(attrs))
        if text is not None:
            element.string = text
        self.head.append(element)
        return element

    def find_element_by_id(self, element_id: str) -> Tag | None:
        return self.soup.find(id=element_id)

    def find_elements(self, tag_name: str, attribute: str) -> list[Tag]:
        return self.soup.find_all(tag_name, attrs={attribute: True})

    def has_attribute(self, element: Tag, attribute: str) -> bool:
        return element.has_attr(attribute)

    def remove_element(self, element: Tag) -> None:
        element.decompose()

    async def fetch(self, location: str) -> bytes:
        parts = urlsplit(location)
        if parts.scheme in {"http", "https"}:
            return await asyncio.to_thread(self._fetch_remote, location)
        if parts.scheme == "data":
            return self._decode_data_uri(location)

        path = Path(unquote(parts.path)) if parts.scheme == "file" else Path(location)
        if not path.is_absolute():
            path = self.base_path / path
        return await asyncio.to_thread(self._read_local, path)

    def _fetch_remote(self, url: str) -> bytes:
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ResourceFetchError(url, str(e)) from e
        return response.content

    @staticmethod
    def _decode_data_uri(uri: str) -> bytes:
        """Decode an RFC 2397 ``data:`` URI (base64 or percent-encoded payload)."""
        header, separator, payload = uri[len("data:") :].partition(",")
        if not separator:
            raise ResourceFetchError(uri[:48], "data URI has no payload separator")

        data = unquote_to_bytes(payload)
        if header.lower().endswith(";base64"):
            try:
                return base64.b64decode(data, validate=True)
            except (binascii.Error, ValueError) as e:
                raise ResourceFetchError(uri[:48], f"invalid base64 payload: {e}") from e
        return data

    def _read_local(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise ResourceFetchError(str(path), str(e)) from e

    def save(self, output_path: Path | str) -> Path:
        """Serialize the document to ``output_path`` as UTF-8."""
        output_path = Path(output_path)
        try:
            output_path.write_text(str(self.soup), encoding="utf-8")
        except OSError as e:
            raise FileWriteError(str(output_path), str(e)) from e
        logger.info(f"Saved document to {output_path}")
        return output_path

    def __str__(self) -> str:
        return str(self.soup)
