"""Typed records describing documentation metadata and rendered artefacts.

Raw metadata served by the docs backend is normalised into immutable
records (:class:`DocsInfo`, :class:`Version`, :class:`PageRecord`) through the
``from_payload`` constructors. The navigation builder never mutates these; it
derives fresh :class:`Page` trees for every route change.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from types import MappingProxyType


class DocsInfoError(ValueError):
    """Raised when docs metadata is missing versions or expected page scopes."""


@dc.dataclass(frozen=True, slots=True)
class Library:
    """A library published as part of a documentation release."""

    name: str
    version: str

    @classmethod
    def from_payload(cls, payload: cabc.Mapping[str, typ.Any]) -> Library:
        """Build a Library from a decoded mapping."""
        return cls(
            name=_require_str(payload, "name", "library"),
            version=str(payload.get("version", "")),
        )


@dc.dataclass(frozen=True, slots=True)
class Version:
    """A documentation release and the libraries it ships."""

    name: str
    libraries: tuple[Library, ...] = ()

    @classmethod
    def from_payload(cls, payload: cabc.Mapping[str, typ.Any]) -> Version:
        """Build a Version from a decoded mapping."""
        libraries = payload.get("libraries") or []
        return cls(
            name=_require_str(payload, "name", "version"),
            libraries=tuple(Library.from_payload(lib) for lib in libraries),
        )


@dc.dataclass(frozen=True, slots=True)
class PageRecord:
    """A page entry exactly as the backend describes it.

    Attributes
    ----------
    name : str
        Stable identifier used in routes.
    title : str
        Display text for navigation.
    file : str
        Backend content identifier for the markdown source.
    unlisted : bool
        Whether the page is hidden from listings.
    children : tuple[PageRecord, ...]
        Nested pages; the backend may nest arbitrarily deep.
    """

    name: str
    title: str = ""
    file: str = ""
    unlisted: bool = False
    children: tuple[PageRecord, ...] = ()

    @classmethod
    def from_payload(cls, payload: cabc.Mapping[str, typ.Any]) -> PageRecord:
        """Build a PageRecord (and its children) from a decoded mapping."""
        children = payload.get("children") or []
        return cls(
            name=_require_str(payload, "name", "page"),
            title=str(payload.get("title") or ""),
            file=str(payload.get("file") or ""),
            unlisted=bool(payload.get("unlisted", False)),
            children=tuple(cls.from_payload(child) for child in children),
        )


@dc.dataclass(frozen=True, slots=True)
class DocsInfo:
    """All versions plus the page collections keyed by scope.

    Scope keys are version names and the reserved ``"all"`` key for pages
    shared by every version.
    """

    versions: tuple[Version, ...]
    pages: cabc.Mapping[str, tuple[PageRecord, ...]]

    @classmethod
    def from_payload(cls, payload: cabc.Mapping[str, typ.Any]) -> DocsInfo:
        """Build DocsInfo from the decoded backend response.

        Raises
        ------
        DocsInfoError
            If the payload lacks a ``versions`` list or a ``pages`` mapping.
        """
        versions_raw = payload.get("versions")
        pages_raw = payload.get("pages")
        if not isinstance(versions_raw, list):
            msg = "Docs metadata must contain a 'versions' list."
            raise DocsInfoError(msg)
        if not isinstance(pages_raw, dict):
            msg = "Docs metadata must contain a 'pages' mapping."
            raise DocsInfoError(msg)
        return cls(
            versions=tuple(Version.from_payload(item) for item in versions_raw),
            pages=MappingProxyType(
                {
                    str(scope): tuple(
                        PageRecord.from_payload(item) for item in items or []
                    )
                    for scope, items in pages_raw.items()
                }
            ),
        )


@dc.dataclass(frozen=True, slots=True)
class Page:
    """A navigable page in the built tree.

    Root pages may carry leaf children; leaves never carry children of their
    own, so the tree is at most two levels deep.
    """

    name: str
    title: str
    file: str
    link: str
    version: str
    unlisted: bool = False
    children: tuple[Page, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class TocItem:
    """A table-of-contents entry collected while rendering a heading."""

    url: str
    name: str
    level: str
    fragment: str


@dc.dataclass(frozen=True, slots=True)
class FlatNode:
    """Display projection of a page for a collapsible navigation tree."""

    expandable: bool
    name: str
    level: int
    link: str


@dc.dataclass(frozen=True, slots=True)
class RenderContext:
    """Page and version a markdown render is resolved against."""

    page: Page
    version: Version


def _require_str(payload: cabc.Mapping[str, typ.Any], key: str, kind: str) -> str:
    """Return ``payload[key]`` as a non-empty string or raise DocsInfoError."""
    value = payload.get(key)
    if value is None or not str(value):
        msg = f"Each {kind} entry requires a non-empty '{key}'."
        raise DocsInfoError(msg)
    return str(value)


__all__ = [
    "DocsInfo",
    "DocsInfoError",
    "FlatNode",
    "Library",
    "Page",
    "PageRecord",
    "RenderContext",
    "TocItem",
    "Version",
]
