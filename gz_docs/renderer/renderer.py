"""Render docs markdown into HTML plus the table of contents it declares."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from markdown import Markdown

from .extension import DocsRenderExtension

if typ.TYPE_CHECKING:
    from gz_docs.models import RenderContext, TocItem

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)


@dc.dataclass(slots=True)
class RenderedMarkdown:
    """HTML for one page and the TOC entries gathered while rendering it."""

    html: str
    toc: list[TocItem]


class DocsMarkdownRenderer:
    """Render markdown for a page with the docs rewrite rules applied."""

    def __init__(self, *, api_host: str, api_version: str) -> None:
        """Initialize a renderer resolving images against the content API.

        Parameters
        ----------
        api_host : str
            Base URL of the content API, e.g. ``"https://api.gazebosim.org"``.
        api_version : str
            API version path segment, e.g. ``"1.0"``.
        """
        self.api_host = api_host
        self.api_version = api_version

    def render(self, text: str, context: RenderContext) -> RenderedMarkdown:
        """Render ``text`` for ``context``.

        Each call builds a fresh ``Markdown`` instance and TOC list, so entries
        never leak between pages.
        """
        toc: list[TocItem] = []
        normalized = FENCED_INDENT_PATTERN.sub(r"\1", text)
        if not normalized.strip():
            return RenderedMarkdown(html="", toc=toc)
        extension = DocsRenderExtension(
            context, toc, api_host=self.api_host, api_version=self.api_version
        )
        md = Markdown(extensions=[extension, "tables", "sane_lists"])
        return RenderedMarkdown(html=md.convert(normalized), toc=toc)


__all__ = ["DocsMarkdownRenderer", "RenderedMarkdown"]
