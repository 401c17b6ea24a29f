"""Markdown extension rewriting docs markup into version-aware HTML.

The extension bundles the rendering rules applied to every docs page:

* fenced and indented code blocks become ``<pre class="codeblock"><code>``
  blocks with escaped content,
* inline code spans gain the ``codespan`` class,
* images are served from the content API for the page's scope,
* relative links and in-page anchors are rewritten into versioned routes,
* headings receive slug ids, a permalink anchor, and (for levels 1-3) a
  table-of-contents entry appended to the caller's TOC list.

Every rule reads the explicit :class:`~gz_docs.models.RenderContext` handed to
the extension, so one ``Markdown`` instance renders exactly one page.
"""

from __future__ import annotations

import html
import re
import typing as typ
import xml.etree.ElementTree as etree  # noqa: N813

from markdown.extensions import Extension
from markdown.extensions.attr_list import get_attrs_and_remainder
from markdown.extensions.fenced_code import FencedBlockPreprocessor
from markdown.extensions.toc import render_inner_html, strip_tags
from markdown.treeprocessors import Treeprocessor
from markdown.util import AtomicString

from gz_docs._constants import ANCHOR_ICON_SRC, FRAGMENT_ROUTE_PREFIX_LENGTH
from gz_docs.models import TocItem

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from gz_docs.models import RenderContext
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}
SLUG_SEPARATOR_PATTERN = re.compile(r"[^\w]+", re.ASCII)
TOC_MAX_LEVEL = 3


def slugify(text: str) -> str:
    """Lower-case ``text`` and collapse non-word runs into single hyphens."""
    return SLUG_SEPARATOR_PATTERN.sub("-", text.lower()).strip("-")


def code_block_html(escaped_code: str, language: str | None = None) -> str:
    """Return the HTML emitted for an already escaped fenced code block."""
    lang_attr = f' data-language="{html.escape(language)}"' if language else ""
    return f'<pre class="codeblock"{lang_attr}><code>{escaped_code}</code></pre>'


class DocsRenderExtension(Extension):
    """Register the docs code-block preprocessor and rewrite treeprocessor."""

    def __init__(
        self,
        context: RenderContext,
        toc: list[TocItem],
        *,
        api_host: str,
        api_version: str,
    ) -> None:
        """Bind the extension to one page render.

        Parameters
        ----------
        context : RenderContext
            Page and version the markdown belongs to.
        toc : list[TocItem]
            List receiving TOC entries in document order.
        api_host : str
            Base URL of the content API serving images.
        api_version : str
            API version segment used in image URLs.
        """
        super().__init__()
        self.context = context
        self.toc = toc
        self.api_host = api_host.rstrip("/")
        self.api_version = api_version.strip("/")

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the code-block preprocessor and the rewrite treeprocessor."""
        md.registerExtension(self)
        md.preprocessors.register(CodeBlockPreprocessor(md, {}), "gz_code_block", 25)
        md.treeprocessors.register(
            DocsRewriteTreeprocessor(md, self), "gz_docs_rewrite", 15
        )


class CodeBlockPreprocessor(FencedBlockPreprocessor):
    """Stash fenced code blocks as escaped ``codeblock`` HTML.

    Fence syntax, ``{.lang}`` attribute blocks and escaping come from
    Python-Markdown's ``fenced_code`` extension; only the emitted markup
    differs.
    """

    def run(self, lines: list[str]) -> list[str]:
        """Replace every fenced block with an HTML stash placeholder."""
        text = "\n".join(lines)
        index = 0
        while match := self.FENCED_BLOCK_RE.search(text, index):
            language = match.group("lang") or None
            if match.group("attrs"):
                attrs, remainder = get_attrs_and_remainder(match.group("attrs"))
                if remainder:
                    index = match.end("attrs")
                    continue
                _, classes, _ = self.handle_attrs(attrs)
                language = classes[0] if classes else None
            block = code_block_html(self._escape(match.group("code")), language)
            placeholder = self.md.htmlStash.store(block)
            text = f"{text[: match.start()]}\n{placeholder}\n{text[match.end() :]}"
            index = match.start() + 1 + len(placeholder)
        return text.split("\n")


class DocsRewriteTreeprocessor(Treeprocessor):
    """Apply the image, link, heading, and code rules to the parsed tree."""

    def __init__(self, md: Markdown, extension: DocsRenderExtension) -> None:
        super().__init__(md)
        self.ext = extension

    def run(self, root: Element) -> Element:
        """Rewrite elements in document order; heading anchors are added last."""
        block_code: set[int] = set()
        for element in list(root.iter()):
            tag = element.tag
            if tag == "img":
                self._rewrite_image(element)
            elif tag == "a":
                self._rewrite_link(element)
            elif tag == "pre":
                block_code.update(id(child) for child in element if child.tag == "code")
                self._rewrite_code_block(element)
            elif tag == "code" and id(element) not in block_code:
                element.set("class", "codespan")
            elif tag in HEADING_TAGS:
                self._rewrite_heading(element, HEADING_TAGS[tag])
        return root

    def _rewrite_image(self, element: Element) -> None:
        href = element.get("src", "")
        page = self.ext.context.page
        src = (
            f"{self.ext.api_host}/{self.ext.api_version}/images/{page.version}/{href}"
        )
        alt = element.get("alt", "")
        title = element.get("title", "")
        element.attrib.clear()
        element.set("style", "max-width:100%")
        element.set("src", src)
        element.set("title", title)
        element.set("alt", alt)

    def _rewrite_link(self, element: Element) -> None:
        href = element.get("href", "")
        element.set("href", self.rewrite_href(href))
        element.set("title", element.get("title") or href)

    def rewrite_href(self, href: str) -> str:
        """Return the versioned route for a markdown link target."""
        page = self.ext.context.page
        if href.startswith(("http", "/")):
            return href
        if href.startswith("#"):
            fragment = href[1 + FRAGMENT_ROUTE_PREFIX_LENGTH :]
            return f"docs/{page.version}/{page.name}#{fragment}"
        return f"docs/{page.version}/{href}"

    @staticmethod
    def _rewrite_code_block(element: Element) -> None:
        if len(element) != 1 or element[0].tag != "code":
            return
        inner = element[0]
        element.set("class", "codeblock")
        if inner.text:
            inner.text = AtomicString(inner.text.replace('"', "&quot;"))

    def _rewrite_heading(self, element: Element, level: int) -> None:
        context = self.ext.context
        text = html.unescape(strip_tags(render_inner_html(element, self.md)))
        slug = slugify(text)
        url = f"docs/{context.version.name}/{context.page.name}#{slug}"
        if level <= TOC_MAX_LEVEL:
            self.ext.toc.append(
                TocItem(url=url, name=text, level=f"h{level}", fragment=slug)
            )

        element.set("id", slug)
        element.set("class", "heading-anchor")
        anchor = etree.SubElement(
            element,
            "a",
            {
                "name": slug,
                "class": "anchor",
                "title": "Link to this heading",
                "aria-label": "Link to this heading",
                "href": url,
            },
        )
        icon = etree.SubElement(
            anchor,
            "span",
            {"style": "padding-left:4px", "class": "heading-anchor-img"},
        )
        etree.SubElement(icon, "img", {"src": ANCHOR_ICON_SRC, "alt": ""})


__all__ = [
    "CodeBlockPreprocessor",
    "DocsRenderExtension",
    "DocsRewriteTreeprocessor",
    "code_block_html",
    "slugify",
]
