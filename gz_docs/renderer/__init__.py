"""Markdown rendering rules for versioned documentation pages."""

from .extension import DocsRenderExtension, code_block_html, slugify
from .renderer import DocsMarkdownRenderer, RenderedMarkdown

__all__ = [
    "DocsMarkdownRenderer",
    "DocsRenderExtension",
    "RenderedMarkdown",
    "code_block_html",
    "slugify",
]
