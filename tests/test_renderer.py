"""Unit tests for the docs markdown rendering rules.

Each test renders a short markdown snippet through ``DocsMarkdownRenderer``
and inspects the HTML with BeautifulSoup. The rules under test rewrite images
to the content API, links to versioned docs routes, headings into permalink
anchors (collecting TOC entries), and code into ``codespan``/``codeblock``
markup.
"""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from gz_docs.models import Page, RenderContext, TocItem, Version
from gz_docs.renderer import DocsMarkdownRenderer, slugify

API_HOST = "https://api.example.invalid"
API_VERSION = "1.0"


def _context(name: str, scope: str, version: str) -> RenderContext:
    page = Page(
        name=name,
        title=name.title(),
        file=f"{name}.md",
        link=f"/docs/{version}/{name}",
        version=scope,
    )
    return RenderContext(page=page, version=Version(version))


@pytest.fixture
def renderer() -> DocsMarkdownRenderer:
    return DocsMarkdownRenderer(api_host=API_HOST, api_version=API_VERSION)


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_heading_gets_slug_id_anchor_and_toc_entry(
    renderer: DocsMarkdownRenderer,
) -> None:
    """An h2 heading yields an id, a permalink anchor, and one TOC item."""
    result = renderer.render("## My Heading!", _context("foo", "v1", "v1"))
    heading = _soup(result.html).find("h2")

    assert heading is not None, "expected an h2 element"
    assert heading["id"] == "my-heading", f"unexpected id {heading['id']!r}"
    anchor = heading.find("a", class_="anchor")
    assert anchor is not None, "expected a permalink anchor inside the heading"
    assert anchor["href"] == "docs/v1/foo#my-heading"
    assert anchor["title"] == "Link to this heading"
    assert anchor.find("img") is not None, "expected the link icon"
    assert result.toc == [
        TocItem(
            url="docs/v1/foo#my-heading",
            name="My Heading!",
            level="h2",
            fragment="my-heading",
        )
    ]


def test_heading_url_uses_active_version_not_page_scope(
    renderer: DocsMarkdownRenderer,
) -> None:
    """Shared pages link headings under the active version."""
    result = renderer.render("# Intro", _context("foo", "all", "garden"))
    assert result.toc[0].url == "docs/garden/foo#intro"


def test_deep_headings_render_without_toc_entries(
    renderer: DocsMarkdownRenderer,
) -> None:
    markdown = "# One\n\n### Three\n\n#### Four\n\n###### Six\n"
    result = renderer.render(markdown, _context("foo", "v1", "v1"))
    soup = _soup(result.html)

    assert soup.find("h4", id="four") is not None, "expected h4 markup"
    assert soup.find("h6", id="six") is not None, "expected h6 markup"
    assert [(item.level, item.fragment) for item in result.toc] == [
        ("h1", "one"),
        ("h3", "three"),
    ]


def test_toc_resets_between_renders(renderer: DocsMarkdownRenderer) -> None:
    """Rendering a second page never carries TOC entries from the first."""
    first = renderer.render("## Alpha\n\n## Beta", _context("a", "v1", "v1"))
    second = renderer.render("## Gamma", _context("b", "v1", "v1"))

    assert [item.name for item in first.toc] == ["Alpha", "Beta"]
    assert [item.name for item in second.toc] == ["Gamma"]


def test_heading_with_inline_html_slugs_its_text(
    renderer: DocsMarkdownRenderer,
) -> None:
    """Raw HTML inside a heading contributes text, not stash placeholders."""
    result = renderer.render("## Install <sup>beta</sup>", _context("foo", "v1", "v1"))
    heading = _soup(result.html).find("h2")

    assert heading["id"] == "install-beta", f"unexpected id {heading['id']!r}"
    assert heading.find("sup") is not None, "expected the inline HTML to survive"
    assert result.toc == [
        TocItem(
            url="docs/v1/foo#install-beta",
            name="Install beta",
            level="h2",
            fragment="install-beta",
        )
    ]
    assert "\x02" not in result.html, "stash markers must not leak into the page"


def test_heading_entities_are_unescaped_in_toc(renderer: DocsMarkdownRenderer) -> None:
    result = renderer.render("# Build & Run", _context("foo", "v1", "v1"))
    assert result.toc[0].name == "Build & Run"
    assert result.toc[0].fragment == "build-run"


def test_links_are_rewritten_into_versioned_routes(
    renderer: DocsMarkdownRenderer,
) -> None:
    prefix = "x" * 17
    markdown = (
        "[Relative](api.md) [External](https://x.com) [Root](/docs/v2/other) "
        f"[Anchor](#{prefix}section)"
    )
    result = renderer.render(markdown, _context("bar", "v2", "v2"))
    links = {a.get_text(): a for a in _soup(result.html).find_all("a")}

    assert links["Relative"]["href"] == "docs/v2/api.md"
    assert links["External"]["href"] == "https://x.com"
    assert links["Root"]["href"] == "/docs/v2/other"
    assert links["Anchor"]["href"] == "docs/v2/bar#section"


def test_link_title_defaults_to_original_href(renderer: DocsMarkdownRenderer) -> None:
    markdown = '[A](api.md) [B](api.md "Reference")'
    result = renderer.render(markdown, _context("bar", "v2", "v2"))
    titles = {a.get_text(): a["title"] for a in _soup(result.html).find_all("a")}
    assert titles == {"A": "api.md", "B": "Reference"}


def test_relative_links_use_page_scope(renderer: DocsMarkdownRenderer) -> None:
    """Shared pages link to shared content regardless of active version."""
    result = renderer.render("[Next](next)", _context("bar", "all", "garden"))
    assert _soup(result.html).find("a")["href"] == "docs/all/next"


def test_images_resolve_against_content_api(renderer: DocsMarkdownRenderer) -> None:
    markdown = '![Diagram](img/diagram.png "Overview")'
    result = renderer.render(markdown, _context("bar", "garden", "garden"))
    image = _soup(result.html).find("img")

    assert image["src"] == f"{API_HOST}/{API_VERSION}/images/garden/img/diagram.png"
    assert image["alt"] == "Diagram"
    assert image["title"] == "Overview"
    assert image["style"] == "max-width:100%"


def test_inline_code_gets_codespan_class(renderer: DocsMarkdownRenderer) -> None:
    result = renderer.render("Run `gz sim` now.", _context("bar", "v1", "v1"))
    code = _soup(result.html).find("code")
    assert code["class"] == ["codespan"]
    assert code.get_text() == "gz sim"


def test_fenced_code_is_escaped_and_wrapped(renderer: DocsMarkdownRenderer) -> None:
    markdown = 'Before\n\n```bash\necho "<hi>" & done\n```\n\nAfter\n'
    result = renderer.render(markdown, _context("bar", "v1", "v1"))

    assert (
        '<pre class="codeblock" data-language="bash"><code>'
        "echo &quot;&lt;hi&gt;&quot; &amp; done\n</code></pre>"
    ) in result.html
    block = _soup(result.html).find("pre", class_="codeblock")
    assert block.find("code").get("class") is None, (
        "block code must not be styled as an inline codespan"
    )


@pytest.mark.parametrize(
    "fence",
    ["~~~{.python}", "~~~ .python", "```python"],
)
def test_fenced_code_language_hint_forms(
    renderer: DocsMarkdownRenderer, fence: str
) -> None:
    markdown = f"{fence}\nprint(1)\n{fence[:3]}\n"
    result = renderer.render(markdown, _context("bar", "v1", "v1"))
    block = _soup(result.html).find("pre", class_="codeblock")

    assert block is not None, f"expected a codeblock for {fence!r}"
    assert block.get("data-language") == "python", (
        f"expected the language hint from {fence!r}"
    )
    assert block.get_text() == "print(1)\n"


def test_fenced_code_headings_are_not_toc_entries(
    renderer: DocsMarkdownRenderer,
) -> None:
    markdown = "```\n# not a heading\n```\n"
    result = renderer.render(markdown, _context("bar", "v1", "v1"))
    assert result.toc == []
    assert "# not a heading" in result.html


def test_indented_code_blocks_share_codeblock_markup(
    renderer: DocsMarkdownRenderer,
) -> None:
    markdown = 'Example:\n\n    print("a < b")\n'
    result = renderer.render(markdown, _context("bar", "v1", "v1"))
    block = _soup(result.html).find("pre", class_="codeblock")

    assert block is not None, "expected a codeblock pre element"
    assert block.get_text() == 'print("a < b")\n'
    assert "&quot;a &lt; b&quot;" in result.html


def test_blank_markdown_renders_empty(renderer: DocsMarkdownRenderer) -> None:
    result = renderer.render("  \n", _context("bar", "v1", "v1"))
    assert result.html == ""
    assert result.toc == []


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("My Heading!", "my-heading"),
        ("Install on Ubuntu 22.04", "install-on-ubuntu-22-04"),
        ("snake_case stays", "snake_case-stays"),
    ],
)
def test_slugify(text: str, expected: str) -> None:
    assert slugify(text) == expected
