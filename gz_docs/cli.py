"""Cyclopts CLI entrypoint for rendering versioned Gazebo documentation pages.

The ``gzdocs`` console script resolves a ``(version, page)`` route against
the docs metadata served by the content API (or a local checkout passed via
``--docs-dir``), renders the page's markdown, and writes a standalone HTML
document. Auxiliary commands print the navigation tree and known versions.

Examples
--------
Render the install page of the newest release:

>>> from gz_docs.cli import app
>>> app(["render", "--page", "install"])  # doctest: +SKIP

Render a page from a local docs checkout:

>>> app(
...     ["render", "--docs-version", "garden", "--page", "install",
...      "--docs-dir", "docs", "--output", "dist/install.html"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._logging import configure_logging
from .config import ApiConfig, DocsConfig, load_docs_config
from .controller import DocPageController, RenderedPage
from .navigation import PageTreeBuilder, flatten_pages
from .page_writer import DocPageWriter
from .providers import HttpDocsProvider, StaticDocsProvider
from .renderer import DocsMarkdownRenderer
from .versions import resolve_version

if typ.TYPE_CHECKING:
    from .providers import DocsProvider

DEFAULT_CONFIG = Path("config/docs.yaml")

logger = logging.getLogger(__name__)

app = App(name="gzdocs", config=cyclopts.config.Env("GZDOCS_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to docs config", env_var="GZDOCS_CONFIG")
]
DocsDirOption = typ.Annotated[
    Path | None,
    Parameter(help="Serve metadata and markdown from a local docs checkout"),
]
ApiHostOption = typ.Annotated[
    str | None, Parameter(help="Override the content API host", env_var="GZDOCS_API_HOST")
]
ApiVersionOption = typ.Annotated[
    str | None,
    Parameter(help="Override the content API version", env_var="GZDOCS_API_VERSION"),
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_config(
    config: Path, api_host: str | None, api_version: str | None
) -> DocsConfig:
    """Load ``config``, or build one from overrides when the file is absent."""
    if not config.exists() and api_host and api_version:
        return DocsConfig(api=ApiConfig(host=api_host, version=api_version))
    return load_docs_config(config, api_host=api_host, api_version=api_version)


def _build_provider(docs_config: DocsConfig, docs_dir: Path | None) -> DocsProvider:
    if docs_dir is not None:
        return StaticDocsProvider(docs_dir)
    return HttpDocsProvider(docs_config.api.host, docs_config.api.version)


@app.command(help="Render a documentation page to standalone HTML.")
def render(
    *,
    docs_version: typ.Annotated[
        str | None, Parameter(help="Docs version (defaults to the newest)")
    ] = None,
    page: typ.Annotated[
        str | None, Parameter(help="Page name (defaults to the first page)")
    ] = None,
    fragment: typ.Annotated[
        str | None, Parameter(help="Heading id the page is opened at")
    ] = None,
    config: ConfigOption = DEFAULT_CONFIG,
    docs_dir: DocsDirOption = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Where to write the HTML page")
    ] = None,
    api_host: ApiHostOption = None,
    api_version: ApiVersionOption = None,
    verbose: bool = False,
) -> None:
    """Render one docs page and write it as HTML.

    Parameters
    ----------
    docs_version : str or None, optional
        Version name from the route; ``latest``/``all``/unknown names select
        the newest version.
    page : str or None, optional
        Page name from the route; ``None`` selects the first page.
    fragment : str or None, optional
        Heading id; a warning is logged when the page has no such heading.
    config : Path, optional
        Path to the docs configuration file.
    docs_dir : Path or None, optional
        Local directory with ``index.json`` and ``<version>/<file>`` markdown.
    output : Path or None, optional
        Output file; defaults to ``<output_dir>/docs-<version>-<page>.html``.
    api_host, api_version : str or None, optional
        Content API overrides applied on top of the config file.
    verbose : bool, optional
        Enable debug logging.

    Raises
    ------
    SystemExit
        With status 1 when the route resolves to no page.
    """
    configure_logging(verbose=verbose)
    docs_config = _load_config(config, api_host, api_version)
    provider = _build_provider(docs_config, docs_dir)
    redirects: list[str] = []

    def _navigate(route: list[str]) -> None:
        target = "/".join(segment.strip("/") for segment in route)
        logger.debug("navigate -> /%s", target)
        redirects.append(target)

    controller = DocPageController(
        provider,
        DocsMarkdownRenderer(
            api_host=docs_config.api.host, api_version=docs_config.api.version
        ),
        _navigate,
        builder=PageTreeBuilder(
            page_order=docs_config.page_order,
            library_api_url=docs_config.library_api_url,
        ),
        edit_base_url=docs_config.edit_base_url,
    )
    try:
        result = controller.open(docs_version, page, fragment).result()
    finally:
        controller.close()

    if not isinstance(result, RenderedPage):
        print(f"not found: {result.reason}")
        raise SystemExit(1)

    target = output or (
        docs_config.output_dir
        / f"docs-{result.version.name}-{result.page.name}.html"
    )
    written = DocPageWriter().write(result, controller.docs_info.versions, target)
    print(f"wrote {_format_path(written)}")


@app.command(help="Print the navigation tree for a docs version.")
def tree(
    *,
    docs_version: typ.Annotated[
        str | None, Parameter(help="Docs version (defaults to the newest)")
    ] = None,
    config: ConfigOption = DEFAULT_CONFIG,
    docs_dir: DocsDirOption = None,
    api_host: ApiHostOption = None,
    api_version: ApiVersionOption = None,
) -> None:
    """Print one line per navigation node, indented by depth."""
    docs_config = _load_config(config, api_host, api_version)
    docs_info = _build_provider(docs_config, docs_dir).get_docs_info()
    version = resolve_version(docs_version, docs_info.versions)
    builder = PageTreeBuilder(
        page_order=docs_config.page_order,
        library_api_url=docs_config.library_api_url,
    )
    for node in flatten_pages(builder.build(docs_info, version)):
        marker = "+" if node.expandable else "-"
        suffix = f" ({node.link})" if node.link else ""
        print(f"{'  ' * node.level}{marker} {node.name}{suffix}")


@app.command(help="List the known docs versions, newest first.")
def versions(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    docs_dir: DocsDirOption = None,
    api_host: ApiHostOption = None,
    api_version: ApiVersionOption = None,
) -> None:
    """Print each version name, flagging the newest as latest."""
    docs_config = _load_config(config, api_host, api_version)
    docs_info = _build_provider(docs_config, docs_dir).get_docs_info()
    for idx, version in enumerate(docs_info.versions):
        label = f"{version.name} (latest)" if idx == 0 else version.name
        print(label)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``gzdocs`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
