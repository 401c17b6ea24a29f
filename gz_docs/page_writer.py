"""Assemble a rendered docs page into a standalone HTML document."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

if typ.TYPE_CHECKING:
    from .controller import RenderedPage
    from .models import Version


class DocPageWriter:
    """Render :class:`~gz_docs.controller.RenderedPage` results with Jinja."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the writer.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``doc_page.jinja``; defaults to the package
            templates.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("doc_page.jinja")

    def render(self, result: RenderedPage, versions: typ.Sequence[Version]) -> str:
        """Return the full HTML document for ``result``."""
        navigation = result.navigation
        nav_nodes = [
            {
                "name": node.name,
                "link": node.link,
                "level": node.level,
                "expandable": node.expandable,
                "expanded": navigation.is_expanded(node),
                "active": node.link == result.page.link,
            }
            for node in navigation.visible_nodes()
        ]
        return self.template.render(
            html_title=result.html_title,
            page=result.page,
            version=result.version,
            versions=versions,
            nav_nodes=nav_nodes,
            toc=result.toc,
            base_url=result.base_url,
            content=Markup(result.html),  # noqa: S704 - produced by the docs renderer
            edit_url=result.edit_url,
            edit_link=result.edit_link,
        )

    def write(
        self, result: RenderedPage, versions: typ.Sequence[Version], output: Path
    ) -> Path:
        """Render ``result`` and write it to ``output`` as UTF-8."""
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(self.render(result, versions), encoding="utf-8")
        return output


__all__ = ["DocPageWriter"]
