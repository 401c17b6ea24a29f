"""Project the page tree into flat nodes for a collapsible navigation tree."""

from __future__ import annotations

import typing as typ

from gz_docs.models import FlatNode

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from gz_docs.models import Page


def flatten_pages(pages: cabc.Sequence[Page], level: int = 0) -> list[FlatNode]:
    """Return one FlatNode per page and child, in pre-order."""
    nodes: list[FlatNode] = []
    for page in pages:
        nodes.append(
            FlatNode(
                expandable=bool(page.children),
                name=page.title,
                level=level,
                link=page.link,
            )
        )
        nodes.extend(flatten_pages(page.children, level + 1))
    return nodes


def expanded_links(pages: cabc.Sequence[Page], active_url: str) -> set[str]:
    """Return links of top-level pages whose children include ``active_url``."""
    return {
        page.link
        for page in pages
        if any(child.link == active_url for child in page.children)
    }


class NavigationTree:
    """Flat navigation state with per-node expansion."""

    def __init__(self, pages: cabc.Sequence[Page], active_url: str = "") -> None:
        self.nodes = flatten_pages(pages)
        self._expanded: set[str] = set()
        for link in expanded_links(pages, active_url):
            self.expand(link)

    def expand(self, link: str) -> None:
        """Mark every expandable node carrying ``link`` as expanded."""
        for node in self.nodes:
            if node.expandable and node.link == link:
                self._expanded.add(node.link)

    def is_expanded(self, node: FlatNode) -> bool:
        return node.expandable and node.link in self._expanded

    def visible_nodes(self) -> list[FlatNode]:
        """Return nodes whose ancestors are all expanded."""
        visible: list[FlatNode] = []
        hidden_below: int | None = None
        for node in self.nodes:
            if hidden_below is not None and node.level > hidden_below:
                continue
            hidden_below = None
            visible.append(node)
            if node.expandable and not self.is_expanded(node):
                hidden_below = node.level
        return visible


__all__ = ["NavigationTree", "expanded_links", "flatten_pages"]
