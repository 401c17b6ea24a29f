"""Build the ordered navigation tree for the active docs version.

The builder merges the pages scoped to the active version with the pages
shared by every version, lifts the priority pages to the front, and closes
the tree with a synthetic "Library Reference" branch pointing at the
external API docs of each library shipped with the version.

Example
-------
>>> from gz_docs.models import DocsInfo, Version
>>> info = DocsInfo(versions=(Version("garden"),), pages={"garden": (), "all": ()})
>>> [page.name for page in PageTreeBuilder().build(info, Version("garden"))]
['Library Reference']
"""

from __future__ import annotations

import typing as typ

from gz_docs._constants import (
    ALL_SCOPE,
    DOCS_ROUTE_PREFIX,
    LIBRARY_API_URL_TEMPLATE,
    LIBRARY_REFERENCE_TITLE,
    PAGE_ORDER,
)
from gz_docs.models import DocsInfoError, Page

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from gz_docs.models import DocsInfo, PageRecord, Version


class PageTreeBuilder:
    """Produce a fresh, ordered page tree from immutable docs metadata."""

    def __init__(
        self,
        *,
        page_order: cabc.Sequence[str] = PAGE_ORDER,
        library_api_url: str = LIBRARY_API_URL_TEMPLATE,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        page_order : Sequence[str], optional
            Page names lifted to the front of the tree, in this order.
        library_api_url : str, optional
            Format string with ``{name}`` and ``{version}`` placeholders used
            for library reference links.
        """
        self.page_order = tuple(page_order)
        self.library_api_url = library_api_url

    def build(self, docs_info: DocsInfo, active: Version) -> list[Page]:
        """Return the ordered top-level pages for ``active``.

        Ordering is: priority pages (in ``page_order``), then the remaining
        version-scoped pages, then the remaining shared pages, then the
        library reference branch.

        Raises
        ------
        DocsInfoError
            If ``docs_info`` has no page scope for the active version or for
            the shared ``"all"`` scope.
        """
        for scope in (active.name, ALL_SCOPE):
            if scope not in docs_info.pages:
                msg = f"Docs metadata has no pages for scope '{scope}'."
                raise DocsInfoError(msg)

        working = [
            self._stamp(record, scope, active.name)
            for scope in (active.name, ALL_SCOPE)
            for record in docs_info.pages[scope]
        ]

        ordered: list[Page] = []
        for name in self.page_order:
            for idx, page in enumerate(working):
                if page.name == name:
                    ordered.append(working.pop(idx))
                    break
        ordered.extend(working)

        library_branch = self._library_branch(docs_info, active)
        if library_branch is not None:
            ordered.append(library_branch)
        return ordered

    def _stamp(self, record: PageRecord, scope: str, version_name: str) -> Page:
        """Return a Page for ``record`` with link and scope, one child level deep."""
        children = tuple(
            Page(
                name=child.name,
                title=child.title,
                file=child.file,
                link=_page_link(version_name, child.name),
                version=scope,
                unlisted=child.unlisted,
            )
            for child in record.children
        )
        return Page(
            name=record.name,
            title=record.title,
            file=record.file,
            link=_page_link(version_name, record.name),
            version=scope,
            unlisted=record.unlisted,
            children=children,
        )

    def _library_branch(self, docs_info: DocsInfo, active: Version) -> Page | None:
        """Return the library reference branch, or None for unknown versions."""
        match = next((v for v in docs_info.versions if v.name == active.name), None)
        if match is None:
            return None
        children = tuple(
            Page(
                name=library.name,
                title=library.name,
                file="",
                link=self.library_api_url.format(
                    name=library.name, version=library.version
                ),
                version=active.name,
            )
            for library in match.libraries
        )
        return Page(
            name=LIBRARY_REFERENCE_TITLE,
            title=LIBRARY_REFERENCE_TITLE,
            file="",
            link="",
            version=active.name,
            children=children,
        )


def _page_link(version_name: str, page_name: str) -> str:
    return f"{DOCS_ROUTE_PREFIX}/{version_name}/{page_name}"


__all__ = ["PageTreeBuilder"]
