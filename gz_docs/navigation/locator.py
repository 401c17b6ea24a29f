"""Locate a requested page in the built tree and resolve its edit source."""

from __future__ import annotations

import typing as typ

from gz_docs._constants import ALL_SCOPE

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from gz_docs.models import DocsInfo, Page, PageRecord, Version


class PageNotFoundError(LookupError):
    """Raised when no top-level page or direct child matches the route."""


class EditLinkResolutionError(RuntimeError):
    """Raised when the shared-docs lookup for an edit link cannot complete."""


def locate_page(pages: cabc.Sequence[Page], page_name: str | None) -> Page:
    """Return the page named ``page_name`` from a built tree.

    Only top-level pages and their direct children are searched, top-level
    order first; the first match wins. An empty ``page_name`` selects the
    first top-level page.

    Raises
    ------
    IndexError
        If ``page_name`` is empty and ``pages`` is empty.
    PageNotFoundError
        If nothing in the two searched levels carries ``page_name``.
    """
    if not page_name:
        page_name = pages[0].name

    for page in pages:
        if page.name == page_name:
            return page
        for child in page.children:
            if child.name == page_name:
                return child

    msg = f"No docs page named '{page_name}'."
    raise PageNotFoundError(msg)


def is_shared_file(file: str, records: cabc.Iterable[PageRecord]) -> bool:
    """Return True when ``file`` appears anywhere in ``records``, depth first."""
    for record in records:
        if record.file == file:
            return True
        if record.children and is_shared_file(file, record.children):
            return True
    return False


def resolve_edit_link(page: Page, docs_info: DocsInfo, active: Version) -> str:
    """Return the source path used to edit ``page``.

    Shared pages (whose file is listed under the ``"all"`` scope) edit the
    bare file; version-specific pages edit ``<version>/<file>``.

    Raises
    ------
    EditLinkResolutionError
        If the shared scope is absent from ``docs_info``.
    """
    try:
        shared = docs_info.pages[ALL_SCOPE]
    except KeyError as exc:
        msg = f"Docs metadata has no '{ALL_SCOPE}' scope to resolve edit links."
        raise EditLinkResolutionError(msg) from exc

    try:
        is_shared = is_shared_file(page.file, shared)
    except RecursionError as exc:
        msg = f"Page nesting under '{ALL_SCOPE}' is too deep to search."
        raise EditLinkResolutionError(msg) from exc

    if is_shared:
        return page.file
    return f"{active.name}/{page.file}"


__all__ = [
    "EditLinkResolutionError",
    "PageNotFoundError",
    "is_shared_file",
    "locate_page",
    "resolve_edit_link",
]
