"""Page tree construction, lookup, and flattening for versioned docs."""

from .builder import PageTreeBuilder
from .flattener import NavigationTree, expanded_links, flatten_pages
from .locator import (
    EditLinkResolutionError,
    PageNotFoundError,
    is_shared_file,
    locate_page,
    resolve_edit_link,
)

__all__ = [
    "EditLinkResolutionError",
    "NavigationTree",
    "PageNotFoundError",
    "PageTreeBuilder",
    "expanded_links",
    "flatten_pages",
    "is_shared_file",
    "locate_page",
    "resolve_edit_link",
]
