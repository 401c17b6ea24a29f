"""Common literal values used across gz_docs.

These constants keep route prefixes, scope keys, and page ordering rules
centralized so the tree builder, renderer, and tests import the same values
without drifting. Intended for internal use within the gz_docs package.

Examples
--------
>>> from gz_docs import _constants
>>> _constants.LIBRARY_API_URL_TEMPLATE.format(name="gz-math", version="7")
'https://gazebosim.org/api/gz-math/7'
>>> _constants.ALL_SCOPE
'all'
"""

ALL_SCOPE = "all"
LATEST_ALIASES = ("", "latest", ALL_SCOPE)

DOCS_ROUTE_PREFIX = "/docs"
NOT_FOUND_ROUTE = "/not-found"

PAGE_ORDER = ("getstarted", "install", "tutorials")

LIBRARY_REFERENCE_TITLE = "Library Reference"
LIBRARY_API_URL_TEMPLATE = "https://gazebosim.org/api/{name}/{version}"

# Fixed-length router prefix carried by in-page anchors after the leading "#".
# Origin unknown; kept as-is.
FRAGMENT_ROUTE_PREFIX_LENGTH = 17

ANCHOR_ICON_SRC = "/assets/icon/baseline-link-24px.svg"
HTML_TITLE_TEMPLATE = "Gazebo - Docs: {title}"
