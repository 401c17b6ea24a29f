"""Orchestrate docs page requests from route parameters to rendered HTML.

:class:`DocPageController` turns a ``(version, page, fragment)`` route into a
:class:`RenderedPage`: it resolves the active version, builds and flattens the
page tree, locates the page, resolves its edit link, fetches the markdown on
an executor, and renders it. Failures surface as explicit result variants
(:class:`PageNotFound`, :class:`EditSourceUnresolved`) and redirect to the
not-found route.

Route changes may overlap. Every call to :meth:`DocPageController.open`
takes a fresh sequence token; when a fetch completes for a token that is no
longer active, its result future is cancelled instead of being committed, so
the newest navigation always wins, even when it reopens the same page with a
different fragment.

Example
-------
>>> from gz_docs.controller import DocPageController
>>> controller = DocPageController(provider, renderer, navigate=print)  # doctest: +SKIP
>>> result = controller.open("garden", "install").result()  # doctest: +SKIP
>>> result.page.title  # doctest: +SKIP
'Installation'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import threading
import typing as typ
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from urllib.parse import urlsplit, urlunsplit

from ._constants import DOCS_ROUTE_PREFIX, HTML_TITLE_TEMPLATE, NOT_FOUND_ROUTE
from .models import RenderContext
from .navigation import (
    EditLinkResolutionError,
    NavigationTree,
    PageNotFoundError,
    PageTreeBuilder,
    locate_page,
    resolve_edit_link,
)
from .providers import DocNotFoundError
from .versions import resolve_version

if typ.TYPE_CHECKING:
    from .models import DocsInfo, Page, TocItem, Version
    from .providers import DocsProvider
    from .renderer import DocsMarkdownRenderer

logger = logging.getLogger(__name__)

Navigate = typ.Callable[[list[str]], None]


@dc.dataclass(frozen=True, slots=True)
class RouteKey:
    """Route parameters identifying one docs request."""

    version: str | None
    page: str | None


@dc.dataclass(slots=True)
class RenderedPage:
    """Everything the display layer needs for one docs page."""

    key: RouteKey
    version: Version
    page: Page
    pages: list[Page]
    navigation: NavigationTree
    edit_link: str
    edit_url: str | None
    html_title: str
    base_url: str
    html: str
    toc: list[TocItem]
    fragment: str | None = None


@dc.dataclass(frozen=True, slots=True)
class PageNotFound:
    """The route names no page in the built tree, or its markdown is missing."""

    key: RouteKey
    reason: str


@dc.dataclass(frozen=True, slots=True)
class EditSourceUnresolved:
    """The page exists but the edit source lookup could not complete."""

    key: RouteKey
    page: Page
    reason: str


DocPageResult = RenderedPage | PageNotFound | EditSourceUnresolved


def base_url(url: str) -> str:
    """Return ``url`` without its query string and fragment."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


class DocPageController:
    """Resolve docs routes into rendered pages."""

    def __init__(
        self,
        provider: DocsProvider,
        renderer: DocsMarkdownRenderer,
        navigate: Navigate,
        *,
        builder: PageTreeBuilder | None = None,
        executor: Executor | None = None,
        edit_base_url: str | None = None,
    ) -> None:
        """Initialize the controller.

        Parameters
        ----------
        provider : DocsProvider
            Source of docs metadata and page markdown.
        renderer : DocsMarkdownRenderer
            Renderer applying the docs markdown rules.
        navigate : Callable[[list[str]], None]
            Receives route segments for redirects and version changes.
        builder : PageTreeBuilder, optional
            Tree builder; defaults to the standard page ordering.
        executor : Executor, optional
            Runs markdown fetches; defaults to a small thread pool.
        edit_base_url : str, optional
            Prefix joined with edit links to produce full edit URLs.
        """
        self.provider = provider
        self.renderer = renderer
        self.navigate = navigate
        self.builder = builder or PageTreeBuilder()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="gz-docs"
        )
        self.edit_base_url = edit_base_url.rstrip("/") if edit_base_url else None
        self._docs_info: DocsInfo | None = None
        self._lock = threading.Lock()
        self._active_token = 0
        self.current: DocPageResult | None = None

    @property
    def docs_info(self) -> DocsInfo:
        """Return the docs metadata, fetching it on first use."""
        if self._docs_info is None:
            self._docs_info = self.provider.get_docs_info()
        return self._docs_info

    def change_version(self, version_name: str) -> None:
        """Request navigation to the landing page of ``version_name``."""
        self.navigate([DOCS_ROUTE_PREFIX, version_name])

    def open(
        self,
        version: str | None,
        page: str | None,
        fragment: str | None = None,
        *,
        url: str | None = None,
    ) -> Future[DocPageResult]:
        """Handle a route change and return a future for its outcome.

        The returned future is cancelled if a newer route is opened before
        this one's markdown arrives. Errors raised while fetching (other than
        a missing document) or rendering are set on the returned future.

        Raises
        ------
        DocsInfoError
            If the docs metadata lacks versions or the scopes being built.
        """
        key = RouteKey(version=version, page=page)
        with self._lock:
            self._active_token += 1
            token = self._active_token

        docs_info = self.docs_info
        active_version = resolve_version(version, docs_info.versions)
        pages = self.builder.build(docs_info, active_version)

        try:
            target = locate_page(pages, page)
        except (PageNotFoundError, IndexError) as exc:
            return self._fail(token, PageNotFound(key=key, reason=str(exc)))

        try:
            edit_link = resolve_edit_link(target, docs_info, active_version)
        except EditLinkResolutionError as exc:
            return self._fail(
                token, EditSourceUnresolved(key=key, page=target, reason=str(exc))
            )

        pending = _PendingRender(
            token=token,
            key=key,
            version=active_version,
            page=target,
            pages=pages,
            edit_link=edit_link,
            fragment=fragment,
            url=url or target.link,
        )
        result: Future[DocPageResult] = Future()
        fetch = self._executor.submit(self.provider.get_doc, target.version, target.file)
        fetch.add_done_callback(lambda done: self._complete(pending, done, result))
        return result

    def close(self) -> None:
        """Shut down the fetch executor if this controller created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def _fail(
        self, token: int, outcome: PageNotFound | EditSourceUnresolved
    ) -> Future[DocPageResult]:
        logger.warning("Redirecting to not-found: %s", outcome.reason)
        with self._lock:
            if token == self._active_token:
                self.current = outcome
        self.navigate([NOT_FOUND_ROUTE])
        result: Future[DocPageResult] = Future()
        result.set_result(outcome)
        return result

    def _is_stale(self, pending: _PendingRender) -> bool:
        with self._lock:
            return pending.token != self._active_token

    def _complete(
        self,
        pending: _PendingRender,
        fetch: Future[str],
        result: Future[DocPageResult],
    ) -> None:
        if self._is_stale(pending):
            logger.debug("Dropping superseded docs response for %s", pending.key)
            result.cancel()
            return

        try:
            markdown_text = fetch.result()
        except DocNotFoundError as exc:
            outcome = self._fail(
                pending.token, PageNotFound(key=pending.key, reason=str(exc))
            )
            result.set_result(outcome.result())
            return
        except Exception as exc:  # noqa: BLE001 - relayed to the caller's future
            result.set_exception(exc)
            return

        try:
            page_result = self._assemble(pending, markdown_text)
        except Exception as exc:  # noqa: BLE001 - relayed to the caller's future
            logger.exception("Rendering docs page %r failed", pending.page.name)
            result.set_exception(exc)
            return

        with self._lock:
            if pending.token != self._active_token:
                logger.debug("Dropping superseded render for %s", pending.key)
                result.cancel()
                return
            self.current = page_result
        result.set_result(page_result)

    def _assemble(self, pending: _PendingRender, markdown_text: str) -> RenderedPage:
        rendered = self.renderer.render(
            markdown_text, RenderContext(page=pending.page, version=pending.version)
        )
        if pending.fragment and f'id="{pending.fragment}"' not in rendered.html:
            logger.warning(
                "Fragment %r not found on page %r", pending.fragment, pending.page.name
            )

        return RenderedPage(
            key=pending.key,
            version=pending.version,
            page=pending.page,
            pages=pending.pages,
            navigation=NavigationTree(pending.pages, pending.page.link),
            edit_link=pending.edit_link,
            edit_url=self._edit_url(pending.edit_link),
            html_title=HTML_TITLE_TEMPLATE.format(title=pending.page.title),
            base_url=base_url(pending.url),
            html=rendered.html,
            toc=rendered.toc,
            fragment=pending.fragment,
        )

    def _edit_url(self, edit_link: str) -> str | None:
        if self.edit_base_url is None:
            return None
        return f"{self.edit_base_url}/{edit_link}"


@dc.dataclass(frozen=True, slots=True)
class _PendingRender:
    token: int
    key: RouteKey
    version: Version
    page: Page
    pages: list[Page]
    edit_link: str
    fragment: str | None
    url: str


__all__ = [
    "DocPageController",
    "DocPageResult",
    "EditSourceUnresolved",
    "PageNotFound",
    "RenderedPage",
    "RouteKey",
    "base_url",
]
