r"""Fetch docs metadata and page markdown from the documentation backend.

The HTTP provider talks to the content API that also serves page images:

* ``GET <host>/<api_version>/docs`` returns the versions and page scopes,
* ``GET <host>/<api_version>/docs/<version>/<file>`` returns raw markdown.

Example
-------
>>> from gz_docs.providers import HttpDocsProvider
>>> provider = HttpDocsProvider("https://api.gazebosim.org", "1.0")  # doctest: +SKIP
>>> info = provider.get_docs_info()  # doctest: +SKIP
>>> info.versions[0].name  # doctest: +SKIP
'ionic'
"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus
from pathlib import Path
from urllib.parse import quote

import msgspec
import msgspec.json as msgspec_json
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .models import DocsInfo

_USER_AGENT = "gz-docs/0.1"


class DocsProviderError(RuntimeError):
    """Raised when docs metadata or markdown cannot be retrieved."""


class DocNotFoundError(DocsProviderError):
    """Raised when the backend has no markdown for a version and file."""


class DocsProvider(typ.Protocol):
    """Source of docs metadata and page markdown."""

    def get_docs_info(self) -> DocsInfo: ...

    def get_doc(self, version: str, file: str) -> str: ...


def _build_session() -> requests.Session:
    """Return a session retrying idempotent requests on transient 5xx errors."""
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class HttpDocsProvider:
    """Docs provider backed by the content API."""

    def __init__(
        self,
        api_host: str,
        api_version: str,
        *,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialise the provider.

        Parameters
        ----------
        api_host : str
            Base URL of the content API.
        api_version : str
            API version path segment.
        session : requests.Session, optional
            Preconfigured session; defaults to one with retries mounted.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``10.0``.
        """
        self._base_url = f"{api_host.rstrip('/')}/{api_version.strip('/')}"
        self._session = session or _build_session()
        self.timeout = timeout
        self._headers = {"User-Agent": _USER_AGENT}

    def get_docs_info(self) -> DocsInfo:
        """Return the decoded docs metadata."""
        response = self._get(f"{self._base_url}/docs", "docs metadata")
        try:
            payload = msgspec_json.decode(response.content)
        except msgspec.DecodeError as exc:
            msg = "Docs metadata response was not valid JSON"
            raise DocsProviderError(msg) from exc
        if not isinstance(payload, dict):
            msg = "Docs metadata response must be a JSON object"
            raise DocsProviderError(msg)
        return DocsInfo.from_payload(payload)

    def get_doc(self, version: str, file: str) -> str:
        """Return the raw markdown for ``file`` within ``version``."""
        url = f"{self._base_url}/docs/{quote(version)}/{quote(file)}"
        return self._get(url, f"doc '{version}/{file}'").text

    def _get(self, url: str, label: str) -> requests.Response:
        try:
            response = self._session.get(url, headers=self._headers, timeout=self.timeout)
        except requests.RequestException as exc:
            msg = f"Failed to fetch {label}: {exc}"
            raise DocsProviderError(msg) from exc

        if response.status_code == HTTPStatus.NOT_FOUND:
            msg = f"No {label} found at {url}"
            raise DocNotFoundError(msg)
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            snippet = response.text[:200]
            msg = (
                f"Fetching {label} failed with status "
                f"{response.status_code}: {snippet}"
            )
            raise DocsProviderError(msg)
        return response


class StaticDocsProvider:
    """Docs provider serving a local checkout.

    The directory holds ``index.json`` (the docs metadata) and markdown files
    laid out as ``<version>/<file>``.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def get_docs_info(self) -> DocsInfo:
        """Return the docs metadata stored in ``index.json``."""
        index_path = self.root / "index.json"
        try:
            payload = msgspec_json.decode(index_path.read_bytes())
        except FileNotFoundError as exc:
            msg = f"Docs metadata '{index_path}' not found."
            raise DocsProviderError(msg) from exc
        except msgspec.DecodeError as exc:
            msg = f"Docs metadata '{index_path}' is not valid JSON"
            raise DocsProviderError(msg) from exc
        if not isinstance(payload, dict):
            msg = f"Docs metadata '{index_path}' must be a JSON object"
            raise DocsProviderError(msg)
        return DocsInfo.from_payload(payload)

    def get_doc(self, version: str, file: str) -> str:
        """Return the markdown stored under ``<version>/<file>``."""
        path = self.root / version / file
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            msg = f"No doc '{version}/{file}' under {self.root}"
            raise DocNotFoundError(msg) from exc


__all__ = [
    "DocNotFoundError",
    "DocsProvider",
    "DocsProviderError",
    "HttpDocsProvider",
    "StaticDocsProvider",
]
