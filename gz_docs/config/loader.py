"""Load docs configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from gz_docs._constants import LIBRARY_API_URL_TEMPLATE, PAGE_ORDER

from .models import ApiConfig, DocsConfig, DocsConfigError


def load_docs_config(
    path: Path,
    *,
    api_host: str | None = None,
    api_version: str | None = None,
) -> DocsConfig:
    """Load the YAML configuration describing the content API and page order.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration (for example,
        ``config/docs.yaml``).
    api_host : str, optional
        Override for ``api.host``.
    api_version : str, optional
        Override for ``api.version``.

    Returns
    -------
    DocsConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    DocsConfigError
        If the API location is missing after overrides, or a field has the
        wrong shape.

    Examples
    --------
    >>> from pathlib import Path
    >>> from gz_docs.config import load_docs_config
    >>> config = load_docs_config(Path("config/docs.yaml"))  # doctest: +SKIP
    >>> config.api.version  # doctest: +SKIP
    '1.0'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise DocsConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    api_raw = raw.get("api") or {}
    if not isinstance(api_raw, dict):
        msg = "The 'api' section must be a mapping."
        raise DocsConfigError(msg)
    host = api_host or _optional_str(api_raw.get("host"))
    version = api_version or _optional_str(api_raw.get("version"))
    if not host or not version:
        msg = "Configuration requires 'api.host' and 'api.version'."
        raise DocsConfigError(msg)

    page_order = raw.get("page_order", list(PAGE_ORDER))
    if not isinstance(page_order, list):
        msg = "'page_order' must be a list of page names."
        raise DocsConfigError(msg)

    return DocsConfig(
        api=ApiConfig(host=host, version=version),
        edit_base_url=_optional_str(raw.get("edit_base_url")),
        page_order=[str(name) for name in page_order],
        library_api_url=_optional_str(raw.get("library_api_url"))
        or LIBRARY_API_URL_TEMPLATE,
        output_dir=Path(raw.get("output_dir", "public")),
    )


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = ["load_docs_config"]
