"""Typed dataclasses describing gz_docs configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from gz_docs._constants import LIBRARY_API_URL_TEMPLATE, PAGE_ORDER


class DocsConfigError(ValueError):
    """Raised when the docs configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ApiConfig:
    """Location of the content API serving metadata, markdown, and images."""

    host: str
    version: str


@dc.dataclass(slots=True)
class DocsConfig:
    """A fully resolved docs site configuration sourced from YAML."""

    api: ApiConfig
    edit_base_url: str | None = None
    page_order: list[str] = dc.field(default_factory=lambda: list(PAGE_ORDER))
    library_api_url: str = LIBRARY_API_URL_TEMPLATE
    output_dir: Path = Path("public")


__all__ = ["ApiConfig", "DocsConfig", "DocsConfigError"]
