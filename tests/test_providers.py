"""Unit tests for the docs providers."""

from __future__ import annotations

import json
import typing as typ

import pytest
import requests

from gz_docs.models import DocsInfoError
from gz_docs.providers import (
    DocNotFoundError,
    DocsProviderError,
    HttpDocsProvider,
    StaticDocsProvider,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture


def _response(mocker: MockerFixture, status: int, body: bytes = b"") -> typ.Any:
    response = mocker.Mock()
    response.status_code = status
    response.content = body
    response.text = body.decode("utf-8")
    return response


def test_docs_info_is_fetched_and_decoded(
    mocker: MockerFixture, docs_payload: dict[str, typ.Any]
) -> None:
    """Metadata is requested from the versioned API and decoded into records."""
    session = mocker.Mock(spec=requests.Session)
    session.get.return_value = _response(
        mocker, 200, json.dumps(docs_payload).encode("utf-8")
    )

    provider = HttpDocsProvider("https://api.example.invalid/", "1.0", session=session)
    info = provider.get_docs_info()

    called_url = session.get.call_args.args[0]
    assert called_url == "https://api.example.invalid/1.0/docs", (
        f"expected the docs metadata endpoint, got {called_url!r}"
    )
    assert [version.name for version in info.versions] == ["garden", "fortress"]
    assert info.pages["all"][1].children[0].children[0].name == "tut_deep"


def test_doc_markdown_is_fetched_by_version_and_file(mocker: MockerFixture) -> None:
    session = mocker.Mock(spec=requests.Session)
    session.get.return_value = _response(mocker, 200, b"# Install\n")

    provider = HttpDocsProvider("https://api.example.invalid", "1.0", session=session)
    text = provider.get_doc("garden", "tutorials/install.md")

    assert text == "# Install\n"
    called_url = session.get.call_args.args[0]
    assert called_url == (
        "https://api.example.invalid/1.0/docs/garden/tutorials/install.md"
    )
    assert session.get.call_args.kwargs["timeout"] == 10.0


def test_missing_doc_raises_not_found(mocker: MockerFixture) -> None:
    session = mocker.Mock(spec=requests.Session)
    session.get.return_value = _response(mocker, 404)

    provider = HttpDocsProvider("https://api.example.invalid", "1.0", session=session)
    with pytest.raises(DocNotFoundError):
        provider.get_doc("garden", "missing.md")


def test_server_errors_raise_provider_error(mocker: MockerFixture) -> None:
    session = mocker.Mock(spec=requests.Session)
    session.get.return_value = _response(mocker, 502, b"bad gateway")

    provider = HttpDocsProvider("https://api.example.invalid", "1.0", session=session)
    with pytest.raises(DocsProviderError, match="502") as excinfo:
        provider.get_docs_info()
    assert not isinstance(excinfo.value, DocNotFoundError)


def test_transport_failures_are_wrapped(mocker: MockerFixture) -> None:
    session = mocker.Mock(spec=requests.Session)
    session.get.side_effect = requests.ConnectionError("refused")

    provider = HttpDocsProvider("https://api.example.invalid", "1.0", session=session)
    with pytest.raises(DocsProviderError, match="refused"):
        provider.get_doc("garden", "install.md")


def test_invalid_json_raises_provider_error(mocker: MockerFixture) -> None:
    session = mocker.Mock(spec=requests.Session)
    session.get.return_value = _response(mocker, 200, b"<html>")

    provider = HttpDocsProvider("https://api.example.invalid", "1.0", session=session)
    with pytest.raises(DocsProviderError, match="not valid JSON"):
        provider.get_docs_info()


def test_malformed_metadata_fails_fast(mocker: MockerFixture) -> None:
    session = mocker.Mock(spec=requests.Session)
    session.get.return_value = _response(mocker, 200, b'{"pages": {}}')

    provider = HttpDocsProvider("https://api.example.invalid", "1.0", session=session)
    with pytest.raises(DocsInfoError, match="versions"):
        provider.get_docs_info()


def test_static_provider_reads_local_checkout(
    tmp_path: Path, docs_payload: dict[str, typ.Any]
) -> None:
    (tmp_path / "index.json").write_text(json.dumps(docs_payload), encoding="utf-8")
    (tmp_path / "all").mkdir()
    (tmp_path / "all" / "aaa.md").write_text("# Aaa\n", encoding="utf-8")

    provider = StaticDocsProvider(tmp_path)
    assert provider.get_docs_info().versions[0].name == "garden"
    assert provider.get_doc("all", "aaa.md") == "# Aaa\n"
    with pytest.raises(DocNotFoundError):
        provider.get_doc("garden", "missing.md")
