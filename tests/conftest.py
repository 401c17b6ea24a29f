"""Shared fixtures describing a small two-version docs set."""

from __future__ import annotations

import typing as typ

import pytest

from gz_docs.models import DocsInfo


def build_docs_payload() -> dict[str, typ.Any]:
    """Return decoded docs metadata with version-scoped and shared pages."""
    return {
        "versions": [
            {
                "name": "garden",
                "libraries": [
                    {"name": "gz-math", "version": "7"},
                    {"name": "gz-sim", "version": "7"},
                ],
            },
            {"name": "fortress", "libraries": [{"name": "ign-math", "version": "6"}]},
        ],
        "pages": {
            "garden": [
                {"name": "zzz", "title": "Zzz", "file": "zzz.md"},
                {
                    "name": "install",
                    "title": "Installation",
                    "file": "install.md",
                    "children": [
                        {
                            "name": "install_ubuntu",
                            "title": "Ubuntu",
                            "file": "install_ubuntu.md",
                        }
                    ],
                },
                {"name": "getstarted", "title": "Getting Started", "file": "getstarted.md"},
            ],
            "fortress": [
                {"name": "install", "title": "Install Fortress", "file": "install.md"},
            ],
            "all": [
                {"name": "aaa", "title": "Aaa", "file": "aaa.md"},
                {
                    "name": "tutorials",
                    "title": "Tutorials",
                    "file": "tutorials.md",
                    "children": [
                        {
                            "name": "tut_a",
                            "title": "Tutorial A",
                            "file": "tutorials/a.md",
                            "children": [
                                {
                                    "name": "tut_deep",
                                    "title": "Deep",
                                    "file": "tutorials/deep.md",
                                }
                            ],
                        }
                    ],
                },
            ],
        },
    }


@pytest.fixture
def docs_payload() -> dict[str, typ.Any]:
    """Return the fixture docs metadata as decoded JSON."""
    return build_docs_payload()


@pytest.fixture
def docs_info() -> DocsInfo:
    """Return the fixture docs metadata as immutable records."""
    return DocsInfo.from_payload(build_docs_payload())
