"""Pick the active documentation version for a route."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from ._constants import LATEST_ALIASES
from .models import DocsInfoError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import Version

logger = logging.getLogger(__name__)


def resolve_version(
    requested: str | None, versions: cabc.Sequence[Version]
) -> Version:
    """Return a copy of the version matching ``requested``.

    Empty names and the ``latest``/``all`` aliases select the first (newest)
    version. Unknown names fall back to the first version as well; the
    lookup never fails for a non-empty version list.

    Parameters
    ----------
    requested : str or None
        Version name taken from the route.
    versions : Sequence[Version]
        Known versions, newest first.

    Returns
    -------
    Version
        A copy detached from ``versions``.

    Raises
    ------
    DocsInfoError
        If ``versions`` is empty.
    """
    if not versions:
        msg = "Docs metadata lists no versions."
        raise DocsInfoError(msg)

    if requested is None or requested in LATEST_ALIASES:
        return dc.replace(versions[0])

    for version in versions:
        if version.name == requested:
            return dc.replace(version)

    logger.info(
        "Unknown docs version %r; falling back to %r", requested, versions[0].name
    )
    return dc.replace(versions[0])


__all__ = ["resolve_version"]
