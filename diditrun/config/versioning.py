"""Schema version parsing shared by config and credentials."""

from __future__ import annotations

from typing import Optional

from semver import Version

from diditrun.common.errors import InvalidVersionError, MalformedVersionError


def resolve_version(raw: Optional[str], *, latest: Version, kind: str) -> Version:
    """Parse ``raw`` as semver, defaulting to ``latest`` when absent.

    Raises MalformedVersionError for unparsable strings and
    InvalidVersionError for versions newer than ``latest``.
    """
    if raw is None:
        return latest
    try:
        version = Version.parse(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedVersionError(
            f"Malformed {kind} version {raw!r}: {exc}",
            context={"kind": kind, "version": raw},
            cause=exc,
        ) from exc
    if version > latest:
        raise InvalidVersionError(
            f"Specified {kind} file version ({version}) is greater than the "
            f"current version ({latest}).",
            context={"kind": kind, "version": str(version), "latest": str(latest)},
        )
    return version
