"""Locating commands through the PATH entry of an environment."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pipexpy.textutils import split


def search_dirs(env: Mapping[str, str]) -> list[str]:
    """Return the directories listed in ``env['PATH']``, empty ones dropped.

    An environment without PATH yields an empty list.
    """
    path = env.get("PATH")
    if path is None:
        return []
    return split(path, ":")


def find_executable(cmd: str, env: Mapping[str, str]) -> str | None:
    """Return ``dir/cmd`` for the first PATH directory where it is executable.

    The command name is always joined to a PATH directory, even when it
    contains a slash. Returns None when no candidate is executable.
    """
    for directory in search_dirs(env):
        candidate = f"{directory}/{cmd}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None