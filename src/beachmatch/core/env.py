"""
Environment and path helpers.

The API, the CLI and the tests start from different working directories, yet all of
them read `data/beaches.sample.json` and a repo-local `.env` by relative name. Both
are anchored on the project root: the nearest directory above the working directory
(or above this package) holding a `pyproject.toml`, unless `BEACHMATCH_PROJECT_ROOT`
names one explicitly.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

PROJECT_MARKER = "pyproject.toml"


def _nearest_marked_dir(start: Path) -> Path | None:
    for candidate in (start, *start.parents):
        if (candidate / PROJECT_MARKER).is_file():
            return candidate
    return None


@lru_cache
def get_project_root() -> Path:
    """Return the directory relative data paths resolve against (cached)."""
    override = os.getenv("BEACHMATCH_PROJECT_ROOT")
    if override:
        return Path(override).expanduser().resolve()

    cwd = Path.cwd().resolve()
    return _nearest_marked_dir(cwd) or _nearest_marked_dir(Path(__file__).resolve().parent) or cwd


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load one `.env` file, never overriding variables already in the environment.

    `BEACHMATCH_ENV_FILE` wins; otherwise the nearest `.env` above the working
    directory is used, then `<project root>/.env`. Returns the loaded path.
    """
    explicit = os.getenv("BEACHMATCH_ENV_FILE")
    if explicit:
        env_path = Path(explicit).expanduser()
    else:
        found = find_dotenv(usecwd=True)
        env_path = Path(found) if found else get_project_root() / ".env"

    if not env_path.is_file():
        return None
    load_dotenv(dotenv_path=env_path, override=False)
    return env_path.resolve()


def resolve_project_path(path: str | Path) -> Path:
    """Resolve a possibly-relative path against the project root."""
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    return (get_project_root() / p).resolve()
