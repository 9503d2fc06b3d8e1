"""Git metadata helpers shared by the search, the opener and virtual addressing."""

from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import urlsplit

_SCP_LIKE_URL = re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?!//)(?P<path>.+)$")
_SECTION_LINE = re.compile(r'^\s*\[\s*(?P<name>[\w.-]+)(?:\s+"(?P<sub>[^"]*)")?\s*\]')
_REMOTE_URL_LINE = re.compile(r"^\s*url\s*=\s*(?P<url>\S+)\s*$")
_GITDIR_LINE = re.compile(r"^gitdir:\s*(?P<path>.+?)\s*$")


def split_remote_url(url: str) -> tuple[str, str]:
    """Split a remote URL into ``(host, "owner/repo")``.

    Handles URL-style remotes and scp-style ``git@host:owner/repo``.  The
    path loses surrounding slashes and a trailing ``.git``; either part may
    be empty.
    """
    url = url.strip()
    match = _SCP_LIKE_URL.match(url)
    if match:
        host, path = match.group("host"), match.group("path")
    else:
        parts = urlsplit(url)
        host, path = parts.hostname or "", parts.path
    return host, path.strip("/").removesuffix(".git")


def normalize_remote_url(url: str) -> str:
    """Reduce a remote URL to lowercase ``host/owner/repo``.

    ``https://github.com/Acme/Widgets.git``, ``git@github.com:acme/widgets``
    and ``ssh://git@github.com/acme/widgets`` all normalise to
    ``github.com/acme/widgets``.
    """
    host, path = split_remote_url(url)
    return f"{host}/{path}".lower().strip("/")


def find_git_dir(worktree: Path) -> Path | None:
    """Return the git directory of *worktree*, or ``None`` if it is not one.

    ``.git`` is either the git directory itself or, for linked worktrees
    and submodule checkouts, a file holding ``gitdir: <path>``.  A relative
    pointer is relative to the worktree.
    """
    dot_git = worktree / ".git"
    if dot_git.is_dir():
        return dot_git
    try:
        first_line = dot_git.read_text(encoding="utf-8").partition("\n")[0]
    except (OSError, UnicodeDecodeError):
        return None
    match = _GITDIR_LINE.match(first_line)
    if match is None:
        return None
    git_dir = worktree / match.group("path")
    return git_dir if git_dir.is_dir() else None


def config_dir(git_dir: Path) -> Path:
    """Directory holding the ``config`` for *git_dir*.

    A linked worktree's git directory names the shared one in ``commondir``.
    """
    try:
        common = (git_dir / "commondir").read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return git_dir
    return git_dir / common if common else git_dir


def read_remote_urls(git_dir: Path) -> list[str]:
    """Return the ``url`` of every ``[remote "..."]`` section of the config, in file order.

    Other sections with a ``url`` key, such as ``[submodule "..."]``, name
    other repositories and are skipped.
    """
    try:
        text = (config_dir(git_dir) / "config").read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return []

    urls: list[str] = []
    in_remote = False
    for line in text.splitlines():
        if section := _SECTION_LINE.match(line):
            in_remote = section.group("name").lower() == "remote" and section.group("sub") is not None
            continue
        if in_remote and (m := _REMOTE_URL_LINE.match(line)):
            urls.append(m.group("url"))
    return urls
