"""Filesystem search for local clones of remote repositories.

Walks each search root down to ``max_depth`` directory levels looking for
git working trees (a ``.git`` directory, or a ``.git`` file pointing at one)
whose configured remotes point at the queried repository.  Working trees
are not descended into, and hidden directories are skipped.

Uses ``anyio.to_thread.run_sync`` so the walk does not block the event loop.
"""

from __future__ import annotations

from collections.abc import Iterator
from functools import partial
from pathlib import Path

from anyio import to_thread
from loguru import logger

from repospaces.git.remotes import find_git_dir, normalize_remote_url, read_remote_urls
from repospaces.models.repository import LocalPathQuery

_SKIPPED_DIRS = frozenset({"node_modules", "__pycache__"})


class GitRemotePathSearch:
    """LocalPathSearch over a fixed set of root directories."""

    def __init__(self, roots: list[Path], *, max_depth: int = 3) -> None:
        self._roots = roots
        self._max_depth = max_depth

    async def get_local_repo_paths(self, query: LocalPathQuery) -> list[str]:
        if not query.remote_url or not self._roots:
            return []

        target = normalize_remote_url(query.remote_url)
        paths = await to_thread.run_sync(partial(self._search, target))
        logger.debug("Local path search for {} ({}): {} candidate(s)", query.repo_info.name, target, len(paths))
        return paths

    def _search(self, target: str) -> list[str]:
        matches: set[str] = set()
        for root in self._roots:
            for worktree, git_dir in _iter_worktrees(root, self._max_depth):
                remotes = read_remote_urls(git_dir)
                if any(normalize_remote_url(url) == target for url in remotes):
                    matches.add(str(worktree))
        return sorted(matches)


def _iter_worktrees(root: Path, max_depth: int) -> Iterator[tuple[Path, Path]]:
    """Yield ``(worktree, git_dir)`` at most *max_depth* levels below *root* (root included)."""
    pending = [(root, 0)]
    while pending:
        directory, depth = pending.pop()
        git_dir = find_git_dir(directory)
        if git_dir is not None:
            yield directory, git_dir
            continue
        if depth >= max_depth:
            continue
        try:
            children = [p for p in directory.iterdir() if p.is_dir() and not p.is_symlink()]
        except OSError:
            continue
        pending.extend(
            (child, depth + 1)
            for child in children
            if not child.name.startswith(".") and child.name not in _SKIPPED_DIRS
        )
