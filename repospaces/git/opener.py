"""Repository opener.

Filesystem addresses open when the directory is a git working tree, with
either a ``.git`` directory or a ``.git`` file pointing at one.
Virtual addresses open when their provider (the authority's provider name)
is one we can browse remotely; no network access happens here, the handle
only records where the repository lives.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path

from anyio import to_thread
from loguru import logger

from repospaces.git.remotes import find_git_dir
from repospaces.models.repository import Repository, RepositoryAddress
from repospaces.models.workspace import repository_name_from_path
from repospaces.resolution.address import decode_authority, provider_slug


class GitRepositoryOpener:
    """RepositoryOpener for local git working trees and supported virtual providers."""

    def __init__(self, virtual_providers: list[str] | None = None) -> None:
        self._virtual_providers = frozenset(provider_slug(p) for p in virtual_providers or ["github"])

    async def open(self, address: RepositoryAddress) -> Repository | None:
        if address.is_virtual:
            return self._open_virtual(address)

        path = Path(address.path)
        if not await to_thread.run_sync(partial(_is_worktree, path)):
            logger.debug("Not a git repository: {}", path)
            return None
        return Repository(name=repository_name_from_path(str(path)), address=address)

    def _open_virtual(self, address: RepositoryAddress) -> Repository | None:
        provider, _ = decode_authority(address.authority)
        if provider not in self._virtual_providers:
            logger.debug("No virtual provider for {}", address)
            return None
        return Repository(name=repository_name_from_path(address.path), address=address)


def _is_worktree(path: Path) -> bool:
    return find_git_dir(path) is not None
