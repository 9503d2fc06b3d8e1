"""Interfaces for finding and opening repositories on behalf of the resolver."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from repospaces.models.repository import LocalPathQuery, Repository, RepositoryAddress


@runtime_checkable
class LocalPathSearch(Protocol):
    async def get_local_repo_paths(self, query: LocalPathQuery) -> list[str]:
        """Return local clones of the queried remote repository, best first.  May be empty."""
        ...


@runtime_checkable
class RepositoryOpener(Protocol):
    async def open(self, address: RepositoryAddress) -> Repository | None:
        """Open the repository at *address*; ``None`` if it is not a repository root."""
        ...
