"""Local workspace source.

Reads the local workspace file through the store and normalises it into
``LocalWorkspace`` descriptors.  Repository names are derived from their
paths on every load.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from repospaces.models.workspace import LocalRepositoryDescriptor, LocalWorkspace

if TYPE_CHECKING:
    from repospaces.store.base import WorkspacesStore


class LocalWorkspaceSource:
    def __init__(self, store: WorkspacesStore) -> None:
        self._store = store

    async def load(self) -> list[LocalWorkspace]:
        data = await self._store.get_local_workspace_data()
        entries = data.workspaces if data is not None else {}

        workspaces = [
            LocalWorkspace(
                id=entry.local_id,
                name=entry.name,
                repositories=tuple(LocalRepositoryDescriptor.from_path(r.local_path) for r in entry.repositories),
            )
            for entry in entries.values()
        ]
        logger.debug("Local workspaces: loaded {}", len(workspaces))
        return workspaces
