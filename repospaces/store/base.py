"""Local workspace store interface.

The store owns two pieces of on-disk state:

- the local workspace file (local workspace id -> name + repository paths)
- the durable cloud path map (cloud workspace id -> repo id -> local path),
  the only cross-session memory of where a user keeps a cloud repository

Nothing but ``WorkspacesService`` should talk to the store directly.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from repospaces.models.files import LocalWorkspaceFileData


@runtime_checkable
class WorkspacesStore(Protocol):
    async def get_local_workspace_data(self) -> LocalWorkspaceFileData | None:
        """Read the local workspace file.  ``None`` if there is nothing to read."""
        ...

    async def write_local_workspace_data(self, data: LocalWorkspaceFileData) -> None:
        """Replace the local workspace file."""
        ...

    async def get_cloud_workspace_repo_path(self, workspace_id: str, repo_id: str) -> str | None:
        """Return the remembered local path for a cloud repository, if any."""
        ...

    async def write_cloud_workspace_disk_path_to_map(self, workspace_id: str, repo_id: str, local_path: str) -> None:
        """Remember *local_path* for a cloud repository.  Durable once awaited."""
        ...
