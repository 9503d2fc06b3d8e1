"""Cloud workspace source.

Fetches the workspace graph from the remote API and normalises it into
``CloudWorkspace`` descriptors.  Missing data at any level of the response
means "zero items": no response, no projects, a project without
``provider_data`` -- none of these are errors.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from loguru import logger

from repospaces.models.api import WorkspacesResponse
from repospaces.models.workspace import CloudWorkspace


@runtime_checkable
class WorkspacesApi(Protocol):
    async def get_workspaces_with_repos(self) -> WorkspacesResponse | None:
        """Fetch all cloud workspaces with their repositories."""
        ...


class CloudWorkspaceSource:
    def __init__(self, api: WorkspacesApi) -> None:
        self._api = api

    async def load(self) -> list[CloudWorkspace]:
        response = await self._api.get_workspaces_with_repos()
        if response is None:
            logger.debug("Cloud workspaces: no response, treating as empty")
            return []

        workspaces = [
            CloudWorkspace(id=project.id, name=project.name, repositories=tuple(project.repositories))
            for project in response.projects
        ]
        logger.debug("Cloud workspaces: loaded {}", len(workspaces))
        return workspaces
