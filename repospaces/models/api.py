"""Wire schemas for the remote workspaces API.

Every level of the response is optional: a missing ``data``, ``projects``,
``provider_data`` or ``repositories`` validates to ``None`` and is read as
"zero items" by the cloud source, never as a failure.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from repospaces.models.workspace import CloudRepositoryDescriptor


class _Wire(BaseModel):
    model_config = ConfigDict(extra="ignore")


class RepositoryConnection(_Wire):
    nodes: list[CloudRepositoryDescriptor] | None = None


class ProviderData(_Wire):
    repositories: RepositoryConnection | None = None


class ProjectNode(_Wire):
    id: str
    name: str
    provider_data: ProviderData | None = None

    @property
    def repositories(self) -> list[CloudRepositoryDescriptor]:
        if self.provider_data is None or self.provider_data.repositories is None:
            return []
        return list(self.provider_data.repositories.nodes or [])


class ProjectConnection(_Wire):
    total_count: int | None = None
    nodes: list[ProjectNode] | None = None


class WorkspacesData(_Wire):
    projects: ProjectConnection | None = None


class WorkspacesResponse(_Wire):
    data: WorkspacesData | None = None

    @property
    def projects(self) -> list[ProjectNode]:
        if self.data is None or self.data.projects is None:
            return []
        return list(self.data.projects.nodes or [])
