"""On-disk schemas for the local workspace files.

``localWorkspaces.json``::

    {"workspaces": {"<localId>": {"localId": "...", "name": "...",
                                  "repositories": [{"localPath": "..."}]}}}

``cloudWorkspaces.json`` (the durable cloud repo -> local path map)::

    {"workspaces": {"<workspaceId>": {"repoLocalPaths": {"<repoId>": "/path"}}}}

Keys are camelCase on disk; Python attributes are snake_case.  The path map
is read leniently: an entry that is not an object, or a path that is not a
string, is dropped so the remaining mappings survive.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _FileModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LocalWorkspaceRepositoryEntry(_FileModel):
    local_path: str = Field(alias="localPath")


class LocalWorkspaceEntry(_FileModel):
    local_id: str = Field(alias="localId")
    name: str
    repositories: list[LocalWorkspaceRepositoryEntry] = Field(default_factory=list)


class LocalWorkspaceFileData(_FileModel):
    workspaces: dict[str, LocalWorkspaceEntry] = Field(default_factory=dict)


class CloudWorkspaceEntry(_FileModel):
    repo_local_paths: dict[str, str] = Field(default_factory=dict, alias="repoLocalPaths")

    @field_validator("repo_local_paths", mode="before")
    @classmethod
    def _drop_non_string_paths(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {repo_id: path for repo_id, path in value.items() if isinstance(path, str)}
        return value


class CloudWorkspaceFileData(_FileModel):
    workspaces: dict[str, CloudWorkspaceEntry] = Field(default_factory=dict)

    @field_validator("workspaces", mode="before")
    @classmethod
    def _drop_malformed_entries(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: entry for key, entry in value.items() if isinstance(entry, dict | CloudWorkspaceEntry)}
        return value
