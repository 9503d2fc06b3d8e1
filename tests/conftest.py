"""Shared fixtures: in-memory fakes for every collaborator.

Each fake counts its calls so tests can assert on how often the service
and resolver actually reach out.
"""

from __future__ import annotations

import asyncio

import pytest

from repospaces.managers.workspaces import WorkspacesService
from repospaces.models.api import WorkspacesResponse
from repospaces.models.files import LocalWorkspaceFileData
from repospaces.models.repository import LocalPathQuery, Repository, RepositoryAddress
from repospaces.models.workspace import repository_name_from_path
from repospaces.resolution.resolver import RepositoryPathResolver


def cloud_payload(*projects: dict) -> dict:
    """Build a raw API response body holding *projects*."""
    return {"data": {"projects": {"nodes": list(projects)}}}


def cloud_project(workspace_id: str, name: str, *repos: dict) -> dict:
    return {
        "id": workspace_id,
        "name": name,
        "provider_data": {"repositories": {"nodes": list(repos)}},
    }


def cloud_repo(repo_id: str, name: str, owner: str = "acme", provider: str = "github") -> dict:
    return {
        "id": repo_id,
        "name": name,
        "url": f"https://github.com/{owner}/{name}.git",
        "provider": provider,
        "provider_organization_name": owner,
    }


class FakeWorkspacesApi:
    def __init__(self, payload: dict | None = None, *, delay: float = 0.0) -> None:
        self.payload = payload
        self.delay = delay
        self.calls = 0

    async def get_workspaces_with_repos(self) -> WorkspacesResponse | None:
        self.calls += 1
        payload = self.payload
        if self.delay:
            await asyncio.sleep(self.delay)
        if payload is None:
            return None
        return WorkspacesResponse.model_validate(payload)


class FakeStore:
    def __init__(self, local: dict | None = None, paths: dict[tuple[str, str], str] | None = None) -> None:
        self.local = local
        self.paths = dict(paths or {})
        self.local_reads = 0
        self.path_reads = 0
        self.path_writes: list[tuple[str, str, str]] = []

    async def get_local_workspace_data(self) -> LocalWorkspaceFileData | None:
        self.local_reads += 1
        if self.local is None:
            return None
        return LocalWorkspaceFileData.model_validate(self.local)

    async def write_local_workspace_data(self, data: LocalWorkspaceFileData) -> None:
        self.local = data.model_dump(by_alias=True)

    async def get_cloud_workspace_repo_path(self, workspace_id: str, repo_id: str) -> str | None:
        self.path_reads += 1
        return self.paths.get((workspace_id, repo_id))

    async def write_cloud_workspace_disk_path_to_map(self, workspace_id: str, repo_id: str, local_path: str) -> None:
        self.path_writes.append((workspace_id, repo_id, local_path))
        self.paths[(workspace_id, repo_id)] = local_path


class FakePathSearch:
    def __init__(self, results: dict[str, list[str]] | None = None) -> None:
        self.results = results or {}
        self.queries: list[LocalPathQuery] = []

    async def get_local_repo_paths(self, query: LocalPathQuery) -> list[str]:
        self.queries.append(query)
        return list(self.results.get(query.remote_url, []))


class FakeOpener:
    """Opens any address listed in ``valid`` (by URI); fails for those in ``broken``."""

    def __init__(self, valid: set[str] | None = None, broken: set[str] | None = None) -> None:
        self.valid = valid or set()
        self.broken = broken or set()
        self.opened: list[RepositoryAddress] = []

    async def open(self, address: RepositoryAddress) -> Repository | None:
        self.opened.append(address)
        uri = address.as_uri()
        if uri in self.broken:
            msg = f"cannot open {uri}"
            raise OSError(msg)
        if uri not in self.valid:
            return None
        return Repository(name=repository_name_from_path(address.path), address=address)


def file_uri(path: str) -> str:
    return RepositoryAddress.from_path(path).as_uri()


@pytest.fixture
def api() -> FakeWorkspacesApi:
    return FakeWorkspacesApi(
        cloud_payload(
            cloud_project("W", "Widgets", cloud_repo("R1", "widgets"), cloud_repo("R2", "gadgets")),
            cloud_project("X", "Empty"),
        )
    )


@pytest.fixture
def store() -> FakeStore:
    return FakeStore(
        local={
            "workspaces": {
                "L1": {
                    "localId": "L1",
                    "name": "Side projects",
                    "repositories": [{"localPath": "/home/u/proj"}, {"localPath": "/home/u/notes"}],
                }
            }
        }
    )


@pytest.fixture
def search() -> FakePathSearch:
    return FakePathSearch()


@pytest.fixture
def opener() -> FakeOpener:
    return FakeOpener()


@pytest.fixture
def service(api: FakeWorkspacesApi, store: FakeStore) -> WorkspacesService:
    return WorkspacesService(api, store)


@pytest.fixture
def resolver(service: WorkspacesService, search: FakePathSearch, opener: FakeOpener) -> RepositoryPathResolver:
    return RepositoryPathResolver(service, search, opener)
