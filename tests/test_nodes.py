"""Unit tests for the workspace tree nodes."""

from __future__ import annotations

import asyncio

from conftest import FakeOpener, FakePathSearch, FakeStore, FakeWorkspacesApi, file_uri

from repospaces.managers.workspaces import WorkspacesService
from repospaces.models.enums import CollapsibleState
from repospaces.models.repository import LocalPathQuery
from repospaces.models.workspace import CloudRepositoryDescriptor, CloudWorkspace, LocalWorkspace
from repospaces.resolution.resolver import RepositoryPathResolver
from repospaces.views.nodes import MessageNode, RepositoryNode, WorkspaceNode, WorkspacesRootNode


def _repo(repo_id: str, name: str) -> CloudRepositoryDescriptor:
    return CloudRepositoryDescriptor(
        id=repo_id,
        name=name,
        url=f"https://github.com/acme/{name}.git",
        provider="github",
        provider_organization_name="acme",
    )


def _workspace(*repos: CloudRepositoryDescriptor) -> CloudWorkspace:
    return CloudWorkspace(id="W", name="Widgets", repositories=repos)


async def test_children_in_descriptor_order(
    resolver: RepositoryPathResolver, store: FakeStore, opener: FakeOpener
) -> None:
    store.paths[("W", "R1")] = "/src/widgets"
    store.paths[("W", "R2")] = "/src/gadgets"
    opener.valid.update({file_uri("/src/widgets"), file_uri("/src/gadgets")})
    node = WorkspaceNode(_workspace(_repo("R1", "widgets"), _repo("R2", "gadgets")), resolver)

    children = await node.get_children()

    assert all(isinstance(c, RepositoryNode) for c in children)
    assert [c.repository.name for c in children] == ["widgets", "gadgets"]


async def test_unresolved_repository_is_placeholder(
    resolver: RepositoryPathResolver, store: FakeStore, opener: FakeOpener
) -> None:
    store.paths[("W", "R1")] = "/src/widgets"
    opener.valid.add(file_uri("/src/widgets"))
    node = WorkspaceNode(_workspace(_repo("R1", "widgets"), _repo("R2", "gadgets")), resolver)

    first, second = await node.get_children()

    assert isinstance(first, RepositoryNode)
    assert isinstance(second, MessageNode)
    assert second.get_tree_item().label == "gadgets"


async def test_failure_is_isolated_per_repository(store: FakeStore, search: FakePathSearch) -> None:
    store.paths[("W", "R1")] = "/broken"
    store.paths[("W", "R2")] = "/src/gadgets"
    opener = FakeOpener(valid={file_uri("/src/gadgets")}, broken={file_uri("/broken")})
    resolver = RepositoryPathResolver(WorkspacesService(FakeWorkspacesApi(), store), search, opener)
    node = WorkspaceNode(_workspace(_repo("R1", "widgets"), _repo("R2", "gadgets")), resolver)

    first, second = await node.get_children()

    assert isinstance(first, MessageNode)
    assert first.message == "widgets"
    assert first.tooltip is not None
    assert isinstance(second, RepositoryNode)


async def test_get_children_is_cached(resolver: RepositoryPathResolver, store: FakeStore) -> None:
    node = WorkspaceNode(_workspace(_repo("R1", "widgets"), _repo("R2", "gadgets")), resolver)

    first = await node.get_children()
    second = await node.get_children()

    assert first is second
    assert store.path_reads == 2


async def test_refresh_reresolves(resolver: RepositoryPathResolver, store: FakeStore, opener: FakeOpener) -> None:
    node = WorkspaceNode(_workspace(_repo("R1", "widgets"), _repo("R2", "gadgets")), resolver)
    first = await node.get_children()
    assert all(isinstance(c, MessageNode) for c in first)

    store.paths[("W", "R1")] = "/src/widgets"
    opener.valid.add(file_uri("/src/widgets"))
    assert isinstance((await node.get_children())[0], MessageNode)

    await node.refresh()
    assert not node.expanded
    children = await node.get_children()

    assert store.path_reads == 4
    assert isinstance(children[0], RepositoryNode)


async def test_concurrent_expansion_resolves_once(resolver: RepositoryPathResolver, store: FakeStore) -> None:
    node = WorkspaceNode(_workspace(_repo("R1", "widgets"), _repo("R2", "gadgets")), resolver)

    results = await asyncio.gather(node.get_children(), node.get_children(), node.get_children())

    assert results[0] is results[1] is results[2]
    assert store.path_reads == 2


async def test_refresh_during_expansion_is_not_lost(store: FakeStore, opener: FakeOpener) -> None:
    class SlowSearch(FakePathSearch):
        async def get_local_repo_paths(self, query: LocalPathQuery) -> list[str]:
            await asyncio.sleep(0.01)
            return await super().get_local_repo_paths(query)

    search = SlowSearch()
    resolver = RepositoryPathResolver(WorkspacesService(FakeWorkspacesApi(), store), search, opener)
    node = WorkspaceNode(_workspace(_repo("R1", "widgets")), resolver)

    expanding = asyncio.create_task(node.get_children())
    await asyncio.sleep(0)
    await node.refresh()
    await expanding

    assert not node.expanded
    await node.get_children()
    assert len(search.queries) == 2


async def test_local_workspace_children(opener: FakeOpener, service: WorkspacesService, search: FakePathSearch) -> None:
    opener.valid.add(file_uri("/home/u/proj"))
    resolver = RepositoryPathResolver(service, search, opener)
    workspace = await service.get_local_workspace("L1")
    assert isinstance(workspace, LocalWorkspace)

    children = await WorkspaceNode(workspace, resolver).get_children()

    assert isinstance(children[0], RepositoryNode)
    assert isinstance(children[1], MessageNode)
    assert children[1].message == "notes"
    assert search.queries == []


def test_identity_from_workspace_id(resolver: RepositoryPathResolver) -> None:
    a = WorkspaceNode(_workspace(), resolver)
    b = WorkspaceNode(CloudWorkspace(id="W", name="Renamed"), resolver)

    assert a.id == "repospaces:workspace(W)"
    assert a.id == WorkspaceNode.get_id("W")
    assert a == b
    assert len({a, b}) == 1


def test_tree_items(resolver: RepositoryPathResolver) -> None:
    cloud = WorkspaceNode(_workspace(), resolver).get_tree_item()
    local = WorkspaceNode(LocalWorkspace(id="L", name="Mine"), resolver).get_tree_item()

    assert cloud.icon == "cloud"
    assert cloud.collapsible == CollapsibleState.COLLAPSED
    assert cloud.id == "repospaces:workspace(W)"
    assert local.icon == "folder"
    assert local.label == "Mine"


async def test_root_lists_workspace_nodes(
    service: WorkspacesService, resolver: RepositoryPathResolver, api: FakeWorkspacesApi
) -> None:
    root = WorkspacesRootNode(service, resolver)

    nodes = await root.get_children()
    assert [n.id for n in nodes] == [WorkspaceNode.get_id(i) for i in ("W", "X", "L1")]
    assert await root.get_children() is nodes

    await root.refresh()
    await root.get_children()
    assert api.calls == 2
