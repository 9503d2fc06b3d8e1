"""Tree nodes for the workspaces view.

``WorkspacesRootNode`` lists one ``WorkspaceNode`` per workspace.  A
``WorkspaceNode`` expands lazily into one child per repository: a
``RepositoryNode`` when the repository opened, a ``MessageNode``
placeholder carrying the repository name when it did not.

Expansion is cached until ``refresh``.  Expansion and refresh share one
lock per node, so overlapping calls collapse: a second ``get_children``
reuses the first one's result, and a ``refresh`` issued mid-expansion
takes effect after it instead of being lost.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from loguru import logger
from pydantic import BaseModel, ConfigDict

from repospaces.models.enums import CollapsibleState, WorkspaceType

if TYPE_CHECKING:
    from repospaces.managers.workspaces import WorkspacesService
    from repospaces.models.repository import Repository
    from repospaces.models.workspace import RepositoryDescriptor, Workspace
    from repospaces.resolution.resolver import RepositoryPathResolver

ID_PREFIX = "repospaces"


class TreeItem(BaseModel):
    """Presentation of a node, as handed to whatever renders the tree."""

    model_config = ConfigDict(frozen=True)

    label: str
    id: str | None = None
    description: str = ""
    icon: str | None = None
    collapsible: CollapsibleState = CollapsibleState.NONE
    tooltip: str | None = None


class ViewNode:
    """Base node: identity plus a tree item.  Leaves have no children."""

    key = ":node"

    @property
    def id(self) -> str | None:
        return None

    async def get_children(self) -> list[ViewNode]:
        return []

    async def refresh(self) -> None:
        return None

    def get_tree_item(self) -> TreeItem:
        raise NotImplementedError


class MessageNode(ViewNode):
    """Leaf showing a bare message -- used for repositories that did not resolve."""

    key = ":message"

    def __init__(self, message: str, *, tooltip: str | None = None) -> None:
        self.message = message
        self.tooltip = tooltip

    def get_tree_item(self) -> TreeItem:
        return TreeItem(label=self.message, tooltip=self.tooltip)

    def __repr__(self) -> str:
        return f"MessageNode({self.message!r})"


class RepositoryNode(ViewNode):
    key = ":repository"

    def __init__(self, repository: Repository, parent_id: str) -> None:
        self.repository = repository
        self._parent_id = parent_id

    @property
    def id(self) -> str:
        return f"{self._parent_id}{self.key}({self.repository.address})"

    def get_tree_item(self) -> TreeItem:
        return TreeItem(
            label=self.repository.name,
            id=self.id,
            description=str(self.repository.path) if self.repository.path else self.repository.address.as_uri(),
            icon="repo-cloud" if self.repository.is_virtual else "repo",
        )

    def __repr__(self) -> str:
        return f"RepositoryNode({self.repository.name!r})"


class WorkspaceNode(ViewNode):
    key = ":workspace"

    @classmethod
    def get_id(cls, workspace_id: str) -> str:
        return f"{ID_PREFIX}{cls.key}({workspace_id})"

    def __init__(self, workspace: Workspace, resolver: RepositoryPathResolver) -> None:
        self.workspace = workspace
        self._resolver = resolver
        self._children: list[ViewNode] | None = None
        self._lock = asyncio.Lock()

    @property
    def id(self) -> str:
        return WorkspaceNode.get_id(self.workspace.id)

    @property
    def name(self) -> str:
        return self.workspace.name

    @property
    def type(self) -> WorkspaceType:
        return self.workspace.type

    @property
    def expanded(self) -> bool:
        return self._children is not None

    async def get_children(self) -> list[ViewNode]:
        async with self._lock:
            if self._children is None:
                children: list[ViewNode] = []
                for descriptor in self.workspace.repositories:
                    children.append(await self._child_for(descriptor))
                self._children = children
            return self._children

    async def refresh(self) -> None:
        async with self._lock:
            self._children = None
        logger.debug("Workspace node {} refreshed", self.id)

    async def _child_for(self, descriptor: RepositoryDescriptor) -> ViewNode:
        try:
            resolved = await self._resolver.resolve(self.workspace, descriptor)
        except Exception as exc:
            logger.opt(exception=exc).warning(
                "Workspace {}: failed to resolve {}", self.workspace.id, descriptor.name
            )
            return MessageNode(descriptor.name, tooltip=f"Failed to resolve: {exc}")

        if resolved.is_placeholder:
            return MessageNode(resolved.name)
        return RepositoryNode(resolved.repository, self.id)

    def get_tree_item(self) -> TreeItem:
        return TreeItem(
            label=self.name,
            id=self.id,
            icon="cloud" if self.type == WorkspaceType.CLOUD else "folder",
            collapsible=CollapsibleState.COLLAPSED,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorkspaceNode):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"WorkspaceNode({self.id!r})"


class WorkspacesRootNode(ViewNode):
    """Top of the workspaces tree: one ``WorkspaceNode`` per workspace.

    ``refresh`` drops the node list and invalidates the service caches, so
    the next expansion re-fetches every workspace.
    """

    key = ":workspaces"

    def __init__(self, service: WorkspacesService, resolver: RepositoryPathResolver) -> None:
        self._service = service
        self._resolver = resolver
        self._children: list[WorkspaceNode] | None = None
        self._lock = asyncio.Lock()

    @property
    def id(self) -> str:
        return f"{ID_PREFIX}{self.key}"

    async def get_children(self) -> list[WorkspaceNode]:
        async with self._lock:
            if self._children is None:
                workspaces = await self._service.list_workspaces()
                self._children = [WorkspaceNode(workspace, self._resolver) for workspace in workspaces]
            return self._children

    async def refresh(self) -> None:
        async with self._lock:
            self._children = None
            self._service.invalidate()

    def get_tree_item(self) -> TreeItem:
        return TreeItem(label="Workspaces", id=self.id, collapsible=CollapsibleState.EXPANDED)
