"""Tree view nodes."""

from repospaces.views.nodes import (
    MessageNode,
    RepositoryNode,
    TreeItem,
    ViewNode,
    WorkspaceNode,
    WorkspacesRootNode,
)

__all__ = ["MessageNode", "RepositoryNode", "TreeItem", "ViewNode", "WorkspaceNode", "WorkspacesRootNode"]
