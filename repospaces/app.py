"""Wiring: build the service graph from settings.

There are no module-level singletons.  ``create_container`` is called once
per process (by the CLI) and everything downstream receives its
collaborators explicitly, so tests can swap any of them for fakes.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from repospaces.api import HttpWorkspacesApi
from repospaces.git.opener import GitRepositoryOpener
from repospaces.git.search import GitRemotePathSearch
from repospaces.managers.workspaces import WorkspacesService
from repospaces.resolution.resolver import RepositoryPathResolver
from repospaces.settings import RepospacesSettings
from repospaces.store.local import LocalWorkspacesStore
from repospaces.views.nodes import WorkspacesRootNode


@dataclass
class Container:
    settings: RepospacesSettings
    store: LocalWorkspacesStore
    service: WorkspacesService
    resolver: RepositoryPathResolver
    root: WorkspacesRootNode


def create_container(settings: RepospacesSettings) -> Container:
    store = LocalWorkspacesStore(settings.data_path)
    api = HttpWorkspacesApi(settings.api_url, settings.api_token, timeout=settings.api_timeout)
    service = WorkspacesService(api, store)
    resolver = RepositoryPathResolver(
        service,
        GitRemotePathSearch(settings.search_paths, max_depth=settings.search_depth),
        GitRepositoryOpener(settings.virtual_providers),
    )
    logger.debug(
        "Container ready (data_root={}, search_roots={})",
        settings.data_path,
        [str(p) for p in settings.search_paths],
    )
    return Container(
        settings=settings,
        store=store,
        service=service,
        resolver=resolver,
        root=WorkspacesRootNode(service, resolver),
    )
