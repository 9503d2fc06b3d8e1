"""JSON file workspace store.

Layout under the data root::

    {data_root}/localWorkspaces.json
    {data_root}/cloudWorkspaces.json

Uses ``anyio.to_thread.run_sync`` for non-blocking file I/O.

Writes are atomic: data is written to a temporary file in the same directory,
then renamed to the target path, so a crash mid-write never leaves a
truncated map behind.  Path-map updates are read-modify-write and are
serialised with a lock.  A read-modify-write never replaces a file it
could not read; that file is kept as ``{name}.bak``.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import tempfile
from functools import partial
from pathlib import Path
from typing import TypeVar

from anyio import to_thread
from loguru import logger
from pydantic import BaseModel, ValidationError

from repospaces.models.files import (
    CloudWorkspaceEntry,
    CloudWorkspaceFileData,
    LocalWorkspaceEntry,
    LocalWorkspaceFileData,
    LocalWorkspaceRepositoryEntry,
)

LOCAL_WORKSPACES_FILE = "localWorkspaces.json"
CLOUD_WORKSPACES_FILE = "cloudWorkspaces.json"


class LocalWorkspacesStore:
    """JSON file implementation of the WorkspacesStore protocol."""

    def __init__(self, data_root: str | Path) -> None:
        self._base = Path(data_root)
        self._cloud_map_lock = asyncio.Lock()

    @property
    def local_workspaces_path(self) -> Path:
        return self._base / LOCAL_WORKSPACES_FILE

    @property
    def cloud_workspaces_path(self) -> Path:
        return self._base / CLOUD_WORKSPACES_FILE

    # -- Local workspaces ------------------------------------------------------

    async def get_local_workspace_data(self) -> LocalWorkspaceFileData | None:
        return await _read_model(self.local_workspaces_path, LocalWorkspaceFileData)

    async def write_local_workspace_data(self, data: LocalWorkspaceFileData) -> None:
        payload = data.model_dump_json(by_alias=True, indent=2)
        await to_thread.run_sync(partial(_atomic_write, self.local_workspaces_path, payload))

    async def add_local_workspace(self, local_id: str, name: str, paths: list[str]) -> LocalWorkspaceEntry:
        """Add (or replace) a local workspace entry and persist the file."""
        data = await _load_for_update(self.local_workspaces_path, LocalWorkspaceFileData)
        entry = LocalWorkspaceEntry(
            local_id=local_id,
            name=name,
            repositories=[LocalWorkspaceRepositoryEntry(local_path=p) for p in paths],
        )
        data.workspaces[local_id] = entry
        await self.write_local_workspace_data(data)
        logger.info("Local workspace {} saved with {} repositories", local_id, len(paths))
        return entry

    # -- Cloud path map --------------------------------------------------------

    async def get_cloud_workspace_repo_path(self, workspace_id: str, repo_id: str) -> str | None:
        data = await _read_model(self.cloud_workspaces_path, CloudWorkspaceFileData)
        if data is None:
            return None
        entry = data.workspaces.get(workspace_id)
        if entry is None:
            return None
        return entry.repo_local_paths.get(repo_id)

    async def write_cloud_workspace_disk_path_to_map(self, workspace_id: str, repo_id: str, local_path: str) -> None:
        async with self._cloud_map_lock:
            data = await _load_for_update(self.cloud_workspaces_path, CloudWorkspaceFileData)
            entry = data.workspaces.setdefault(workspace_id, CloudWorkspaceEntry())
            entry.repo_local_paths[repo_id] = local_path
            payload = data.model_dump_json(by_alias=True, indent=2)
            await to_thread.run_sync(partial(_atomic_write, self.cloud_workspaces_path, payload))
        logger.debug("Cloud workspace {}: repo {} mapped to {}", workspace_id, repo_id, local_path)


M = TypeVar("M", bound=BaseModel)


async def _load_model(path: Path, model: type[M]) -> M | None:
    """Read and validate a JSON file; ``None`` if it is missing.

    Raises ``ValidationError`` when the content is not valid UTF-8 JSON of
    the expected shape.
    """
    raw = await to_thread.run_sync(partial(_read_file, path))
    if raw is None:
        return None
    return model.model_validate_json(raw)


async def _read_model(path: Path, model: type[M]) -> M | None:
    """Like ``_load_model``, but invalid data is logged and read as ``None``.

    Invalid data means the file was edited by hand or written by an
    incompatible version.
    """
    try:
        return await _load_model(path, model)
    except ValidationError as exc:
        logger.warning("Ignoring unreadable workspace file {}: {}", path, exc)
        return None


async def _load_for_update(path: Path, model: type[M]) -> M:
    """Current contents of *path* before a read-modify-write.

    An unreadable file is moved aside to ``{name}.bak`` and the update
    starts from empty data.
    """
    try:
        data = await _load_model(path, model)
    except ValidationError as exc:
        backup = path.with_name(f"{path.name}.bak")
        await to_thread.run_sync(partial(os.replace, path, backup))
        logger.warning("Unreadable workspace file {} moved to {} before writing: {}", path, backup, exc)
        return model()
    return data if data is not None else model()


# -- Sync helpers (run in thread pool) -----------------------------------------


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename.

    The temp file is created in the same directory so ``os.replace`` is
    atomic on POSIX.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _read_file(path: Path) -> bytes | None:
    """Read raw file contents, ``None`` if the file does not exist.

    Decoding is left to the JSON parser so bad UTF-8 surfaces as a
    validation error.
    """
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
