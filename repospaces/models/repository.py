"""Repository addressing and handles.

An address is where a repository can be opened from: either a filesystem
path (``file`` scheme) or a virtual location routed through a hosting
provider (``vfs`` scheme, see ``repospaces.resolution.address``).  A
``Repository`` is what the opener hands back once an address proved to be
a real repository root.
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlunsplit

from pydantic import BaseModel, ConfigDict

from repospaces.models.enums import AddressScheme


class RepoInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    provider: str | None = None
    owner: str | None = None


class LocalPathQuery(BaseModel):
    """Search key for finding clones of a remote repository on disk."""

    model_config = ConfigDict(frozen=True)

    remote_url: str
    repo_info: RepoInfo


class RepositoryAddress(BaseModel):
    model_config = ConfigDict(frozen=True)

    scheme: AddressScheme
    authority: str = ""
    path: str

    @classmethod
    def from_path(cls, path: str | Path) -> RepositoryAddress:
        return cls(scheme=AddressScheme.FILE, path=str(path))

    @property
    def is_virtual(self) -> bool:
        return self.scheme == AddressScheme.VIRTUAL

    @property
    def fs_path(self) -> Path | None:
        """Filesystem path for ``file`` addresses, ``None`` for virtual ones."""
        if self.is_virtual:
            return None
        return Path(self.path)

    def as_uri(self) -> str:
        return urlunsplit((str(self.scheme), self.authority, self.path, "", ""))

    def __str__(self) -> str:
        return self.as_uri()


class Repository(BaseModel):
    """An opened repository."""

    model_config = ConfigDict(frozen=True)

    name: str
    address: RepositoryAddress

    @property
    def is_virtual(self) -> bool:
        return self.address.is_virtual

    @property
    def path(self) -> Path | None:
        return self.address.fs_path
