"""Shared enumerations."""

from __future__ import annotations

from enum import StrEnum


class WorkspaceType(StrEnum):
    CLOUD = "cloud"
    LOCAL = "local"


class AddressScheme(StrEnum):
    """Scheme of a repository address."""

    FILE = "file"
    VIRTUAL = "vfs"


class CollapsibleState(StrEnum):
    NONE = "none"
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"
