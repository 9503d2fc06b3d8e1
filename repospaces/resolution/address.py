"""Virtual repository addresses.

A cloud repository with no local clone can still be opened through a
virtual filesystem provider for its hosting service.  Its remote URL is
re-rooted under the ``vfs`` scheme with the provider name as the
authority::

    https://github.com/acme/widgets.git
        -> vfs://github+7b2276223a312c...7d/acme/widgets

Provider metadata rides inside the authority as hex-encoded UTF-8 JSON,
joined to the provider name with ``+``, so it survives any URI handling
that only preserves the authority string.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

from repospaces.git.remotes import split_remote_url
from repospaces.models.enums import AddressScheme
from repospaces.models.repository import RepositoryAddress

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9-]+")


class AuthorityMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    v: int = 1
    owner: str | None = None


def encode_authority(provider: str, metadata: AuthorityMetadata | None = None) -> str:
    if metadata is None:
        return provider
    payload = metadata.model_dump_json(exclude_none=True)
    return f"{provider}+{payload.encode('utf-8').hex()}"


def decode_authority(authority: str) -> tuple[str, AuthorityMetadata | None]:
    """Split an authority into provider name and metadata.

    Raises ``ValueError`` if the metadata part is not valid hex JSON.
    """
    provider, sep, encoded = authority.partition("+")
    if not sep:
        return provider, None
    payload = bytes.fromhex(encoded).decode("utf-8")
    return provider, AuthorityMetadata.model_validate_json(payload)


def provider_slug(provider: str) -> str:
    """Lowercase *provider* and collapse anything but letters, digits and ``-`` into ``-``.

    ``"GitHub Enterprise"`` becomes ``"github-enterprise"``, which is safe as
    the host part of an authority.  May return an empty string.
    """
    return _NON_SLUG_CHARS.sub("-", provider.strip().lower()).strip("-")


def remote_url_path(remote_url: str) -> str | None:
    """Return the repository path of a remote URL (``/owner/repo``), or ``None``.

    Handles both URL-style remotes and scp-style ``git@host:owner/repo``.
    A trailing ``.git`` is dropped.
    """
    _, path = split_remote_url(remote_url)
    return f"/{path}" if path else None


def build_virtual_address(
    remote_url: str | None,
    provider: str | None,
    metadata: AuthorityMetadata | None = None,
) -> RepositoryAddress | None:
    """Build a ``vfs`` address for a remote repository.

    Returns ``None`` if there is no URL, no usable provider name, or the
    URL has no repository path.
    """
    if not remote_url or not provider:
        return None
    slug = provider_slug(provider)
    if not slug:
        return None
    path = remote_url_path(remote_url)
    if path is None:
        return None
    return RepositoryAddress(
        scheme=AddressScheme.VIRTUAL,
        authority=encode_authority(slug, metadata),
        path=path,
    )
