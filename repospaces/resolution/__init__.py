"""Repository path resolution for workspace repositories."""

from repospaces.resolution.address import (
    AuthorityMetadata,
    build_virtual_address,
    decode_authority,
    encode_authority,
)
from repospaces.resolution.resolver import RepositoryLocation, RepositoryPathResolver, ResolvedRepository

__all__ = [
    "AuthorityMetadata",
    "RepositoryLocation",
    "RepositoryPathResolver",
    "ResolvedRepository",
    "build_virtual_address",
    "decode_authority",
    "encode_authority",
]
