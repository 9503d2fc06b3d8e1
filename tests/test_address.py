"""Unit tests for virtual repository addresses."""

from __future__ import annotations

import pytest

from repospaces.resolution.address import (
    AuthorityMetadata,
    build_virtual_address,
    decode_authority,
    encode_authority,
    provider_slug,
    remote_url_path,
)


def test_encode_without_metadata() -> None:
    assert encode_authority("github") == "github"
    assert decode_authority("github") == ("github", None)


def test_encode_metadata_is_hex_json() -> None:
    authority = encode_authority("github", AuthorityMetadata(owner="acme"))

    provider, _, encoded = authority.partition("+")
    assert provider == "github"
    assert bytes.fromhex(encoded).decode("utf-8") == '{"v":1,"owner":"acme"}'
    assert decode_authority(authority) == ("github", AuthorityMetadata(owner="acme"))


def test_decode_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        decode_authority("github+zz")


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://github.com/acme/widgets.git", "/acme/widgets"),
        ("https://github.com/acme/widgets/", "/acme/widgets"),
        ("git@github.com:acme/widgets.git", "/acme/widgets"),
        ("ssh://git@github.com/acme/widgets", "/acme/widgets"),
        ("https://github.com", None),
        ("", None),
    ],
)
def test_remote_url_path(url: str, expected: str | None) -> None:
    assert remote_url_path(url) == expected


def test_build_virtual_address() -> None:
    address = build_virtual_address("https://github.com/acme/widgets.git", "GitHub")

    assert address is not None
    assert address.is_virtual
    assert address.as_uri() == "vfs://github/acme/widgets"


@pytest.mark.parametrize(
    ("provider", "slug"),
    [
        ("github", "github"),
        (" GitHub Enterprise ", "github-enterprise"),
        ("Azure DevOps/Server", "azure-devops-server"),
        ("+++", ""),
    ],
)
def test_provider_slug(provider: str, slug: str) -> None:
    assert provider_slug(provider) == slug


def test_build_virtual_address_slugs_provider() -> None:
    address = build_virtual_address(
        "https://ghe.example.com/acme/widgets", "GitHub Enterprise", AuthorityMetadata(owner="acme")
    )

    assert address is not None
    assert address.authority.startswith("github-enterprise+")
    assert " " not in address.as_uri()
    assert decode_authority(address.authority) == ("github-enterprise", AuthorityMetadata(owner="acme"))


@pytest.mark.parametrize(
    ("url", "provider"),
    [
        (None, "github"),
        ("https://github.com/acme/widgets", None),
        ("https://github.com/acme/widgets", ""),
        ("https://github.com/", "github"),
        ("https://github.com/acme/widgets", " + "),
    ],
)
def test_build_virtual_address_needs_url_and_provider(url: str | None, provider: str | None) -> None:
    assert build_virtual_address(url, provider) is None
