"""HTTP client for the remote workspaces API.

The API speaks GraphQL over a single endpoint.  Only one query is used:
all projects (cloud workspaces) with their repositories.
"""

from __future__ import annotations

import httpx
from loguru import logger
from pydantic import SecretStr

from repospaces.models.api import WorkspacesResponse

GRAPHQL_PATH = "/api/projects/graphql"

WORKSPACES_WITH_REPOS_QUERY = """
query getWorkspacesWithRepos {
    projects (first: 100) {
        total_count
        nodes {
            id
            name
            provider_data {
                repositories (first: 100) {
                    nodes {
                        id
                        name
                        url
                        provider
                        provider_organization_name
                    }
                }
            }
        }
    }
}
"""


class HttpWorkspacesApi:
    """Workspaces API client backed by ``httpx.AsyncClient``.

    Without a token there is no account to ask, so
    ``get_workspaces_with_repos`` returns ``None`` (no cloud workspaces)
    instead of failing.  HTTP errors propagate as ``httpx.HTTPStatusError``.
    """

    def __init__(
        self,
        base_url: str,
        token: SecretStr | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    async def get_workspaces_with_repos(self) -> WorkspacesResponse | None:
        if self._token is None:
            logger.info("No workspaces API token configured -- skipping cloud workspaces")
            return None

        headers = {"Authorization": f"Bearer {self._token.get_secret_value()}"}
        async with httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.post(GRAPHQL_PATH, json={"query": WORKSPACES_WITH_REPOS_QUERY})
            response.raise_for_status()

        return WorkspacesResponse.model_validate(response.json())
