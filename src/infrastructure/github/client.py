"""GitHub REST client used to list a user's public repositories."""

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from core.config import settings

logger = structlog.get_logger()


class GitHubClient:
    """Thin async wrapper around the GitHub ``/users/{name}/repos`` endpoint.

    A fresh ``httpx.AsyncClient`` is opened per call; ``transport`` lets tests
    plug in an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        client_id: str = settings.github_client_id,
        client_secret: str = settings.github_client_secret,
        user_agent: str = settings.github_user_agent,
        timeout: float = settings.github_timeout_seconds,
        per_page: int = settings.github_repos_per_page,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client_id = client_id
        self._client_secret = client_secret
        self._user_agent = user_agent
        self._timeout = timeout
        self._per_page = per_page
        self._transport = transport

    async def list_repos(self, username: str) -> Any | None:
        """
        Fetch the oldest-first page of a user's repositories.

        Returns:
            The decoded JSON body on HTTP 200, None for any other status.

        Raises:
            httpx.HTTPError: On transport failures (connection, timeout).
        """
        url = f"{self._base_url}/users/{quote(username, safe='')}/repos"
        params = {
            "per_page": self._per_page,
            "sort": "created:asc",
            "client_id": self._client_id,
            "client_secret": self._client_secret,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    url,
                    params=params,
                    headers={"User-Agent": self._user_agent},
                )
        except httpx.HTTPError as e:
            logger.error("github_request_failed", username=username, error=str(e))
            raise

        if response.status_code != 200:
            logger.info(
                "github_profile_not_found",
                username=username,
                status_code=response.status_code,
            )
            return None

        return response.json()
