import httpx
from typing import Any, Dict, Optional

from .base import FetchError, LookupSource
from ..config import Settings, get_settings
from ..schemas import Mode

ENDPOINTS = {
    Mode.USER: "/users/{name}",
    Mode.REPO: "/repos/{name}",
}


class GitHubAdapter(LookupSource):
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.settings.user_agent,
        }
        if self.settings.github_token:
            headers["Authorization"] = f"Bearer {self.settings.github_token}"
        self.headers = headers
        client_kwargs: Dict[str, Any] = {
            "base_url": str(self.settings.github_base_url),
        }
        if self.settings.github_proxy:
            client_kwargs["proxy"] = self.settings.github_proxy
        if transport is not None:
            client_kwargs["transport"] = transport
        self.client = httpx.AsyncClient(**client_kwargs)

    async def fetch(self, mode: Mode, name: str) -> Dict[str, Any]:
        path = ENDPOINTS[mode].format(name=name)
        try:
            resp = await self.client.get(
                path, headers=self.headers, timeout=self.settings.request_timeout_seconds
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise FetchError(mode, name, f"GitHub {status}: {exc.response.text}", status) from exc
        except httpx.RequestError as exc:
            raise FetchError(
                mode, name, f"GitHub request error: {type(exc).__name__} {exc!r}"
            ) from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise FetchError(mode, name, "GitHub returned a non-JSON body", resp.status_code) from exc
        if not isinstance(data, dict):
            raise FetchError(
                mode, name, f"GitHub returned {type(data).__name__}, expected an object", resp.status_code
            )
        return data

    async def aclose(self) -> None:
        await self.client.aclose()
