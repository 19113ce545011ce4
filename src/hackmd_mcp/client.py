"""HackMD API client — one HTTP request per call"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from hackmd_mcp.settings import HackMDConfig

logger = logging.getLogger(__name__)


class HackMDAPIError(Exception):
    """Non-2xx response from the HackMD API"""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _segment(value: str) -> str:
    """Percent-encode a single path segment (note id / team path)."""
    return quote(value, safe="")


class HackMDClient:
    """Thin async wrapper around the HackMD REST API.

    Use as an async context manager so the underlying connection pool is
    closed with the server that owns it::

        async with HackMDClient(config) as client:
            me = await client.get_me()
    """

    def __init__(
        self,
        config: HackMDConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.api_url,
            headers=config.get_headers(),
            transport=transport,
        )

    async def __aenter__(self) -> "HackMDClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
    ) -> Any:
        logger.debug("%s %s", method, path)
        resp = await self._client.request(method, path, json=json)
        if resp.is_error:
            raise HackMDAPIError(resp.status_code, self._error_message(resp))
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return resp.text

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        message = (
            f"Received an error response ({resp.status_code} {resp.reason_phrase}) "
            "from HackMD"
        )
        detail = ""
        try:
            body = resp.json()
        except ValueError:
            detail = resp.text.strip()
        else:
            if isinstance(body, dict):
                detail = str(body.get("message") or body.get("error") or "")
        return f"{message}: {detail}" if detail else message

    # ------------------------------------------------------------------
    # User
    # ------------------------------------------------------------------

    async def get_me(self) -> Any:
        return await self._request("GET", "/me")

    async def get_history(self) -> Any:
        return await self._request("GET", "/history")

    async def get_teams(self) -> Any:
        return await self._request("GET", "/teams")

    # ------------------------------------------------------------------
    # User notes
    # ------------------------------------------------------------------

    async def get_note_list(self) -> Any:
        return await self._request("GET", "/notes")

    async def get_note(self, note_id: str) -> Any:
        return await self._request("GET", f"/notes/{_segment(note_id)}")

    async def create_note(self, payload: dict[str, Any]) -> Any:
        return await self._request("POST", "/notes", json=payload)

    async def update_note(self, note_id: str, payload: dict[str, Any]) -> Any:
        return await self._request("PATCH", f"/notes/{_segment(note_id)}", json=payload)

    async def delete_note(self, note_id: str) -> Any:
        return await self._request("DELETE", f"/notes/{_segment(note_id)}")

    # ------------------------------------------------------------------
    # Team notes
    # ------------------------------------------------------------------

    async def get_team_notes(self, team_path: str) -> Any:
        return await self._request("GET", f"/teams/{_segment(team_path)}/notes")

    async def create_team_note(self, team_path: str, payload: dict[str, Any]) -> Any:
        return await self._request(
            "POST", f"/teams/{_segment(team_path)}/notes", json=payload
        )

    async def update_team_note(
        self, team_path: str, note_id: str, payload: dict[str, Any]
    ) -> Any:
        return await self._request(
            "PATCH",
            f"/teams/{_segment(team_path)}/notes/{_segment(note_id)}",
            json=payload,
        )

    async def delete_team_note(self, team_path: str, note_id: str) -> Any:
        return await self._request(
            "DELETE", f"/teams/{_segment(team_path)}/notes/{_segment(note_id)}"
        )
