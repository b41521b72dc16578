import asyncio
from typing import List, Optional
import aiohttp

NETWORK_ERROR = "NETWORK_ERROR"

class ApiError(Exception):
    def __init__(self, status_code: int, code: str, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message

# Thin async client for the message service
class ApiClient:
    def __init__(self, base_url: str = "", session: Optional[aiohttp.ClientSession] = None):
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _request(self, method: str, endpoint: str, payload: Optional[dict] = None) -> dict:
        url = f"{self.base_url}{endpoint}"
        session = self._get_session()
        try:
            async with session.request(
                method, url, json=payload, headers={"Content-Type": "application/json"}
            ) as resp:
                data = await resp.json(content_type=None)
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise ApiError(0, NETWORK_ERROR, "Network request failed") from e

        if status >= 400:
            data = data if isinstance(data, dict) else {}
            raise ApiError(status, data.get("code", ""), data.get("error", ""))

        return data

    async def get_messages(self) -> List[dict]:
        data = await self._request("GET", "/api/messages")
        return data["messages"]

    async def create_message(self, content: str) -> dict:
        data = await self._request("POST", "/api/messages", {"content": content})
        return data["message"]
