"""
Async HTTP client for the HearMe backend.
"""
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from .config import BackendConfig

logger = logging.getLogger(__name__)


class BackendClient:
    """Thin aiohttp wrapper around the /api endpoints."""

    def __init__(self, base_url: str = "http://localhost:4000", user_id: str = "student1",
                 timeout_s: float = 5.0):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.timeout = aiohttp.ClientTimeout(total=timeout_s)
        self._session: Optional[aiohttp.ClientSession] = None

    @classmethod
    def from_config(cls, cfg: BackendConfig) -> "BackendClient":
        return cls(base_url=cfg.base_url, user_id=cfg.user_id, timeout_s=cfg.timeout_s)

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        session = self._get_session()
        async with session.post(f"{self.base_url}{path}", json=payload) as response:
            response.raise_for_status()
            return await response.json()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        session = self._get_session()
        async with session.get(f"{self.base_url}{path}", params=params) as response:
            response.raise_for_status()
            return await response.json()

    async def submit_log(self, log_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Store a generic log record (speech, gesture, ...)."""
        return await self._post("/api/logs", {
            "type": log_type,
            "data": data,
            "userId": self.user_id,
        })

    async def send_sos(self, location: str = "Unknown", message: str = "SOS") -> Dict[str, Any]:
        return await self._post("/api/sos", {
            "userId": self.user_id,
            "location": location,
            "message": message,
        })

    async def translate(self, text: str, target: str = "en") -> str:
        data = await self._post("/api/translate", {
            "text": text,
            "target": target,
            "userId": self.user_id,
        })
        return data.get("translatedText", "")

    async def health(self) -> Dict[str, Any]:
        return await self._get("/api/health")

    async def recent_logs(self, limit: int = 50) -> List[Dict[str, Any]]:
        return await self._get("/api/logs", params={"limit": limit})

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
