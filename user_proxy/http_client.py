import httpx
from typing import Optional

from user_proxy.logging_config import log_structured


class HttpClient:
    """Shared outbound client, opened at startup and reused by every request."""

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout
        self.client: Optional[httpx.AsyncClient] = None

    async def start(self):
        self.client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
        log_structured("HTTP client initialized", timeout=self.timeout)

    async def stop(self):
        if self.client:
            try:
                await self.client.aclose()
                log_structured("HTTP client closed")
            except Exception as e:
                log_structured("HTTP client close failed", level="ERROR", error=str(e))
            finally:
                self.client = None

    async def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        if not self.client:
            raise RuntimeError("HTTP client not initialized.")
        return await self.client.request(method, url, **kwargs)
