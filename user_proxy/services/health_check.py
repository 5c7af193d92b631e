from datetime import datetime, timezone

import httpx

from user_proxy.config import Settings
from user_proxy.http_client import HttpClient
from user_proxy.logging_config import SERVICE_NAME, log_structured


async def check_upstream_health(http_client: HttpClient, settings: Settings) -> bool:
    try:
        response = await http_client.request("GET", settings.users_url)
        return response.status_code == 200
    except (httpx.HTTPError, RuntimeError) as e:
        log_structured("Upstream health check failed", level="WARNING", error=str(e))
        return False


async def check_services_health(http_client: HttpClient, settings: Settings):
    upstream = await check_upstream_health(http_client, settings)
    return {
        "status": "healthy" if upstream else "degraded",
        "service": SERVICE_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "upstream": upstream,
    }
