import os
from typing import List

from pydantic import BaseModel, Field

# =========================
# 🌍 ENVIRONMENT CONFIG
# =========================
DEFAULT_UPSTREAM_USERS_URL = "https://reqres.in/api/users"


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseModel):
    upstream_users_url: str = DEFAULT_UPSTREAM_USERS_URL
    request_timeout: float = Field(10.0, gt=0)
    environment: str = "development"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def users_url(self) -> str:
        return self.upstream_users_url.rstrip("/")

    def user_url(self, user_id) -> str:
        return f"{self.users_url}/{user_id}"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            upstream_users_url=os.getenv("UPSTREAM_USERS_URL", DEFAULT_UPSTREAM_USERS_URL),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "10")),
            environment=os.getenv("ENVIRONMENT", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=_split(os.getenv("CORS_ORIGINS", "*")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
        )
