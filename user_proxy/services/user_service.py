"""Translation between the inbound user endpoints and the upstream users API.

Each public coroutine performs exactly one upstream call and either returns a
model for the caller or raises :class:`ProxyError` carrying the status code and
error envelope the caller should see. Nothing is retried.
"""
from typing import List

import httpx
from pydantic import ValidationError

from user_proxy.config import Settings
from user_proxy.exceptions import ProxyError
from user_proxy.http_client import HttpClient
from user_proxy.logging_config import log_structured
from user_proxy.metrics import UPSTREAM_CALLS
from user_proxy.models import UpstreamUser, User, UserList


def dump_response(response: httpx.Response) -> str:
    """Render an upstream response the way it came over the wire: status line, headers, body."""
    lines = [f"{response.http_version} {response.status_code} {response.reason_phrase}"]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    return "\r\n".join(lines) + "\r\n\r\n" + response.text


class UserService:
    def __init__(self, http_client: HttpClient, settings: Settings):
        self.http_client = http_client
        self.settings = settings

    async def _call(self, method: str, url: str, failure: str, **kwargs) -> httpx.Response:
        try:
            response = await self.http_client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            UPSTREAM_CALLS.labels(method=method, outcome="error").inc()
            log_structured("Upstream request failed", level="ERROR", method=method, url=url, error=str(e))
            raise ProxyError(500, failure) from e

        UPSTREAM_CALLS.labels(method=method, outcome=f"{response.status_code // 100}xx").inc()
        return response

    async def list_users(self) -> UserList:
        response = await self._call("GET", self.settings.users_url, "Failed to fetch data")
        try:
            return UserList.model_validate_json(response.content)
        except ValidationError as e:
            log_structured("Upstream user list unparsable", level="ERROR", status=response.status_code, error=str(e))
            raise ProxyError(500, "Failed to parse data") from e

    async def get_user(self, user_id: int) -> User:
        # upstream has no single-item fetch in use, so scan the collection
        users = await self.list_users()
        user = find_user(users.data, user_id)
        if user is None:
            log_structured("User not found", level="WARNING", user_id=user_id)
            raise ProxyError(404, "User not found")
        return user

    async def create_user(self, user: User) -> User:
        response = await self._call(
            "POST",
            self.settings.users_url,
            "Failed to send request",
            json=user.model_dump(),
        )

        if response.status_code != 201:
            log_structured("Create user rejected upstream", level="ERROR", status=response.status_code)
            raise ProxyError(response.status_code, "Failed to create user", details=dump_response(response))

        try:
            return UpstreamUser.model_validate_json(response.content)
        except ValidationError as e:
            log_structured("Created user unparsable", level="ERROR", error=str(e))
            raise ProxyError(500, "Failed to unmarshal response") from e

    async def update_user(self, user_id: int, user: User) -> User:
        response = await self._call(
            "PUT",
            self.settings.user_url(user_id),
            "Failed to update user",
            json=user.model_dump(),
        )

        if response.status_code != 200:
            log_structured("Update user rejected upstream", level="ERROR", status=response.status_code, user_id=user_id)
            raise ProxyError(500, "Failed to update user")

        try:
            return UpstreamUser.model_validate_json(response.content)
        except ValidationError as e:
            log_structured("Updated user unparsable", level="ERROR", error=str(e), user_id=user_id)
            raise ProxyError(500, "Failed to parse response") from e

    async def delete_user(self, user_id: int) -> None:
        response = await self._call("DELETE", self.settings.user_url(user_id), "Failed to send request")

        if response.status_code == 404:
            log_structured("Delete user not found upstream", level="WARNING", user_id=user_id)
            raise ProxyError(404, "User not found")

        if response.status_code not in (200, 204):
            log_structured("Delete user rejected upstream", level="ERROR", status=response.status_code, user_id=user_id)
            raise ProxyError(500, "Failed to delete user")


def find_user(users: List[User], user_id: int):
    for user in users:
        if user.id == user_id:
            return user
    return None
