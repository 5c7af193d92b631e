from typing import List, Optional

from pydantic import BaseModel


class User(BaseModel):
    id: int = 0
    email: str


class UpstreamUser(User):
    """A user as the upstream reports it; absent fields decode to zero values."""

    email: str = ""


class UserList(BaseModel):
    data: List[UpstreamUser]


class ErrorEnvelope(BaseModel):
    error: str
    details: Optional[str] = None
