import re

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import ValidationError

from user_proxy.exceptions import ProxyError
from user_proxy.logging_config import log_structured
from user_proxy.models import User, UserList
from user_proxy.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_MAX_ID = 2**63 - 1
_MAX_ID_DIGITS = len(str(_MAX_ID))


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def parse_user_id(raw: str):
    """Parse a path id as a signed 64-bit integer, or return None."""
    if not _ID_PATTERN.fullmatch(raw):
        return None
    digits = raw.lstrip("+-").lstrip("0")
    # checked before int() so huge segments never hit the conversion limit
    if len(digits) > _MAX_ID_DIGITS:
        return None
    value = int(digits) if digits else 0
    if raw.startswith("-"):
        value = -value
    if value > _MAX_ID:
        return None
    return value


def valid_user_id(user_id: str) -> int:
    value = parse_user_id(user_id)
    if value is None or value <= 0:
        log_structured("Rejected user id", level="WARNING", user_id=user_id[:64])
        raise ProxyError(400, "Invalid ID")
    return value


async def read_user(request: Request, error: str) -> User:
    body = await request.body()
    try:
        return User.model_validate_json(body)
    except ValidationError as e:
        log_structured("Rejected request body", level="WARNING", path=request.url.path, error=str(e))
        raise ProxyError(400, error) from e


@router.get("", response_model=UserList)
async def list_users(service: UserService = Depends(get_user_service)):
    log_structured("Proxying list users request")
    return await service.list_users()


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: int = Depends(valid_user_id), service: UserService = Depends(get_user_service)):
    log_structured("Proxying get user request", user_id=user_id)
    return await service.get_user(user_id)


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(request: Request, service: UserService = Depends(get_user_service)):
    user = await read_user(request, "Invalid input data")
    log_structured("Proxying create user request", email=user.email)
    return await service.create_user(user)


@router.put("/{user_id}", response_model=User)
async def update_user(request: Request, user_id: int = Depends(valid_user_id), service: UserService = Depends(get_user_service)):
    user = await read_user(request, "Invalid input")
    log_structured("Proxying update user request", user_id=user_id)
    return await service.update_user(user_id, user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int = Depends(valid_user_id), service: UserService = Depends(get_user_service)):
    log_structured("Proxying delete user request", user_id=user_id)
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
