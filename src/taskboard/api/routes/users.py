"""User directory endpoints."""

from fastapi import APIRouter

from src.taskboard.api.dependencies import CurrentIdentity, UserServiceDep
from src.taskboard.schemas.user import UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserRead])
async def list_users(identity: CurrentIdentity, service: UserServiceDep) -> list[UserRead]:
    """List all users, for picking assignees and team members."""
    users = await service.list_users()
    return [UserRead.model_validate(u) for u in users]
