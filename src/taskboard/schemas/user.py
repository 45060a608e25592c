from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class UserRead(BaseModel):
    id: UUID
    email: str
    user_type: str

    model_config = {"from_attributes": True}


class UserDetail(UserRead):
    created_at: datetime
    updated_at: datetime


class UpdateUserTypeRequest(BaseModel):
    user_type: str


class UpdateUserTypeResponse(BaseModel):
    message: str = "user_type updated successfully"
    user: UserDetail
