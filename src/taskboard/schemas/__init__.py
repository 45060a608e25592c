from src.taskboard.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LogoutAllResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    SessionUser,
)
from src.taskboard.schemas.task import (
    AssignTaskRequest,
    TaskCreate,
    TaskDetailsUpdate,
    TaskRead,
    TeamTasksResponse,
    UpdateStatusRequest,
    UserTasksResponse,
)
from src.taskboard.schemas.team import (
    AddMemberRequest,
    AddMemberResponse,
    MyTeamsResponse,
    TeamCreate,
    TeamMemberRead,
    TeamMembersResponse,
    TeamRead,
)
from src.taskboard.schemas.user import (
    UpdateUserTypeRequest,
    UpdateUserTypeResponse,
    UserDetail,
    UserRead,
)

__all__ = [
    # Auth
    "LoginRequest",
    "LoginResponse",
    "LogoutAllResponse",
    "MessageResponse",
    "RegisterRequest",
    "RegisterResponse",
    "SessionUser",
    # Tasks
    "AssignTaskRequest",
    "TaskCreate",
    "TaskDetailsUpdate",
    "TaskRead",
    "TeamTasksResponse",
    "UpdateStatusRequest",
    "UserTasksResponse",
    # Teams
    "AddMemberRequest",
    "AddMemberResponse",
    "MyTeamsResponse",
    "TeamCreate",
    "TeamMemberRead",
    "TeamMembersResponse",
    "TeamRead",
    # Users
    "UpdateUserTypeRequest",
    "UpdateUserTypeResponse",
    "UserDetail",
    "UserRead",
]
