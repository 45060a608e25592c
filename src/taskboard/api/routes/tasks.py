"""Task endpoints.

The static ``/reporter`` and ``/assignee`` routes are declared before
``/{task_id}`` so they are not captured by the path parameter.
"""

from uuid import UUID

from fastapi import APIRouter, Response, status

from src.taskboard.api.dependencies import CurrentIdentity, TaskServiceDep
from src.taskboard.schemas.task import (
    AssignTaskRequest,
    TaskCreate,
    TaskDetailsUpdate,
    TaskRead,
    UpdateStatusRequest,
    UserTasksResponse,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid title, or due_at less than 8 hours away"},
        403: {"description": "Reporter or assignee is not a member of the team"},
        404: {"description": "Team not found"},
    },
)
async def create_task(
    data: TaskCreate, identity: CurrentIdentity, service: TaskServiceDep
) -> TaskRead:
    """Create a task in a team. Assigned to the caller unless assignee_id is given."""
    task = await service.create_task(identity, data)
    return TaskRead.model_validate(task)


@router.get("/reporter", response_model=UserTasksResponse)
async def tasks_reported_by_me(
    identity: CurrentIdentity, service: TaskServiceDep
) -> UserTasksResponse:
    tasks = await service.list_reported(identity)
    return UserTasksResponse(
        user_id=identity.user_id, tasks=[TaskRead.model_validate(t) for t in tasks]
    )


@router.get("/assignee", response_model=UserTasksResponse)
async def tasks_assigned_to_me(
    identity: CurrentIdentity, service: TaskServiceDep
) -> UserTasksResponse:
    tasks = await service.list_assigned(identity)
    return UserTasksResponse(
        user_id=identity.user_id, tasks=[TaskRead.model_validate(t) for t in tasks]
    )


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(task_id: UUID, identity: CurrentIdentity, service: TaskServiceDep) -> TaskRead:
    task = await service.get_task(identity, task_id)
    return TaskRead.model_validate(task)


@router.patch("/{task_id}/assign", response_model=TaskRead)
async def assign_task(
    task_id: UUID,
    data: AssignTaskRequest,
    identity: CurrentIdentity,
    service: TaskServiceDep,
) -> TaskRead:
    """Reassign a task. Reporter only; the new assignee must be a team member."""
    task = await service.assign(identity, task_id, data.assignee_id)
    return TaskRead.model_validate(task)


@router.patch("/{task_id}/status", response_model=TaskRead)
async def update_task_status(
    task_id: UUID,
    data: UpdateStatusRequest,
    identity: CurrentIdentity,
    service: TaskServiceDep,
) -> TaskRead:
    """Set a task to open, in_progress, done or canceled. Assignee only."""
    task = await service.update_status(identity, task_id, data.status)
    return TaskRead.model_validate(task)


@router.patch("/{task_id}/update-details", response_model=TaskRead)
async def update_task_details(
    task_id: UUID,
    data: TaskDetailsUpdate,
    identity: CurrentIdentity,
    service: TaskServiceDep,
) -> TaskRead:
    task = await service.update_details(identity, task_id, data)
    return TaskRead.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID, identity: CurrentIdentity, service: TaskServiceDep
) -> Response:
    await service.delete(identity, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
