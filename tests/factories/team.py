"""Team, membership and task factories."""

from datetime import timedelta

from polyfactory import Use

from src.taskboard.models import Task, TaskStatus, Team, TeamMember, TeamRole
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class TeamFactory(BaseFactory):
    __model__ = Team

    id = Use(generate_uuid)
    name = Use(lambda: f"Team {generate_uuid().hex[-6:]}")
    owner_id = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class TeamMemberFactory(BaseFactory):
    __model__ = TeamMember

    # FK fields - must be set explicitly
    team_id = None
    user_id = None
    role = TeamRole.MEMBER.value
    created_at = Use(utc_now)

    @classmethod
    def owner(cls, **kwargs):
        return cls.build(role=TeamRole.OWNER.value, **kwargs)


class TaskFactory(BaseFactory):
    __model__ = Task

    id = Use(generate_uuid)
    team_id = None
    reporter_id = None
    assignee_id = None
    title = Use(lambda: f"Task {generate_uuid().hex[-6:]}")
    description = None
    due_at = Use(lambda: utc_now() + timedelta(days=2))
    reminder_sent_at = None
    status = TaskStatus.OPEN.value
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
