"""Property-based tests for request validators using hypothesis."""

from datetime import UTC, datetime, timedelta, timezone
from uuid import uuid4

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from src.taskboard.schemas.auth import MIN_PASSWORD_LENGTH, RegisterRequest
from src.taskboard.schemas.task import MAX_TITLE_LENGTH, TaskCreate, TaskDetailsUpdate
from src.taskboard.schemas.team import TeamCreate

pytestmark = pytest.mark.unit

printable = st.characters(min_codepoint=33, max_codepoint=126)
whitespace = st.text(alphabet=" \t\n", max_size=3)


def field_errors(exc_info, field: str) -> bool:
    return any(error["loc"] == (field,) for error in exc_info.value.errors())


@given(password=st.text(alphabet=printable, min_size=MIN_PASSWORD_LENGTH, max_size=64))
@settings(max_examples=50)
def test_long_enough_passwords_accepted(password: str):
    request = RegisterRequest(email="a@example.com", password=password)
    assert request.password == password


@given(
    password=st.text(alphabet=printable, max_size=MIN_PASSWORD_LENGTH - 1),
    pad=whitespace,
)
def test_short_passwords_rejected_even_when_padded(password: str, pad: str):
    """Surrounding whitespace does not count towards the minimum length."""
    with pytest.raises(ValidationError) as exc_info:
        RegisterRequest(email="a@example.com", password=pad + password + pad)
    assert field_errors(exc_info, "password")


@given(local=st.from_regex(r"^[a-zA-Z][a-zA-Z0-9]{0,15}$", fullmatch=True), pad=whitespace)
def test_emails_normalized(local: str, pad: str):
    request = RegisterRequest(email=f"{pad}{local}@Example.COM{pad}", password="longenough")
    assert request.email == f"{local.lower()}@example.com"


@given(email=st.text(alphabet=printable, max_size=30).filter(lambda s: "@" not in s))
def test_emails_without_at_rejected(email: str):
    with pytest.raises(ValidationError) as exc_info:
        RegisterRequest(email=email, password="longenough")
    assert field_errors(exc_info, "email")


@given(name=st.text(alphabet=printable, min_size=1, max_size=100), pad=whitespace)
def test_team_names_trimmed(name: str, pad: str):
    assert TeamCreate(name=pad + name + pad).name == name


@given(name=whitespace)
def test_blank_team_names_rejected(name: str):
    with pytest.raises(ValidationError):
        TeamCreate(name=name)


@given(title=st.text(alphabet=printable, min_size=MAX_TITLE_LENGTH + 1, max_size=150))
def test_long_titles_rejected(title: str):
    with pytest.raises(ValidationError) as exc_info:
        TaskCreate(team_id=uuid4(), title=title, due_at=datetime.now(UTC))
    assert field_errors(exc_info, "title")


@given(offset_hours=st.integers(min_value=-12, max_value=14))
def test_due_at_normalized_to_naive_utc(offset_hours: int):
    tz = timezone(timedelta(hours=offset_hours))
    local = datetime(2030, 1, 1, 12, 0, tzinfo=tz)

    task = TaskCreate(team_id=uuid4(), title="Plan", due_at=local)

    assert task.due_at.tzinfo is None
    assert task.due_at == local.astimezone(UTC).replace(tzinfo=None)


class TestTaskDetailsUpdateEdgeCases:
    def test_empty_patch_rejected(self):
        with pytest.raises(ValidationError):
            TaskDetailsUpdate()

    def test_description_only_accepted(self):
        assert TaskDetailsUpdate(description="more detail").description == "more detail"

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            TaskDetailsUpdate(title="   ")
