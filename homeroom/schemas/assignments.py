"""Request/response schemas for homework assignments."""

from datetime import date

from pydantic import AliasChoices, Field, model_validator

from homeroom.schemas.base import CamelModel

NAME_MAX_LEN = 255


class AssignmentOut(CamelModel):
    """Assignment as returned to clients."""

    id: int
    owner_id: int
    name: str
    due_date: date


class AssignmentCreate(CamelModel):
    """Body for POST /users/{id}: a new item for that student."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=NAME_MAX_LEN,
        validation_alias=AliasChoices("assignmentName", "name"),
        description="Assignment title",
    )
    due_date: date = Field(
        ...,
        validation_alias=AliasChoices("assignmentDate", "dueDate", "due_date"),
        description="Due date (YYYY-MM-DD)",
    )


class AssignmentUpdate(CamelModel):
    """Body for PATCH /assignments/{id}; omitted fields are left unchanged."""

    name: str | None = Field(
        default=None,
        min_length=1,
        max_length=NAME_MAX_LEN,
        validation_alias=AliasChoices("assignmentName", "name"),
    )
    due_date: date | None = Field(
        default=None,
        validation_alias=AliasChoices("assignmentDate", "dueDate", "due_date"),
    )

    @model_validator(mode="after")
    def require_a_field(self) -> "AssignmentUpdate":
        if self.name is None and self.due_date is None:
            raise ValueError("Provide a name or a due date to update")
        return self

    def changes(self) -> dict[str, object]:
        """Fields to write, keyed by model attribute name."""
        return self.model_dump(exclude_none=True, by_alias=False)


class AssignmentsResponse(CamelModel):
    """Response for GET /assignments: the resolved owner and their items."""

    user_id: int
    assignments: list[AssignmentOut]
