from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Any, List, Optional
from ..utils.coercion import normalize_completed


class TaskCreate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field("", max_length=1000)
    due_date: Optional[str] = Field(None, alias="dueDate")

    model_config = ConfigDict(populate_by_name=True)


class TaskUpdate(BaseModel):
    """Partial update. Only keys sent by the client count as "set"."""

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    completed: Any = None
    due_date: Optional[str] = Field(None, alias="dueDate")

    model_config = ConfigDict(populate_by_name=True)


class TaskResponse(BaseModel):
    id: int
    title: str
    description: str
    completed: bool
    due_date: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("due_date", "dueDate"),
        serialization_alias="dueDate",
    )
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
    )

    model_config = ConfigDict(from_attributes=True)

    @field_validator("completed", mode="before")
    @classmethod
    def coerce_completed(cls, value):
        return normalize_completed(value)

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, value):
        return value if value is not None else ""


class TaskListResponse(BaseModel):
    success: bool = True
    data: List[TaskResponse]


class TaskEnvelope(BaseModel):
    success: bool = True
    data: TaskResponse


class TaskDeleteResponse(BaseModel):
    success: bool = True
    message: str = "Task deleted"
    data: TaskResponse
