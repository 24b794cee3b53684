from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional


class TaskBase(BaseModel):
    title: str = Field(..., min_length=1, description="Task title")
    description: Optional[str] = Field(None, description="Task description, null when absent")
    is_completed: bool = Field(default=False, description="Task completion status")


class CreateTaskInput(TaskBase):
    """Input of the createTask procedure"""
    pass


class TaskIdInput(BaseModel):
    id: int


class GetTaskInput(TaskIdInput):
    """Input of the getTask procedure"""
    pass


class DeleteTaskInput(TaskIdInput):
    """Input of the deleteTask procedure"""
    pass


class TaskUpdate(BaseModel):
    """Fields to change on a task - all optional.

    Only fields that were explicitly supplied are applied, so
    ``description=None`` clears the description while an omitted
    description keeps the stored one.
    """
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    is_completed: Optional[bool] = None

    @field_validator('title', 'is_completed')
    @classmethod
    def not_null_when_given(cls, v):
        """Title and completion may be omitted but never set to null"""
        if v is None:
            raise ValueError('Field may be omitted but cannot be null')
        return v

    def changes(self) -> dict:
        """Fields explicitly supplied by the caller"""
        return self.model_dump(exclude_unset=True, exclude={'id'})


class UpdateTaskInput(TaskUpdate):
    """Input of the updateTask procedure"""
    id: int


class Task(TaskBase):
    """Schema for returning a task"""
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
