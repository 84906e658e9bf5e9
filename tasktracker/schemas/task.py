from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator
from tasktracker import validation


def _clean_description(v):
    if v is None:
        raise ValueError("description may not be null")
    problem = validation.description_problem(v)
    if problem:
        raise ValueError(problem)
    return v.strip()

class TaskCreate(BaseModel):
    description: str
    completed: bool = False

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v):
        return _clean_description(v)

class TaskUpdate(BaseModel):
    description: Optional[str] = None
    completed: Optional[bool] = None

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v):
        return _clean_description(v)

    @field_validator("completed")
    @classmethod
    def completed_not_null(cls, v):
        if v is None:
            raise ValueError("completed may not be null")
        return v

class TaskOut(BaseModel):
    id: int
    description: str
    completed: bool
    owner_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
