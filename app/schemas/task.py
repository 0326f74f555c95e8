# app/schemas/task.py
from pydantic import BaseModel, Field, field_validator
from datetime import datetime

class TaskRequest(BaseModel):
    """Body of POST /tasks"""
    user_id: int
    title: str = Field(min_length=1)
    description: str = ""

    @field_validator("title")
    @classmethod
    def title_must_not_be_blank(cls, v):
        if not v.strip():
            raise ValueError("title is required")
        return v

class TaskUpdateRequest(BaseModel):
    """Body of PUT /task/{id}"""
    title: str = ""
    description: str = ""
    status: str = ""

class TaskCreate(BaseModel):
    user_id: int
    title: str
    description: str = ""

class TaskUpdate(BaseModel):
    # user_id and created_at cannot be changed after creation
    id: int
    title: str
    description: str = ""
    status: str

class TaskOut(BaseModel):
    id: int
    user_id: int
    title: str
    description: str
    status: str
    created_at: datetime

    model_config = {
        "from_attributes": True
    }
