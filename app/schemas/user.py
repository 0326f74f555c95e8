# app/schemas/user.py
from pydantic import BaseModel, Field
from datetime import datetime

class UserRequest(BaseModel):
    """Body of POST /users and PUT /user/{id}"""
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

class UserCreate(BaseModel):
    username: str
    password: str

class UserUpdate(BaseModel):
    id: int
    username: str
    password: str

class UserOut(BaseModel):
    id: int
    username: str
    password: str
    created_at: datetime

    model_config = {
        "from_attributes": True
    }
