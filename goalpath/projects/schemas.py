import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    key: str = Field(min_length=1, max_length=20)
    description: Optional[str] = None
    default_assignee: Optional[str] = None
    image_url: Optional[str] = None


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    key: Optional[str] = Field(default=None, min_length=1, max_length=20)
    description: Optional[str] = None
    default_assignee: Optional[str] = None
    image_url: Optional[str] = None


class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    key: str
    description: Optional[str] = None
    default_assignee: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
