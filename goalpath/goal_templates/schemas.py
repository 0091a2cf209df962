import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GoalTemplateCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    prompt_text: str = Field(min_length=1)
    output_schema: dict
    system_msg: Optional[str] = None


class GoalTemplateUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    prompt_text: Optional[str] = Field(default=None, min_length=1)
    output_schema: Optional[dict] = None
    system_msg: Optional[str] = None


class GoalTemplateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    prompt_text: str
    output_schema: dict
    system_msg: Optional[str] = None
    created_at: datetime
    updated_at: datetime
