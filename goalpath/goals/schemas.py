import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from goalpath.db.enums import GoalChannel


class GoalCreate(BaseModel):
    project_id: uuid.UUID
    title: str = Field(min_length=1, max_length=200)
    niche: Optional[str] = None
    channel: GoalChannel
    description: Optional[str] = None
    timebox_days: int = Field(default=30, ge=1)
    budget_usd: int = Field(default=0, ge=0)
    success_metric: str = "$50 net"
    constraints: List[str] = []
    revenue: List[str] = []
    deliverables: List[str] = []
    audience_json: Optional[dict] = None
    profile_json: Optional[dict] = None
    template_id: Optional[uuid.UUID] = None


class GoalUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    niche: Optional[str] = None
    channel: Optional[GoalChannel] = None
    description: Optional[str] = None
    timebox_days: Optional[int] = Field(default=None, ge=1)
    budget_usd: Optional[int] = Field(default=None, ge=0)
    success_metric: Optional[str] = None
    constraints: Optional[List[str]] = None
    revenue: Optional[List[str]] = None
    deliverables: Optional[List[str]] = None
    audience_json: Optional[dict] = None
    profile_json: Optional[dict] = None
    template_id: Optional[uuid.UUID] = None


class GoalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    template_id: Optional[uuid.UUID] = None
    active_plan_id: Optional[uuid.UUID] = None
    created_by: uuid.UUID
    title: str
    niche: Optional[str] = None
    channel: GoalChannel
    description: Optional[str] = None
    timebox_days: int
    budget_usd: int
    success_metric: str
    constraints: List[str]
    revenue: List[str]
    deliverables: List[str]
    audience_json: Optional[dict] = None
    profile_json: Optional[dict] = None
    created_at: datetime
    updated_at: datetime


class GoalPromptOut(BaseModel):
    template_id: uuid.UUID
    template_name: str
    system_msg: Optional[str] = None
    prompt: str
    output_schema: dict
