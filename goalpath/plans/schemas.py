import uuid
from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from goalpath.db.enums import ExpertiseLevel, PlanStatus


class PlanCreate(BaseModel):
    goal_id: uuid.UUID
    assessment_id: uuid.UUID
    template_id: str = Field(min_length=1)


class PlanAction(BaseModel):
    action: Literal["approve", "abandon", "execute"]


class PlanItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    parent_id: Optional[uuid.UUID] = None
    type: str
    name: str
    description: Optional[str] = None
    phase: int
    order: int
    estimated_hours: float
    difficulty: ExpertiseLevel
    status: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    metadata: Optional[dict] = Field(default=None, validation_alias="meta")
    dependencies: List[str] = []


class PlanOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    assessment_id: uuid.UUID
    template_id: Optional[str] = None
    goal_id: uuid.UUID
    name: str
    description: Optional[str] = None
    status: PlanStatus
    adjusted_for_user: bool
    estimated_hours: Optional[float] = None
    success_probability: Optional[float] = None
    risk_factors: Any = None
    adaptations: Any = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[uuid.UUID] = None
    executed_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class PlanDetailOut(PlanOut):
    items: List[PlanItemOut] = []
