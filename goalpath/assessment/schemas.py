import uuid
from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from goalpath.db.enums import AssessmentStatus, ExpertiseLevel, GoalChannel, KnowledgeDomain, QuestionType


class AssessmentCreate(BaseModel):
    goal_id: uuid.UUID


class AssessmentAction(BaseModel):
    action: Literal["start", "complete"]


class ResponseCreate(BaseModel):
    question_id: str = Field(min_length=1)
    answer: Any = None
    time_spent: Optional[int] = Field(default=None, ge=0)
    confidence: Optional[float] = Field(default=None, ge=0, le=1)


class TemplateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    channel: GoalChannel
    description: Optional[str] = None
    version: str
    min_questions: int
    max_questions: int
    time_limit: Optional[int] = None
    passing_score: Optional[float] = None


class QuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    domain: KnowledgeDomain
    question_text: str
    question_type: QuestionType
    is_required: bool
    order: int
    weight: float
    options: Optional[list] = None
    validation_rules: Optional[dict] = None
    help_text: Optional[str] = None
    depends_on: Optional[str] = None
    depends_on_answer: Any = None


class ResponseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    question_id: str
    answer: Any = None
    score: Optional[float] = None
    time_spent: Optional[int] = None
    confidence: Optional[float] = None
    created_at: datetime


class DomainExpertiseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    domain: KnowledgeDomain
    level: ExpertiseLevel
    score: float
    confidence: float
    details: Optional[dict] = None


class RecommendationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    domain: KnowledgeDomain
    type: str
    title: str
    description: str
    priority: int
    url: Optional[str] = None
    estimated_time: Optional[int] = None
    metadata: Optional[dict] = Field(default=None, validation_alias="meta")


class AssessmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    goal_id: uuid.UUID
    user_id: uuid.UUID
    channel: GoalChannel
    status: AssessmentStatus
    overall_level: ExpertiseLevel
    score: Optional[float] = None
    confidence: Optional[float] = None
    time_spent: Optional[int] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class AssessmentDetailOut(AssessmentOut):
    is_expired: bool = False
    domain_scores: List[DomainExpertiseOut] = []
    recommendations: List[RecommendationOut] = []


class ProgressOut(BaseModel):
    total_questions: int
    answered_questions: int
    percent_complete: float
    estimated_time_remaining: int


class PlanActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    description: Optional[str] = None
    type: str
    phase: int
    order: int
    estimated_hours: float
    difficulty: ExpertiseLevel


class PlanTemplateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    channel: GoalChannel
    description: Optional[str] = None
    min_expertise: ExpertiseLevel
    max_expertise: ExpertiseLevel
    typical_duration: int
    sprint_count: int
    success_rate: Optional[float] = None
    structure: dict
    prerequisites: Optional[dict] = None
    deliverables: Optional[dict] = None
    milestones: Optional[list] = None
    activities: List[PlanActivityOut] = []
