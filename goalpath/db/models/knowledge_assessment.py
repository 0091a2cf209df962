import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, Float, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goalpath.db.base import Base
from goalpath.db.enums import AssessmentStatus, ExpertiseLevel, GoalChannel, KnowledgeDomain


class KnowledgeAssessment(Base):
    __tablename__ = "knowledge_assessments"
    __table_args__ = (UniqueConstraint("goal_id", "user_id", name="uq_assessment_goal_user"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    goal_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("goals.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), index=True)
    channel: Mapped[GoalChannel] = mapped_column(Enum(GoalChannel, native_enum=False, length=30), nullable=False)

    status: Mapped[AssessmentStatus] = mapped_column(
        Enum(AssessmentStatus, native_enum=False, length=20), nullable=False, default=AssessmentStatus.NOT_STARTED
    )
    overall_level: Mapped[ExpertiseLevel] = mapped_column(
        Enum(ExpertiseLevel, native_enum=False, length=20), nullable=False, default=ExpertiseLevel.BEGINNER
    )
    score: Mapped[float | None] = mapped_column(Float, nullable=True)
    confidence: Mapped[float | None] = mapped_column(Float, nullable=True)
    time_spent: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds

    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    goal: Mapped["Goal"] = relationship(back_populates="assessments")
    responses: Mapped[list["AssessmentResponse"]] = relationship(
        back_populates="assessment", cascade="all, delete-orphan", order_by="AssessmentResponse.created_at"
    )
    domain_scores: Mapped[list["DomainExpertise"]] = relationship(back_populates="assessment", cascade="all, delete-orphan")
    recommendations: Mapped[list["AssessmentRecommendation"]] = relationship(
        back_populates="assessment", cascade="all, delete-orphan", order_by="AssessmentRecommendation.priority"
    )
    plans: Mapped[list["GeneratedPlan"]] = relationship(back_populates="assessment", cascade="all, delete-orphan")


class AssessmentResponse(Base):
    __tablename__ = "assessment_responses"
    __table_args__ = (UniqueConstraint("assessment_id", "question_id", name="uq_response_assessment_question"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    assessment_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("knowledge_assessments.id", ondelete="CASCADE"), index=True)
    question_id: Mapped[str] = mapped_column(String(64), ForeignKey("assessment_questions.id", ondelete="CASCADE"), index=True)

    answer: Mapped[dict | list | str | int | float | bool | None] = mapped_column(JSON, nullable=True)
    score: Mapped[float | None] = mapped_column(Float, nullable=True)
    time_spent: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    confidence: Mapped[float | None] = mapped_column(Float, nullable=True)  # 0..1, self-reported

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    assessment: Mapped["KnowledgeAssessment"] = relationship(back_populates="responses")
    question: Mapped["AssessmentQuestion"] = relationship()


class DomainExpertise(Base):
    __tablename__ = "domain_expertise"
    __table_args__ = (UniqueConstraint("assessment_id", "domain", name="uq_domain_expertise_assessment_domain"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    assessment_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("knowledge_assessments.id", ondelete="CASCADE"), index=True)

    domain: Mapped[KnowledgeDomain] = mapped_column(Enum(KnowledgeDomain, native_enum=False, length=40), nullable=False)
    level: Mapped[ExpertiseLevel] = mapped_column(Enum(ExpertiseLevel, native_enum=False, length=20), nullable=False)
    score: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    confidence: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    details: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    assessment: Mapped["KnowledgeAssessment"] = relationship(back_populates="domain_scores")


class AssessmentRecommendation(Base):
    __tablename__ = "assessment_recommendations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    assessment_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("knowledge_assessments.id", ondelete="CASCADE"), index=True)

    domain: Mapped[KnowledgeDomain] = mapped_column(Enum(KnowledgeDomain, native_enum=False, length=40), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)  # learning/tool/resource/practice
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    estimated_time: Mapped[int | None] = mapped_column(Integer, nullable=True)  # hours
    meta: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)

    assessment: Mapped["KnowledgeAssessment"] = relationship(back_populates="recommendations")
