import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Enum, Float, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goalpath.db.base import Base
from goalpath.db.enums import GoalChannel, KnowledgeDomain, QuestionType


class AssessmentTemplate(Base):
    __tablename__ = "assessment_templates"
    __table_args__ = (UniqueConstraint("channel", "version", name="uq_assessment_template_channel_version"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    channel: Mapped[GoalChannel] = mapped_column(Enum(GoalChannel, native_enum=False, length=30), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    version: Mapped[str] = mapped_column(String(20), nullable=False, default="1.0.0")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    min_questions: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    max_questions: Mapped[int] = mapped_column(Integer, nullable=False, default=20)
    time_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    passing_score: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    questions: Mapped[list["AssessmentQuestion"]] = relationship(
        back_populates="template", cascade="all, delete-orphan", order_by="AssessmentQuestion.order"
    )


class AssessmentQuestion(Base):
    __tablename__ = "assessment_questions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    template_id: Mapped[str] = mapped_column(String(64), ForeignKey("assessment_templates.id", ondelete="CASCADE"), index=True)

    domain: Mapped[KnowledgeDomain] = mapped_column(Enum(KnowledgeDomain, native_enum=False, length=40), nullable=False)
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    question_type: Mapped[QuestionType] = mapped_column(Enum(QuestionType, native_enum=False, length=20), nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)

    options: Mapped[list | None] = mapped_column(JSON, nullable=True)
    validation_rules: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    help_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    depends_on: Mapped[str | None] = mapped_column(String(64), nullable=True)
    depends_on_answer: Mapped[dict | list | str | None] = mapped_column(JSON, nullable=True)
    meta: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)

    template: Mapped["AssessmentTemplate"] = relationship(back_populates="questions")
    scoring_rules: Mapped[list["QuestionScoringRule"]] = relationship(
        back_populates="question", cascade="all, delete-orphan"
    )


class QuestionScoringRule(Base):
    __tablename__ = "question_scoring_rules"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    question_id: Mapped[str] = mapped_column(String(64), ForeignKey("assessment_questions.id", ondelete="CASCADE"), index=True)

    # {"type": "scale", "value": {"min": 1, "max": 3}} or {"type": "choice", "value": "None"}
    condition: Mapped[dict] = mapped_column(JSON, nullable=False)
    score: Mapped[float] = mapped_column(Float, nullable=False)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)

    question: Mapped["AssessmentQuestion"] = relationship(back_populates="scoring_rules")
