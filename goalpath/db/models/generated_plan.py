import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Enum, Float, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goalpath.db.base import Base
from goalpath.db.enums import ExpertiseLevel, PlanStatus


class GeneratedPlan(Base):
    __tablename__ = "generated_plans"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    assessment_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("knowledge_assessments.id", ondelete="CASCADE"), index=True)
    # None when the plan was produced without a template
    template_id: Mapped[str | None] = mapped_column(String(64), ForeignKey("plan_templates.id", ondelete="SET NULL"), nullable=True)
    goal_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("goals.id", ondelete="CASCADE"), index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[PlanStatus] = mapped_column(Enum(PlanStatus, native_enum=False, length=20), nullable=False, default=PlanStatus.DRAFT)
    adjusted_for_user: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    estimated_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    success_probability: Mapped[float | None] = mapped_column(Float, nullable=True)
    risk_factors: Mapped[list | dict | None] = mapped_column(JSON, nullable=True)
    adaptations: Mapped[list | dict | None] = mapped_column(JSON, nullable=True)

    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    executed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    assessment: Mapped["KnowledgeAssessment"] = relationship(back_populates="plans")
    template: Mapped["PlanTemplate | None"] = relationship()
    items: Mapped[list["GeneratedPlanItem"]] = relationship(
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="[GeneratedPlanItem.phase, GeneratedPlanItem.order, GeneratedPlanItem.created_at]",
    )


class GeneratedPlanItem(Base):
    __tablename__ = "generated_plan_items"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    plan_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("generated_plans.id", ondelete="CASCADE"), index=True)
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("generated_plan_items.id", ondelete="SET NULL"), nullable=True
    )

    type: Mapped[str] = mapped_column(String(20), nullable=False)  # sprint/issue
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    phase: Mapped[int] = mapped_column(Integer, nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    estimated_hours: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    difficulty: Mapped[ExpertiseLevel] = mapped_column(Enum(ExpertiseLevel, native_enum=False, length=20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")

    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    meta: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)
    dependencies: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    plan: Mapped["GeneratedPlan"] = relationship(back_populates="items")
