## Static plan blueprints: phases in `structure`, activities per phase
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Enum, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goalpath.db.base import Base
from goalpath.db.enums import ExpertiseLevel, GoalChannel


class PlanTemplate(Base):
    __tablename__ = "plan_templates"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    channel: Mapped[GoalChannel] = mapped_column(Enum(GoalChannel, native_enum=False, length=30), nullable=False, index=True)
    template_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("assessment_templates.id", ondelete="SET NULL"), nullable=True, index=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    min_expertise: Mapped[ExpertiseLevel] = mapped_column(Enum(ExpertiseLevel, native_enum=False, length=20), nullable=False)
    max_expertise: Mapped[ExpertiseLevel] = mapped_column(Enum(ExpertiseLevel, native_enum=False, length=20), nullable=False)
    typical_duration: Mapped[int] = mapped_column(Integer, nullable=False, default=30)  # days
    sprint_count: Mapped[int] = mapped_column(Integer, nullable=False, default=4)
    success_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    version: Mapped[str] = mapped_column(String(20), nullable=False, default="1.0.0")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    structure: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)  # {"phases": [{name, duration, focus}]}
    prerequisites: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    deliverables: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    milestones: Mapped[list | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    activities: Mapped[list["PlanActivity"]] = relationship(
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="[PlanActivity.phase, PlanActivity.order]",
    )


class PlanActivity(Base):
    __tablename__ = "plan_activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    template_id: Mapped[str] = mapped_column(String(64), ForeignKey("plan_templates.id", ondelete="CASCADE"), index=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(30), nullable=False)  # learning/setup/execution/review
    phase: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-based
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    estimated_hours: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    difficulty: Mapped[ExpertiseLevel] = mapped_column(Enum(ExpertiseLevel, native_enum=False, length=20), nullable=False)

    dependencies: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    resources: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    success_criteria: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    meta: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)  # {"domain": KnowledgeDomain}

    template: Mapped["PlanTemplate"] = relationship(back_populates="activities")
