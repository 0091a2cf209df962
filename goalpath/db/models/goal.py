import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goalpath.db.base import Base
from goalpath.db.enums import GoalChannel


class Goal(Base):
    __tablename__ = "goals"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), index=True)
    template_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("goal_templates.id", ondelete="SET NULL"), nullable=True)
    # no FK: generated_plans already references goals
    active_plan_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    created_by: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), index=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    niche: Mapped[str | None] = mapped_column(String(200), nullable=True)
    channel: Mapped[GoalChannel] = mapped_column(Enum(GoalChannel, native_enum=False, length=30), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    timebox_days: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    budget_usd: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    success_metric: Mapped[str] = mapped_column(String(200), nullable=False, default="$50 net")

    constraints: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    revenue: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    deliverables: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    audience_json: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    profile_json: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    project: Mapped["Project"] = relationship(back_populates="goals")
    template: Mapped["GoalTemplate | None"] = relationship()
    assessments: Mapped[list["KnowledgeAssessment"]] = relationship(back_populates="goal", cascade="all, delete-orphan")
    roadmap: Mapped["Roadmap | None"] = relationship(back_populates="goal", cascade="all, delete-orphan", uselist=False)
