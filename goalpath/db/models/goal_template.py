## Prompt templates a goal can be planned from
import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from goalpath.db.base import Base


class GoalTemplate(Base):
    __tablename__ = "goal_templates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    prompt_text: Mapped[str] = mapped_column(Text, nullable=False)  # Jinja2 source
    output_schema: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    system_msg: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
