import logging

from goalpath.db.base import Base
from goalpath.db.session import engine

# Registering every model on Base.metadata also lets string relationships resolve
from goalpath.db.models.user import User  # noqa: F401
from goalpath.db.models.session_token import SessionToken  # noqa: F401
from goalpath.db.models.project import Project  # noqa: F401
from goalpath.db.models.goal_template import GoalTemplate  # noqa: F401
from goalpath.db.models.goal import Goal  # noqa: F401
from goalpath.db.models.assessment_template import AssessmentQuestion, AssessmentTemplate, QuestionScoringRule  # noqa: F401
from goalpath.db.models.knowledge_assessment import (  # noqa: F401
    AssessmentRecommendation,
    AssessmentResponse,
    DomainExpertise,
    KnowledgeAssessment,
)
from goalpath.db.models.plan_template import PlanActivity, PlanTemplate  # noqa: F401
from goalpath.db.models.generated_plan import GeneratedPlan, GeneratedPlanItem  # noqa: F401
from goalpath.db.models.roadmap import Issue, Roadmap, Sprint  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(bind=None) -> None:
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database schema ready")
