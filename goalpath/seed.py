"""Load the assessment, plan and goal template catalogue.

Run with ``python -m goalpath.seed``. Safe to re-run: templates and questions
are upserted by id (goal templates by name), and scoring rules and plan
activities are replaced wholesale for every seeded question and plan template.
"""
import logging

from sqlalchemy.orm import Session

from goalpath.db.init_db import init_db
from goalpath.db.models.assessment_template import AssessmentQuestion, AssessmentTemplate, QuestionScoringRule
from goalpath.db.models.goal_template import GoalTemplate
from goalpath.db.models.plan_template import PlanActivity, PlanTemplate
from goalpath.db.session import SessionLocal
from goalpath import seed_data

logger = logging.getLogger(__name__)


def _upsert(db: Session, model, key: str, data: dict):
    row = db.query(model).filter(getattr(model, key) == data[key]).first()
    if row is None:
        row = model(**data)
        db.add(row)
    else:
        for field, value in data.items():
            setattr(row, field, value)
    return row


def seed(db: Session) -> dict:
    for data in seed_data.ASSESSMENT_TEMPLATES:
        _upsert(db, AssessmentTemplate, "id", data)
    db.flush()

    for data in seed_data.QUESTIONS:
        question = _upsert(db, AssessmentQuestion, "id", {"is_required": True, **data})
        question.scoring_rules.clear()
    db.flush()

    for rule in seed_data.SCORING_RULES:
        db.add(QuestionScoringRule(**rule))

    for data in seed_data.PLAN_TEMPLATES:
        template = _upsert(db, PlanTemplate, "id", data)
        template.activities.clear()
    db.flush()

    for activity in seed_data.PLAN_ACTIVITIES:
        db.add(PlanActivity(**activity))

    for data in seed_data.GOAL_TEMPLATES:
        _upsert(db, GoalTemplate, "name", data)

    db.commit()
    counts = {
        "assessment_templates": len(seed_data.ASSESSMENT_TEMPLATES),
        "questions": len(seed_data.QUESTIONS),
        "scoring_rules": len(seed_data.SCORING_RULES),
        "plan_templates": len(seed_data.PLAN_TEMPLATES),
        "plan_activities": len(seed_data.PLAN_ACTIVITIES),
        "goal_templates": len(seed_data.GOAL_TEMPLATES),
    }
    logger.info("Seeded catalogue: %s", counts)
    return counts


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    init_db()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
