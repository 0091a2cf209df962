## Assessment lifecycle: create, start, answer, complete, reset
import logging
import uuid
from datetime import timedelta
from typing import Any

from sqlalchemy.orm import Session

from goalpath.assessment.scoring import (
    AssessmentResult,
    InvalidAnswer,
    calculate_domain_score,
    calculate_overall_assessment,
    calculate_question_score,
    validate_answer,
)
from goalpath.db.enums import AssessmentStatus, ExpertiseLevel, level_rank
from goalpath.db.models.assessment_template import AssessmentQuestion, AssessmentTemplate
from goalpath.db.models.goal import Goal
from goalpath.db.models.knowledge_assessment import (
    AssessmentRecommendation,
    AssessmentResponse,
    DomainExpertise,
    KnowledgeAssessment,
)
from goalpath.db.models.plan_template import PlanTemplate
from goalpath.errors import BadRequest, NotFound
from goalpath.settings import settings
from goalpath.utils import as_utc, utcnow

logger = logging.getLogger(__name__)


def _version_key(version: str) -> tuple:
    parts = []
    for piece in (version or "").split("."):
        parts.append(int(piece) if piece.isdigit() else 0)
    return tuple(parts)


def get_or_create_assessment(db: Session, goal: Goal, user_id: uuid.UUID) -> KnowledgeAssessment:
    existing = (
        db.query(KnowledgeAssessment)
        .filter(KnowledgeAssessment.goal_id == goal.id, KnowledgeAssessment.user_id == user_id)
        .first()
    )
    if existing:
        return existing

    assessment = KnowledgeAssessment(
        goal_id=goal.id,
        user_id=user_id,
        channel=goal.channel,
        status=AssessmentStatus.NOT_STARTED,
        overall_level=ExpertiseLevel.BEGINNER,
        expires_at=utcnow() + timedelta(days=settings.assessment_expiry_days),
    )
    db.add(assessment)
    db.commit()
    db.refresh(assessment)
    logger.info("Created assessment %s for goal %s", assessment.id, goal.id)
    return assessment


def get_template(db: Session, channel) -> AssessmentTemplate | None:
    """Active template for the channel with the highest version."""
    templates = (
        db.query(AssessmentTemplate)
        .filter(AssessmentTemplate.channel == channel, AssessmentTemplate.is_active.is_(True))
        .all()
    )
    if not templates:
        return None
    # versions are dotted strings, compare numerically
    return max(templates, key=lambda t: _version_key(t.version))


def get_questions(db: Session, template_id: str, level: ExpertiseLevel | None = None) -> list[AssessmentQuestion]:
    # every level currently gets the full question set
    return (
        db.query(AssessmentQuestion)
        .filter(AssessmentQuestion.template_id == template_id)
        .order_by(AssessmentQuestion.order.asc())
        .all()
    )


def _require_template(db: Session, assessment: KnowledgeAssessment) -> AssessmentTemplate:
    template = get_template(db, assessment.channel)
    if not template:
        raise NotFound("Template not found")
    return template


def is_expired(assessment: KnowledgeAssessment) -> bool:
    expires_at = as_utc(assessment.expires_at)
    if expires_at is None:
        return False
    return utcnow() > expires_at


def start_assessment(db: Session, assessment: KnowledgeAssessment) -> KnowledgeAssessment:
    if assessment.status != AssessmentStatus.NOT_STARTED:
        raise BadRequest("Assessment has already been started")

    assessment.status = AssessmentStatus.IN_PROGRESS
    assessment.started_at = utcnow()
    db.commit()
    db.refresh(assessment)
    return assessment


def submit_response(
    db: Session,
    assessment: KnowledgeAssessment,
    question_id: str,
    answer: Any,
    time_spent: int | None = None,
    confidence: float | None = None,
) -> AssessmentResponse:
    if assessment.status != AssessmentStatus.IN_PROGRESS:
        raise BadRequest("Assessment is not in progress")
    if is_expired(assessment):
        raise BadRequest("Assessment has expired")

    template = _require_template(db, assessment)
    question = (
        db.query(AssessmentQuestion)
        .filter(AssessmentQuestion.id == question_id, AssessmentQuestion.template_id == template.id)
        .first()
    )
    if not question:
        raise NotFound("Question not found")

    try:
        validate_answer(answer, question.question_type, question.validation_rules)
    except InvalidAnswer as e:
        raise BadRequest(str(e))

    score = calculate_question_score(answer, question.question_type, question.scoring_rules)

    response = (
        db.query(AssessmentResponse)
        .filter(AssessmentResponse.assessment_id == assessment.id, AssessmentResponse.question_id == question.id)
        .first()
    )
    if response is None:
        response = AssessmentResponse(assessment_id=assessment.id, question_id=question.id)
        db.add(response)

    response.answer = answer
    response.score = score
    response.time_spent = time_spent
    response.confidence = confidence
    db.commit()
    db.refresh(response)
    return response


def complete_assessment(db: Session, assessment: KnowledgeAssessment) -> AssessmentResult:
    if assessment.status != AssessmentStatus.IN_PROGRESS:
        raise BadRequest("Assessment is not in progress")

    template = _require_template(db, assessment)
    questions = get_questions(db, template.id)
    responses = list(assessment.responses)

    # Domains in first-seen question order
    domains = list(dict.fromkeys(q.domain for q in questions))
    domain_scores = [calculate_domain_score(responses, questions, d) for d in domains]

    existing = {de.domain: de for de in assessment.domain_scores}
    for ds in domain_scores:
        row = existing.get(ds.domain)
        if row is None:
            row = DomainExpertise(assessment_id=assessment.id, domain=ds.domain)
            assessment.domain_scores.append(row)
        row.level = ds.level
        row.score = ds.score
        row.confidence = ds.confidence
        row.details = ds.details

    total_time = sum(r.time_spent or 0 for r in responses)
    result = calculate_overall_assessment(domain_scores, total_time, assessment.channel)

    assessment.recommendations.clear()
    for rec in result.recommendations:
        assessment.recommendations.append(
            AssessmentRecommendation(
                domain=rec.domain,
                type=rec.type,
                title=rec.title,
                description=rec.description,
                priority=rec.priority,
                url=rec.url,
                estimated_time=rec.estimated_time,
                meta=rec.metadata,
            )
        )

    assessment.status = AssessmentStatus.COMPLETED
    assessment.completed_at = utcnow()
    assessment.overall_level = result.overall_level
    assessment.score = result.score
    assessment.confidence = result.confidence
    assessment.time_spent = total_time
    db.commit()
    db.refresh(assessment)

    logger.info(
        "Assessment %s completed: level=%s score=%.1f domains=%d",
        assessment.id, result.overall_level.value, result.score, len(domain_scores),
    )
    return result


def get_progress(db: Session, assessment: KnowledgeAssessment) -> dict:
    template = _require_template(db, assessment)
    total = len(get_questions(db, template.id))
    answered = len(assessment.responses)
    percent = (answered / total) * 100 if total else 0
    remaining = max(total - answered, 0) * settings.minutes_per_question
    return {
        "total_questions": total,
        "answered_questions": answered,
        "percent_complete": percent,
        "estimated_time_remaining": remaining,
    }


def get_available_plans(db: Session, assessment: KnowledgeAssessment) -> list[PlanTemplate]:
    template = _require_template(db, assessment)
    candidates = (
        db.query(PlanTemplate)
        .filter(
            PlanTemplate.channel == assessment.channel,
            PlanTemplate.template_id == template.id,
            PlanTemplate.is_active.is_(True),
        )
        .all()
    )
    # levels are stored as strings, so the range check happens here
    rank = level_rank(assessment.overall_level)
    return [
        p for p in candidates
        if level_rank(p.min_expertise) <= rank <= level_rank(p.max_expertise)
    ]


def reset_assessment(db: Session, assessment: KnowledgeAssessment) -> KnowledgeAssessment:
    assessment.responses.clear()
    assessment.domain_scores.clear()
    assessment.recommendations.clear()

    assessment.status = AssessmentStatus.NOT_STARTED
    assessment.overall_level = ExpertiseLevel.BEGINNER
    assessment.started_at = None
    assessment.completed_at = None
    assessment.score = None
    assessment.confidence = None
    assessment.time_spent = None
    db.commit()
    db.refresh(assessment)
    logger.info("Assessment %s reset", assessment.id)
    return assessment
