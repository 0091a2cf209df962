# Knowledge assessment API
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from goalpath.assessment import service
from goalpath.assessment.schemas import (
    AssessmentAction,
    AssessmentCreate,
    AssessmentDetailOut,
    AssessmentOut,
    ProgressOut,
    PlanTemplateOut,
    QuestionOut,
    ResponseCreate,
    ResponseOut,
    TemplateOut,
)
from goalpath.auth.deps import get_current_user
from goalpath.db.models.knowledge_assessment import KnowledgeAssessment
from goalpath.db.models.user import User
from goalpath.deps import get_db
from goalpath.errors import Forbidden, NotFound
from goalpath.goals.routes import get_owned_goal
from goalpath.ratelimit import rate_limit

router = APIRouter(prefix="/api/assessments", tags=["assessments"])


def get_user_assessment(db: Session, assessment_id: uuid.UUID, user: User) -> KnowledgeAssessment:
    assessment = db.query(KnowledgeAssessment).filter(KnowledgeAssessment.id == assessment_id).first()
    if not assessment:
        raise NotFound("Assessment not found")
    if assessment.user_id != user.id:
        raise Forbidden()
    return assessment


def _detail(assessment: KnowledgeAssessment) -> AssessmentDetailOut:
    out = AssessmentDetailOut.model_validate(assessment)
    out.is_expired = service.is_expired(assessment)
    return out


@router.post("", dependencies=[Depends(rate_limit("create-assessment"))])
def create_assessment(body: AssessmentCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    goal = get_owned_goal(db, body.goal_id, user)
    template = service.get_template(db, goal.channel)
    if not template:
        raise NotFound("No assessment template available for this channel")

    assessment = service.get_or_create_assessment(db, goal, user.id)
    questions = service.get_questions(db, template.id, assessment.overall_level)
    return {
        "assessment": AssessmentOut.model_validate(assessment),
        "template": TemplateOut.model_validate(template),
        "questions": [QuestionOut.model_validate(q) for q in questions],
    }


@router.get("")
def find_assessment(goal_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    goal = get_owned_goal(db, goal_id, user)
    assessment = (
        db.query(KnowledgeAssessment)
        .filter(KnowledgeAssessment.goal_id == goal.id, KnowledgeAssessment.user_id == user.id)
        .first()
    )
    if not assessment:
        return {"assessment": None, "template": None}

    template = service.get_template(db, assessment.channel)
    return {
        "assessment": _detail(assessment),
        "template": TemplateOut.model_validate(template) if template else None,
    }


@router.get("/{assessment_id}", response_model=AssessmentDetailOut)
def get_assessment(assessment_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return _detail(get_user_assessment(db, assessment_id, user))


@router.put("/{assessment_id}", dependencies=[Depends(rate_limit("update-assessment"))])
def update_assessment(
    assessment_id: uuid.UUID,
    body: AssessmentAction,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    assessment = get_user_assessment(db, assessment_id, user)
    if body.action == "start":
        return AssessmentOut.model_validate(service.start_assessment(db, assessment))
    return service.complete_assessment(db, assessment)


@router.delete("/{assessment_id}", dependencies=[Depends(rate_limit("reset-assessment"))])
def reset_assessment(assessment_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    service.reset_assessment(db, get_user_assessment(db, assessment_id, user))
    return {"success": True}


@router.get("/{assessment_id}/responses")
def list_responses(assessment_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    assessment = get_user_assessment(db, assessment_id, user)
    return [ResponseOut.model_validate(r) for r in assessment.responses]


@router.post("/{assessment_id}/responses", dependencies=[Depends(rate_limit("submit-response"))])
def submit_response(
    assessment_id: uuid.UUID,
    body: ResponseCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    assessment = get_user_assessment(db, assessment_id, user)
    response = service.submit_response(
        db, assessment, body.question_id, body.answer,
        time_spent=body.time_spent, confidence=body.confidence,
    )
    db.refresh(assessment)
    return {
        "success": True,
        "response": ResponseOut.model_validate(response),
        "progress": ProgressOut(**service.get_progress(db, assessment)),
    }


@router.get("/{assessment_id}/progress", response_model=ProgressOut)
def get_progress(assessment_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return service.get_progress(db, get_user_assessment(db, assessment_id, user))


@router.get("/{assessment_id}/plans")
def available_plans(assessment_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    assessment = get_user_assessment(db, assessment_id, user)
    return [PlanTemplateOut.model_validate(p) for p in service.get_available_plans(db, assessment)]
