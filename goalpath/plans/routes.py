# Generated plans API
import uuid
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from goalpath.assessment.routes import get_user_assessment
from goalpath.auth.deps import get_current_user
from goalpath.db.enums import PlanStatus
from goalpath.db.models.generated_plan import GeneratedPlan
from goalpath.db.models.goal import Goal
from goalpath.db.models.knowledge_assessment import KnowledgeAssessment
from goalpath.db.models.user import User
from goalpath.deps import get_db
from goalpath.errors import BadRequest, Forbidden, NotFound
from goalpath.goals.routes import get_owned_goal
from goalpath.plans import service
from goalpath.plans.schemas import PlanAction, PlanCreate, PlanDetailOut, PlanOut
from goalpath.ratelimit import rate_limit

router = APIRouter(prefix="/api/plans", tags=["plans"])


def get_user_plan(db: Session, plan_id: uuid.UUID, user: User) -> GeneratedPlan:
    plan = db.query(GeneratedPlan).filter(GeneratedPlan.id == plan_id).first()
    if not plan:
        raise NotFound("Plan not found")
    if plan.assessment.user_id != user.id:
        raise Forbidden()
    return plan


@router.get("")
def list_plans(
    goal_id: Optional[uuid.UUID] = None,
    status: Optional[PlanStatus] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    q = (
        db.query(GeneratedPlan)
        .join(KnowledgeAssessment, GeneratedPlan.assessment_id == KnowledgeAssessment.id)
        .filter(KnowledgeAssessment.user_id == user.id)
    )
    if goal_id:
        q = q.filter(GeneratedPlan.goal_id == goal_id)
    if status:
        q = q.filter(GeneratedPlan.status == status)
    items = q.order_by(GeneratedPlan.created_at.desc()).all()
    return {"plans": [PlanOut.model_validate(p) for p in items]}


@router.post("", status_code=201, response_model=PlanDetailOut, dependencies=[Depends(rate_limit("generate-plan"))])
def create_plan(body: PlanCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    assessment = get_user_assessment(db, body.assessment_id, user)
    goal = get_owned_goal(db, body.goal_id, user)
    if assessment.goal_id != goal.id:
        raise BadRequest("Assessment does not belong to this goal")

    plan = service.generate_plan(
        db, assessment, goal, body.template_id,
        timebox_days=goal.timebox_days, constraints=goal.constraints,
    )
    return plan


@router.get("/{plan_id}", response_model=PlanDetailOut)
def get_plan(plan_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return get_user_plan(db, plan_id, user)


@router.put("/{plan_id}", dependencies=[Depends(rate_limit("update-plan"))])
def update_plan(
    plan_id: uuid.UUID,
    body: PlanAction,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    plan = get_user_plan(db, plan_id, user)

    if body.action == "approve":
        return PlanOut.model_validate(service.approve_plan(db, plan, user.id))
    if body.action == "abandon":
        return PlanOut.model_validate(service.abandon_plan(db, plan))

    goal = db.query(Goal).filter(Goal.id == plan.goal_id).first()
    if not goal:
        raise NotFound("Goal not found")
    created = service.execute_plan(db, plan, goal, user.id)
    db.refresh(plan)
    return {"plan": PlanOut.model_validate(plan), **created}


@router.delete("/{plan_id}", dependencies=[Depends(rate_limit("delete-plan"))])
def delete_plan(plan_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    service.delete_plan(db, get_user_plan(db, plan_id, user))
    return {"success": True}
