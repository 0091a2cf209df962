# Goals API, scoped to the user who created them
import uuid
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from goalpath.auth.deps import get_current_user
from goalpath.db.models.goal import Goal
from goalpath.db.models.goal_template import GoalTemplate
from goalpath.db.models.user import User
from goalpath.deps import get_db
from goalpath.errors import BadRequest, NotFound
from goalpath.goals.prompt import render_goal_prompt
from goalpath.goals.schemas import GoalCreate, GoalOut, GoalPromptOut, GoalUpdate
from goalpath.projects.routes import get_live_project
from goalpath.ratelimit import rate_limit

router = APIRouter(prefix="/api/goals", tags=["goals"])


def get_owned_goal(db: Session, goal_id: uuid.UUID, user: User) -> Goal:
    # other users' goals look missing rather than forbidden
    goal = db.query(Goal).filter(Goal.id == goal_id, Goal.created_by == user.id).first()
    if not goal:
        raise NotFound("Goal not found or access denied")
    return goal


def _check_template(db: Session, template_id: uuid.UUID | None) -> None:
    if template_id is not None and not db.query(GoalTemplate).filter(GoalTemplate.id == template_id).first():
        raise NotFound("Goal template not found")


@router.get("")
def list_goals(
    project_id: Optional[uuid.UUID] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    q = db.query(Goal).filter(Goal.created_by == user.id)
    if project_id:
        q = q.filter(Goal.project_id == project_id)
    items = q.order_by(Goal.updated_at.desc()).all()
    return {"goals": [GoalOut.model_validate(g) for g in items]}


@router.post("", status_code=201, dependencies=[Depends(rate_limit("create-goal"))])
def create_goal(body: GoalCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    get_live_project(db, body.project_id)
    _check_template(db, body.template_id)

    goal = Goal(**body.model_dump(), created_by=user.id)
    db.add(goal)
    db.commit()
    db.refresh(goal)
    return {"goal": GoalOut.model_validate(goal)}


@router.get("/{goal_id}")
def get_goal(goal_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return {"goal": GoalOut.model_validate(get_owned_goal(db, goal_id, user))}


@router.patch("/{goal_id}", dependencies=[Depends(rate_limit("update-goal"))])
def update_goal(goal_id: uuid.UUID, body: GoalUpdate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    goal = get_owned_goal(db, goal_id, user)
    data = body.model_dump(exclude_unset=True)
    if "template_id" in data:
        _check_template(db, data["template_id"])

    for field, value in data.items():
        if value is None and field in ("title", "channel", "timebox_days", "budget_usd", "success_metric",
                                       "constraints", "revenue", "deliverables"):
            raise BadRequest(f"{field} cannot be null")
        setattr(goal, field, value)
    db.commit()
    db.refresh(goal)
    return {"goal": GoalOut.model_validate(goal)}


@router.delete("/{goal_id}", dependencies=[Depends(rate_limit("delete-goal"))])
def delete_goal(goal_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    goal = get_owned_goal(db, goal_id, user)
    db.delete(goal)
    db.commit()
    return {"success": True}


@router.get("/{goal_id}/prompt", response_model=GoalPromptOut)
def goal_prompt(goal_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    goal = get_owned_goal(db, goal_id, user)
    if goal.template is None:
        raise BadRequest("Goal has no template")

    return GoalPromptOut(
        template_id=goal.template.id,
        template_name=goal.template.name,
        system_msg=goal.template.system_msg,
        prompt=render_goal_prompt(goal.template, goal),
        output_schema=goal.template.output_schema or {},
    )
