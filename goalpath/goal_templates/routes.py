# Goal templates API
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from goalpath.auth.deps import get_current_user
from goalpath.db.models.goal import Goal
from goalpath.db.models.goal_template import GoalTemplate
from goalpath.db.models.user import User
from goalpath.deps import get_db
from goalpath.errors import BadRequest, Conflict, NotFound
from goalpath.goal_templates.schemas import GoalTemplateCreate, GoalTemplateOut, GoalTemplateUpdate
from goalpath.ratelimit import rate_limit

router = APIRouter(prefix="/api/goal-templates", tags=["goal-templates"])


def _get_template(db: Session, template_id: uuid.UUID) -> GoalTemplate:
    template = db.query(GoalTemplate).filter(GoalTemplate.id == template_id).first()
    if not template:
        raise NotFound("Goal template not found")
    return template


def _name_taken(db: Session, name: str, exclude: uuid.UUID | None = None) -> bool:
    q = db.query(GoalTemplate).filter(GoalTemplate.name == name)
    if exclude is not None:
        q = q.filter(GoalTemplate.id != exclude)
    return q.first() is not None


@router.get("")
def list_goal_templates(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    items = db.query(GoalTemplate).order_by(GoalTemplate.created_at.desc()).all()
    return {"templates": [GoalTemplateOut.model_validate(t) for t in items]}


@router.post("", status_code=201, dependencies=[Depends(rate_limit("create-goal-template"))])
def create_goal_template(body: GoalTemplateCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    if _name_taken(db, body.name):
        raise Conflict("A goal template with this name already exists")

    template = GoalTemplate(**body.model_dump())
    db.add(template)
    db.commit()
    db.refresh(template)
    return {"template": GoalTemplateOut.model_validate(template)}


@router.patch("/{template_id}", dependencies=[Depends(rate_limit("update-goal-template"))])
def update_goal_template(
    template_id: uuid.UUID,
    body: GoalTemplateUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    template = _get_template(db, template_id)
    data = body.model_dump(exclude_unset=True)
    for field in ("name", "prompt_text", "output_schema"):
        if field in data and data[field] is None:
            raise BadRequest(f"{field} cannot be null")
    if data.get("name") and _name_taken(db, data["name"], exclude=template.id):
        raise Conflict("A goal template with this name already exists")

    for field, value in data.items():
        setattr(template, field, value)
    db.commit()
    db.refresh(template)
    return {"template": GoalTemplateOut.model_validate(template)}


@router.delete("/{template_id}", dependencies=[Depends(rate_limit("delete-goal-template"))])
def delete_goal_template(template_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    template = _get_template(db, template_id)
    in_use = db.query(Goal).filter(Goal.template_id == template.id).count()
    if in_use:
        raise Conflict("Cannot delete template that is being used by goals", details={"goals": in_use})

    db.delete(template)
    db.commit()
    return {"success": True}
