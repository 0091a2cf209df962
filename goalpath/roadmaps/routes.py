# Roadmaps API, one roadmap per goal
import uuid
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from goalpath.auth.deps import get_current_user
from goalpath.db.models.goal import Goal
from goalpath.db.models.roadmap import Roadmap
from goalpath.db.models.user import User
from goalpath.deps import get_db
from goalpath.errors import Conflict, NotFound
from goalpath.goals.routes import get_owned_goal
from goalpath.ratelimit import rate_limit
from goalpath.roadmaps.schemas import RoadmapCreate, RoadmapOut, RoadmapUpdate

router = APIRouter(prefix="/api/roadmaps", tags=["roadmaps"])


def get_owned_roadmap(db: Session, roadmap_id: uuid.UUID, user: User) -> Roadmap:
    rm = (
        db.query(Roadmap)
        .join(Goal, Roadmap.goal_id == Goal.id)
        .filter(Roadmap.id == roadmap_id, Goal.created_by == user.id)
        .first()
    )
    if not rm:
        raise NotFound("Roadmap not found or access denied")
    return rm


@router.get("")
def list_roadmaps(
    goal_id: Optional[uuid.UUID] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    q = db.query(Roadmap).join(Goal, Roadmap.goal_id == Goal.id).filter(Goal.created_by == user.id)
    if goal_id:
        q = q.filter(Roadmap.goal_id == goal_id)
    items = q.order_by(Roadmap.updated_at.desc()).all()
    return {"roadmaps": [RoadmapOut.model_validate(rm) for rm in items]}


@router.post("", status_code=201, dependencies=[Depends(rate_limit("create-roadmap"))])
def create_roadmap(body: RoadmapCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    goal = get_owned_goal(db, body.goal_id, user)
    if db.query(Roadmap).filter(Roadmap.goal_id == goal.id).first():
        raise Conflict("Roadmap already exists for this goal")

    rm = Roadmap(
        goal_id=goal.id,
        name=body.name.strip(),
        description=body.description,
        status=body.status,
    )
    db.add(rm)
    db.commit()
    db.refresh(rm)
    return {"roadmap": RoadmapOut.model_validate(rm)}


@router.get("/{roadmap_id}")
def get_roadmap(roadmap_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return {"roadmap": RoadmapOut.model_validate(get_owned_roadmap(db, roadmap_id, user))}


@router.patch("/{roadmap_id}", dependencies=[Depends(rate_limit("update-roadmap"))])
def update_roadmap(
    roadmap_id: uuid.UUID,
    body: RoadmapUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    rm = get_owned_roadmap(db, roadmap_id, user)
    for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(rm, field, value)
    db.commit()
    db.refresh(rm)
    return {"roadmap": RoadmapOut.model_validate(rm)}


@router.delete("/{roadmap_id}", dependencies=[Depends(rate_limit("delete-roadmap"))])
def delete_roadmap(roadmap_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    rm = get_owned_roadmap(db, roadmap_id, user)
    db.delete(rm)
    db.commit()
    return {"success": True}
