# Projects API (soft delete via deleted_at)
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from goalpath.auth.deps import get_current_user
from goalpath.db.models.project import Project
from goalpath.db.models.user import User
from goalpath.deps import get_db
from goalpath.errors import BadRequest, Conflict, NotFound
from goalpath.projects.schemas import ProjectCreate, ProjectOut, ProjectUpdate
from goalpath.ratelimit import rate_limit
from goalpath.utils import utcnow

router = APIRouter(prefix="/api/projects", tags=["projects"])


def get_live_project(db: Session, project_id: uuid.UUID) -> Project:
    project = db.query(Project).filter(Project.id == project_id, Project.deleted_at.is_(None)).first()
    if not project:
        raise NotFound("Project not found")
    return project


def _key_taken(db: Session, key: str, exclude: uuid.UUID | None = None) -> bool:
    q = db.query(Project).filter(Project.key == key)
    if exclude is not None:
        q = q.filter(Project.id != exclude)
    return q.first() is not None


@router.get("")
def list_projects(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    items = (
        db.query(Project)
        .filter(Project.deleted_at.is_(None))
        .order_by(Project.updated_at.desc())
        .all()
    )
    return {"projects": [ProjectOut.model_validate(p) for p in items]}


@router.post("", status_code=201, dependencies=[Depends(rate_limit("create-project"))])
def create_project(body: ProjectCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    key = body.key.strip().upper()
    if _key_taken(db, key):
        raise Conflict("Project key already exists")

    project = Project(
        name=body.name.strip(),
        key=key,
        description=body.description,
        default_assignee=body.default_assignee,
        image_url=body.image_url,
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    return {"project": ProjectOut.model_validate(project)}


@router.get("/{project_id}")
def get_project(project_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return {"project": ProjectOut.model_validate(get_live_project(db, project_id))}


@router.patch("/{project_id}", dependencies=[Depends(rate_limit("update-project"))])
def update_project(
    project_id: uuid.UUID,
    body: ProjectUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    project = get_live_project(db, project_id)
    data = body.model_dump(exclude_unset=True)
    for field in ("name", "key"):
        if field in data and data[field] is None:
            raise BadRequest(f"{field} cannot be null")
    if "key" in data:
        data["key"] = data["key"].strip().upper()
        if _key_taken(db, data["key"], exclude=project.id):
            raise Conflict("Project key already exists")

    for field, value in data.items():
        setattr(project, field, value)
    db.commit()
    db.refresh(project)
    return {"project": ProjectOut.model_validate(project)}


@router.delete("/{project_id}", dependencies=[Depends(rate_limit("delete-project"))])
def delete_project(project_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    project = get_live_project(db, project_id)
    project.deleted_at = utcnow()
    db.commit()
    return {"success": True}
