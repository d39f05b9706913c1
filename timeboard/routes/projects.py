import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from timeboard.auth.deps import Identity
from timeboard.db import get_db
from timeboard.models.enums import ProjectStatus
from timeboard.models.project import Project
from timeboard.rbac.deps import require_perm
from timeboard.schemas.common import Page, page_of
from timeboard.schemas.projects import ProjectCreateIn, ProjectOut, ProjectSummaryOut, ProjectUpdateIn
from timeboard.services import projects as svc

router = APIRouter(prefix="/projects", tags=["projects"])

def _project_out(p: Project, counts: tuple[int, int] = (0, 0)) -> ProjectOut:
    return ProjectOut(
        id=p.id,
        org_id=p.org_id,
        name=p.name,
        code=p.code,
        description=p.description,
        status=p.status,
        client={"id": p.client.id, "name": p.client.name} if p.client else None,
        budget_hours=p.budget_hours,
        budget_amount=p.budget_amount,
        hourly_rate=p.hourly_rate,
        start_date=p.start_date,
        end_date=p.end_date,
        color=p.color,
        active=p.active,
        task_count=counts[0],
        time_entry_count=counts[1],
        created_at=p.created_at,
    )

@router.post("", response_model=ProjectOut, status_code=201)
def create_project(
    payload: ProjectCreateIn,
    ident: Identity = Depends(require_perm("projects:create")),
    db: Session = Depends(get_db),
) -> ProjectOut:
    p = svc.create_project(db, ident.org_id, payload)
    return _project_out(p)

@router.get("", response_model=Page[ProjectOut])
def list_projects(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = None,
    status: ProjectStatus | None = None,
    client_id: uuid.UUID | None = None,
    ident: Identity = Depends(require_perm("projects:read")),
    db: Session = Depends(get_db),
) -> Page[ProjectOut]:
    rows, total = svc.list_projects(
        db, ident.org_id, search=search, status=status, client_id=client_id, page=page, limit=limit
    )
    counts = svc.project_counts(db, ident.org_id, [r.id for r in rows])
    items = [_project_out(r, counts[r.id]) for r in rows]
    return Page[ProjectOut](**page_of(items, total, page, limit))

@router.get("/{project_id}", response_model=ProjectOut)
def get_project(
    project_id: uuid.UUID,
    ident: Identity = Depends(require_perm("projects:read")),
    db: Session = Depends(get_db),
) -> ProjectOut:
    p = svc.get_project(db, ident.org_id, project_id)
    return _project_out(p, svc.project_counts(db, ident.org_id, [p.id])[p.id])

@router.get("/{project_id}/summary", response_model=ProjectSummaryOut)
def get_project_summary(
    project_id: uuid.UUID,
    ident: Identity = Depends(require_perm("projects:read")),
    db: Session = Depends(get_db),
) -> ProjectSummaryOut:
    return ProjectSummaryOut(**svc.project_summary(db, ident.org_id, project_id))

@router.patch("/{project_id}", response_model=ProjectOut)
def update_project(
    project_id: uuid.UUID,
    payload: ProjectUpdateIn,
    ident: Identity = Depends(require_perm("projects:update")),
    db: Session = Depends(get_db),
) -> ProjectOut:
    p = svc.update_project(db, ident.org_id, project_id, payload)
    return _project_out(p, svc.project_counts(db, ident.org_id, [p.id])[p.id])

@router.delete("/{project_id}")
def delete_project(
    project_id: uuid.UUID,
    ident: Identity = Depends(require_perm("projects:delete")),
    db: Session = Depends(get_db),
) -> dict:
    svc.delete_project(db, ident.org_id, project_id)
    return {"deleted": True}
