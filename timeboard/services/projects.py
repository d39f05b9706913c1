import logging
import uuid

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from timeboard.errors import Conflict, NotFound
from timeboard.models.enums import ProjectStatus
from timeboard.models.project import Project
from timeboard.models.task import Task
from timeboard.models.timesheet_entry import TimesheetEntry
from timeboard.schemas.projects import ProjectCreateIn, ProjectUpdateIn
from timeboard.services.clients import get_client

log = logging.getLogger(__name__)

def get_project(db: Session, org_id: uuid.UUID, project_id: uuid.UUID) -> Project:
    p = db.scalar(select(Project).where(Project.id == project_id, Project.org_id == org_id))
    if p is None:
        raise NotFound("project not found")
    return p

def _ensure_code_free(db: Session, org_id: uuid.UUID, code: str, exclude_id: uuid.UUID | None = None) -> None:
    q = select(Project.id).where(Project.org_id == org_id, Project.code == code)
    if exclude_id is not None:
        q = q.where(Project.id != exclude_id)
    if db.scalar(q) is not None:
        raise Conflict("project code already exists in this organization")

def project_counts(
    db: Session, org_id: uuid.UUID, project_ids: list[uuid.UUID]
) -> dict[uuid.UUID, tuple[int, int]]:
    """(task count, time entry count) per project id."""
    if not project_ids:
        return {}
    tasks = dict(
        db.execute(
            select(Task.project_id, func.count())
            .where(Task.org_id == org_id, Task.project_id.in_(project_ids))
            .group_by(Task.project_id)
        ).all()
    )
    entries = dict(
        db.execute(
            select(TimesheetEntry.project_id, func.count())
            .where(TimesheetEntry.org_id == org_id, TimesheetEntry.project_id.in_(project_ids))
            .group_by(TimesheetEntry.project_id)
        ).all()
    )
    return {pid: (tasks.get(pid, 0), entries.get(pid, 0)) for pid in project_ids}

def create_project(db: Session, org_id: uuid.UUID, payload: ProjectCreateIn) -> Project:
    _ensure_code_free(db, org_id, payload.code)
    if payload.client_id is not None:
        get_client(db, org_id, payload.client_id)

    p = Project(org_id=org_id, **payload.model_dump())
    db.add(p)
    db.commit()
    db.refresh(p)
    log.info("project %s (%s) created", p.id, p.code)
    return p

def list_projects(
    db: Session,
    org_id: uuid.UUID,
    *,
    search: str | None = None,
    status: ProjectStatus | None = None,
    client_id: uuid.UUID | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Project], int]:
    q = select(Project).where(Project.org_id == org_id, Project.active.is_(True))
    if search:
        q = q.where(
            Project.name.icontains(search, autoescape=True)
            | Project.code.icontains(search, autoescape=True)
            | Project.description.icontains(search, autoescape=True)
        )
    if status is not None:
        q = q.where(Project.status == status)
    if client_id is not None:
        q = q.where(Project.client_id == client_id)

    total = db.scalar(select(func.count()).select_from(q.subquery())) or 0
    rows = db.scalars(
        q.order_by(Project.created_at.desc()).offset((page - 1) * limit).limit(limit)
    ).all()
    return list(rows), total

def update_project(db: Session, org_id: uuid.UUID, project_id: uuid.UUID, payload: ProjectUpdateIn) -> Project:
    p = get_project(db, org_id, project_id)
    fields = payload.model_dump(exclude_unset=True)

    if fields.get("code") and fields["code"] != p.code:
        _ensure_code_free(db, org_id, fields["code"], exclude_id=p.id)
    if fields.get("client_id") is not None:
        get_client(db, org_id, fields["client_id"])

    for name, value in fields.items():
        if value is None and name in {"name", "code", "status"}:
            continue
        setattr(p, name, value)

    db.add(p)
    db.commit()
    db.refresh(p)
    return p

def delete_project(db: Session, org_id: uuid.UUID, project_id: uuid.UUID) -> Project:
    p = get_project(db, org_id, project_id)
    # soft delete: tasks and time entries keep pointing at it
    p.active = False
    db.add(p)
    db.commit()
    db.refresh(p)
    log.info("project %s archived", p.id)
    return p

def count_tasks_by_status(db: Session, org_id: uuid.UUID, project_id: uuid.UUID) -> dict[str, int]:
    rows = db.execute(
        select(Task.status, func.count())
        .where(Task.org_id == org_id, Task.project_id == project_id)
        .group_by(Task.status)
    ).all()
    return {status: n for status, n in rows}

def _hours(minutes: int) -> float:
    return round(minutes / 60, 2)

def project_summary(db: Session, org_id: uuid.UUID, project_id: uuid.UUID) -> dict:
    p = get_project(db, org_id, project_id)

    total_minutes, billable_minutes = db.execute(
        select(
            func.coalesce(func.sum(TimesheetEntry.minutes), 0),
            func.coalesce(
                func.sum(case((TimesheetEntry.billable.is_(True), TimesheetEntry.minutes), else_=0)), 0
            ),
        ).where(TimesheetEntry.org_id == org_id, TimesheetEntry.project_id == p.id)
    ).one()

    total_hours = total_minutes / 60
    remaining = None
    if p.budget_hours is not None:
        remaining = round(max(0.0, p.budget_hours - total_hours), 2)

    return {
        "project": {"id": p.id, "name": p.name, "code": p.code},
        "status": p.status,
        "time_tracking": {
            "total_hours": _hours(total_minutes),
            "billable_hours": _hours(billable_minutes),
            "budget_hours": p.budget_hours,
            "remaining_budget_hours": remaining,
        },
        "tasks": count_tasks_by_status(db, org_id, p.id),
    }
