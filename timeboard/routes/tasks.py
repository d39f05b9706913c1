import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from timeboard.auth.deps import Identity
from timeboard.config import settings
from timeboard.db import get_db
from timeboard.models.enums import TaskStatus
from timeboard.models.task import Task
from timeboard.models.timesheet_entry import TimesheetEntry
from timeboard.rbac.deps import require_perm
from timeboard.schemas.common import Page, page_of
from timeboard.schemas.tasks import (
    KanbanOut,
    SubtaskOut,
    TaskCardOut,
    TaskCreateIn,
    TaskDetailOut,
    TaskOrderIn,
    TaskOrderOut,
    TaskOut,
    TaskUpdateIn,
)
from timeboard.services import tasks as svc

router = APIRouter(prefix="/tasks", tags=["tasks"])

def _card_fields(t: Task, counts: tuple[int, int]) -> dict:
    return {
        "id": t.id,
        "title": t.title,
        "status": t.status,
        "priority": t.priority,
        "order_index": t.order_index,
        "parent_id": t.parent_id,
        "tags": t.tags or [],
        "due_date": t.due_date,
        "estimated_hours": t.estimated_hours,
        "assignees": [{"id": u.id, "name": u.name} for u in t.assignees],
        "subtask_count": counts[0],
        "time_entry_count": counts[1],
        "created_at": t.created_at,
    }

def _task_fields(t: Task, counts: tuple[int, int]) -> dict:
    return {
        **_card_fields(t, counts),
        "org_id": t.org_id,
        "project_id": t.project_id,
        "description": t.description,
        "project": {"id": t.project.id, "name": t.project.name, "code": t.project.code},
        "updated_at": t.updated_at,
    }

def _task_out(db: Session, org_id: uuid.UUID, t: Task) -> TaskOut:
    counts = svc.task_counts(db, org_id, [t.id])[t.id]
    return TaskOut(**_task_fields(t, counts))

@router.post("", response_model=TaskOut, status_code=201)
def create_task(
    payload: TaskCreateIn,
    ident: Identity = Depends(require_perm("tasks:create")),
    db: Session = Depends(get_db),
) -> TaskOut:
    t = svc.create_task(db, ident.org_id, payload)
    return _task_out(db, ident.org_id, t)

@router.get("", response_model=Page[TaskOut])
def list_tasks(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    search: str | None = None,
    project_id: uuid.UUID | None = None,
    status: TaskStatus | None = None,
    assignee_id: uuid.UUID | None = None,
    ident: Identity = Depends(require_perm("tasks:read")),
    db: Session = Depends(get_db),
) -> Page[TaskOut]:
    rows, total = svc.list_tasks(
        db,
        ident.org_id,
        project_id=project_id,
        status=status,
        assignee_id=assignee_id,
        search=search,
        page=page,
        limit=limit,
    )
    counts = svc.task_counts(db, ident.org_id, [r.id for r in rows])
    items = [TaskOut(**_task_fields(r, counts[r.id])) for r in rows]
    return Page[TaskOut](**page_of(items, total, page, limit))

@router.get("/kanban/{project_id}", response_model=KanbanOut)
def get_kanban_board(
    project_id: uuid.UUID,
    ident: Identity = Depends(require_perm("tasks:read")),
    db: Session = Depends(get_db),
) -> KanbanOut:
    project, lanes = svc.kanban_board(db, ident.org_id, project_id)
    counts = svc.task_counts(db, ident.org_id, [t.id for lane in lanes.values() for t in lane])
    return KanbanOut(
        project={"id": project.id, "name": project.name, "code": project.code},
        board={
            status: [TaskCardOut(**_card_fields(t, counts[t.id])) for t in lane]
            for status, lane in lanes.items()
        },
    )

# declared before /{task_id} so "order" is not parsed as an id
@router.patch("/order", response_model=TaskOrderOut)
def update_task_order(
    payload: TaskOrderIn,
    ident: Identity = Depends(require_perm("tasks:update")),
    db: Session = Depends(get_db),
) -> TaskOrderOut:
    n = svc.reorder_tasks(db, ident.org_id, payload.tasks)
    return TaskOrderOut(updated=n)

@router.get("/{task_id}", response_model=TaskDetailOut)
def get_task(
    task_id: uuid.UUID,
    ident: Identity = Depends(require_perm("tasks:read")),
    db: Session = Depends(get_db),
) -> TaskDetailOut:
    t = svc.get_task(db, ident.org_id, task_id)
    counts = svc.task_counts(db, ident.org_id, [t.id])[t.id]

    subtasks = db.scalars(
        select(Task)
        .where(Task.org_id == ident.org_id, Task.parent_id == t.id)
        .order_by(Task.order_index.asc(), Task.created_at.desc())
    ).all()
    entries = db.scalars(
        select(TimesheetEntry)
        .where(TimesheetEntry.org_id == ident.org_id, TimesheetEntry.task_id == t.id)
        .order_by(TimesheetEntry.date.desc())
        .limit(10)
    ).all()

    return TaskDetailOut(
        **_task_fields(t, counts),
        parent={"id": t.parent.id, "title": t.parent.title} if t.parent else None,
        subtasks=[
            SubtaskOut(
                id=s.id, title=s.title, status=s.status, priority=s.priority, order_index=s.order_index
            )
            for s in subtasks
        ],
        recent_time_entries=[
            {"id": e.id, "date": e.date, "minutes": e.minutes, "user": {"id": e.user.id, "name": e.user.name}}
            for e in entries
        ],
    )

@router.patch("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: uuid.UUID,
    payload: TaskUpdateIn,
    ident: Identity = Depends(require_perm("tasks:update")),
    db: Session = Depends(get_db),
) -> TaskOut:
    t = svc.update_task(db, ident.org_id, task_id, payload)
    return _task_out(db, ident.org_id, t)

@router.delete("/{task_id}")
def delete_task(
    task_id: uuid.UUID,
    ident: Identity = Depends(require_perm("tasks:delete")),
    db: Session = Depends(get_db),
) -> dict:
    svc.delete_task(db, ident.org_id, task_id)
    return {"deleted": True}
