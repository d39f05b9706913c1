"""Task store access and the board/ordering operations built on it.

Every function takes ``org_id`` as a required positional argument and adds
it to every query it issues.
"""

import logging
import uuid

from sqlalchemy import case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from timeboard.config import settings
from timeboard.errors import Forbidden, NotFound
from timeboard.models.enums import TaskStatus
from timeboard.models.project import Project
from timeboard.models.task import Task
from timeboard.models.timesheet_entry import TimesheetEntry
from timeboard.models.user import User
from timeboard.schemas.tasks import TaskCreateIn, TaskOrderItem, TaskUpdateIn
from timeboard.services import ordering
from timeboard.services.projects import get_project

log = logging.getLogger(__name__)

# board lane position of each status; unknown values sort after DONE
_STATUS_RANK = case(
    {status.value: rank for rank, status in enumerate(ordering.LANES)},
    value=Task.status,
    else_=len(ordering.LANES),
)

_NOT_NULL_FIELDS = {"title", "status", "priority", "tags", "order_index"}

def _scoped(org_id: uuid.UUID):
    return select(Task).where(Task.org_id == org_id)

def get_task(db: Session, org_id: uuid.UUID, task_id: uuid.UUID) -> Task:
    task = db.scalar(_scoped(org_id).where(Task.id == task_id))
    if task is None:
        raise NotFound("task not found")
    return task

def _get_parent(db: Session, org_id: uuid.UUID, project_id: uuid.UUID, parent_id: uuid.UUID) -> Task:
    parent = db.scalar(_scoped(org_id).where(Task.id == parent_id, Task.project_id == project_id))
    if parent is None:
        raise NotFound("parent task not found")
    return parent

def _get_assignees(db: Session, org_id: uuid.UUID, user_ids: list[uuid.UUID]) -> list[User]:
    wanted = set(user_ids)
    if not wanted:
        return []
    users = db.scalars(select(User).where(User.org_id == org_id, User.id.in_(list(wanted)))).all()
    if len(users) != len(wanted):
        raise NotFound("one or more assignees not found")
    return list(users)

def lane_max(db: Session, org_id: uuid.UUID, project_id: uuid.UUID, status: TaskStatus) -> int | None:
    return db.scalar(
        select(func.max(Task.order_index)).where(
            Task.org_id == org_id,
            Task.project_id == project_id,
            Task.status == status.value,
        )
    )

def task_counts(db: Session, org_id: uuid.UUID, task_ids: list[uuid.UUID]) -> dict[uuid.UUID, tuple[int, int]]:
    """(subtask count, time entry count) per task id."""
    if not task_ids:
        return {}

    subtasks = dict(
        db.execute(
            select(Task.parent_id, func.count())
            .where(Task.org_id == org_id, Task.parent_id.in_(task_ids))
            .group_by(Task.parent_id)
        ).all()
    )
    entries = dict(
        db.execute(
            select(TimesheetEntry.task_id, func.count())
            .where(TimesheetEntry.org_id == org_id, TimesheetEntry.task_id.in_(task_ids))
            .group_by(TimesheetEntry.task_id)
        ).all()
    )
    return {tid: (subtasks.get(tid, 0), entries.get(tid, 0)) for tid in task_ids}

def create_task(db: Session, org_id: uuid.UUID, payload: TaskCreateIn) -> Task:
    get_project(db, org_id, payload.project_id)

    if payload.parent_id is not None:
        _get_parent(db, org_id, payload.project_id, payload.parent_id)
        _parent_chain(db, org_id, payload.parent_id)

    assignees = _get_assignees(db, org_id, payload.assignee_ids or [])

    order_index = payload.order_index
    if order_index is None:
        order_index = ordering.next_order_index(lane_max(db, org_id, payload.project_id, payload.status))

    t = Task(
        org_id=org_id,
        project_id=payload.project_id,
        parent_id=payload.parent_id,
        title=payload.title,
        description=payload.description,
        status=payload.status.value,
        priority=payload.priority,
        tags=list(payload.tags),
        due_date=payload.due_date,
        estimated_hours=payload.estimated_hours,
        order_index=order_index,
        assignees=assignees,
    )
    db.add(t)
    db.commit()
    db.refresh(t)
    log.info("task %s created in lane %s/%s at %d", t.id, t.project_id, t.status, t.order_index)
    return t

def list_tasks(
    db: Session,
    org_id: uuid.UUID,
    *,
    project_id: uuid.UUID | None = None,
    status: TaskStatus | None = None,
    assignee_id: uuid.UUID | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = 50,
) -> tuple[list[Task], int]:
    q = _scoped(org_id)
    if project_id is not None:
        q = q.where(Task.project_id == project_id)
    if status is not None:
        q = q.where(Task.status == status.value)
    if assignee_id is not None:
        q = q.where(Task.assignees.any(User.id == assignee_id))
    if search:
        q = q.where(
            Task.title.icontains(search, autoescape=True)
            | Task.description.icontains(search, autoescape=True)
        )

    total = db.scalar(select(func.count()).select_from(q.order_by(None).subquery())) or 0
    rows = db.scalars(
        q.order_by(_STATUS_RANK, Task.order_index.asc(), Task.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    return list(rows), total

def kanban_board(db: Session, org_id: uuid.UUID, project_id: uuid.UUID) -> tuple[Project, dict[TaskStatus, list[Task]]]:
    project = get_project(db, org_id, project_id)
    tasks = db.scalars(_scoped(org_id).where(Task.project_id == project_id)).all()
    return project, ordering.project_to_board(tasks)

def _parent_lookup(db: Session, org_id: uuid.UUID):
    def parent_of(task_id: uuid.UUID) -> uuid.UUID | None:
        return db.scalar(select(Task.parent_id).where(Task.id == task_id, Task.org_id == org_id))

    return parent_of

def _parent_chain(db: Session, org_id: uuid.UUID, parent_id: uuid.UUID) -> list[uuid.UUID]:
    """Ancestry of a proposed parent; the child must still fit in task_max_depth."""
    try:
        return ordering.ancestry(parent_id, _parent_lookup(db, org_id), settings.task_max_depth - 1)
    except ordering.AncestryError as e:
        log.warning("parent %s chain rejected: %s", parent_id, e)
        raise Forbidden(str(e))

def update_task(db: Session, org_id: uuid.UUID, task_id: uuid.UUID, payload: TaskUpdateIn) -> Task:
    t = get_task(db, org_id, task_id)
    fields = payload.model_dump(exclude_unset=True)

    new_parent_id = fields.get("parent_id")
    if new_parent_id is not None:
        if new_parent_id == t.id:
            log.warning("task %s refused itself as parent", t.id)
            raise Forbidden("task cannot be its own parent")

        _get_parent(db, org_id, t.project_id, new_parent_id)

        if t.id in _parent_chain(db, org_id, new_parent_id):
            log.warning("task %s refused parent %s: cycle", t.id, new_parent_id)
            raise Forbidden("circular parent reference")

    if "assignee_ids" in fields:
        t.assignees = _get_assignees(db, org_id, fields.pop("assignee_ids") or [])

    for name, value in fields.items():
        if value is None and name in _NOT_NULL_FIELDS:
            continue
        if name == "status":
            # lane change: order_index is kept as is
            value = value.value
        setattr(t, name, value)

    db.add(t)
    db.commit()
    db.refresh(t)
    return t

def reorder_tasks(db: Session, org_id: uuid.UUID, items: list[TaskOrderItem]) -> int:
    """Set order_index for each listed task in one transaction.

    Nothing is written unless every id exists in the organization.
    """
    wanted = {item.id for item in items}
    tasks = db.scalars(_scoped(org_id).where(Task.id.in_(list(wanted)))).all()
    if len(tasks) != len(wanted):
        raise NotFound("one or more tasks not found")

    ordering.apply_order(tasks, ((item.id, item.order_index) for item in items))
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        log.exception("task reorder rolled back (%d tasks)", len(wanted))
        raise

    log.info("reordered %d tasks", len(wanted))
    return len(wanted)

def delete_task(db: Session, org_id: uuid.UUID, task_id: uuid.UUID) -> None:
    t = get_task(db, org_id, task_id)
    subtasks, entries = task_counts(db, org_id, [t.id])[t.id]

    if subtasks > 0:
        log.warning("refused delete of task %s: %d subtasks", t.id, subtasks)
        raise Forbidden("cannot delete task with subtasks")
    if entries > 0:
        log.warning("refused delete of task %s: %d time entries", t.id, entries)
        raise Forbidden("cannot delete task with time entries")

    db.delete(t)
    db.commit()
    log.info("task %s deleted", task_id)
