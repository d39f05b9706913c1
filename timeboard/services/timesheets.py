import datetime as dt
import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from timeboard.errors import NotFound
from timeboard.models.task import Task
from timeboard.models.timesheet_entry import TimesheetEntry
from timeboard.schemas.timesheets import TimesheetEntryCreateIn, TimesheetEntryUpdateIn
from timeboard.services.projects import get_project

log = logging.getLogger(__name__)

def _hours(minutes: int) -> float:
    return round(minutes / 60, 2)

def week_start_of(day: dt.date) -> dt.date:
    # weeks start on monday
    return day - dt.timedelta(days=day.weekday())

def summarize_minutes(entries: list[TimesheetEntry]) -> dict:
    total = sum(e.minutes for e in entries)
    billable = sum(e.minutes for e in entries if e.billable)
    return {
        "total_minutes": total,
        "billable_minutes": billable,
        "total_hours": _hours(total),
        "billable_hours": _hours(billable),
    }

def get_entry(db: Session, org_id: uuid.UUID, entry_id: uuid.UUID) -> TimesheetEntry:
    e = db.scalar(
        select(TimesheetEntry).where(TimesheetEntry.id == entry_id, TimesheetEntry.org_id == org_id)
    )
    if e is None:
        raise NotFound("timesheet entry not found")
    return e

def _check_task(db: Session, org_id: uuid.UUID, project_id: uuid.UUID, task_id: uuid.UUID) -> None:
    found = db.scalar(
        select(Task.id).where(Task.id == task_id, Task.org_id == org_id, Task.project_id == project_id)
    )
    if found is None:
        raise NotFound("task not found")

def create_entry(
    db: Session, org_id: uuid.UUID, user_id: uuid.UUID, payload: TimesheetEntryCreateIn
) -> TimesheetEntry:
    get_project(db, org_id, payload.project_id)
    if payload.task_id is not None:
        _check_task(db, org_id, payload.project_id, payload.task_id)

    e = TimesheetEntry(org_id=org_id, user_id=user_id, **payload.model_dump())
    db.add(e)
    db.commit()
    db.refresh(e)
    log.info("timesheet entry %s: %d min on project %s", e.id, e.minutes, e.project_id)
    return e

def list_entries(
    db: Session,
    org_id: uuid.UUID,
    *,
    user_id: uuid.UUID | None = None,
    project_id: uuid.UUID | None = None,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
    page: int = 1,
    limit: int = 50,
) -> tuple[list[TimesheetEntry], int]:
    q = select(TimesheetEntry).where(TimesheetEntry.org_id == org_id)
    if user_id is not None:
        q = q.where(TimesheetEntry.user_id == user_id)
    if project_id is not None:
        q = q.where(TimesheetEntry.project_id == project_id)
    # the range only applies with both ends
    if date_from is not None and date_to is not None:
        q = q.where(TimesheetEntry.date >= date_from, TimesheetEntry.date <= date_to)

    total = db.scalar(select(func.count()).select_from(q.subquery())) or 0
    rows = db.scalars(
        q.order_by(TimesheetEntry.date.desc(), TimesheetEntry.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    return list(rows), total

def update_entry(
    db: Session, org_id: uuid.UUID, entry_id: uuid.UUID, payload: TimesheetEntryUpdateIn
) -> TimesheetEntry:
    e = get_entry(db, org_id, entry_id)
    fields = payload.model_dump(exclude_unset=True)

    if fields.get("task_id") is not None:
        _check_task(db, org_id, e.project_id, fields["task_id"])

    for name, value in fields.items():
        if value is None and name in {"date", "minutes", "billable"}:
            continue
        setattr(e, name, value)

    db.add(e)
    db.commit()
    db.refresh(e)
    return e

def delete_entry(db: Session, org_id: uuid.UUID, entry_id: uuid.UUID) -> None:
    e = get_entry(db, org_id, entry_id)
    db.delete(e)
    db.commit()
    log.info("timesheet entry %s deleted", entry_id)

def weekly_summary(
    db: Session,
    org_id: uuid.UUID,
    *,
    user_id: uuid.UUID | None = None,
    week_start: dt.date | None = None,
    today: dt.date | None = None,
) -> dict:
    """Totals for one seven-day window, grouped by day and by project.

    ``daily_summary`` and ``project_summary`` hold ORM entries/projects;
    callers render them.
    """
    start = week_start or week_start_of(today or dt.date.today())
    end = start + dt.timedelta(days=6)

    q = select(TimesheetEntry).where(
        TimesheetEntry.org_id == org_id,
        TimesheetEntry.date >= start,
        TimesheetEntry.date <= end,
    )
    if user_id is not None:
        q = q.where(TimesheetEntry.user_id == user_id)
    entries = db.scalars(q.order_by(TimesheetEntry.date.asc(), TimesheetEntry.created_at.asc())).all()

    daily: dict[str, dict] = {}
    projects: dict[uuid.UUID, dict] = {}
    for e in entries:
        day = daily.setdefault(
            e.date.isoformat(), {"total_minutes": 0, "billable_minutes": 0, "entries": []}
        )
        day["total_minutes"] += e.minutes
        if e.billable:
            day["billable_minutes"] += e.minutes
        day["entries"].append(e)

        proj = projects.setdefault(
            e.project_id, {"project": e.project, "total_minutes": 0, "billable_minutes": 0}
        )
        proj["total_minutes"] += e.minutes
        if e.billable:
            proj["billable_minutes"] += e.minutes

    totals = summarize_minutes(list(entries))
    return {
        "week_start": start,
        "week_end": end,
        "total_hours": totals["total_hours"],
        "billable_hours": totals["billable_hours"],
        "daily_summary": daily,
        "project_summary": list(projects.values()),
    }
