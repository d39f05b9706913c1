import datetime as dt
import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from timeboard.auth.deps import Identity
from timeboard.config import settings
from timeboard.db import get_db
from timeboard.models.timesheet_entry import TimesheetEntry
from timeboard.rbac.deps import require_perm
from timeboard.schemas.common import page_of
from timeboard.schemas.timesheets import (
    TimesheetEntryCreateIn,
    TimesheetEntryOut,
    TimesheetEntryUpdateIn,
    TimesheetPage,
    WeeklySummaryOut,
)
from timeboard.services import timesheets as svc

router = APIRouter(prefix="/timesheets", tags=["timesheets"])

def _entry_out(e: TimesheetEntry) -> TimesheetEntryOut:
    return TimesheetEntryOut(
        id=e.id,
        org_id=e.org_id,
        date=e.date,
        minutes=e.minutes,
        billable=e.billable,
        hourly_rate=e.hourly_rate,
        notes=e.notes,
        project={"id": e.project.id, "name": e.project.name, "code": e.project.code},
        task={"id": e.task.id, "title": e.task.title} if e.task else None,
        user={"id": e.user.id, "name": e.user.name},
        created_at=e.created_at,
    )

@router.post("", response_model=TimesheetEntryOut, status_code=201)
def create_entry(
    payload: TimesheetEntryCreateIn,
    ident: Identity = Depends(require_perm("timesheets:create")),
    db: Session = Depends(get_db),
) -> TimesheetEntryOut:
    return _entry_out(svc.create_entry(db, ident.org_id, ident.user_id, payload))

@router.get("", response_model=TimesheetPage)
def list_entries(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    user_id: uuid.UUID | None = None,
    project_id: uuid.UUID | None = None,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
    ident: Identity = Depends(require_perm("timesheets:read")),
    db: Session = Depends(get_db),
) -> TimesheetPage:
    rows, total = svc.list_entries(
        db,
        ident.org_id,
        user_id=user_id,
        project_id=project_id,
        date_from=date_from,
        date_to=date_to,
        page=page,
        limit=limit,
    )
    return TimesheetPage(
        **page_of([_entry_out(r) for r in rows], total, page, limit),
        summary=svc.summarize_minutes(rows),
    )

@router.get("/weekly", response_model=WeeklySummaryOut)
def get_weekly_summary(
    user_id: uuid.UUID | None = None,
    week_start: dt.date | None = None,
    ident: Identity = Depends(require_perm("timesheets:read")),
    db: Session = Depends(get_db),
) -> WeeklySummaryOut:
    s = svc.weekly_summary(db, ident.org_id, user_id=user_id, week_start=week_start)
    return WeeklySummaryOut(
        week_start=s["week_start"],
        week_end=s["week_end"],
        total_hours=s["total_hours"],
        billable_hours=s["billable_hours"],
        daily_summary={
            day: {**d, "entries": [_entry_out(e) for e in d["entries"]]}
            for day, d in s["daily_summary"].items()
        },
        project_summary=[
            {
                "project": {"id": p["project"].id, "name": p["project"].name, "code": p["project"].code},
                "total_minutes": p["total_minutes"],
                "billable_minutes": p["billable_minutes"],
            }
            for p in s["project_summary"]
        ],
    )

@router.get("/{entry_id}", response_model=TimesheetEntryOut)
def get_entry(
    entry_id: uuid.UUID,
    ident: Identity = Depends(require_perm("timesheets:read")),
    db: Session = Depends(get_db),
) -> TimesheetEntryOut:
    return _entry_out(svc.get_entry(db, ident.org_id, entry_id))

@router.patch("/{entry_id}", response_model=TimesheetEntryOut)
def update_entry(
    entry_id: uuid.UUID,
    payload: TimesheetEntryUpdateIn,
    ident: Identity = Depends(require_perm("timesheets:update")),
    db: Session = Depends(get_db),
) -> TimesheetEntryOut:
    return _entry_out(svc.update_entry(db, ident.org_id, entry_id, payload))

@router.delete("/{entry_id}")
def delete_entry(
    entry_id: uuid.UUID,
    ident: Identity = Depends(require_perm("timesheets:delete")),
    db: Session = Depends(get_db),
) -> dict:
    svc.delete_entry(db, ident.org_id, entry_id)
    return {"deleted": True}
