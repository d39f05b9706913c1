import datetime as dt
import uuid
from decimal import Decimal

from pydantic import BaseModel, Field

from timeboard.schemas.common import Page, ProjectRef, Ref, TaskRef, UtcDatetime

class TimesheetEntryCreateIn(BaseModel):
    project_id: uuid.UUID
    task_id: uuid.UUID | None = None
    date: dt.date
    minutes: int = Field(ge=1, le=24 * 60)
    billable: bool = True
    hourly_rate: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    notes: str | None = None

# project_id is fixed at creation
class TimesheetEntryUpdateIn(BaseModel):
    task_id: uuid.UUID | None = None
    date: dt.date | None = None
    minutes: int | None = Field(default=None, ge=1, le=24 * 60)
    billable: bool | None = None
    hourly_rate: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    notes: str | None = None

class TimesheetEntryOut(BaseModel):
    id: uuid.UUID
    org_id: uuid.UUID
    date: dt.date
    minutes: int
    billable: bool
    hourly_rate: float | None
    notes: str | None
    project: ProjectRef
    task: TaskRef | None
    user: Ref
    created_at: UtcDatetime

class MinutesSummary(BaseModel):
    total_minutes: int
    billable_minutes: int
    total_hours: float
    billable_hours: float

class TimesheetPage(Page[TimesheetEntryOut]):
    summary: MinutesSummary

class DaySummary(BaseModel):
    total_minutes: int
    billable_minutes: int
    entries: list[TimesheetEntryOut]

class ProjectWeekSummary(BaseModel):
    project: ProjectRef
    total_minutes: int
    billable_minutes: int

class WeeklySummaryOut(BaseModel):
    week_start: dt.date
    week_end: dt.date
    total_hours: float
    billable_hours: float
    # keyed by ISO date
    daily_summary: dict[str, DaySummary]
    project_summary: list[ProjectWeekSummary]
