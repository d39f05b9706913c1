import datetime as dt
import uuid
from decimal import Decimal

from pydantic import BaseModel, Field

from timeboard.models.enums import ProjectStatus
from timeboard.schemas.common import ProjectRef, Ref, UtcDatetime

_HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"

class ProjectCreateIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    code: str = Field(min_length=1, max_length=32)
    description: str | None = None
    client_id: uuid.UUID | None = None
    status: ProjectStatus = ProjectStatus.planned
    budget_hours: int | None = Field(default=None, ge=0)
    budget_amount: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    hourly_rate: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    color: str | None = Field(default=None, pattern=_HEX_COLOR)

class ProjectUpdateIn(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    code: str | None = Field(default=None, min_length=1, max_length=32)
    description: str | None = None
    client_id: uuid.UUID | None = None
    status: ProjectStatus | None = None
    budget_hours: int | None = Field(default=None, ge=0)
    budget_amount: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    hourly_rate: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    color: str | None = Field(default=None, pattern=_HEX_COLOR)

class ProjectOut(BaseModel):
    id: uuid.UUID
    org_id: uuid.UUID
    name: str
    code: str
    description: str | None
    status: ProjectStatus
    client: Ref | None
    budget_hours: int | None
    budget_amount: float | None
    hourly_rate: float | None
    start_date: dt.date | None
    end_date: dt.date | None
    color: str | None
    active: bool
    task_count: int = 0
    time_entry_count: int = 0
    created_at: UtcDatetime

class TimeTrackingSummary(BaseModel):
    total_hours: float
    billable_hours: float
    budget_hours: int | None
    remaining_budget_hours: float | None

class ProjectSummaryOut(BaseModel):
    project: ProjectRef
    status: ProjectStatus
    time_tracking: TimeTrackingSummary
    # keyed by stored status value
    tasks: dict[str, int]
