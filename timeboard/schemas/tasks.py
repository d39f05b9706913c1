import datetime as dt
import uuid

from pydantic import BaseModel, Field

from timeboard.models.enums import Priority, TaskStatus
from timeboard.schemas.common import ProjectRef, Ref, TaskRef, UtcDatetime

class TaskCreateIn(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: str | None = None
    project_id: uuid.UUID
    parent_id: uuid.UUID | None = None
    status: TaskStatus = TaskStatus.todo
    priority: Priority = Priority.medium
    tags: list[str] = Field(default_factory=list, max_length=10)
    due_date: dt.date | None = None
    estimated_hours: int | None = Field(default=None, ge=0)
    assignee_ids: list[uuid.UUID] | None = Field(default=None, max_length=20)
    # omitted: appended to the end of its lane
    order_index: int | None = None

# project_id is fixed at creation
class TaskUpdateIn(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = None
    parent_id: uuid.UUID | None = None
    status: TaskStatus | None = None
    priority: Priority | None = None
    tags: list[str] | None = Field(default=None, max_length=10)
    due_date: dt.date | None = None
    estimated_hours: int | None = Field(default=None, ge=0)
    assignee_ids: list[uuid.UUID] | None = Field(default=None, max_length=20)
    order_index: int | None = None

class TaskOrderItem(BaseModel):
    id: uuid.UUID
    order_index: int

class TaskOrderIn(BaseModel):
    tasks: list[TaskOrderItem] = Field(min_length=1)

class TaskOrderOut(BaseModel):
    success: bool = True
    updated: int

class TaskCardOut(BaseModel):
    id: uuid.UUID
    title: str
    # str: legacy rows may hold values outside TaskStatus
    status: str
    priority: Priority
    order_index: int
    parent_id: uuid.UUID | None
    tags: list[str]
    due_date: dt.date | None
    estimated_hours: int | None
    assignees: list[Ref]
    subtask_count: int
    time_entry_count: int
    created_at: UtcDatetime

class TaskOut(TaskCardOut):
    org_id: uuid.UUID
    project_id: uuid.UUID
    description: str | None
    project: ProjectRef
    updated_at: UtcDatetime

class SubtaskOut(BaseModel):
    id: uuid.UUID
    title: str
    status: str
    priority: Priority
    order_index: int

class TimeEntryBrief(BaseModel):
    id: uuid.UUID
    date: dt.date
    minutes: int
    user: Ref

class TaskDetailOut(TaskOut):
    parent: TaskRef | None
    subtasks: list[SubtaskOut]
    recent_time_entries: list[TimeEntryBrief]

class KanbanOut(BaseModel):
    project: ProjectRef
    board: dict[TaskStatus, list[TaskCardOut]]
