import uuid
from datetime import date, datetime

from sqlalchemy import JSON, Column, Date, DateTime, Enum, ForeignKey, Index, Integer, String, Table, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from timeboard.clock import now_utc
from timeboard.models.base import Base
from timeboard.models.enums import Priority, TaskStatus
from timeboard.models.project import Project
from timeboard.models.user import User

task_assignees = Table(
    "task_assignees",
    Base.metadata,
    Column("task_id", Uuid, ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Uuid, ForeignKey("users.id"), primary_key=True),
)

class Task(Base):
    __tablename__ = "tasks"
    # lane lookups: (org, project, status) then order_index
    __table_args__ = (Index("ix_tasks_lane", "org_id", "project_id", "status", "order_index"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    org_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("orgs.id"), index=True, nullable=False)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("projects.id"), index=True, nullable=False
    )
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("tasks.id"), index=True, nullable=True
    )

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # plain string column: unknown values must survive a load so listings can show them
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=TaskStatus.todo.value)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    priority: Mapped[Priority] = mapped_column(
        Enum(Priority, name="priority"), nullable=False, default=Priority.medium
    )

    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    estimated_hours: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    project: Mapped[Project] = relationship(lazy="joined")
    parent: Mapped["Task | None"] = relationship(remote_side=[id])
    assignees: Mapped[list[User]] = relationship(
        secondary=task_assignees, lazy="selectin", order_by=User.name
    )
