import datetime as dt
import uuid
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, ForeignKey, Integer, Numeric, Text, Uuid, func, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from timeboard.clock import now_utc
from timeboard.models.base import Base
from timeboard.models.project import Project
from timeboard.models.task import Task
from timeboard.models.user import User

class TimesheetEntry(Base):
    __tablename__ = "timesheet_entries"
    __table_args__ = (CheckConstraint("minutes > 0 AND minutes <= 1440", name="ck_timesheet_minutes"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    org_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("orgs.id"), index=True, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), index=True, nullable=False)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("projects.id"), index=True, nullable=False
    )
    task_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("tasks.id"), index=True, nullable=True
    )

    date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)
    minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    billable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    hourly_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    project: Mapped[Project] = relationship(lazy="joined")
    task: Mapped[Task | None] = relationship(lazy="joined")
    user: Mapped[User] = relationship(lazy="joined")
