"""init schema

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-19
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

# sqlalchemy Enum columns store member names
ROLES = ("owner", "admin", "manager", "team_member", "client")
PROJECT_STATUSES = ("planned", "active", "on_hold", "completed", "cancelled")
PRIORITIES = ("low", "medium", "high", "urgent")

def upgrade() -> None:
    # enums
    postgresql.ENUM(*ROLES, name="role").create(op.get_bind(), checkfirst=True)
    postgresql.ENUM(*PROJECT_STATUSES, name="project_status").create(op.get_bind(), checkfirst=True)
    postgresql.ENUM(*PRIORITIES, name="priority").create(op.get_bind(), checkfirst=True)

    role = postgresql.ENUM(*ROLES, name="role", create_type=False)
    project_status = postgresql.ENUM(*PROJECT_STATUSES, name="project_status", create_type=False)
    priority = postgresql.ENUM(*PRIORITIES, name="priority", create_type=False)

    uuid_t = sa.dialects.postgresql.UUID(as_uuid=True)

    def timestamps() -> list[sa.Column]:
        return [
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        ]

    op.create_table(
        "orgs",
        sa.Column("id", uuid_t, primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("timezone", sa.String(length=64), nullable=False, server_default="UTC"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )

    op.create_table(
        "users",
        sa.Column("id", uuid_t, primary_key=True, nullable=False),
        sa.Column("org_id", uuid_t, sa.ForeignKey("orgs.id"), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("role", role, nullable=False, server_default="team_member"),
        sa.Column("password_hash", sa.String(length=100), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_org_id", "users", ["org_id"])

    op.create_table(
        "clients",
        sa.Column("id", uuid_t, primary_key=True, nullable=False),
        sa.Column("org_id", uuid_t, sa.ForeignKey("orgs.id"), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("billing_address", sa.Text(), nullable=True),
        sa.Column("tax_id", sa.String(length=64), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *timestamps(),
    )
    op.create_index("ix_clients_org_id", "clients", ["org_id"])

    op.create_table(
        "projects",
        sa.Column("id", uuid_t, primary_key=True, nullable=False),
        sa.Column("org_id", uuid_t, sa.ForeignKey("orgs.id"), nullable=False),
        sa.Column("client_id", uuid_t, sa.ForeignKey("clients.id"), nullable=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("code", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", project_status, nullable=False, server_default="planned"),
        sa.Column("budget_hours", sa.Integer(), nullable=True),
        sa.Column("budget_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("color", sa.String(length=7), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *timestamps(),
        sa.UniqueConstraint("org_id", "code", name="uq_project_org_code"),
    )
    op.create_index("ix_projects_org_id", "projects", ["org_id"])
    op.create_index("ix_projects_client_id", "projects", ["client_id"])

    op.create_table(
        "tasks",
        sa.Column("id", uuid_t, primary_key=True, nullable=False),
        sa.Column("org_id", uuid_t, sa.ForeignKey("orgs.id"), nullable=False),
        sa.Column("project_id", uuid_t, sa.ForeignKey("projects.id"), nullable=False),
        sa.Column("parent_id", uuid_t, sa.ForeignKey("tasks.id"), nullable=True),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="TODO"),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("priority", priority, nullable=False, server_default="medium"),
        sa.Column("tags", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("estimated_hours", sa.Integer(), nullable=True),
        *timestamps(),
    )
    op.create_index("ix_tasks_org_id", "tasks", ["org_id"])
    op.create_index("ix_tasks_project_id", "tasks", ["project_id"])
    op.create_index("ix_tasks_parent_id", "tasks", ["parent_id"])
    op.create_index("ix_tasks_lane", "tasks", ["org_id", "project_id", "status", "order_index"])

    op.create_table(
        "task_assignees",
        sa.Column("task_id", uuid_t, sa.ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_id", uuid_t, sa.ForeignKey("users.id"), primary_key=True),
    )

    op.create_table(
        "timesheet_entries",
        sa.Column("id", uuid_t, primary_key=True, nullable=False),
        sa.Column("org_id", uuid_t, sa.ForeignKey("orgs.id"), nullable=False),
        sa.Column("user_id", uuid_t, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("project_id", uuid_t, sa.ForeignKey("projects.id"), nullable=False),
        sa.Column("task_id", uuid_t, sa.ForeignKey("tasks.id"), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("minutes", sa.Integer(), nullable=False),
        sa.Column("billable", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *timestamps(),
        sa.CheckConstraint("minutes > 0 AND minutes <= 1440", name="ck_timesheet_minutes"),
    )
    op.create_index("ix_timesheet_entries_org_id", "timesheet_entries", ["org_id"])
    op.create_index("ix_timesheet_entries_user_id", "timesheet_entries", ["user_id"])
    op.create_index("ix_timesheet_entries_project_id", "timesheet_entries", ["project_id"])
    op.create_index("ix_timesheet_entries_task_id", "timesheet_entries", ["task_id"])
    op.create_index("ix_timesheet_entries_date", "timesheet_entries", ["date"])

def downgrade() -> None:
    for name in ("date", "task_id", "project_id", "user_id", "org_id"):
        op.drop_index(f"ix_timesheet_entries_{name}", table_name="timesheet_entries")
    op.drop_table("timesheet_entries")

    op.drop_table("task_assignees")

    op.drop_index("ix_tasks_lane", table_name="tasks")
    op.drop_index("ix_tasks_parent_id", table_name="tasks")
    op.drop_index("ix_tasks_project_id", table_name="tasks")
    op.drop_index("ix_tasks_org_id", table_name="tasks")
    op.drop_table("tasks")

    op.drop_index("ix_projects_client_id", table_name="projects")
    op.drop_index("ix_projects_org_id", table_name="projects")
    op.drop_table("projects")

    op.drop_index("ix_clients_org_id", table_name="clients")
    op.drop_table("clients")

    op.drop_index("ix_users_org_id", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

    op.drop_table("orgs")

    postgresql.ENUM(name="priority").drop(op.get_bind(), checkfirst=True)
    postgresql.ENUM(name="project_status").drop(op.get_bind(), checkfirst=True)
    postgresql.ENUM(name="role").drop(op.get_bind(), checkfirst=True)
