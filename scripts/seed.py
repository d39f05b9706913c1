import datetime as dt
import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from timeboard.auth.passwords import hash_password
from timeboard.db import SessionLocal
from timeboard.logging_setup import setup_logging
from timeboard.models.enums import Priority, ProjectStatus, Role, TaskStatus
from timeboard.models.client import Client
from timeboard.models.org import Org
from timeboard.models.project import Project
from timeboard.models.task import Task
from timeboard.models.timesheet_entry import TimesheetEntry
from timeboard.models.user import User
from timeboard.services.timesheets import week_start_of

SEED_PASSWORD = "changeme123"

@dataclass
class SeedResult:
    owner_email: str
    manager_email: str
    member_email: str
    org_id: uuid.UUID
    project_id: uuid.UUID
    task_ids: list[uuid.UUID]

def get_or_create_org(db: Session, name: str) -> Org:
    o = db.scalar(select(Org).where(Org.name == name))
    if o is None:
        o = Org(name=name)
        db.add(o)
        db.flush()
    return o

def get_or_create_user(db: Session, org_id: uuid.UUID, email: str, name: str, role: Role) -> User:
    email = email.lower().strip()
    u = db.scalar(select(User).where(User.email == email))
    if u is None:
        u = User(org_id=org_id, email=email, name=name, role=role, password_hash=hash_password(SEED_PASSWORD))
        db.add(u)
        db.flush()
    elif u.role != role:
        u.role = role
        db.add(u)
        db.flush()
    return u

def get_or_create_client(db: Session, org_id: uuid.UUID, name: str) -> Client:
    c = db.scalar(select(Client).where(Client.org_id == org_id, Client.name == name))
    if c is None:
        c = Client(org_id=org_id, name=name, email="billing@acme.example.com")
        db.add(c)
        db.flush()
    return c

def get_or_create_project(db: Session, org_id: uuid.UUID, client_id: uuid.UUID, code: str, name: str) -> Project:
    p = db.scalar(select(Project).where(Project.org_id == org_id, Project.code == code))
    if p is None:
        p = Project(
            org_id=org_id,
            client_id=client_id,
            code=code,
            name=name,
            status=ProjectStatus.active,
            budget_hours=120,
            color="#3366ff",
        )
        db.add(p)
        db.flush()
    return p

def get_or_create_task(
    db: Session,
    project: Project,
    title: str,
    status: TaskStatus,
    order_index: int,
    assignees: list[User],
    parent: Task | None = None,
) -> Task:
    t = db.scalar(
        select(Task).where(
            Task.org_id == project.org_id,
            Task.project_id == project.id,
            Task.title == title,
        )
    )
    if t is None:
        t = Task(
            org_id=project.org_id,
            project_id=project.id,
            parent_id=parent.id if parent else None,
            title=title,
            status=status.value,
            order_index=order_index,
            priority=Priority.medium,
            tags=[],
            assignees=assignees,
        )
        db.add(t)
        db.flush()
    else:
        # keep it stable if you re-run seed
        t.status = status.value
        t.order_index = order_index
        db.add(t)
        db.flush()
    return t

def ensure_entry(db: Session, user: User, project: Project, task: Task, day: dt.date, minutes: int) -> None:
    found = db.scalar(
        select(TimesheetEntry.id).where(
            TimesheetEntry.org_id == project.org_id,
            TimesheetEntry.user_id == user.id,
            TimesheetEntry.task_id == task.id,
            TimesheetEntry.date == day,
        )
    )
    if found is None:
        db.add(
            TimesheetEntry(
                org_id=project.org_id,
                user_id=user.id,
                project_id=project.id,
                task_id=task.id,
                date=day,
                minutes=minutes,
                billable=True,
            )
        )
        db.flush()

def seed() -> SeedResult:
    db = SessionLocal()
    try:
        org = get_or_create_org(db, "seeded org")

        owner = get_or_create_user(db, org.id, "owner@example.com", "owner", Role.owner)
        manager = get_or_create_user(db, org.id, "manager@example.com", "manager", Role.manager)
        member = get_or_create_user(db, org.id, "member@example.com", "member", Role.team_member)

        client = get_or_create_client(db, org.id, "Acme Corp")
        project = get_or_create_project(db, org.id, client.id, "WEB", "website relaunch")

        # one card per lane, plus a subtask under the first
        tasks = [
            get_or_create_task(db, project, "write brief", TaskStatus.todo, 0, [manager]),
            get_or_create_task(db, project, "build landing page", TaskStatus.in_progress, 0, [member]),
            get_or_create_task(db, project, "review copy", TaskStatus.in_review, 0, [manager, member]),
            get_or_create_task(db, project, "kickoff call", TaskStatus.done, 0, [owner]),
        ]
        tasks.append(
            get_or_create_task(db, project, "collect references", TaskStatus.todo, 1, [member], parent=tasks[0])
        )

        monday = week_start_of(dt.date.today())
        ensure_entry(db, member, project, tasks[1], monday, 120)
        ensure_entry(db, member, project, tasks[1], monday + dt.timedelta(days=1), 90)
        ensure_entry(db, manager, project, tasks[2], monday, 45)

        db.commit()

        return SeedResult(
            owner_email=owner.email,
            manager_email=manager.email,
            member_email=member.email,
            org_id=org.id,
            project_id=project.id,
            task_ids=[t.id for t in tasks],
        )
    finally:
        db.close()

if __name__ == "__main__":
    setup_logging()
    r = seed()
    print("seed complete")
    print(f"org_id={r.org_id}")
    print(f"project_id={r.project_id}")
    print(f"tasks={len(r.task_ids)}")
    print(f"users (password {SEED_PASSWORD}):")
    print(f"  owner:   {r.owner_email}")
    print(f"  manager: {r.manager_email}")
    print(f"  member:  {r.member_email}")
