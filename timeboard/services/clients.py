import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from timeboard.errors import Forbidden, NotFound
from timeboard.models.client import Client
from timeboard.models.project import Project
from timeboard.schemas.clients import ClientCreateIn, ClientUpdateIn

log = logging.getLogger(__name__)

def get_client(db: Session, org_id: uuid.UUID, client_id: uuid.UUID) -> Client:
    c = db.scalar(select(Client).where(Client.id == client_id, Client.org_id == org_id))
    if c is None:
        raise NotFound("client not found")
    return c

def project_counts(db: Session, org_id: uuid.UUID, client_ids: list[uuid.UUID]) -> dict[uuid.UUID, int]:
    if not client_ids:
        return {}
    rows = db.execute(
        select(Project.client_id, func.count())
        .where(Project.org_id == org_id, Project.client_id.in_(client_ids))
        .group_by(Project.client_id)
    ).all()
    return dict(rows)

def create_client(db: Session, org_id: uuid.UUID, payload: ClientCreateIn) -> Client:
    c = Client(org_id=org_id, **payload.model_dump())
    db.add(c)
    db.commit()
    db.refresh(c)
    log.info("client %s created", c.id)
    return c

def list_clients(
    db: Session,
    org_id: uuid.UUID,
    *,
    search: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Client], int]:
    q = select(Client).where(Client.org_id == org_id)
    if search:
        q = q.where(
            Client.name.icontains(search, autoescape=True)
            | Client.email.icontains(search, autoescape=True)
        )

    total = db.scalar(select(func.count()).select_from(q.subquery())) or 0
    rows = db.scalars(
        q.order_by(Client.created_at.desc()).offset((page - 1) * limit).limit(limit)
    ).all()
    return list(rows), total

def update_client(db: Session, org_id: uuid.UUID, client_id: uuid.UUID, payload: ClientUpdateIn) -> Client:
    c = get_client(db, org_id, client_id)
    for name, value in payload.model_dump(exclude_unset=True).items():
        if value is None and name in {"name", "active"}:
            continue
        setattr(c, name, value)
    db.add(c)
    db.commit()
    db.refresh(c)
    return c

def delete_client(db: Session, org_id: uuid.UUID, client_id: uuid.UUID) -> None:
    c = get_client(db, org_id, client_id)
    n = project_counts(db, org_id, [c.id]).get(c.id, 0)
    if n > 0:
        log.warning("refused delete of client %s: %d projects", c.id, n)
        raise Forbidden("cannot delete client with projects")
    db.delete(c)
    db.commit()
    log.info("client %s deleted", client_id)
