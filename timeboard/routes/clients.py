import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from timeboard.auth.deps import Identity
from timeboard.db import get_db
from timeboard.models.client import Client
from timeboard.rbac.deps import require_perm
from timeboard.schemas.clients import ClientCreateIn, ClientOut, ClientUpdateIn
from timeboard.schemas.common import Page, page_of
from timeboard.services import clients as svc

router = APIRouter(prefix="/clients", tags=["clients"])

def _client_out(c: Client, project_count: int = 0) -> ClientOut:
    return ClientOut(
        id=c.id,
        org_id=c.org_id,
        name=c.name,
        email=c.email,
        phone=c.phone,
        address=c.address,
        billing_address=c.billing_address,
        tax_id=c.tax_id,
        notes=c.notes,
        active=c.active,
        project_count=project_count,
        created_at=c.created_at,
    )

@router.post("", response_model=ClientOut, status_code=201)
def create_client(
    payload: ClientCreateIn,
    ident: Identity = Depends(require_perm("clients:create")),
    db: Session = Depends(get_db),
) -> ClientOut:
    return _client_out(svc.create_client(db, ident.org_id, payload))

@router.get("", response_model=Page[ClientOut])
def list_clients(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = None,
    ident: Identity = Depends(require_perm("clients:read")),
    db: Session = Depends(get_db),
) -> Page[ClientOut]:
    rows, total = svc.list_clients(db, ident.org_id, search=search, page=page, limit=limit)
    counts = svc.project_counts(db, ident.org_id, [r.id for r in rows])
    items = [_client_out(r, counts.get(r.id, 0)) for r in rows]
    return Page[ClientOut](**page_of(items, total, page, limit))

@router.get("/{client_id}", response_model=ClientOut)
def get_client(
    client_id: uuid.UUID,
    ident: Identity = Depends(require_perm("clients:read")),
    db: Session = Depends(get_db),
) -> ClientOut:
    c = svc.get_client(db, ident.org_id, client_id)
    return _client_out(c, svc.project_counts(db, ident.org_id, [c.id]).get(c.id, 0))

@router.patch("/{client_id}", response_model=ClientOut)
def update_client(
    client_id: uuid.UUID,
    payload: ClientUpdateIn,
    ident: Identity = Depends(require_perm("clients:update")),
    db: Session = Depends(get_db),
) -> ClientOut:
    c = svc.update_client(db, ident.org_id, client_id, payload)
    return _client_out(c, svc.project_counts(db, ident.org_id, [c.id]).get(c.id, 0))

@router.delete("/{client_id}")
def delete_client(
    client_id: uuid.UUID,
    ident: Identity = Depends(require_perm("clients:delete")),
    db: Session = Depends(get_db),
) -> dict:
    svc.delete_client(db, ident.org_id, client_id)
    return {"deleted": True}
