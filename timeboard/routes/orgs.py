from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from timeboard.auth.deps import Identity
from timeboard.db import get_db
from timeboard.models.org import Org
from timeboard.rbac.deps import require_perm
from timeboard.routes.users import user_out
from timeboard.schemas.orgs import OrgOut, OrgUpdateIn
from timeboard.services import users as svc

router = APIRouter(prefix="/org", tags=["orgs"])

def _org_out(db: Session, org: Org) -> OrgOut:
    return OrgOut(
        id=org.id,
        name=org.name,
        currency=org.currency,
        timezone=org.timezone,
        users=[user_out(u) for u in svc.list_users(db, org.id)],
    )

@router.get("", response_model=OrgOut)
def get_current_org(
    ident: Identity = Depends(require_perm("org:view")),
    db: Session = Depends(get_db),
) -> OrgOut:
    return _org_out(db, svc.get_org(db, ident.org_id))

@router.patch("", response_model=OrgOut)
def update_current_org(
    payload: OrgUpdateIn,
    ident: Identity = Depends(require_perm("org:update")),
    db: Session = Depends(get_db),
) -> OrgOut:
    return _org_out(db, svc.update_org(db, ident.org_id, payload))
