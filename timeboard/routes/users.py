import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from timeboard.auth.deps import Identity
from timeboard.db import get_db
from timeboard.models.user import User
from timeboard.rbac.deps import require_perm
from timeboard.schemas.users import UserCreateIn, UserOut
from timeboard.services import users as svc

router = APIRouter(prefix="/users", tags=["users"])

def user_out(u: User) -> UserOut:
    return UserOut(
        id=u.id,
        email=u.email,
        name=u.name,
        role=u.role,
        last_login_at=u.last_login_at,
        created_at=u.created_at,
    )

@router.get("", response_model=list[UserOut])
def list_users(
    ident: Identity = Depends(require_perm("users:read")),
    db: Session = Depends(get_db),
) -> list[UserOut]:
    return [user_out(u) for u in svc.list_users(db, ident.org_id)]

@router.post("", response_model=UserOut, status_code=201)
def create_user(
    payload: UserCreateIn,
    ident: Identity = Depends(require_perm("users:create")),
    db: Session = Depends(get_db),
) -> UserOut:
    return user_out(svc.create_user(db, ident.org_id, ident.role, payload))

@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: uuid.UUID,
    ident: Identity = Depends(require_perm("users:read")),
    db: Session = Depends(get_db),
) -> UserOut:
    return user_out(svc.get_user(db, ident.org_id, user_id))
