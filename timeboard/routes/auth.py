from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from timeboard.auth.tokens import issue_access_token
from timeboard.config import settings
from timeboard.db import get_db
from timeboard.models.org import Org
from timeboard.models.user import User
from timeboard.ratelimit import rate_limit
from timeboard.schemas.auth import AccessTokenOut, LoginIn, RegisterIn
from timeboard.services import users as svc

router = APIRouter(prefix="/auth", tags=["auth"])

def _session_out(org: Org, user: User) -> AccessTokenOut:
    return AccessTokenOut(
        access_token=issue_access_token(user.id, org.id, user.role.value),
        user={
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "role": user.role,
            "org_id": org.id,
        },
        organization={"id": org.id, "name": org.name},
    )

@router.post("/register", response_model=AccessTokenOut, status_code=201)
def register(
    payload: RegisterIn,
    db: Session = Depends(get_db),
    _: None = Depends(
        rate_limit(
            "auth:register",
            limit_per_window=settings.rate_limit_register_per_min,
            window_seconds=60,
        )
    ),
) -> AccessTokenOut:
    org, user = svc.register_org(db, payload)
    return _session_out(org, user)

@router.post("/login", response_model=AccessTokenOut)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    _: None = Depends(
        rate_limit(
            "auth:login",
            limit_per_window=settings.rate_limit_login_per_min,
            window_seconds=60,
        )
    ),
) -> AccessTokenOut:
    org, user = svc.authenticate(db, payload.email, payload.password)
    return _session_out(org, user)
