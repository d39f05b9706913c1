import uuid
from dataclasses import dataclass

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from timeboard.auth.tokens import decode_access_token
from timeboard.db import get_db
from timeboard.errors import Unauthorized
from timeboard.models.enums import Role
from timeboard.models.user import User

bearer = HTTPBearer(auto_error=False)

@dataclass(frozen=True)
class Identity:
    """Who is calling: every tenant-scoped query takes ``org_id`` from here."""

    user_id: uuid.UUID
    org_id: uuid.UUID
    role: Role
    user: User

def get_identity(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> Identity:
    if creds is None or creds.scheme.lower() != "bearer":
        raise Unauthorized("missing bearer token")

    try:
        payload = decode_access_token(creds.credentials)
        user_id = uuid.UUID(payload["sub"])
        org_id = uuid.UUID(payload["org_id"])
    except (jwt.PyJWTError, KeyError, ValueError, TypeError):
        raise Unauthorized("invalid token")

    user = db.get(User, user_id)
    if user is None or not user.active:
        raise Unauthorized("user not found")

    # token minted for another org
    if user.org_id != org_id:
        raise Unauthorized("invalid token")

    # role comes from the store, not the token
    return Identity(user_id=user.id, org_id=user.org_id, role=user.role, user=user)
