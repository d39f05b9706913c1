import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from timeboard.auth.passwords import hash_password, verify_password
from timeboard.clock import now_utc
from timeboard.errors import Conflict, Forbidden, NotFound, Unauthorized
from timeboard.models.enums import Role
from timeboard.models.org import Org
from timeboard.models.user import User
from timeboard.rbac.perms import GRANTABLE_ROLES
from timeboard.schemas.auth import RegisterIn
from timeboard.schemas.orgs import OrgUpdateIn
from timeboard.schemas.users import UserCreateIn

log = logging.getLogger(__name__)

def _normalize_email(email: str) -> str:
    return email.lower().strip()

def _ensure_email_free(db: Session, email: str) -> None:
    if db.scalar(select(User.id).where(User.email == email)) is not None:
        raise Conflict("user with this email already exists")

def register_org(db: Session, payload: RegisterIn) -> tuple[Org, User]:
    """Create an organization and its owner in one transaction."""
    email = _normalize_email(payload.email)
    _ensure_email_free(db, email)

    org = Org(name=payload.organization_name)
    db.add(org)
    db.flush()

    user = User(
        org_id=org.id,
        email=email,
        name=payload.admin_name,
        role=Role.owner,
        password_hash=hash_password(payload.password),
        last_login_at=now_utc(),
    )
    db.add(user)
    db.commit()
    db.refresh(org)
    db.refresh(user)
    log.info("registered org %s with owner %s", org.id, user.id)
    return org, user

def authenticate(db: Session, email: str, password: str) -> tuple[Org, User]:
    user = db.scalar(select(User).where(User.email == _normalize_email(email)))
    if user is None or not user.active or not verify_password(password, user.password_hash):
        log.info("failed login for %s", _normalize_email(email))
        raise Unauthorized("invalid credentials")

    user.last_login_at = now_utc()
    db.add(user)
    db.commit()
    db.refresh(user)

    org = db.get(Org, user.org_id)
    if org is None:
        raise Unauthorized("invalid credentials")
    return org, user

def get_org(db: Session, org_id: uuid.UUID) -> Org:
    org = db.get(Org, org_id)
    if org is None:
        raise NotFound("organization not found")
    return org

def update_org(db: Session, org_id: uuid.UUID, payload: OrgUpdateIn) -> Org:
    org = get_org(db, org_id)
    for name, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(org, name, value)
    db.add(org)
    db.commit()
    db.refresh(org)
    return org

def list_users(db: Session, org_id: uuid.UUID) -> list[User]:
    q = (
        select(User)
        .where(User.org_id == org_id, User.active.is_(True))
        .order_by(User.created_at.desc())
    )
    return list(db.scalars(q).all())

def get_user(db: Session, org_id: uuid.UUID, user_id: uuid.UUID) -> User:
    user = db.scalar(
        select(User).where(User.id == user_id, User.org_id == org_id, User.active.is_(True))
    )
    if user is None:
        raise NotFound("user not found")
    return user

def create_user(db: Session, org_id: uuid.UUID, creator_role: Role, payload: UserCreateIn) -> User:
    allowed = GRANTABLE_ROLES.get(creator_role, set())
    if payload.role not in allowed:
        log.warning("%s may not grant role %s", creator_role.value, payload.role.value)
        raise Forbidden("forbidden")

    email = _normalize_email(payload.email)
    _ensure_email_free(db, email)

    user = User(
        org_id=org_id,
        email=email,
        name=payload.name,
        role=payload.role,
        password_hash=hash_password(payload.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    log.info("user %s created in org %s as %s", user.id, org_id, user.role.value)
    return user
