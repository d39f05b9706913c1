import uuid

from pydantic import BaseModel, EmailStr, Field

from timeboard.models.enums import Role
from timeboard.schemas.common import UtcDatetime

class UserCreateIn(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1, max_length=200)
    role: Role = Role.team_member
    password: str = Field(min_length=8, max_length=128)

class UserOut(BaseModel):
    id: uuid.UUID
    email: str
    name: str
    role: Role
    last_login_at: UtcDatetime | None
    created_at: UtcDatetime
