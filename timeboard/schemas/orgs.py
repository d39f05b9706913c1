import uuid
from pydantic import BaseModel, Field

from timeboard.schemas.users import UserOut

class OrgUpdateIn(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    timezone: str | None = Field(default=None, min_length=1, max_length=64)

class OrgOut(BaseModel):
    id: uuid.UUID
    name: str
    currency: str
    timezone: str
    users: list[UserOut] = []
