import uuid

from pydantic import BaseModel, EmailStr, Field

from timeboard.schemas.common import UtcDatetime

class ClientCreateIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = None
    billing_address: str | None = None
    tax_id: str | None = Field(default=None, max_length=64)
    notes: str | None = None
    active: bool = True

class ClientUpdateIn(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = None
    billing_address: str | None = None
    tax_id: str | None = Field(default=None, max_length=64)
    notes: str | None = None
    active: bool | None = None

class ClientOut(BaseModel):
    id: uuid.UUID
    org_id: uuid.UUID
    name: str
    email: str | None
    phone: str | None
    address: str | None
    billing_address: str | None
    tax_id: str | None
    notes: str | None
    active: bool
    project_count: int = 0
    created_at: UtcDatetime
