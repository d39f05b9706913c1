import uuid

from pydantic import BaseModel, EmailStr, Field

from timeboard.models.enums import Role

class RegisterIn(BaseModel):
    organization_name: str = Field(min_length=1, max_length=100)
    admin_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)

class LoginIn(BaseModel):
    email: EmailStr
    password: str

class SessionUser(BaseModel):
    id: uuid.UUID
    email: str
    name: str
    role: Role
    org_id: uuid.UUID

class SessionOrg(BaseModel):
    id: uuid.UUID
    name: str

class AccessTokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: SessionUser
    organization: SessionOrg
