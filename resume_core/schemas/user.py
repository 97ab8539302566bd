# resume_core/schemas/user.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr

class UserCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: EmailStr
    name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    picture: str | None = None
    provider: str = "local"
    password_hash: str | None = None

class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: EmailStr | None = None
    name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    picture: str | None = None
    provider: str | None = None
    password_hash: str | None = None

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: EmailStr
    name: str | None
    first_name: str | None
    last_name: str | None
    picture: str | None
    provider: str
    password_hash: str | None
    created_at: datetime
    updated_at: datetime
