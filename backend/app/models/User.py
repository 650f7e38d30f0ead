from enum import Enum

from sqlmodel import Field, SQLModel
from pydantic import EmailStr

from .RefreshToken import TokenResponse


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class Status(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DELETED = "DELETED"

# ==========================================
# SQLModel (Database Entity + Base Pydantic)
# ==========================================
class User(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, nullable=False)
    hashed_password: str = Field(nullable=False)
    name: str = Field(nullable=False)
    role: Role = Field(default=Role.USER)
    status: Status = Field(default=Status.ACTIVE)

    @property
    def username(self) -> str:
        # Email is the login name and the access token subject
        return self.email

# ==========================================
# Pydantic Models (DTOs)
# ==========================================

# Properties to receive via API on registration
class UserCreateRequest(SQLModel):
    email: EmailStr
    password: str
    name: str

# Properties to receive via API on login
class LoginRequest(SQLModel):
    email: EmailStr
    password: str

# Returned after a successful registration
class UserCreateResponse(TokenResponse):
    user_id: int

# Properties to return via API
class UserResponse(SQLModel):
    id: int
    email: str
    name: str
    role: Role
    status: Status
