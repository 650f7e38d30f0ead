from typing import Protocol

from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from ..models.User import Status
from ..user.repository import UserRepository


class IdentityDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    user_id: int | None = None
    authorities: tuple[str, ...] = ()
    enabled: bool = True


class AuthenticatedIdentity(BaseModel):
    """
    Identity established by a verified access token. No credential
    material is carried: the token was the proof, not a password.
    """
    model_config = ConfigDict(frozen=True)

    principal: IdentityDetails
    credentials: str = ""
    authorities: tuple[str, ...] = ()

    @property
    def username(self) -> str:
        return self.principal.username


class IdentityLookup(Protocol):
    def load_by_username(self, username: str) -> IdentityDetails | None: ...


class UserIdentityLookup:
    """Resolves token subjects against the users table."""

    def __init__(self, session: Session):
        self.users = UserRepository(session)

    def load_by_username(self, username: str) -> IdentityDetails | None:
        user = self.users.find_by_email(username)
        if user is None:
            return None
        return IdentityDetails(
            username=user.username,
            user_id=user.id,
            authorities=(f"ROLE_{user.role.value}",),
            enabled=user.status == Status.ACTIVE,
        )
