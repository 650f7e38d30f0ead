from passlib.context import CryptContext

from ..core.settings import settings

# Password hashing
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__time_cost=2,
    argon2__memory_cost=102400,
    argon2__parallelism=8
)

class PasswordEncoder:
    """Argon2 password hashing with a server-side pepper."""

    def __init__(self, pepper: str | None = None, context: CryptContext = pwd_context):
        self.pepper = settings.PASSWORD_PEPPER if pepper is None else pepper
        self.context = context

    def encode(self, raw_password: str) -> str:
        return self.context.hash(raw_password + self.pepper)

    def matches(self, raw_password: str, hashed_password: str) -> bool:
        return self.context.verify(raw_password + self.pepper, hashed_password)
