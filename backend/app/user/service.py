from sqlmodel import Session

from ..auth.jwt_provider import JwtTokenProvider
from ..auth.passwords import PasswordEncoder
from ..auth.repository import RefreshTokenRepository
from ..core.database import unit_of_work
from ..core.errors import (
    DuplicateRegistrationError,
    InvalidCredentialsError,
    UnknownRefreshTokenError,
)
from ..core.logging import get_logger
from ..models.RefreshToken import TokenResponse
from ..models.User import (
    LoginRequest,
    Role,
    Status,
    User,
    UserCreateRequest,
    UserCreateResponse,
)
from .repository import UserRepository

logger = get_logger("carpool.user")


class UserService:
    def __init__(
        self,
        session: Session,
        token_provider: JwtTokenProvider,
        user_repository: UserRepository | None = None,
        refresh_token_repository: RefreshTokenRepository | None = None,
        password_encoder: PasswordEncoder | None = None,
    ):
        self.session = session
        self.token_provider = token_provider
        self.users = user_repository or UserRepository(session)
        self.refresh_tokens = refresh_token_repository or RefreshTokenRepository(session)
        self.password_encoder = password_encoder or PasswordEncoder()

    def join_user(self, request: UserCreateRequest) -> UserCreateResponse:
        """
        Registers a new user and issues their first token pair. The
        duplicate check, the user insert and the refresh token insert
        commit together or not at all.
        """
        with unit_of_work(self.session):
            self._validate_duplicate_user(request.email)
            user = self.users.save(self._create_user(request))

            access_token = self.token_provider.create_access_token(user)
            refresh_token = self.refresh_tokens.save(self.token_provider.create_refresh_token(user))
            response = UserCreateResponse(
                user_id=user.id,
                access_token=access_token,
                refresh_token=refresh_token.key,
            )

        logger.info("User registered", user_id=response.user_id)
        return response

    def login(self, request: LoginRequest) -> TokenResponse:
        with unit_of_work(self.session):
            user = self.users.find_by_email(request.email)
            if user is None or user.status != Status.ACTIVE:
                raise InvalidCredentialsError()
            if not self.password_encoder.matches(request.password, user.hashed_password):
                raise InvalidCredentialsError()

            response = self._issue_tokens(user)

        logger.info("User logged in", user_id=user.id)
        return response

    def reissue(self, refresh_key: str) -> TokenResponse:
        """
        Trades a stored refresh token for a new access token. The refresh
        token is rotated: the presented record is deleted and replaced.
        """
        self.token_provider.validate_refresh_token(refresh_key)

        with unit_of_work(self.session):
            stored = self.refresh_tokens.find_by_key(refresh_key)
            if stored is None:
                raise UnknownRefreshTokenError()

            user = self.users.find_by_id(stored.value)
            if user is None or user.status != Status.ACTIVE:
                raise UnknownRefreshTokenError("Refresh token owner is no longer active")

            if not self.refresh_tokens.delete_by_key(refresh_key):
                # Rotated by a concurrent reissue after our lookup
                raise UnknownRefreshTokenError()
            response = self._issue_tokens(user)

        logger.info("Tokens reissued", user_id=user.id)
        return response

    def logout(self, refresh_key: str) -> bool:
        with unit_of_work(self.session):
            return self.refresh_tokens.delete_by_key(refresh_key)

    def _issue_tokens(self, user: User) -> TokenResponse:
        access_token = self.token_provider.create_access_token(user)
        refresh_token = self.refresh_tokens.save(self.token_provider.create_refresh_token(user))
        return TokenResponse(access_token=access_token, refresh_token=refresh_token.key)

    def _validate_duplicate_user(self, email: str) -> None:
        if self.users.find_by_email(email) is not None:
            raise DuplicateRegistrationError(details={"email": email})

    def _create_user(self, request: UserCreateRequest) -> User:
        return User(
            email=request.email,
            hashed_password=self.password_encoder.encode(request.password),
            name=request.name,
            role=Role.USER,
            status=Status.ACTIVE,
        )
