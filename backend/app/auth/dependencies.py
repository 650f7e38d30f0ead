from fastapi import Depends, HTTPException, Request, status
from sqlmodel import Session

from ..core.database import get_session
from ..user.service import UserService
from .identity import AuthenticatedIdentity, UserIdentityLookup
from .jwt_provider import JwtConfig, JwtTokenProvider


def get_jwt_config(request: Request) -> JwtConfig:
    # Built once in the application lifespan
    return request.app.state.jwt_config


def get_token_provider(
    config: JwtConfig = Depends(get_jwt_config),
    session: Session = Depends(get_session),
) -> JwtTokenProvider:
    return JwtTokenProvider(config, identity_lookup=UserIdentityLookup(session))


def get_user_service(
    session: Session = Depends(get_session),
    token_provider: JwtTokenProvider = Depends(get_token_provider),
) -> UserService:
    return UserService(session, token_provider)


async def get_current_identity(
    request: Request,
    token_provider: JwtTokenProvider = Depends(get_token_provider),
) -> AuthenticatedIdentity:
    """
    Authenticates the request from its bearer token. Token errors are left
    to the application's exception handler so each kind keeps its own code.
    """
    token = token_provider.resolve_token(request)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    identity = token_provider.get_authentication(token)
    if not identity.principal.enabled:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is not active")
    return identity
