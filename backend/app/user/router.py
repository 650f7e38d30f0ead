from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from ..auth.dependencies import get_current_identity, get_user_service
from ..auth.identity import AuthenticatedIdentity
from ..core.database import get_session
from ..models.User import User, UserCreateRequest, UserCreateResponse, UserResponse
from .service import UserService

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserCreateResponse, status_code=status.HTTP_201_CREATED)
async def join_user(request: UserCreateRequest, service: UserService = Depends(get_user_service)):
    """
    Register a new user. Returns the first access and refresh token.
    """
    return service.join_user(request)

@router.get("/me", response_model=UserResponse)
async def get_me(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    session: Session = Depends(get_session),
):
    """
    Get the authenticated user's information.
    """
    user = session.get(User, identity.principal.user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
