from fastapi import APIRouter, Depends, status

from ..models.RefreshToken import ReissueRequest, TokenResponse
from ..models.User import LoginRequest
from ..user.service import UserService
from .dependencies import get_user_service

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=TokenResponse)
async def login(login_data: LoginRequest, service: UserService = Depends(get_user_service)):
    """
    Login with email and password to get an access and refresh token.
    """
    return service.login(login_data)

@router.post("/reissue", response_model=TokenResponse)
async def reissue(reissue_data: ReissueRequest, service: UserService = Depends(get_user_service)):
    """
    Exchange a refresh token for a new token pair. The old refresh token stops working.
    """
    return service.reissue(reissue_data.refresh_token)

@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(reissue_data: ReissueRequest, service: UserService = Depends(get_user_service)):
    """
    Forget the given refresh token.
    """
    service.logout(reissue_data.refresh_token)
    return {"message": "Logged out successfully"}
