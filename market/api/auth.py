"""
POST /api/auth/token: login, returns JWT with role claim.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from market.core.auth import create_access_token
from market.core.security import verify_password
from market.db import get_db
from market.models.user import UserStatus
from market.repositories.user_repo import UserRepository
from market.schemas.auth import TokenResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/token",
    response_model=TokenResponse,
    summary="Login",
    description="Returns JWT access token. Token payload includes sub (user id), role (buyer|seller|admin), exp.",
)
async def login(
    form: OAuth2PasswordRequestForm = Depends(),
    session: AsyncSession = Depends(get_db),
) -> TokenResponse:
    repo = UserRepository(session)
    user = await repo.get_by_email(form.username)
    if (
        not user
        or user.status == UserStatus.DELETED
        or not verify_password(form.password, user.hashed_password)
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    token = create_access_token(user.id, user.role)
    return TokenResponse(access_token=token, token_type="bearer")
