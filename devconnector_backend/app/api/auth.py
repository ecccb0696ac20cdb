from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.security import get_current_user_id
from app.services import registration
from schemas.user import LoginRequest, TokenResponse, UserResponse

router = APIRouter()


@router.get("", response_model=UserResponse)
async def current_user(user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    user = await registration.get_user(db, user_id)
    return UserResponse(id=user.id, name=user.name, email=user.email, avatar=user.avatar, date=user.date)


@router.post("", response_model=TokenResponse)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    token = await registration.login(db, payload.email, payload.password)
    return TokenResponse(token=token)
