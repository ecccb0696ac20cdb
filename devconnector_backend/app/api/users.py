from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services import registration
from schemas.user import UserRegisterRequest, TokenResponse

router = APIRouter()


@router.post("", response_model=TokenResponse)
async def register_user(payload: UserRegisterRequest, db: AsyncSession = Depends(get_db)):
    token = await registration.register(db, payload.name, payload.email, payload.password)
    return TokenResponse(token=token)
