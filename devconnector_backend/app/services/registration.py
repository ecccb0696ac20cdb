import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ConflictError, NotFoundError, ValidationError, field_error
from app.security import check_password, hash_password, sign_token
from app.utils.avatar import gravatar_url
from app.validation import validate_login, validate_registration
from models.user import User

logger = logging.getLogger("devconnector.users")


def _normalize_email(email: str) -> str:
    return email.strip().lower()


async def find_user_by_email(db: AsyncSession, email: str) -> User | None:
    res = await db.execute(select(User).where(User.email == _normalize_email(email)))
    return res.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: str) -> User:
    user = (await db.execute(select(User).where(User.id == user_id))).scalar_one_or_none()
    if not user:
        raise NotFoundError("User Not Found")
    return user


async def register(db: AsyncSession, name: str | None, email: str | None, password: str | None) -> str:
    validate_registration(name, email, password)
    email = _normalize_email(email)
    if await find_user_by_email(db, email):
        raise ConflictError("User Already Exists")

    user = User(
        name=name.strip(),
        email=email,
        password=hash_password(password),
        avatar=gravatar_url(email),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # 并发注册同一邮箱时由唯一索引兜底
        await db.rollback()
        raise ConflictError("User Already Exists")
    logger.info("user registered id=%s", user.id)
    return sign_token(user.id)


async def login(db: AsyncSession, email: str | None, password: str | None) -> str:
    validate_login(email, password)
    user = await find_user_by_email(db, email)
    if not user or not check_password(password, user.password):
        logger.info("login rejected email=%s", _normalize_email(email))
        raise ValidationError([field_error("email", "Invalid Credentials")])
    return sign_token(user.id)
