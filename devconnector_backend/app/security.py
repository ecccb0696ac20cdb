import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from fastapi import Request
from jose import JWTError, jwt

from app.config import settings
from app.errors import AuthError


def _split_header_names(raw_value: str, fallback: list[str]) -> list[str]:
    names = [item.strip().lower() for item in (raw_value or "").split(",") if item.strip()]
    return names or fallback


TOKEN_HEADER_NAMES = _split_header_names(
    settings.AUTH_TOKEN_HEADERS,
    ["x-auth-token", "authorization"],
)
JWT_SECRET = settings.AUTH_JWT_SECRET or "devconnector-dev-secret"
JWT_ALGORITHM = settings.AUTH_JWT_ALGORITHM or "HS256"
logger = logging.getLogger("devconnector.security")


def _audit_auth_failure(request: Request | None, reason: str, *, token_present: bool) -> None:
    if not request:
        logger.warning("AUTH_DENY reason=%s", reason)
        return
    path = getattr(getattr(request, "url", None), "path", "-")
    method = getattr(request, "method", "-")
    client = getattr(request, "client", None)
    ip = getattr(client, "host", "-") if client else "-"
    logger.warning(
        "AUTH_DENY reason=%s method=%s path=%s ip=%s token_present=%s",
        reason,
        method,
        path,
        ip,
        int(bool(token_present)),
    )


# ---- token service ----

def sign_token(user_id: str, expires_in: int | None = None) -> str:
    seconds = expires_in if expires_in is not None else settings.AUTH_TOKEN_EXPIRE_SECONDS
    claims = {
        "sub": str(user_id),
        "exp": datetime.now(timezone.utc) + timedelta(seconds=seconds),
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> dict:
    """Return the token claims, raising ``JWTError`` on a bad signature, expiry or shape."""
    payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    if not payload.get("sub"):
        raise JWTError("token missing subject")
    return payload


# ---- password hashing ----

def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def check_password(password: str, digest: str | None) -> bool:
    if not password or not digest:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), digest.encode("utf-8"))
    except ValueError:
        # 存储的摘要格式不正确
        return False


# ---- auth gate ----

def _extract_auth_token(request: Request) -> str | None:
    if not request:
        return None
    headers = getattr(request, "headers", None)
    if not headers:
        return None
    for name in TOKEN_HEADER_NAMES:
        value = headers.get(name)
        if not value:
            continue
        raw = value.strip()
        if not raw:
            continue
        if name == "authorization":
            if raw.lower().startswith("bearer "):
                raw = raw.split(" ", 1)[1].strip()
            elif " " in raw:
                # 仅支持 Bearer 格式
                continue
        if raw:
            return raw
    return None


def authenticate(request: Request) -> str:
    token = _extract_auth_token(request)
    if not token:
        _audit_auth_failure(request, "missing_token", token_present=False)
        raise AuthError("No token, authorization denied")
    try:
        payload = verify_token(token)
    except JWTError:
        _audit_auth_failure(request, "invalid_token", token_present=True)
        raise AuthError("Token is not valid")
    user_id = str(payload["sub"])
    request.state.user_id = user_id
    return user_id


def get_current_user_id(request: Request) -> str:
    """FastAPI dependency: the authenticated user id for this request."""
    return authenticate(request)
