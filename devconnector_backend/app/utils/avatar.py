import hashlib
from urllib.parse import urlencode

from app.config import settings

GRAVATAR_BASE = "//www.gravatar.com/avatar/"


def gravatar_url(email: str, *, size: str | None = None, rating: str | None = None, default: str | None = None) -> str:
    """Deterministic Gravatar URL for ``email`` (protocol-relative, like the gravatar npm helper)."""
    digest = hashlib.md5((email or "").strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({
        "s": size or settings.GRAVATAR_SIZE,
        "r": rating or settings.GRAVATAR_RATING,
        "d": default or settings.GRAVATAR_DEFAULT,
    })
    return f"{GRAVATAR_BASE}{digest}?{query}"
