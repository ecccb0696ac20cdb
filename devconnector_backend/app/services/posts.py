"""Post, like and comment operations.

Every mutation is a read-modify-write of a single post row. The row's
``version`` column makes the write conditional on what was read, so two
requests racing on the same post cannot both succeed; the loser gets a
``ConflictError`` and is not retried.
"""
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from app.errors import AuthorizationError, ConflictError, InternalError, NotFoundError
from app.services.registration import get_user
from app.validation import validate_text
from models.post import Post, utcnow
from models.user import new_id

logger = logging.getLogger("devconnector.posts")

POST_NOT_FOUND = "Post Not Found"


def is_valid_id(value: str | None) -> bool:
    if not value:
        return False
    try:
        uuid.UUID(hex=value)
    except ValueError:
        return False
    return True


def is_post_author(post: Post, user_id: str) -> bool:
    return post.user_id == user_id


def is_comment_author(comment: dict, user_id: str) -> bool:
    return comment.get("user") == user_id


def has_liked(post: Post, user_id: str) -> bool:
    return any(like.get("user") == user_id for like in (post.likes or []))


async def _load_post(db: AsyncSession, post_id: str) -> Post:
    # 非法 id 与不存在同样按 404 处理
    if not is_valid_id(post_id):
        raise NotFoundError(POST_NOT_FOUND)
    post = (await db.execute(select(Post).where(Post.id == post_id))).scalar_one_or_none()
    if not post:
        raise NotFoundError(POST_NOT_FOUND)
    return post


async def _commit(db: AsyncSession, post_id: str) -> None:
    try:
        await db.commit()
    except StaleDataError:
        await db.rollback()
        logger.warning("post write lost race post=%s", post_id)
        raise ConflictError("Post was modified by another request")
    except SQLAlchemyError as exc:
        await db.rollback()
        raise InternalError(f"post write failed post={post_id}: {exc}") from exc


async def create_post(db: AsyncSession, user_id: str, text: str | None) -> Post:
    validate_text(text)
    user = await get_user(db, user_id)
    post = Post(
        user_id=user.id,
        name=user.name,
        avatar=user.avatar,
        text=text,
        date=utcnow(),
        likes=[],
        comments=[],
    )
    db.add(post)
    await db.commit()
    logger.info("post created post=%s user=%s", post.id, user_id)
    return post


async def list_posts(db: AsyncSession) -> list[Post]:
    res = await db.execute(select(Post).order_by(Post.date.desc()))
    return list(res.scalars().all())


async def get_post(db: AsyncSession, post_id: str) -> Post:
    return await _load_post(db, post_id)


async def delete_post(db: AsyncSession, user_id: str, post_id: str) -> None:
    post = await _load_post(db, post_id)
    if not is_post_author(post, user_id):
        raise AuthorizationError("Authorization Denied")
    await db.delete(post)
    await _commit(db, post_id)
    logger.info("post deleted post=%s user=%s", post_id, user_id)


async def like_post(db: AsyncSession, user_id: str, post_id: str) -> list[dict]:
    post = await _load_post(db, post_id)
    if has_liked(post, user_id):
        raise ConflictError("Post already liked")
    post.likes = [{"user": user_id}, *(post.likes or [])]
    await _commit(db, post_id)
    return post.likes


async def unlike_post(db: AsyncSession, user_id: str, post_id: str) -> list[dict]:
    post = await _load_post(db, post_id)
    if not has_liked(post, user_id):
        raise ConflictError("Post has not been liked yet")
    post.likes = [like for like in post.likes if like.get("user") != user_id]
    await _commit(db, post_id)
    return post.likes


async def add_comment(db: AsyncSession, user_id: str, post_id: str, text: str | None) -> list[dict]:
    validate_text(text)
    user = await get_user(db, user_id)
    post = await _load_post(db, post_id)
    comment = {
        "id": new_id(),
        "user": user.id,
        "name": user.name,
        "avatar": user.avatar,
        "text": text,
        "date": utcnow().isoformat(),
    }
    post.comments = [comment, *(post.comments or [])]
    await _commit(db, post_id)
    logger.info("comment added post=%s comment=%s user=%s", post_id, comment["id"], user_id)
    return post.comments


async def delete_comment(db: AsyncSession, user_id: str, post_id: str, comment_id: str) -> list[dict]:
    post = await _load_post(db, post_id)
    comment = next((c for c in (post.comments or []) if c.get("id") == comment_id), None)
    if comment is None:
        raise NotFoundError("Comment does not exist")
    if not is_comment_author(comment, user_id):
        raise AuthorizationError("User Not Authorized")
    post.comments = [c for c in post.comments if c.get("id") != comment_id]
    await _commit(db, post_id)
    logger.info("comment deleted post=%s comment=%s user=%s", post_id, comment_id, user_id)
    return post.comments
