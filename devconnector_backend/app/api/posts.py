from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.security import get_current_user_id
from app.services import posts as post_service
from models.post import Post
from schemas.post import (
    PostCreate,
    PostResponse,
    CommentCreate,
    CommentResponse,
    LikeEntry,
    MessageResponse,
)

router = APIRouter()


def to_like_entries(likes: list[dict]) -> list[LikeEntry]:
    return [LikeEntry(user=like["user"]) for like in likes or []]


def to_comment_responses(comments: list[dict]) -> list[CommentResponse]:
    return [
        CommentResponse(
            id=c["id"],
            user=c["user"],
            name=c.get("name"),
            avatar=c.get("avatar"),
            text=c["text"],
            date=c["date"],
        ) for c in comments or []
    ]


def to_post_response(post: Post) -> PostResponse:
    return PostResponse(
        id=post.id,
        user=post.user_id,
        name=post.name,
        avatar=post.avatar,
        text=post.text,
        date=post.date,
        likes=to_like_entries(post.likes),
        comments=to_comment_responses(post.comments),
    )


@router.post("", response_model=PostResponse)
async def create_post(payload: PostCreate, user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    post = await post_service.create_post(db, user_id, payload.text)
    return to_post_response(post)


@router.get("", response_model=list[PostResponse])
async def list_posts(user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    return [to_post_response(p) for p in await post_service.list_posts(db)]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    return to_post_response(await post_service.get_post(db, post_id))


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(post_id: str, user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    await post_service.delete_post(db, user_id, post_id)
    return MessageResponse(msg="The Post Was Deleted")


@router.put("/like/{post_id}", response_model=list[LikeEntry])
async def like_post(post_id: str, user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    return to_like_entries(await post_service.like_post(db, user_id, post_id))


@router.put("/unlike/{post_id}", response_model=list[LikeEntry])
async def unlike_post(post_id: str, user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    return to_like_entries(await post_service.unlike_post(db, user_id, post_id))


@router.post("/comment/{post_id}", response_model=list[CommentResponse])
async def add_comment(
    post_id: str,
    payload: CommentCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    comments = await post_service.add_comment(db, user_id, post_id, payload.text)
    return to_comment_responses(comments)


@router.delete("/comment/{post_id}/{comment_id}", response_model=list[CommentResponse])
async def delete_comment(
    post_id: str,
    comment_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    comments = await post_service.delete_comment(db, user_id, post_id, comment_id)
    return to_comment_responses(comments)
