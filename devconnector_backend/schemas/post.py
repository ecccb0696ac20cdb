from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class PostCreate(BaseModel):
    text: Optional[str] = None


class CommentCreate(BaseModel):
    text: Optional[str] = None


class LikeEntry(BaseModel):
    user: str


class CommentResponse(BaseModel):
    id: str
    user: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    text: str
    date: datetime


class PostResponse(BaseModel):
    id: str
    user: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    text: str
    date: datetime
    likes: List[LikeEntry] = []
    comments: List[CommentResponse] = []


class MessageResponse(BaseModel):
    msg: str
