from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, ForeignKey, Text, JSON
from app.database import Base
from models.types import UTCDateTime
from models.user import new_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), ForeignKey("users.id"), index=True, nullable=False)
    name = Column(String, nullable=True)
    avatar = Column(String, nullable=True)
    text = Column(Text, nullable=False)
    date = Column(UTCDateTime, default=utcnow, nullable=False)
    likes = Column(JSON, default=list, nullable=False)  # [{"user": id}]，最新在前
    comments = Column(JSON, default=list, nullable=False)  # 内嵌评论，最新在前
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
