import uuid
from sqlalchemy import Column, String
from sqlalchemy.sql import func
from app.database import Base
from models.types import UTCDateTime


def new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # bcrypt digest
    avatar = Column(String, nullable=True)
    date = Column(UTCDateTime, server_default=func.now())
