"""书签模型"""
from sqlalchemy import Column, String, Boolean, BigInteger
import time
import uuid

from ..database import Base


def now_ms() -> int:
    """当前时间（毫秒时间戳）"""
    return int(time.time() * 1000)


class Bookmark(Base):
    """书签表

    列名沿用接口字段名（createdAt / updatedAt），属性名使用 snake_case。
    """
    __tablename__ = "bookmarks"

    guid = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    link = Column(String(256), nullable=False, default="")
    created_at = Column("createdAt", BigInteger, nullable=False)
    updated_at = Column("updatedAt", BigInteger, nullable=True)
    description = Column(String(255), nullable=True)
    favorites = Column(Boolean, nullable=False, default=False)
