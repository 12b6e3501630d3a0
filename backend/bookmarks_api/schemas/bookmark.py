"""书签相关 Schema"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError
from typing import Any, List, Optional

from ..utils.validators import (
    LinkValidationError,
    check_link,
    check_description,
    check_favorites,
)


def _run(rule, value: Any) -> Any:
    """执行校验规则，失败时转换为 pydantic 错误（type 即错误码）"""
    try:
        return rule(value)
    except LinkValidationError as e:
        raise PydanticCustomError(e.code, e.description)


class BookmarkCreate(BaseModel):
    """创建书签"""
    link: Optional[str] = Field(None, validate_default=True)
    description: Optional[str] = None
    favorites: Optional[bool] = None

    @field_validator("link", mode="before")
    @classmethod
    def validate_link(cls, v: Any) -> Any:
        return _run(check_link, v)

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v: Any) -> Any:
        return _run(check_description, v)

    @field_validator("favorites", mode="before")
    @classmethod
    def validate_favorites(cls, v: Any) -> Any:
        return _run(check_favorites, v)


class BookmarkUpdate(BookmarkCreate):
    """更新书签（只校验提交的字段）"""
    link: Optional[str] = None

    @field_validator("favorites", mode="before")
    @classmethod
    def validate_favorites(cls, v: Any) -> Any:
        # 列不可为空，显式提交 null 也视为无效
        return _run(lambda value: check_favorites(value, nullable=False), v)

    def changes(self) -> dict:
        """实际提交的字段"""
        return self.model_dump(include=self.model_fields_set)


class BookmarkResponse(BaseModel):
    """书签响应"""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    guid: str
    link: str
    created_at: int
    updated_at: Optional[int] = None
    description: Optional[str] = None
    favorites: bool


class BookmarkCreated(BaseModel):
    """创建结果"""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    guid: str
    created_at: int


class BookmarkCreatedResponse(BaseModel):
    """创建书签响应"""
    data: BookmarkCreated


class BookmarkListResponse(BaseModel):
    """书签列表响应"""
    length: int
    data: List[BookmarkResponse]


class MessageResponse(BaseModel):
    """操作结果"""
    data: str = "OK"
