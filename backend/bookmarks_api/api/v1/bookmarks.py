"""书签路由"""
from fastapi import APIRouter, Body, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, update, delete
from pydantic import ValidationError
from typing import Any, Dict, Optional
import logging

from ...database import get_db
from ...exceptions import APIError
from ...models import Bookmark, now_ms
from ...schemas import (
    BookmarkCreate,
    BookmarkUpdate,
    BookmarkCreated,
    BookmarkResponse,
    BookmarkCreatedResponse,
    BookmarkListResponse,
    MessageResponse,
)
from ...utils import (
    BadOrderError,
    split_query_params,
    resolve_pagination,
    resolve_order,
    build_filters,
    validation_error,
)

router = APIRouter()
logger = logging.getLogger(__name__)


async def bookmark_exists(db: AsyncSession, guid: str) -> bool:
    """检查 guid 对应的书签是否存在"""
    result = await db.execute(
        select(func.count()).select_from(Bookmark).where(Bookmark.guid == guid)
    )
    return result.scalar_one() > 0


def _not_found(message: str) -> APIError:
    return APIError(status.HTTP_404_NOT_FOUND, "bookmarks", message)


def _invalid(exc: ValidationError) -> APIError:
    error = validation_error(exc)
    logger.info(f"[Bookmarks] 校验失败: {error['code']} {error['description']}")
    return APIError(status.HTTP_400_BAD_REQUEST, "validation", error)


@router.get("", response_model=BookmarkListResponse)
@router.get("/", response_model=BookmarkListResponse, include_in_schema=False)
async def get_bookmarks(
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    获取书签列表

    - limit / offset / sort_by / sort_dir 控制分页和排序
    - 其余 query 参数作为等值过滤条件
    - length 为符合过滤条件的总数（不受分页影响）
    """
    query, where = split_query_params(request.query_params)

    try:
        offset, limit = resolve_pagination(query)
        order = resolve_order(Bookmark, query["sort_by"], query["sort_dir"])
        filters = build_filters(Bookmark, where)

        result = await db.execute(
            select(Bookmark)
            .where(*filters)
            .order_by(order)
            .offset(offset)
            .limit(limit)
        )
        data = result.scalars().all()

        amount = (await db.execute(
            select(func.count()).select_from(Bookmark).where(*filters)
        )).scalar_one()
    except BadOrderError as e:
        logger.warning(f"[Bookmarks] {e}")
        raise APIError(status.HTTP_400_BAD_REQUEST, "backend", "Bad order request!")
    except Exception:
        logger.exception(f"[Bookmarks] 获取书签失败: query={dict(request.query_params)}")
        raise APIError(status.HTTP_400_BAD_REQUEST, "backend", ["Can't get bookmarks"])

    if amount == 0:
        raise APIError(
            status.HTTP_401_UNAUTHORIZED,
            "bookmarks",
            "No bookmark found with this query!"
        )

    return {
        "length": amount,
        "data": [BookmarkResponse.model_validate(b) for b in data],
    }


@router.post("", response_model=BookmarkCreatedResponse)
@router.post("/", response_model=BookmarkCreatedResponse, include_in_schema=False)
async def create_bookmark(
    payload: Optional[Dict[str, Any]] = Body(None),
    db: AsyncSession = Depends(get_db)
):
    """创建书签"""
    try:
        bookmark_in = BookmarkCreate.model_validate(payload or {})
    except ValidationError as e:
        raise _invalid(e)

    bookmark = Bookmark(
        link=bookmark_in.link,
        description=bookmark_in.description or "",
        favorites=bookmark_in.favorites or False,
        created_at=now_ms(),
    )

    try:
        db.add(bookmark)
        await db.commit()
    except Exception:
        logger.exception(f"[Bookmarks] 创建书签失败: {bookmark_in.link}")
        raise APIError(status.HTTP_400_BAD_REQUEST, "backend", "Can't create bookmark!")

    logger.info(f"[Bookmarks] 创建书签: {bookmark.guid} {bookmark.link}")
    return {"data": BookmarkCreated.model_validate(bookmark)}


@router.patch("/{guid}", response_model=MessageResponse)
async def update_bookmark(
    guid: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    db: AsyncSession = Depends(get_db)
):
    """更新书签（部分更新，只处理提交的字段）"""
    try:
        exists = await bookmark_exists(db, guid)
    except Exception:
        logger.exception(f"[Bookmarks] 检查书签失败: {guid}")
        raise APIError(status.HTTP_400_BAD_REQUEST, "backend", "Can't patch bookmark!")

    if not exists:
        raise _not_found(f"404 Bookmark not found with UUID = {guid}")

    try:
        bookmark_in = BookmarkUpdate.model_validate(payload or {})
    except ValidationError as e:
        raise _invalid(e)

    values = {
        getattr(Bookmark, key): value
        for key, value in bookmark_in.changes().items()
    }
    values[Bookmark.updated_at] = now_ms()

    try:
        result = await db.execute(
            update(Bookmark).where(Bookmark.guid == guid).values(values)
        )
        updated = result.rowcount
        await db.commit()
    except Exception:
        logger.exception(f"[Bookmarks] 更新书签失败: {guid}")
        raise APIError(status.HTTP_400_BAD_REQUEST, "backend", "Can't patch bookmark!")

    # 检查与更新之间被删除
    if updated == 0:
        raise _not_found(f"404 Bookmark not found with UUID = {guid}")

    return {"data": "OK"}


@router.delete("/{guid}", response_model=MessageResponse)
async def delete_bookmark(
    guid: str,
    db: AsyncSession = Depends(get_db)
):
    """删除书签"""
    try:
        result = await db.execute(
            delete(Bookmark).where(Bookmark.guid == guid)
        )
        deleted = result.rowcount
        await db.commit()
    except Exception:
        logger.exception(f"[Bookmarks] 删除书签失败: {guid}")
        raise APIError(status.HTTP_400_BAD_REQUEST, "backend", "Can't delete bookmark!")

    if deleted == 0:
        logger.info(f"[Bookmarks] 书签不存在: {guid}")
        raise _not_found(f"404 Bookmark not found with guid {guid}")

    logger.info(f"[Bookmarks] 删除书签: {guid}")
    return {"data": "OK"}
