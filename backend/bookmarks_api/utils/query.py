"""列表查询参数解析"""
from typing import Any, Dict, List, Mapping, Tuple

from sqlalchemy import Boolean, Integer, asc, desc
from sqlalchemy.sql.elements import ColumnElement

from ..config import settings

# 控制参数（分页 / 排序），其余 query 参数一律视为等值过滤
DEFAULT_QUERY_PARAMS = {
    "limit": settings.DEFAULT_LIMIT,
    "offset": settings.DEFAULT_OFFSET,
    "sort_by": settings.DEFAULT_SORT_BY,
    "sort_dir": settings.DEFAULT_SORT_DIR,
}

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


class BadOrderError(ValueError):
    """排序字段或方向无效"""
    pass


def split_query_params(params: Mapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    拆分请求参数

    Args:
        params: query string 键值对

    Returns:
        (控制参数（已合并默认值）, where 过滤参数)
    """
    query: Dict[str, Any] = {}
    where: Dict[str, Any] = {}

    for key, value in params.items():
        if key in DEFAULT_QUERY_PARAMS:
            query[key] = value
        else:
            where[key] = value

    return {**DEFAULT_QUERY_PARAMS, **query}, where


def _columns(model) -> Dict[str, Any]:
    """按数据库列名索引的列"""
    return {column.name: column for column in model.__table__.columns}


def resolve_pagination(query: Mapping[str, Any]) -> Tuple[int, int]:
    """解析 offset / limit，必须是非负整数"""
    offset = int(query["offset"])
    limit = int(query["limit"])
    if offset < 0 or limit < 0:
        raise ValueError(f"offset/limit 不能为负数: offset={offset}, limit={limit}")
    return offset, limit


def resolve_order(model, sort_by: str, sort_dir: str) -> ColumnElement:
    """解析排序子句"""
    column = _columns(model).get(sort_by)
    if column is None:
        raise BadOrderError(f"未知的排序字段: {sort_by}")

    direction = str(sort_dir).lower()
    if direction == "asc":
        return asc(column)
    if direction == "desc":
        return desc(column)
    raise BadOrderError(f"未知的排序方向: {sort_dir}")


def coerce_value(column, raw: Any) -> Any:
    """按列类型转换 query string 中的值"""
    if not isinstance(raw, str):
        return raw
    if isinstance(column.type, Boolean):
        value = raw.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise ValueError(f"{column.name} 不是布尔值: {raw}")
    if isinstance(column.type, Integer):
        return int(raw)
    return raw


def build_filters(model, where: Mapping[str, Any]) -> List[ColumnElement]:
    """生成等值过滤条件"""
    columns = _columns(model)
    clauses = []
    for key, raw in where.items():
        column = columns.get(key)
        if column is None:
            raise ValueError(f"未知的过滤字段: {key}")
        clauses.append(column == coerce_value(column, raw))
    return clauses
