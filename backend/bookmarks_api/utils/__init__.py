"""工具函数"""
from .query import (
    DEFAULT_QUERY_PARAMS,
    BadOrderError,
    split_query_params,
    resolve_pagination,
    resolve_order,
    build_filters,
)
from .validators import (
    LinkValidationError,
    check_link,
    check_description,
    check_favorites,
    validation_error,
)

__all__ = [
    "DEFAULT_QUERY_PARAMS", "BadOrderError",
    "split_query_params", "resolve_pagination", "resolve_order", "build_filters",
    "LinkValidationError", "check_link", "check_description", "check_favorites",
    "validation_error",
]
