import pytest

from bookmarks_api.models import Bookmark
from bookmarks_api.utils.query import (
    DEFAULT_QUERY_PARAMS,
    BadOrderError,
    build_filters,
    coerce_value,
    resolve_order,
    resolve_pagination,
    split_query_params,
)


@pytest.mark.unit
class TestSplitQueryParams:
    def test_empty_query_uses_defaults(self):
        query, where = split_query_params({})

        assert query == {"limit": 50, "offset": 0, "sort_by": "createdAt", "sort_dir": "asc"}
        assert where == {}

    def test_control_keys_only_leave_where_empty(self):
        query, where = split_query_params({"limit": "10", "sort_dir": "desc"})

        assert where == {}
        assert query["limit"] == "10"
        assert query["sort_dir"] == "desc"
        assert query["offset"] == 0
        assert query["sort_by"] == "createdAt"

    def test_every_key_is_partitioned(self):
        query, where = split_query_params({
            "favorites": "true",
            "limit": "5",
            "link": "https://example.com",
            "offset": "2",
        })

        assert where == {"favorites": "true", "link": "https://example.com"}
        assert query["limit"] == "5"
        assert query["offset"] == "2"

    def test_unknown_keys_become_filters(self):
        _, where = split_query_params({"whatever": "x"})

        assert where == {"whatever": "x"}

    def test_defaults_are_not_mutated(self):
        split_query_params({"limit": "1", "sort_by": "link"})

        assert DEFAULT_QUERY_PARAMS["limit"] == 50
        assert DEFAULT_QUERY_PARAMS["sort_by"] == "createdAt"
        query, _ = split_query_params({})
        assert query["limit"] == 50


@pytest.mark.unit
class TestResolvers:
    def test_pagination_parses_strings(self):
        assert resolve_pagination({"offset": "3", "limit": "7"}) == (3, 7)

    @pytest.mark.parametrize("offset, limit", [("a", "1"), ("0", "ten"), ("-1", "5"), ("0", "-5")])
    def test_pagination_rejects_invalid(self, offset, limit):
        with pytest.raises(ValueError):
            resolve_pagination({"offset": offset, "limit": limit})

    def test_order_by_column_name(self):
        clause = resolve_order(Bookmark, "createdAt", "DESC")

        assert "createdAt" in str(clause)
        assert "DESC" in str(clause)

    def test_order_unknown_column(self):
        with pytest.raises(BadOrderError):
            resolve_order(Bookmark, "created_at_typo", "asc")

    def test_order_unknown_direction(self):
        with pytest.raises(BadOrderError):
            resolve_order(Bookmark, "link", "sideways")

    def test_filters_coerce_boolean(self):
        favorites = Bookmark.__table__.c.favorites

        assert coerce_value(favorites, "true") is True
        assert coerce_value(favorites, "0") is False
        assert len(build_filters(Bookmark, {"favorites": "yes"})) == 1

    def test_filters_coerce_integer(self):
        created_at = Bookmark.created_at.property.columns[0]

        assert coerce_value(created_at, "1547459442106") == 1547459442106

    def test_filters_reject_unknown_column(self):
        with pytest.raises(ValueError):
            build_filters(Bookmark, {"title": "x"})

    def test_filters_reject_bad_boolean(self):
        with pytest.raises(ValueError):
            build_filters(Bookmark, {"favorites": "maybe"})
