"""Tests for daogen.compiler.field_allocator."""

from daogen.compiler.field_allocator import NameIndex


class TestNameIndex:
    def test_first_suggestion_is_kept(self) -> None:
        assert NameIndex().unique_field("product_dao_cache") == "product_dao_cache"

    def test_collisions_get_numeric_suffix(self) -> None:
        index = NameIndex()
        assert index.unique_field("cache") == "cache"
        assert index.unique_field("cache") == "cache_2"
        assert index.unique_field("cache") == "cache_3"

    def test_reserved_names_are_avoided(self) -> None:
        index = NameIndex(reserved={"context", "product_dao_cache"})
        assert index.unique_field("context") == "context_2"
        assert index.unique_field("product_dao_cache") == "product_dao_cache_2"
        assert index.unique_field("product_dao_cache") == "product_dao_cache_3"

    def test_suggestions_are_sanitized(self) -> None:
        index = NameIndex()
        assert index.unique_field("product-dao cache") == "product_dao_cache"
        assert index.unique_field("1cache") == "_1cache"
        assert index.unique_field("class") == "class_"

    def test_deterministic(self) -> None:
        first = [NameIndex().unique_field("x") for _ in range(3)]
        assert first == ["x", "x", "x"]
