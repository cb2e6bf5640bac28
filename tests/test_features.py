"""Tests for nostd_matrix.features."""

from nostd_matrix.features import feature_extras, has_alloc


class TestFeatureExtras:
    def test_removes_reserved_and_sorts(self) -> None:
        features = {"foo": [], "std": [], "bar": [], "default": ["std"], "alloc": []}
        assert feature_extras(features) == ["bar", "foo"]

    def test_input_order_does_not_matter(self) -> None:
        a = {"default": [], "std": [], "alloc": [], "foo": [], "bar": []}
        b = {"bar": [], "foo": [], "alloc": [], "std": [], "default": []}
        assert feature_extras(a) == feature_extras(b) == ["bar", "foo"]

    def test_none_is_empty(self) -> None:
        assert feature_extras(None) == []

    def test_only_reserved_is_empty(self) -> None:
        assert feature_extras({"default": [], "std": [], "alloc": []}) == []


class TestHasAlloc:
    def test_key_present_with_empty_value(self) -> None:
        assert has_alloc({"alloc": []}) is True

    def test_value_is_irrelevant(self) -> None:
        assert has_alloc({"alloc": ["dep:hashbrown"]}) is True

    def test_absent(self) -> None:
        assert has_alloc({"std": ["alloc"]}) is False
        assert has_alloc(None) is False
