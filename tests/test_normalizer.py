"""Tests for normalizer module."""

import pytest

from entitylinks.core.errors import InvalidArgumentError
from entitylinks.core.normalizer import normalize, normalize_whitelist
from entitylinks.core.registry import TypeDescriptor
from entitylinks.core.render import LinkRecord


def record(type_name, id, **data):
    return LinkRecord(type=type_name, id=id, data=data)


class TestNormalize:
    """Tests for normalize."""

    def test_flattens_nested_lists(self):
        """Test arbitrarily nested results are flattened in order."""
        results = [record("user", "a"), [[record("post", "b")], [record("tag", "c"), []]]]

        assert [r.id for r in normalize(results)] == ["a", "b", "c"]

    def test_drops_none(self):
        results = [None, [record("user", "a"), None], None]

        assert [r.id for r in normalize(results)] == ["a"]

    @pytest.mark.parametrize("results", [[{"type": "a", "id": "x", "data": {}}], "abc", [record("user", "a"), 7]])
    def test_rejects_non_records(self, results):
        """Test plain dicts, strings and other values are refused."""
        with pytest.raises(InvalidArgumentError):
            normalize(results)

    def test_dedupes_keeping_first(self):
        """Test the first record per (type, id) wins."""
        results = [record("team", "abc", n=1), [record("team", "abc", n=2)], record("profile", "abc")]

        output = normalize(results)
        assert [(r.type, r.id) for r in output] == [("team", "abc"), ("profile", "abc")]
        assert output[0].data == {"n": 1}

    def test_empty_whitelist(self):
        """Test an empty include list yields nothing."""
        assert normalize([record("user", "a")], []) == []

    def test_populated_whitelist(self):
        """Test only listed types survive."""
        results = [record("user", "a"), record("post", "b"), record("tag", "c")]

        assert [r.type for r in normalize(results, ["post", "tag"])] == ["post", "tag"]

    def test_no_whitelist(self):
        results = [record("user", "a"), record("post", "b")]

        assert len(normalize(results, None)) == 2

    def test_empty(self):
        assert normalize([]) == []
        assert normalize(None) == []


class TestNormalizeWhitelist:
    """Tests for normalize_whitelist."""

    def test_preserves_absent_and_empty(self):
        assert normalize_whitelist(None) is None
        assert normalize_whitelist([]) == frozenset()

    def test_names_and_descriptors(self):
        post = TypeDescriptor("post", None, dict)

        assert normalize_whitelist(["user", post]) == frozenset({"user", "post"})

    def test_single_name(self):
        assert normalize_whitelist("user") == frozenset({"user"})
