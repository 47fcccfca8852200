"""Tests for descriptor deduplication."""

from pkgunits.dedup import deduplicate, descriptor_key
from pkgunits.models import Descriptor


def _pkg(id, name="foo", pkg_path=None, go_files=None):
    return Descriptor(
        id=id,
        name=name,
        pkg_path=pkg_path if pkg_path is not None else id,
        go_files=list(go_files or []),
    )


class TestDeduplicate:
    """Tests for deduplicate()."""

    def test_empty(self):
        assert deduplicate([]) == []

    def test_exact_duplicates_removed(self):
        a = _pkg("example.com/foo", go_files=["a.go"])
        b = _pkg("example.com/foo", go_files=["a.go"])

        result = deduplicate([a, b])

        assert len(result) == 1
        assert result[0] is a

    def test_file_order_ignored(self):
        """File lists are compared after sorting."""
        a = _pkg("example.com/foo", go_files=["b.go", "a.go"])
        b = _pkg("example.com/foo", go_files=["a.go", "b.go"])

        assert len(deduplicate([a, b])) == 1

    def test_sorts_files_in_place(self):
        a = _pkg("example.com/foo", go_files=["c.go", "a.go", "b.go"])
        deduplicate([a])

        assert a.go_files == ["a.go", "b.go", "c.go"]

    def test_different_files_kept(self):
        a = _pkg("example.com/foo", go_files=["a.go"])
        b = _pkg("example.com/foo", go_files=["a.go", "a_test.go"])

        assert len(deduplicate([a, b])) == 2

    def test_each_key_field_distinguishes(self):
        base = _pkg("example.com/foo", go_files=["a.go"])
        variants = [
            _pkg("example.com/foo [example.com/foo.test]", pkg_path="example.com/foo", go_files=["a.go"]),
            _pkg("example.com/foo", name="main", go_files=["a.go"]),
            _pkg("example.com/foo", pkg_path="example.com/bar", go_files=["a.go"]),
        ]

        result = deduplicate([base, *variants])

        assert len(result) == 4

    def test_idempotent(self):
        pkgs = [
            _pkg("p", go_files=["b.go", "a.go"]),
            _pkg("p", go_files=["a.go", "b.go"]),
            _pkg("p [p.test]", pkg_path="p", go_files=["a.go", "a_test.go"]),
            _pkg("q"),
            _pkg("q"),
        ]

        once = deduplicate(pkgs)
        twice = deduplicate(once)

        assert {descriptor_key(d) for d in twice} == {descriptor_key(d) for d in once}
        assert len(twice) == len(once) == 3

    def test_accepts_iterator(self):
        result = deduplicate(iter([_pkg("p"), _pkg("p")]))
        assert len(result) == 1


class TestDescriptorKey:
    def test_joins_files(self):
        d = _pkg("p", go_files=["a.go", "b.go"])
        assert descriptor_key(d) == ("p", "foo", "p", "a.go;b.go")
