import pytest

from helmify.walker import walk


@pytest.fixture
def manifest_tree(tmp_path):
    (tmp_path / "b.yaml").write_text("kind: B\n", encoding="utf-8")
    (tmp_path / "a.yaml").write_text("kind: A\n", encoding="utf-8")
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "c.yaml").write_text("kind: C\n", encoding="utf-8")
    return tmp_path


def _collect(paths, recursively):
    return [(name, handle.read()) for name, handle in walk(paths, recursively)]


def test_single_file(manifest_tree):
    result = _collect([str(manifest_tree / "a.yaml")], False)
    assert result == [("a.yaml", "kind: A\n")]


def test_directory_not_recursive_skips_subdirs(manifest_tree):
    result = _collect([str(manifest_tree)], False)
    assert result == [("a.yaml", "kind: A\n"), ("b.yaml", "kind: B\n")]


def test_directory_recursive_includes_nested(manifest_tree):
    result = _collect([str(manifest_tree)], True)
    assert [name for name, _ in result] == ["a.yaml", "b.yaml", "c.yaml"]
    assert ("c.yaml", "kind: C\n") in result


def test_missing_path_is_skipped(manifest_tree):
    result = _collect([str(manifest_tree / "missing.yaml"), str(manifest_tree / "b.yaml")], False)
    assert result == [("b.yaml", "kind: B\n")]


def test_files_are_closed_after_iteration(manifest_tree):
    handles = [handle for _, handle in walk([str(manifest_tree)], False)]
    assert len(handles) == 2
    assert all(handle.closed for handle in handles)


def test_multiple_paths_keep_given_order(manifest_tree):
    result = _collect([str(manifest_tree / "nested"), str(manifest_tree / "a.yaml")], False)
    assert [name for name, _ in result] == ["c.yaml", "a.yaml"]