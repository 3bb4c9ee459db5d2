"""Unit tests for the index (staging area)."""

import pytest
from kit.core.errors import NotFoundError
from kit.core.index import Index


@pytest.fixture
def index(tmp_path):
    (tmp_path / 'work').mkdir()
    return Index(tmp_path / 'index', tmp_path / 'work')


def write(index, name, content='x'):
    path = index.work_tree / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def test_empty_index(index):
    assert index.get_staged_files() == []
    assert len(index) == 0


def test_add_preserves_order(index):
    """Test staged paths come back in the order first added."""
    index.add_to_index(write(index, 'b.txt'))
    index.add_to_index(write(index, 'a.txt'))
    index.add_to_index(write(index, 'sub/c.txt'))
    assert index.get_staged_files() == ['b.txt', 'a.txt', 'sub/c.txt']


def test_add_is_idempotent(index):
    path = write(index, 'a.txt')
    index.add_to_index(path)
    index.add_to_index(path)
    assert index.get_staged_files() == ['a.txt']


def test_add_relative_path(index):
    write(index, 'rel.txt')
    assert index.add_to_index('rel.txt') == 'rel.txt'


def test_add_missing_file(index):
    with pytest.raises(NotFoundError):
        index.add_to_index('missing.txt')


def test_add_outside_work_tree(index, tmp_path):
    outside = tmp_path / 'outside.txt'
    outside.write_text('x')
    with pytest.raises(NotFoundError, match="outside"):
        index.add_to_index(outside)


def test_persisted_format(index):
    index.add_to_index(write(index, 'a.txt'))
    index.add_to_index(write(index, 'b.txt'))
    assert index.index_file.read_text() == 'a.txt\nb.txt\n'


def test_remove_and_clear(index):
    index.add_to_index(write(index, 'a.txt'))
    index.add_to_index(write(index, 'b.txt'))

    assert index.remove_from_index('a.txt')
    assert not index.remove_from_index('a.txt')
    assert index.get_staged_files() == ['b.txt']

    index.clear()
    assert index.get_staged_files() == []
