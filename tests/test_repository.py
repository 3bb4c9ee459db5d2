"""Repository initialization tests."""

import pytest
from kit.core.errors import AlreadyExistsError, InvalidKeyError, NotFoundError
from kit.core.objects import CommitMetadata, RefType, RepositoryConfig
from kit.core.remote import init_repo
from kit.core.repository import Repository


def test_init_returns_config(temp_dir):
    """Test init returns the persisted repository identity."""
    config = init_repo('Demo', temp_dir / 'r', 'main')
    assert config == RepositoryConfig(name='Demo', default_branch='main')
    assert Repository(temp_dir / 'r').repository_config == config


def test_init_creates_layout(temp_dir):
    """Test init creates marker, stores and index."""
    init_repo('Demo', temp_dir / 'r', 'main')
    kit_dir = temp_dir / 'r' / '.kit'
    assert kit_dir.is_dir()
    assert (kit_dir / 'objects').is_dir()
    assert (kit_dir / 'refs').is_dir()
    assert (kit_dir / 'index').read_text() == ''
    assert (kit_dir / 'config').exists()


def test_init_creates_single_commit(temp_dir):
    """Test init stores exactly one commit and points main and HEAD at it."""
    init_repo('Demo', temp_dir / 'r', 'main')
    repo = Repository(temp_dir / 'r')

    hashes = repo.objects.list()
    assert len(hashes) == 1

    head = repo.refs.get_head()
    assert head == hashes[0]
    assert repo.refs.get_ref('main').commit_hash == head

    commit = repo.revisions.read_commit(head)
    assert commit.author == 'System'
    assert commit.message == 'Initial commit'
    assert commit.parent is None
    assert commit.snapshot == []


def test_init_custom_branch(temp_dir):
    init_repo('Demo', temp_dir / 'r', 'trunk')
    repo = Repository(temp_dir / 'r')
    assert repo.refs.get_ref('trunk', RefType.BRANCH).commit_hash == repo.refs.get_head()
    assert not repo.refs.ref_exists('main', RefType.BRANCH)


def test_double_init_rejected(temp_dir):
    """Test second init fails and leaves the first repository untouched."""
    init_repo('Demo', temp_dir / 'r', 'main')
    repo = Repository(temp_dir / 'r')
    head = repo.refs.get_head()
    objects = repo.objects.list()

    with pytest.raises(AlreadyExistsError, match="already exists"):
        init_repo('Other', temp_dir / 'r', 'dev')

    assert repo.refs.get_head() == head
    assert repo.objects.list() == objects
    assert repo.repository_config.name == 'Demo'
    assert not repo.refs.ref_exists('dev', RefType.BRANCH)


def test_open_requires_marker(temp_dir):
    with pytest.raises(NotFoundError):
        Repository.open(temp_dir)


def test_find_repository_in_subdirectory(repo):
    """Test finding repo from nested directory."""
    subdir = repo.work_tree / 'subdir' / 'nested'
    subdir.mkdir(parents=True)

    found_repo = Repository.find_repository(str(subdir))
    assert found_repo is not None
    assert found_repo.work_tree == repo.work_tree


def test_find_repository_none(temp_dir):
    """Test no repo found returns None."""
    assert Repository.find_repository(temp_dir) is None


def test_store_file_stages_and_stores(repo):
    """Test store_file writes the content object and registers the path."""
    path = repo.work_tree / 'notes.txt'
    path.write_text('hello')

    content_hash = repo.store_file(path)

    assert repo.objects.retrieve(content_hash) == b'hello'
    assert repo.index.get_staged_files() == ['notes.txt']


def test_store_file_missing(repo):
    with pytest.raises(NotFoundError):
        repo.store_file(repo.work_tree / 'missing.txt')


def test_commit_advances_head_and_branch(repo, make_commit):
    """Test commit publishes the new commit on HEAD and the default branch."""
    initial = repo.refs.get_head()
    commit_hash = make_commit(repo, 'a.txt', 'a', 'Add a')

    assert repo.refs.get_head() == commit_hash
    assert repo.refs.get_ref('main').commit_hash == commit_hash
    assert repo.revisions.read_commit(commit_hash).parent == initial


def test_commit_leaves_branch_when_head_moved_elsewhere(repo, make_commit, sample_metadata):
    """Test the default branch only follows HEAD while they agree."""
    first = make_commit(repo, 'a.txt', 'a', 'Add a')
    second = make_commit(repo, 'b.txt', 'b', 'Add b')
    repo.refs.update_head(first)

    third = repo.commit(sample_metadata)

    assert repo.refs.get_head() == third
    assert repo.refs.get_ref('main').commit_hash == second


@pytest.mark.parametrize('branch', ['HEAD', '', 'a/../b'])
def test_init_rejects_bad_branch_name(temp_dir, branch):
    """Test a bad branch name fails before anything is written."""
    path = temp_dir / 'r'
    with pytest.raises(InvalidKeyError):
        init_repo('X', path, branch)

    assert not (path / '.kit').exists()

    init_repo('X', path, 'main')
    assert Repository(path).refs.get_ref('main').is_bound
