"""Unit tests for the revision graph."""

import pytest
from kit.core.errors import NotFoundError, SerializationError
from kit.core.objects import CommitMetadata


def stage(repo, name, content):
    path = repo.work_tree / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.index.add_to_index(path)


def test_create_revision_referential_integrity(repo, sample_metadata):
    """Test the commit and every snapshot object are retrievable."""
    stage(repo, 'a.txt', 'alpha')
    stage(repo, 'dir/b.txt', 'beta')

    commit_hash = repo.revisions.create_revision(sample_metadata)
    commit = repo.revisions.read_commit(commit_hash)

    assert commit.author == sample_metadata.author
    assert commit.message == sample_metadata.message
    assert commit.metadata.timestamp == sample_metadata.timestamp
    assert [e.path for e in commit.snapshot] == ['a.txt', 'dir/b.txt']
    assert [repo.objects.retrieve(h) for h in commit.content_hashes()] == [b'alpha', b'beta']


def test_create_revision_parent_is_head(repo, sample_metadata):
    head = repo.refs.get_head()
    stage(repo, 'a.txt', 'alpha')
    commit_hash = repo.revisions.create_revision(sample_metadata)
    assert repo.revisions.read_commit(commit_hash).parent == head


def test_create_revision_does_not_move_refs(repo, sample_metadata):
    """Test publishing is left to the caller."""
    head = repo.refs.get_head()
    stage(repo, 'a.txt', 'alpha')
    repo.revisions.create_revision(sample_metadata)
    assert repo.refs.get_head() == head
    assert repo.refs.get_ref('main').commit_hash == head


def test_create_revision_is_idempotent(repo, sample_metadata):
    """Test identical metadata and snapshot give the identical commit hash."""
    stage(repo, 'a.txt', 'alpha')
    before = len(repo.objects)
    first = repo.revisions.create_revision(sample_metadata)
    second = repo.revisions.create_revision(sample_metadata)
    assert first == second
    assert len(repo.objects) == before + 2


def test_create_revision_deduplicates_content(repo, sample_metadata):
    stage(repo, 'a.txt', 'same')
    stage(repo, 'b.txt', 'same')
    commit = repo.revisions.read_commit(repo.revisions.create_revision(sample_metadata))
    assert commit.snapshot[0].hash == commit.snapshot[1].hash


def test_create_revision_missing_staged_file(repo, sample_metadata):
    stage(repo, 'gone.txt', 'x')
    (repo.work_tree / 'gone.txt').unlink()
    with pytest.raises(NotFoundError, match="gone.txt"):
        repo.revisions.create_revision(sample_metadata)


def test_read_commit_rejects_blob(repo):
    blob_hash = repo.objects.store(b'just bytes')
    with pytest.raises(SerializationError):
        repo.revisions.read_commit(blob_hash)


def test_read_commit_missing(repo):
    with pytest.raises(NotFoundError):
        repo.revisions.read_commit('e' * 40)


def test_iter_history(repo_with_commits):
    """Test first-parent history walks newest first back to the root."""
    messages = [c.message for _, c in repo_with_commits.revisions.iter_history()]
    assert messages == ['Second commit', 'First commit', 'Initial commit']


def test_iter_history_from_start(repo_with_commits):
    history = list(repo_with_commits.revisions.iter_history())
    first_hash = history[1][0]
    messages = [c.message for _, c in repo_with_commits.revisions.iter_history(first_hash)]
    assert messages == ['First commit', 'Initial commit']


def test_reachable_objects(repo_with_commits):
    """Test reachability covers every commit and snapshot object."""
    repo = repo_with_commits
    reachable = repo.revisions.reachable_objects()
    assert reachable == set(repo.objects.list())


def test_read_file(repo_with_commits):
    head = repo_with_commits.refs.get_head()
    assert repo_with_commits.revisions.read_file(head, 'file2.txt') == b'Second file'
    with pytest.raises(NotFoundError):
        repo_with_commits.revisions.read_file(head, 'nope.txt')


def test_snapshot_includes_all_staged_files(repo, make_commit):
    """Test later commits keep earlier staged paths."""
    make_commit(repo, 'a.txt', 'a', 'Add a')
    head = make_commit(repo, 'b.txt', 'b', 'Add b')
    commit = repo.revisions.read_commit(head)
    assert [e.path for e in commit.snapshot] == ['a.txt', 'b.txt']


def test_commit_metadata_defaults(repo, make_commit):
    commit_hash = make_commit(repo)
    commit = repo.revisions.read_commit(commit_hash)
    assert isinstance(commit.metadata, CommitMetadata)
    assert commit.metadata.timestamp
