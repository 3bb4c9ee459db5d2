"""Shared pytest fixtures for Kit tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from kit.core.config import Config
from kit.core.objects import CommitMetadata
from kit.core.remote import init_repo
from kit.core.repository import Repository


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's global config and environment."""
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', tmp_path / '.kitconfig')
    for var in ('KIT_AUTHOR_NAME', 'KIT_AUTHOR_EMAIL', 'KIT_USER_NAME', 'KIT_USER_EMAIL'):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    path = temp_dir / 'repo'
    init_repo('Demo', path, 'main')
    return Repository(path)


@pytest.fixture
def make_commit():
    """
    Factory that writes a file, stages it and commits.

    Returns:
        Callable (repo, filename, content, message) -> commit hash
    """
    def _make_commit(repo, filename='file.txt', content='content', message='Test commit'):
        file_path = repo.work_tree / filename
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)
        repo.store_file(file_path)
        metadata = CommitMetadata(
            author='Test User <test@example.com>',
            message=message,
        )
        return repo.commit(metadata)

    return _make_commit


@pytest.fixture
def repo_with_commits(repo, make_commit):
    """Repository with two commits on top of the initial commit."""
    make_commit(repo, 'file1.txt', 'Hello, World!', 'First commit')
    make_commit(repo, 'file2.txt', 'Second file', 'Second commit')
    return repo


@pytest.fixture
def sample_metadata():
    """Commit metadata with a fixed timestamp."""
    return CommitMetadata(
        author='Test User <test@example.com>',
        message='Test commit',
        timestamp='2024-01-01T00:00:00+00:00',
    )
