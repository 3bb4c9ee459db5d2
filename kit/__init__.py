"""Kit - content-addressed storage and synchronization core of a Git-like VCS."""

__version__ = '0.1.0'

from kit.core.repository import Repository
from kit.core.objects import Commit, CommitMetadata, Ref, RefType, RepositoryConfig
from kit.core.remote import init_repo, clone_repo, push_repo, pull_repo

__all__ = [
    'Repository',
    'Commit',
    'CommitMetadata',
    'Ref',
    'RefType',
    'RepositoryConfig',
    'init_repo',
    'clone_repo',
    'push_repo',
    'pull_repo',
]
